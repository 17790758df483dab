"""
Runtime package: the value cells a machine keeps its state in, locking, and
the executor that runs transition actions.
"""

from .cell import Cell
from .executor import TransitionExecutor

__all__ = ["Cell", "TransitionExecutor"]
