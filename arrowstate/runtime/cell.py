# arrowstate/runtime/cell.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Generic, TypeVar

T = TypeVar("T")


class Cell(Generic[T]):
    """
    Holds one current value with get/set semantics. The machine keeps its
    current state and its in-flight transition in cells; anything that wants to
    observe them can wrap the machine's read accessors.
    """

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value

    def __repr__(self) -> str:
        return f"Cell({self._value!r})"
