# arrowstate/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager


def get_lock() -> threading.RLock:
    """
    Provide the lock guarding a machine's runtime state. Reentrant, so an
    availability predicate may query the machine it belongs to.
    """
    return threading.RLock()


@contextmanager
def with_lock(lock):
    """
    Acquire the given lock upon entry and release it upon exit.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()
