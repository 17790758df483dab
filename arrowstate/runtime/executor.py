# arrowstate/runtime/executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
import logging
import threading
from typing import Any, Optional

from arrowstate.core.edges import Edge
from arrowstate.core.types import ArrowID, PendingTransition, StateID
from arrowstate.runtime.cell import Cell
from arrowstate.runtime.concurrency import get_lock, with_lock

logger = logging.getLogger(__name__)


class TransitionExecutor:
    """
    Runs the action of an edge the gate has already approved, and is the only
    writer of the machine's current state and in-flight transition.

    An action may raise, return a plain value, or return an awaitable or a
    thread pool future. In every case the machine is busy from ``begin`` until
    the action settles, and the state advances if and only if the action
    completed without error.
    """

    def __init__(
        self,
        state: Cell[StateID],
        pending: Cell[Optional[PendingTransition]],
        lock: Optional[threading.RLock] = None,
    ) -> None:
        """
        :param state: Cell holding the machine's current state.
        :param pending: Cell holding the in-flight transition, or None.
        :param lock: Lock shared with the machine's gate.
        """
        self._state = state
        self._pending = pending
        self._lock = lock or get_lock()

    def begin(self, target_arrow: Optional[ArrowID], target_state: StateID) -> PendingTransition:
        """
        Mark the machine busy. Must be called in the same critical section as
        the gate check that approved the request.
        """
        pending = PendingTransition(target_arrow=target_arrow, target_state=target_state)
        with with_lock(self._lock):
            self._pending.set(pending)
        logger.debug("Transition to %r via %r started", target_state, target_arrow)
        return pending

    def execute(self, pending: PendingTransition, edge: Edge, *args: Any, **kwargs: Any) -> Any:
        """
        Run the edge's action and settle the transition.

        :param pending: The transition returned by ``begin``.
        :param edge: The resolved edge to run.
        :return: The action's value, or an asyncio Future of it if the action
                 returned an awaitable or a concurrent.futures.Future.
        :raises Exception: Whatever the action raised, unchanged. TypeError for
                 an edge of unrecognized shape.
        """
        try:
            result = edge.run(*args, **kwargs)
        except BaseException:
            self._abandon(pending)
            raise

        if inspect.isawaitable(result) or isinstance(result, concurrent.futures.Future):
            return self._defer(pending, result)

        self._commit(pending)
        return result

    def _defer(self, pending: PendingTransition, awaitable: Any) -> asyncio.Future:
        """Schedule an awaitable result and settle the transition when it does."""
        try:
            loop = asyncio.get_running_loop()
            if isinstance(awaitable, concurrent.futures.Future):
                future = asyncio.wrap_future(awaitable, loop=loop)
            else:
                future = asyncio.ensure_future(awaitable, loop=loop)
        except BaseException:
            self._abandon(pending)
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise

        outcome = loop.create_future()

        def _settled(fut: asyncio.Future) -> None:
            if fut.cancelled():
                self._abandon(pending)
                outcome.cancel()
                return
            error = fut.exception()
            if error is not None:
                self._abandon(pending)
                if not outcome.done():
                    outcome.set_exception(error)
                return
            value = fut.result()
            self._commit(pending)
            if not outcome.done():
                outcome.set_result(value)

        future.add_done_callback(_settled)
        return outcome

    def _commit(self, pending: PendingTransition) -> None:
        with with_lock(self._lock):
            self._state.set(pending.target_state)
            self._pending.set(None)
        logger.debug("Transition to %r via %r committed", pending.target_state, pending.target_arrow)

    def _abandon(self, pending: PendingTransition) -> None:
        with with_lock(self._lock):
            self._pending.set(None)
        logger.debug("Transition to %r via %r abandoned, state unchanged", pending.target_state, pending.target_arrow)
