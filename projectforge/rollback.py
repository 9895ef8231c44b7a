"""Rollback on failure or interruption.

The coordinator deletes a project directory exactly once when the
transaction that created it fails, whether the failure is a logical error,
``KeyboardInterrupt`` (SIGINT), a cancelled event loop, or SIGTERM.
"""

from __future__ import annotations

import signal
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from projectforge.lifecycle import DirectoryHandle, DirectoryStatus, LifecycleManager
from projectforge.utils import print_error


class RollbackCoordinator:
    """Calls :meth:`LifecycleManager.rollback` for failed transactions."""

    def __init__(self, lifecycle: LifecycleManager) -> None:
        self.lifecycle = lifecycle
        self._rolled_back: set[int] = set()

    def on_failure(self, handle: DirectoryHandle) -> None:
        """Roll back *handle* unless it is committed or already handled."""
        if handle.status is DirectoryStatus.COMMITTED:
            return
        if id(handle) in self._rolled_back:
            return
        self._rolled_back.add(id(handle))
        print_error("An error occurred. Cleaning up...")
        self.lifecycle.rollback(handle)

    @asynccontextmanager
    async def guard(self, handle: DirectoryHandle) -> AsyncIterator[DirectoryHandle]:
        """Roll back *handle* if anything escapes the ``async with`` body.

        ``BaseException`` is intercepted so that Ctrl-C and task cancellation
        clean up too; the exception is always re-raised.
        """
        try:
            yield handle
        except BaseException:
            self.on_failure(handle)
            raise


def _raise_interrupt(signum: int, frame: Any) -> None:
    raise KeyboardInterrupt(f"Received signal {signum}")


def install_signal_handlers() -> None:
    """Route SIGTERM (and SIGBREAK on Windows) through ``KeyboardInterrupt``.

    ``asyncio.run`` already turns SIGINT into task cancellation, which
    :meth:`RollbackCoordinator.guard` handles; this makes termination by
    other signals take the same path.
    """
    for name in ("SIGTERM", "SIGBREAK"):
        sig = getattr(signal, name, None)
        if sig is not None:
            signal.signal(sig, _raise_interrupt)
