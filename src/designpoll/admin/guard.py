"""Busy guard for admin operations.

A trigger that arrives while the same operation is still in flight is
rejected, not queued.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Generator

from designpoll.core.errors import OperationInProgressError

logger = logging.getLogger(__name__)


class OperationGuard:
    """Per-operation non-blocking locks."""

    def __init__(self) -> None:
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, operation: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(operation, threading.Lock())

    def is_busy(self, operation: str) -> bool:
        return self._lock_for(operation).locked()

    @contextmanager
    def hold(self, operation: str) -> Generator[None, None, None]:
        """Run the block as the only in-flight instance of operation.

        Raises:
            OperationInProgressError: If operation is already running.
        """
        lock = self._lock_for(operation)
        if not lock.acquire(blocking=False):
            logger.warning(f"Rejected concurrent {operation}")
            raise OperationInProgressError(operation)
        try:
            yield
        finally:
            lock.release()
