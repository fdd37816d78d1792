"""
Single-writer gate for table actions.

Only one action may mutate a table at a time. Callers wait a bounded time for
the gate and get a `GameBusyError` instead of blocking forever. With a lease
store (the database) the gate also excludes other server processes sharing
the same table; a lease left behind by a crashed holder expires and is taken
over.
"""

import logging
import os
import threading
import time
import uuid
from contextlib import contextmanager
from typing import Optional

from nothanks.errors import GameBusyError

ACTION_TIMEOUT = 5.0
LEASE_POLL_INTERVAL = 0.05


class ActionGate:
    def __init__(self, timeout: float = ACTION_TIMEOUT, lease_store=None,
                 table_id: str = "default", lease_seconds: Optional[float] = None):
        self.timeout = timeout
        self.lease_store = lease_store
        self.table_id = table_id
        self.lease_seconds = lease_seconds if lease_seconds is not None else timeout
        self._lock = threading.Lock()
        self._holder = f"{os.getpid()}:{uuid.uuid4().hex[:8]}"
        self._current_action: Optional[str] = None

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self, action: str):
        """Run the body as the only writer of the table."""
        if not self._lock.acquire(timeout=self.timeout):
            logging.info(f"Gate for table {self.table_id} busy with {self._current_action}, rejected {action}")
            raise GameBusyError(action, self.timeout, self._current_action)
        try:
            self._current_action = action
            if self.lease_store is not None:
                self._acquire_lease(action)
                try:
                    yield
                finally:
                    self.lease_store.release_lease(self.table_id, self._holder)
            else:
                yield
        finally:
            self._current_action = None
            self._lock.release()

    def _acquire_lease(self, action: str) -> None:
        deadline = time.monotonic() + self.timeout
        while not self.lease_store.acquire_lease(self.table_id, self._holder, self.lease_seconds):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logging.info(f"Lease for table {self.table_id} held by another process, rejected {action}")
                raise GameBusyError(action, self.timeout, "another server process")
            time.sleep(min(LEASE_POLL_INTERVAL, remaining))
