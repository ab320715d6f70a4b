"""Cooperative cancellation for long scans."""

from __future__ import annotations

import threading
import time
from typing import Optional

from .errors import ScanCancelled


class CancelToken:
    """Flag checked between discovery entries and before each file is analyzed.

    A token may carry a ``timeout`` in seconds, after which it reports
    itself cancelled without anyone calling :meth:`cancel`.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise ScanCancelled("Scan cancelled before completion")
