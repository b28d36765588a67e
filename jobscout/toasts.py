"""Short-lived user notifications, decoupled from any one screen."""
from __future__ import annotations

import threading
import time
from typing import Callable

from jobscout.log import get_logger
from jobscout.models import ToastMessage, ToastType

log = get_logger(__name__)

DEFAULT_TTL = 5.0


class ToastChannel:
    """Queue of toasts that expire ``ttl`` seconds after they are shown.

    Expiry is lazy: ``active()`` drops anything older than ``ttl``. Ids are
    derived from wall-clock milliseconds and never repeat or go backwards.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
        id_clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._id_clock = id_clock
        self._toasts: list[ToastMessage] = []
        self._last_id = 0
        self._lock = threading.Lock()

    def show(self, message: str, type: ToastType = ToastType.INFO) -> ToastMessage:
        with self._lock:
            toast_id = max(int(self._id_clock() * 1000), self._last_id + 1)
            self._last_id = toast_id
            toast = ToastMessage(id=toast_id, message=message, type=ToastType(type), created_at=self._clock())
            self._toasts.append(toast)

        if toast.type is ToastType.ERROR:
            log.warning("Toast [%s] %s", toast.type.value, message)
        else:
            log.info("Toast [%s] %s", toast.type.value, message)
        return toast

    def dismiss(self, toast_id: int) -> bool:
        with self._lock:
            before = len(self._toasts)
            self._toasts = [t for t in self._toasts if t.id != toast_id]
            return len(self._toasts) != before

    def active(self) -> list[ToastMessage]:
        now = self._clock()
        with self._lock:
            self._toasts = [t for t in self._toasts if now - t.created_at < self.ttl]
            return list(self._toasts)

    def clear(self) -> None:
        with self._lock:
            self._toasts.clear()
