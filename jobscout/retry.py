"""Retry decorator with exponential backoff for transient I/O failures."""
from __future__ import annotations

import functools
import random
import time
from typing import Any, Callable, Tuple, Type

from jobscout.log import get_logger

log = get_logger(__name__)


def retry(
    *,
    attempts: int = 3,
    base_delay: float = 1.0,
    max_delay: float = 20.0,
    factor: float = 2.0,
    jitter: bool = True,
    retry_on: Tuple[Type[BaseException], ...] = (OSError,),
    sleep: Callable[[float], None] = time.sleep,
) -> Callable:
    """Re-invoke the wrapped callable while it raises one of ``retry_on``.

    Anything else propagates immediately; the last transient error is
    re-raised once ``attempts`` are used up.
    """

    def decorator(fn: Callable) -> Callable:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            for attempt in range(1, attempts + 1):
                try:
                    return fn(*args, **kwargs)
                except retry_on as exc:
                    if attempt >= attempts:
                        log.error("%s gave up after %d attempts: %s", fn.__qualname__, attempts, exc)
                        raise
                    delay = min(base_delay * factor ** (attempt - 1), max_delay)
                    if jitter:
                        delay *= 0.5 + random.random()
                    log.warning(
                        "%s attempt %d/%d failed (%s), retrying in %.1fs",
                        fn.__qualname__, attempt, attempts, exc, delay,
                    )
                    sleep(delay)
            raise AssertionError("unreachable")

        return wrapper

    return decorator
