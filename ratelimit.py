import logging
import threading
import time
from typing import Callable, Optional

import config

logger = logging.getLogger(__name__)


class RateLimiter:
    """Keeps at least `min_interval` seconds between granted calls.

    The lock is held while sleeping, so concurrent callers queue up behind
    each other instead of all measuring against the same stale timestamp.
    """

    def __init__(
        self,
        min_interval: float = config.MIN_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_request: Optional[float] = None

    def wait_if_needed(self) -> None:
        with self._lock:
            if self._last_request is not None:
                wait = self.min_interval - (self._clock() - self._last_request)
                if wait > 0:
                    logger.debug("Rate limit: sleeping %.2fs", wait)
                    self._sleep(wait)
            self._last_request = self._clock()

    @property
    def last_request(self) -> Optional[float]:
        return self._last_request


_default_limiter: Optional[RateLimiter] = None
_default_lock = threading.Lock()


def default_limiter() -> RateLimiter:
    global _default_limiter
    with _default_lock:
        if _default_limiter is None:
            _default_limiter = RateLimiter()
        return _default_limiter
