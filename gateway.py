import logging
import time
from typing import Any, Callable, Optional

import requests

import config
from errors import CodeforcesError, ExhaustedRetriesError, TransportError, UpstreamError
from ratelimit import RateLimiter, default_limiter
from structs import ApiEnvelope

logger = logging.getLogger(__name__)


def linear_backoff(attempt: int) -> float:
    return attempt * config.BACKOFF_SECONDS


class RetryPolicy:
    def __init__(self, max_attempts: int = config.MAX_RETRIES,
                 backoff: Callable[[int], float] = linear_backoff):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff


class ApiGateway:
    """One GET against the Codeforces API, throttled and retried.

    Every attempt, retries included, goes through the rate limiter first.
    Returns the envelope's `result` on success; raises ExhaustedRetriesError
    carrying the last TransportError/UpstreamError otherwise.
    """

    def __init__(
        self,
        limiter: Optional[RateLimiter] = None,
        session: Optional[requests.Session] = None,
        base_url: str = config.API_BASE_URL,
        timeout: float = config.REQUEST_TIMEOUT,
        policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.limiter = limiter or default_limiter()
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": config.USER_AGENT})
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    def call(self, endpoint: str, retries: Optional[int] = None) -> Any:
        attempts = retries if retries is not None else self.policy.max_attempts
        if attempts < 1:
            raise ValueError("retries must be at least 1")

        last_error: Optional[CodeforcesError] = None
        for attempt in range(1, attempts + 1):
            self.limiter.wait_if_needed()
            try:
                return self._request(endpoint)
            except CodeforcesError as e:
                last_error = e
                logger.warning("Codeforces call %s failed (attempt %d/%d): %s",
                               endpoint, attempt, attempts, e)
            if attempt < attempts:
                self._sleep(self.policy.backoff(attempt))

        logger.error("Giving up on %s after %d attempts", endpoint, attempts)
        raise ExhaustedRetriesError(endpoint, attempts, last_error) from last_error

    def _request(self, endpoint: str) -> Any:
        url = self.base_url + endpoint
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            raise TransportError(f"HTTP error! status: {response.status_code}",
                                 status_code=response.status_code)

        try:
            envelope = ApiEnvelope.model_validate(response.json())
        except ValueError as e:
            # ValidationError is a ValueError, and so is a JSON decode failure
            raise UpstreamError(f"Malformed response from {endpoint}: {e}") from e

        if envelope.status != "OK":
            raise UpstreamError(envelope.comment or "Unknown error")
        return envelope.result

