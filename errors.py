from typing import Optional


class CodeforcesError(Exception):
    """Base class for everything the API layer raises."""


class TransportError(CodeforcesError):
    """Non-2xx response or a network failure."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(CodeforcesError):
    """The API answered, but with status FAILED or a payload we can't read."""

    def __init__(self, comment: str):
        super().__init__(f"Codeforces API error: {comment}")
        self.comment = comment


class ExhaustedRetriesError(CodeforcesError):
    def __init__(self, endpoint: str, attempts: int, last_error: CodeforcesError):
        super().__init__(f"{endpoint} failed after {attempts} attempts: {last_error}")
        self.endpoint = endpoint
        self.attempts = attempts
        self.last_error = last_error


HttpError = TransportError
ApiError = UpstreamError
