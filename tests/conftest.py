import pytest

from errors import ExhaustedRetriesError, TransportError
from factories import FakeClient


@pytest.fixture
def failing_client():
    last = TransportError("HTTP error! status: 503", status_code=503)
    return FakeClient(error=ExhaustedRetriesError("user.status?handle=tourist", 3, last))
