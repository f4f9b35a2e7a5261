"""Fixtures for API layer unit tests."""

from collections.abc import Callable

import pytest
from starlette.requests import Request

RequestFactory = Callable[..., Request]


@pytest.fixture
def make_request() -> RequestFactory:
    """Build bare Starlette requests for calling handlers directly."""

    def _make(
        method: str = "GET", path: str = "/api/users", body: bytes = b""
    ) -> Request:
        scope = {
            "type": "http",
            "method": method,
            "path": path,
            "headers": [(b"content-type", b"application/json")],
            "query_string": b"",
        }
        sent = False

        async def receive() -> dict[str, object]:
            nonlocal sent
            if sent:
                return {"type": "http.disconnect"}
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        return Request(scope, receive)

    return _make
