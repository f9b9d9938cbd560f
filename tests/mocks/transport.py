"""Mock HTTP transport and session for testing."""

import json
from typing import Any
from unittest.mock import MagicMock

from src.cow_orderbook.core.enums import HttpMethod
from src.cow_orderbook.core.interfaces import HttpTransport, RawResponse


class MockTransport(HttpTransport):
    """Transport that records requests and replays canned responses."""

    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []
        self._responses: list[tuple[int, str]] = []
        self.closed = False

    def respond(self, status: int = 200, body: Any = None, raw: str | None = None) -> None:
        """Queue a response; ``body`` is JSON-encoded unless ``raw`` is given."""
        self._responses.append((status, raw if raw is not None else json.dumps(body)))

    def send(self, method: HttpMethod, url: str, body: str | None = None) -> RawResponse:
        self.requests.append({"method": HttpMethod(method), "url": url, "body": body})
        if not self._responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        status, text = self._responses.pop(0)
        return RawResponse(status=status, body=text, url=url)

    def close(self) -> None:
        self.closed = True

    @property
    def last_request(self) -> dict[str, Any]:
        return self.requests[-1]


def make_http_response(status_code: int = 200, text: str = "{}") -> MagicMock:
    """Create a mock ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response
