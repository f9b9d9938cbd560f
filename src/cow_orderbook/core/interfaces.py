"""Core interfaces for the orderbook API client."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from src.cow_orderbook.core.enums import HttpMethod


@dataclass(frozen=True)
class RawResponse:
    """A fully read HTTP response, before any status or schema checks."""

    status: int
    body: str
    url: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport(ABC):
    """Interface for sending HTTP requests to the orderbook API."""

    @abstractmethod
    def send(self, method: HttpMethod, url: str, body: str | None = None) -> RawResponse:
        """Send a request and read the full response.

        Args:
            method: HTTP method
            url: Fully composed request URL
            body: Pre-serialized JSON body, sent as ``application/json``

        Returns:
            RawResponse: Status, body text and final URL of the response.
                Non-2xx statuses are returned, not raised.

        Raises:
            TransportError: If no response could be obtained
        """
        pass

    def close(self) -> None:
        """Release pooled connections."""
        pass
