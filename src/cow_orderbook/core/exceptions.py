"""Core exceptions for the orderbook API client."""


class OrderbookClientError(Exception):
    """Base exception for all client errors."""

    pass


class ConfigurationError(OrderbookClientError):
    """Raised when client configuration is invalid."""

    pass


class MalformedBaseUrlError(ConfigurationError):
    """Raised when the base URL cannot carry hierarchical path segments."""

    pass


class EncodingError(OrderbookClientError):
    """Raised when an outgoing request body or query cannot be serialized."""

    pass


class TransportError(OrderbookClientError):
    """Raised when a request could not be completed at the network level."""

    def __init__(self, message: str, *, url: str | None = None, method: str | None = None):
        super().__init__(message)
        self.url = url
        self.method = method


class HttpError(OrderbookClientError):
    """Raised when the API answers with a non-success status code.

    The raw body is kept verbatim since it usually carries the API's
    structured error (``{"errorType": ..., "description": ...}``).
    """

    def __init__(self, status: int, body: str, *, url: str | None = None):
        self.status = status
        self.body = body
        self.url = url
        location = f" from {url}" if url else ""
        super().__init__(f"HTTP error {status}{location}: {body}")


class DecodeError(OrderbookClientError):
    """Raised when a response body does not match the expected schema."""

    def __init__(self, message: str, *, body: str, url: str | None = None):
        super().__init__(message)
        self.body = body
        self.url = url


class InvalidIdentifierError(ValueError):
    """Raised when a fixed-width hex identifier cannot be parsed."""

    pass


class InvalidHexLengthError(InvalidIdentifierError):
    """Raised when a hex identifier has the wrong number of characters."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Invalid hex length: expected {expected} characters, got {actual}")


class InvalidHexDigitError(InvalidIdentifierError):
    """Raised when a hex identifier contains a non-hex character."""

    def __init__(self, character: str, position: int):
        self.character = character
        self.position = position
        super().__init__(f"Invalid hex character {character!r} at position {position}")
