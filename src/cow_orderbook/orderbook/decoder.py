"""Response decoding for the orderbook API."""

import json
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from src.cow_orderbook.core.exceptions import DecodeError, HttpError
from src.cow_orderbook.core.interfaces import RawResponse
from src.cow_orderbook.utils.logger import get_logger, truncate_body

logger = get_logger(__name__)

T = TypeVar("T")


@lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _events(event_logger: Any):
    return event_logger if event_logger is not None else logger


def ensure_success(response: RawResponse, event_logger: Any = None) -> None:
    """Raise if the response status is outside the 2xx range.

    Args:
        response: Raw response from the transport
        event_logger: Logger for the error event (the module logger if None)

    Raises:
        HttpError: With the raw status code and body text
    """
    if response.is_success:
        return
    _events(event_logger).warning(
        "Orderbook API returned an error",
        status=response.status,
        url=response.url,
        body=truncate_body(response.body),
    )
    raise HttpError(response.status, response.body, url=response.url)


def decode_response(
    response: RawResponse, response_type: type[T], event_logger: Any = None
) -> T:
    """Decode a successful response body into ``response_type``.

    Args:
        response: Raw response from the transport
        response_type: Expected type (pydantic model, ``list[Model]``, identifier...)
        event_logger: Logger for error events (the module logger if None)

    Returns:
        The validated value

    Raises:
        HttpError: If the status is not 2xx
        DecodeError: If the body does not match the expected type
    """
    ensure_success(response, event_logger)
    try:
        return _adapter(response_type).validate_json(response.body)
    except ValidationError as e:
        _events(event_logger).error(
            "Failed to parse JSON response",
            url=response.url,
            error=str(e),
            body=truncate_body(response.body),
        )
        raise DecodeError(
            f"Failed to parse JSON response from {response.url}: {e}",
            body=response.body,
            url=response.url,
        ) from e


def decode_json(response: RawResponse, event_logger: Any = None) -> Any:
    """Decode a successful response body as untyped JSON.

    Raises:
        HttpError: If the status is not 2xx
        DecodeError: If the body is not valid JSON
    """
    ensure_success(response, event_logger)
    try:
        return json.loads(response.body)
    except json.JSONDecodeError as e:
        _events(event_logger).error(
            "Response body is not JSON", url=response.url, error=str(e)
        )
        raise DecodeError(
            f"Response body from {response.url} is not valid JSON: {e}",
            body=response.body,
            url=response.url,
        ) from e


def decode_text(response: RawResponse, event_logger: Any = None) -> str:
    """Return the raw body text of a successful response.

    Raises:
        HttpError: If the status is not 2xx
    """
    ensure_success(response, event_logger)
    return response.body
