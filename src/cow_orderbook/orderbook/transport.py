"""HTTP transport with exponential-backoff retries."""

from collections.abc import Callable
from typing import Any

import requests
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from src.cow_orderbook.config.constants import (
    JSON_CONTENT_TYPE,
    MAX_RETRIES,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_BACKOFF_SECONDS,
    RETRY_MAX_BACKOFF_SECONDS,
    TRANSIENT_STATUS_CODES,
)
from src.cow_orderbook.core.enums import HttpMethod
from src.cow_orderbook.core.exceptions import TransportError
from src.cow_orderbook.core.interfaces import HttpTransport, RawResponse
from src.cow_orderbook.utils.logger import get_logger, truncate_body

logger = get_logger(__name__)

# Network-level failures that may succeed on another attempt
TRANSIENT_EXCEPTIONS = (requests.ConnectionError, requests.Timeout)


def is_transient_status(response: requests.Response) -> bool:
    """Check if a response status is worth retrying (408, 429 or any 5xx)."""
    status = response.status_code
    return status in TRANSIENT_STATUS_CODES or 500 <= status < 600


class RetryingTransport(HttpTransport):
    """Transport that retries transient failures with exponential backoff.

    Only network errors, server errors (5xx) and the statuses in
    ``TRANSIENT_STATUS_CODES`` are retried. Any other response, other 4xx
    included, is returned on the first attempt and left to the response decoder to classify.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        max_retries: int = MAX_RETRIES,
        backoff_seconds: float = RETRY_BACKOFF_SECONDS,
        max_backoff_seconds: float = RETRY_MAX_BACKOFF_SECONDS,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        sleep: Callable[[float], None] | None = None,
        event_logger: Any = None,
    ):
        """Initialize transport.

        Args:
            session: Shared requests session (a new pooled session if None)
            max_retries: Retries after the first attempt (default: 3)
            backoff_seconds: Exponential backoff multiplier in seconds
            max_backoff_seconds: Upper bound for a single wait
            timeout_seconds: Per-request timeout passed to requests
            sleep: Optional sleep function for the retry controller
            event_logger: structlog-compatible logger (the module logger if None)

        Raises:
            ValueError: If max_retries is negative
        """
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")

        self.session = session if session is not None else requests.Session()
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds
        self.max_backoff_seconds = max_backoff_seconds
        self.timeout_seconds = timeout_seconds
        self._sleep = sleep
        self._logger = event_logger if event_logger is not None else logger

    def _retrying(self) -> Retrying:
        """Build a fresh retry controller for one request."""
        kwargs: dict[str, Any] = {
            "stop": stop_after_attempt(self.max_retries + 1),
            "wait": wait_exponential(
                multiplier=self.backoff_seconds, max=self.max_backoff_seconds
            ),
            "retry": (
                retry_if_exception_type(TRANSIENT_EXCEPTIONS)
                | retry_if_result(is_transient_status)
            ),
            "before_sleep": self._log_retry,
            # Out of attempts: return the last response, or re-raise the last error
            "retry_error_callback": lambda state: state.outcome.result(),
        }
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        return Retrying(**kwargs)

    def _log_retry(self, retry_state: RetryCallState) -> None:
        outcome = retry_state.outcome
        if outcome is not None and outcome.failed:
            reason = repr(outcome.exception())
        elif outcome is not None:
            reason = f"status {outcome.result().status_code}"
        else:
            reason = "unknown"
        self._logger.warning(
            "Retrying orderbook request",
            attempt=retry_state.attempt_number,
            reason=reason,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        )

    def send(self, method: HttpMethod | str, url: str, body: str | None = None) -> RawResponse:
        """Send a request, retrying transient failures.

        Args:
            method: HTTP method (member or name, any case)
            url: Fully composed request URL
            body: Pre-serialized JSON body

        Returns:
            RawResponse: The last response received

        Raises:
            ValueError: If the method is not a supported HTTP method
            TransportError: If no response was received after all retries
        """
        method_name = HttpMethod(method.upper()).value
        headers = {"Content-Type": JSON_CONTENT_TYPE} if body is not None else None

        self._logger.debug(
            "Sending orderbook request", method=method_name, url=url, body=truncate_body(body)
        )

        def _attempt() -> requests.Response:
            return self.session.request(
                method_name,
                url,
                data=body.encode("utf-8") if body is not None else None,
                headers=headers,
                timeout=self.timeout_seconds,
            )

        try:
            response = self._retrying()(_attempt)
        except TRANSIENT_EXCEPTIONS as e:
            self._logger.error(
                "Orderbook request failed after retries",
                method=method_name,
                url=url,
                retries=self.max_retries,
                error=str(e),
            )
            raise TransportError(
                f"Failed to send request to URL: {url} after {self.max_retries} retries: {e}",
                url=url,
                method=method_name,
            ) from e
        except requests.RequestException as e:
            self._logger.error(
                "Orderbook request failed", method=method_name, url=url, error=str(e)
            )
            raise TransportError(
                f"Failed to send request to URL: {url}: {e}", url=url, method=method_name
            ) from e

        self._logger.debug(
            "Received orderbook response",
            method=method_name,
            url=url,
            status=response.status_code,
        )
        return RawResponse(status=response.status_code, body=response.text, url=url)

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
