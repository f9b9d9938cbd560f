"""Tests for the retrying HTTP transport."""

from unittest.mock import MagicMock

import pytest
import requests

from src.cow_orderbook.config.constants import JSON_CONTENT_TYPE, REQUEST_TIMEOUT_SECONDS
from src.cow_orderbook.core.enums import HttpMethod
from src.cow_orderbook.core.exceptions import TransportError
from src.cow_orderbook.core.interfaces import RawResponse
from src.cow_orderbook.orderbook.transport import RetryingTransport
from tests.mocks.transport import make_http_response

URL = "https://api.cow.fi/mainnet/api/v1/version"


class TestRetryingTransportInitialization:
    """Test transport construction."""

    def test_defaults(self):
        """Should create its own session with default settings."""
        transport = RetryingTransport()

        assert isinstance(transport.session, requests.Session)
        assert transport.max_retries == 3
        assert transport.timeout_seconds == REQUEST_TIMEOUT_SECONDS
        transport.close()

    def test_negative_retries_rejected(self, mock_session):
        """Should reject a negative retry count."""
        with pytest.raises(ValueError, match="max_retries"):
            RetryingTransport(session=mock_session, max_retries=-1)

    def test_close_closes_session(self, retrying_transport, mock_session):
        """Should close the underlying session."""
        retrying_transport.close()

        mock_session.close.assert_called_once()

    def test_context_manager_closes_session(self, mock_session):
        """Should close the session when leaving the with block."""
        with RetryingTransport(session=mock_session) as transport:
            assert transport.session is mock_session

        mock_session.close.assert_called_once()


class TestRetryingTransportSend:
    """Test sending requests."""

    def test_get_returns_raw_response(self, retrying_transport, mock_session):
        """Should return status, body and URL of the response."""
        mock_session.request.return_value = make_http_response(200, "v2.290.0")

        response = retrying_transport.send(HttpMethod.GET, URL)

        assert response == RawResponse(status=200, body="v2.290.0", url=URL)
        mock_session.request.assert_called_once_with(
            "GET", URL, data=None, headers=None, timeout=REQUEST_TIMEOUT_SECONDS
        )

    def test_body_sent_as_json(self, retrying_transport, mock_session):
        """Should send the body as UTF-8 JSON."""
        mock_session.request.return_value = make_http_response(201, '"0x01"')

        retrying_transport.send(HttpMethod.POST, URL, '{"kind":"sell"}')

        mock_session.request.assert_called_once_with(
            "POST",
            URL,
            data=b'{"kind":"sell"}',
            headers={"Content-Type": JSON_CONTENT_TYPE},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )

    def test_client_errors_not_retried(self, retrying_transport, mock_session, sleeps):
        """Should return a 4xx response on the first attempt."""
        mock_session.request.return_value = make_http_response(400, '{"errorType":"Bad"}')

        response = retrying_transport.send(HttpMethod.GET, URL)

        assert response.status == 400
        assert response.body == '{"errorType":"Bad"}'
        assert mock_session.request.call_count == 1
        assert sleeps == []

    def test_not_found_not_retried(self, retrying_transport, mock_session):
        """Should return 404 without retrying."""
        mock_session.request.return_value = make_http_response(404, "")

        assert retrying_transport.send(HttpMethod.GET, URL).status == 404
        assert mock_session.request.call_count == 1

    @pytest.mark.parametrize("method", ["get", "Get", "GET", HttpMethod.GET])
    def test_method_name_case_insensitive(self, retrying_transport, mock_session, method):
        """Should accept method names in any case."""
        mock_session.request.return_value = make_http_response(200, "ok")

        retrying_transport.send(method, URL)

        assert mock_session.request.call_args.args == ("GET", URL)

    def test_unknown_method_rejected(self, retrying_transport, mock_session):
        """Should reject methods the orderbook API does not use."""
        with pytest.raises(ValueError):
            retrying_transport.send("TRACE", URL)

        mock_session.request.assert_not_called()


class TestRetryingTransportRetries:
    """Test retry behavior."""

    def test_transient_status_retried_until_success(
        self, retrying_transport, mock_session, sleeps
    ):
        """Should retry a 503 and return the later success."""
        mock_session.request.side_effect = [
            make_http_response(503, "unavailable"),
            make_http_response(200, "ok"),
        ]

        response = retrying_transport.send(HttpMethod.GET, URL)

        assert response.status == 200
        assert mock_session.request.call_count == 2
        assert sleeps == [0.5]

    @pytest.mark.parametrize("status", [408, 429, 500, 501, 502, 503, 504, 507])
    def test_persistent_transient_status_returns_last_response(
        self, retrying_transport, mock_session, sleeps, status
    ):
        """Should return the last response after exhausting retries."""
        mock_session.request.return_value = make_http_response(status, "busy")

        response = retrying_transport.send(HttpMethod.GET, URL)

        assert response.status == status
        assert mock_session.request.call_count == 4
        assert sleeps == [0.5, 1.0, 2.0]

    def test_connection_error_retried_until_success(self, retrying_transport, mock_session):
        """Should retry network failures."""
        mock_session.request.side_effect = [
            requests.ConnectionError("reset"),
            requests.Timeout("slow"),
            make_http_response(200, "ok"),
        ]

        response = retrying_transport.send(HttpMethod.GET, URL)

        assert response.body == "ok"
        assert mock_session.request.call_count == 3

    def test_persistent_connection_error_raises_transport_error(
        self, retrying_transport, mock_session
    ):
        """Should raise TransportError once retries are exhausted."""
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError) as exc_info:
            retrying_transport.send(HttpMethod.GET, URL)

        assert mock_session.request.call_count == 4
        assert "after 3 retries" in str(exc_info.value)
        assert exc_info.value.url == URL
        assert exc_info.value.method == "GET"
        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)

    def test_non_transient_request_error_not_retried(self, retrying_transport, mock_session):
        """Should fail fast on request errors that cannot succeed later."""
        mock_session.request.side_effect = requests.exceptions.InvalidURL("bad url")

        with pytest.raises(TransportError, match="bad url"):
            retrying_transport.send(HttpMethod.GET, URL)

        assert mock_session.request.call_count == 1

    def test_zero_retries(self, mock_session, sleeps):
        """Should make a single attempt when retries are disabled."""
        transport = RetryingTransport(session=mock_session, max_retries=0, sleep=sleeps.append)
        mock_session.request.side_effect = requests.Timeout("slow")

        with pytest.raises(TransportError):
            transport.send(HttpMethod.GET, URL)

        assert mock_session.request.call_count == 1
        assert sleeps == []

    def test_backoff_is_capped(self, mock_session, sleeps):
        """Should not wait longer than the configured maximum."""
        transport = RetryingTransport(
            session=mock_session,
            max_retries=5,
            backoff_seconds=1.0,
            max_backoff_seconds=4.0,
            sleep=sleeps.append,
        )
        mock_session.request.return_value = make_http_response(502, "")

        transport.send(HttpMethod.GET, URL)

        assert sleeps == [1.0, 2.0, 4.0, 4.0, 4.0]


class TestRetryingTransportLogging:
    """Test transport log events."""

    def test_injected_logger_receives_retry_warning(self, mock_session, sleeps):
        """Should log retries and the final response through the given logger."""
        event_logger = MagicMock()
        transport = RetryingTransport(
            session=mock_session, sleep=sleeps.append, event_logger=event_logger
        )
        mock_session.request.side_effect = [
            make_http_response(502, "bad gateway"),
            make_http_response(200, "ok"),
        ]

        transport.send(HttpMethod.GET, URL)

        event_logger.warning.assert_called_once()
        assert event_logger.warning.call_args.args == ("Retrying orderbook request",)
        assert event_logger.warning.call_args.kwargs["attempt"] == 1
        assert event_logger.warning.call_args.kwargs["reason"] == "status 502"
        assert event_logger.debug.call_count == 2

    def test_injected_logger_receives_exhausted_error(self, mock_session, sleeps):
        """Should log the exhausted retries through the given logger."""
        event_logger = MagicMock()
        transport = RetryingTransport(
            session=mock_session, max_retries=1, sleep=sleeps.append, event_logger=event_logger
        )
        mock_session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(TransportError):
            transport.send(HttpMethod.GET, URL)

        event_logger.error.assert_called_once()
        assert event_logger.error.call_args.kwargs["retries"] == 1

    def test_unconfigured_logging_prints_nothing(self, retrying_transport, mock_session, capsys):
        """Should stay silent when the application has not configured logging."""
        mock_session.request.side_effect = [
            make_http_response(503, "unavailable"),
            make_http_response(200, "ok"),
        ]

        retrying_transport.send(HttpMethod.GET, URL)

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
