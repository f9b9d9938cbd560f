"""Pytest configuration and shared fixtures."""

import copy
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.cow_orderbook.orderbook.client import OrderApiClient
from src.cow_orderbook.orderbook.transport import RetryingTransport
from tests.fixtures.orders import SAMPLE_OPEN_BUY_ORDER, SAMPLE_ORDER
from tests.fixtures.trades import SAMPLE_COMPETITION, SAMPLE_TRADE
from tests.mocks.transport import MockTransport

BASE_URL = "https://api.cow.fi/mainnet"

# ===== Pytest Markers =====


def pytest_configure(config: Any) -> None:
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (hit the live API)")
    config.addinivalue_line("markers", "slow: Slow tests (may take several seconds)")


# ===== Transport Fixtures =====


@pytest.fixture
def mock_transport() -> MockTransport:
    """Create a recording mock transport."""
    return MockTransport()


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock requests session."""
    return MagicMock()


@pytest.fixture
def sleeps() -> list[float]:
    """Collects retry waits instead of sleeping."""
    return []


@pytest.fixture
def retrying_transport(mock_session: MagicMock, sleeps: list[float]) -> RetryingTransport:
    """Create a retrying transport over the mock session that never really sleeps."""
    return RetryingTransport(session=mock_session, backoff_seconds=0.5, sleep=sleeps.append)


@pytest.fixture
def client(mock_transport: MockTransport) -> OrderApiClient:
    """Create an orderbook client backed by the mock transport."""
    return OrderApiClient(BASE_URL, transport=mock_transport)


# ===== Payload Fixtures =====


@pytest.fixture
def sample_order() -> dict[str, Any]:
    """Sample fulfilled sell order."""
    return copy.deepcopy(SAMPLE_ORDER)


@pytest.fixture
def sample_open_buy_order() -> dict[str, Any]:
    """Sample presigned buy order."""
    return copy.deepcopy(SAMPLE_OPEN_BUY_ORDER)


@pytest.fixture
def sample_trade() -> dict[str, Any]:
    """Sample trade."""
    return copy.deepcopy(SAMPLE_TRADE)


@pytest.fixture
def sample_competition() -> dict[str, Any]:
    """Sample solver competition."""
    return copy.deepcopy(SAMPLE_COMPETITION)
