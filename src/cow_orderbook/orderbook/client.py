"""Client for the orderbook API."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from src.cow_orderbook.config.network import Network
from src.cow_orderbook.config.settings import Settings
from src.cow_orderbook.core.enums import HttpMethod
from src.cow_orderbook.core.exceptions import EncodingError
from src.cow_orderbook.core.interfaces import HttpTransport
from src.cow_orderbook.models.competition import (
    CompetitionOrderStatusResponse,
    SolverCompetitionResponse,
)
from src.cow_orderbook.models.order import Order, OrderCancellations, OrderCreation
from src.cow_orderbook.models.quote import PartialOrder, QuoteResponse
from src.cow_orderbook.models.responses import (
    AppDataResponse,
    TokenPriceResponse,
    TotalSurplusResponse,
)
from src.cow_orderbook.models.trade import Trade
from src.cow_orderbook.orderbook.decoder import decode_json, decode_response, decode_text
from src.cow_orderbook.orderbook.transport import RetryingTransport
from src.cow_orderbook.orderbook.url import OrderApiUrl
from src.cow_orderbook.primitives.app_data import AppData, AppDataHash
from src.cow_orderbook.primitives.order_uid import OrderUid
from src.cow_orderbook.primitives.types import TxHash, normalize_address
from src.cow_orderbook.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ByOwner:
    """Trades query selecting all trades of an owner."""

    owner: str

    def __post_init__(self):
        object.__setattr__(self, "owner", normalize_address(self.owner))

    def to_query(self) -> dict[str, str]:
        return {"owner": self.owner}


@dataclass(frozen=True)
class ByOrderId:
    """Trades query selecting the trades of a single order."""

    order_uid: OrderUid

    def __post_init__(self):
        if not isinstance(self.order_uid, OrderUid):
            object.__setattr__(self, "order_uid", OrderUid.parse(self.order_uid))

    def to_query(self) -> dict[str, str]:
        return {"orderUid": str(self.order_uid)}


# A query carries exactly one of the two filters by construction
GetTradesQuery = ByOwner | ByOrderId


def _order_uid(value: OrderUid | str) -> OrderUid:
    return value if isinstance(value, OrderUid) else OrderUid.parse(value)


def _tx_hash(value: TxHash | str) -> TxHash:
    return value if isinstance(value, TxHash) else TxHash.parse(value)


def _app_data_hash(value: AppDataHash | str) -> AppDataHash:
    return value if isinstance(value, AppDataHash) else AppDataHash.parse(value)


def _encode_body(payload: BaseModel, what: str) -> str:
    """Serialize a request model to wire JSON.

    Raises:
        EncodingError: If the model cannot be serialized
    """
    try:
        return payload.model_dump_json(by_alias=True, exclude_none=True)
    except (PydanticSerializationError, TypeError, ValueError) as e:
        raise EncodingError(f"Failed to serialize {what}: {e}") from e


class OrderApiClient:
    """Typed client for the orderbook REST API.

    Every operation builds its URL, sends it through the retrying transport
    and decodes the response. The client keeps no per-call state, so one
    instance can be shared across threads.
    """

    def __init__(
        self,
        api_url: str,
        transport: HttpTransport | None = None,
        event_logger: Any = None,
    ):
        """Initialize orderbook client.

        Args:
            api_url: Orderbook API base URL (e.g. ``https://api.cow.fi/mainnet``)
            transport: HTTP transport (a default ``RetryingTransport`` if None)
            event_logger: structlog-compatible logger for client events; a default
                transport and the response decoder log through it as well

        Raises:
            MalformedBaseUrlError: If the base URL is unusable
        """
        self.api_url = OrderApiUrl(api_url)
        base_logger = event_logger if event_logger is not None else logger
        self._logger = base_logger.bind(api_url=api_url)
        self.transport = (
            transport if transport is not None else RetryingTransport(event_logger=self._logger)
        )

    @classmethod
    def for_network(
        cls, network: Network | str, settings: Settings | None = None, event_logger: Any = None
    ):
        """Create a client for a named network.

        Args:
            network: Network or its name (e.g. ``"mainnet"``)
            settings: Optional settings for retry and timeout configuration
            event_logger: structlog-compatible logger for client events

        Raises:
            ConfigurationError: If the network name is unknown
        """
        if not isinstance(network, Network):
            network = Network.from_name(network)
        logger.info("Creating orderbook client", network=str(network))
        transport = _transport_from_settings(settings, network.api_url, event_logger)
        return cls(network.api_url, transport=transport, event_logger=event_logger)

    @classmethod
    def from_settings(cls, settings: Settings, event_logger: Any = None):
        """Create a client from settings (network or explicit API URL)."""
        logger.info("Creating orderbook client", api_url=settings.api_url)
        transport = _transport_from_settings(settings, settings.api_url, event_logger)
        return cls(settings.api_url, transport=transport, event_logger=event_logger)

    def close(self) -> None:
        """Release the transport's pooled connections."""
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ===== Orders =====

    def create_order(self, order: OrderCreation) -> OrderUid:
        """Submit a signed order.

        Returns:
            OrderUid: Identifier assigned to the new order

        Raises:
            EncodingError: If the order cannot be serialized
            HttpError: If the API rejects the order (e.g. 400 with ``errorType``)
        """
        url = self.api_url.orders()
        body = _encode_body(order, "order")
        response = self.transport.send(HttpMethod.POST, url, body)
        uid = decode_response(response, OrderUid, event_logger=self._logger)
        self._logger.info("Order created", order_uid=str(uid))
        return uid

    def cancel_orders(self, cancellations: OrderCancellations) -> None:
        """Cancel orders with a signed cancellation.

        Raises:
            HttpError: If the API rejects the cancellation
        """
        url = self.api_url.orders()
        body = _encode_body(cancellations, "order cancellations")
        response = self.transport.send(HttpMethod.DELETE, url, body)
        decode_text(response, event_logger=self._logger)
        self._logger.info("Orders cancelled", count=len(cancellations.order_uids))

    def get_order_by_id(self, order_uid: OrderUid | str) -> Order:
        """Get an order by its UID."""
        url = self.api_url.order_by_id(_order_uid(order_uid))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, Order, event_logger=self._logger)

    def get_order_status(self, order_uid: OrderUid | str) -> CompetitionOrderStatusResponse:
        """Get an order's status in the solver competition."""
        url = self.api_url.order_status(_order_uid(order_uid))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, CompetitionOrderStatusResponse, event_logger=self._logger)

    def get_orders_by_tx_hash(self, tx_hash: TxHash | str) -> list[Order]:
        """Get the orders settled in a transaction."""
        url = self.api_url.orders_by_tx_hash(_tx_hash(tx_hash))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, list[Order], event_logger=self._logger)

    def get_user_orders(
        self, owner: str, offset: int | None = None, limit: int | None = None
    ) -> list[Order]:
        """Get orders of an account, newest first.

        Args:
            owner: Account address
            offset: Number of orders to skip (API default if None)
            limit: Maximum number of orders (API default if None)

        Raises:
            ValueError: If the address or pagination values are invalid
        """
        if offset is not None and offset < 0:
            raise ValueError("Offset cannot be negative")
        if limit is not None and limit <= 0:
            raise ValueError("Limit must be positive")

        url = self.api_url.user_orders(normalize_address(owner), offset=offset, limit=limit)
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, list[Order], event_logger=self._logger)

    # ===== Trades =====

    def get_trades(self, query: GetTradesQuery) -> list[Trade]:
        """Get trades by owner or by order UID."""
        url = self.api_url.trades(query.to_query())
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, list[Trade], event_logger=self._logger)

    # ===== Quotes =====

    def get_quote(self, partial_order: PartialOrder) -> QuoteResponse:
        """Get a price and fee quote for an order."""
        url = self.api_url.quote()
        body = _encode_body(partial_order, "partial order")
        response = self.transport.send(HttpMethod.POST, url, body)
        return decode_response(response, QuoteResponse, event_logger=self._logger)

    # ===== Auction and solver competition =====

    def get_auction(self) -> Any:
        """Get the current batch auction as untyped JSON."""
        url = self.api_url.auction()
        response = self.transport.send(HttpMethod.GET, url)
        return decode_json(response, event_logger=self._logger)

    def get_competition_by_id(self, auction_id: int) -> SolverCompetitionResponse:
        """Get the solver competition of an auction."""
        if isinstance(auction_id, bool) or not isinstance(auction_id, int):
            raise ValueError(f"Auction id must be an integer, got {auction_id!r}")
        url = self.api_url.solver_competition_by_id(auction_id)
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, SolverCompetitionResponse, event_logger=self._logger)

    def get_competition_by_tx_hash(self, tx_hash: TxHash | str) -> SolverCompetitionResponse:
        """Get the solver competition that produced a settlement transaction."""
        url = self.api_url.solver_competition_by_tx_hash(_tx_hash(tx_hash))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, SolverCompetitionResponse, event_logger=self._logger)

    def get_latest_competition(self) -> SolverCompetitionResponse:
        """Get the most recent solver competition."""
        url = self.api_url.solver_competition_latest()
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, SolverCompetitionResponse, event_logger=self._logger)

    # ===== Prices and surplus =====

    def get_token_price(self, token: str) -> TokenPriceResponse:
        """Get a token's price in the native token."""
        url = self.api_url.native_price(normalize_address(token))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, TokenPriceResponse, event_logger=self._logger)

    def get_total_surplus(self, owner: str) -> TotalSurplusResponse:
        """Get the total surplus of a user. [UNSTABLE upstream endpoint]"""
        url = self.api_url.user_surplus(normalize_address(owner))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, TotalSurplusResponse, event_logger=self._logger)

    # ===== App data =====

    def get_app_data(self, app_data_hash: AppDataHash | str) -> AppDataResponse:
        """Get the app data document registered under a hash."""
        url = self.api_url.app_data_by_hash(_app_data_hash(app_data_hash))
        response = self.transport.send(HttpMethod.GET, url)
        return decode_response(response, AppDataResponse, event_logger=self._logger)

    def upload_app_data(self, app_data: AppData) -> AppDataHash:
        """Register an app data document; the API computes its hash."""
        url = self.api_url.app_data()
        body = _encode_body(app_data, "app data")
        response = self.transport.send(HttpMethod.PUT, url, body)
        return decode_response(response, AppDataHash, event_logger=self._logger)

    def upload_app_data_by_hash(
        self, app_data_hash: AppDataHash | str, app_data: AppData
    ) -> AppDataHash:
        """Register an app data document under a precomputed hash."""
        url = self.api_url.app_data_by_hash(_app_data_hash(app_data_hash))
        body = _encode_body(app_data, "app data")
        response = self.transport.send(HttpMethod.PUT, url, body)
        return decode_response(response, AppDataHash, event_logger=self._logger)

    # ===== Service metadata =====

    def get_version(self) -> str:
        """Get the API version as raw text."""
        url = self.api_url.api_version()
        response = self.transport.send(HttpMethod.GET, url)
        return decode_text(response, event_logger=self._logger)


def _transport_from_settings(
    settings: Settings | None, api_url: str, event_logger: Any = None
) -> RetryingTransport:
    base_logger = event_logger if event_logger is not None else logger
    bound_logger = base_logger.bind(api_url=api_url)
    if settings is None:
        return RetryingTransport(event_logger=bound_logger)
    return RetryingTransport(
        event_logger=bound_logger,
        max_retries=settings.max_retries,
        backoff_seconds=settings.retry_backoff_seconds,
        max_backoff_seconds=settings.retry_max_backoff_seconds,
        timeout_seconds=settings.request_timeout_seconds,
    )
