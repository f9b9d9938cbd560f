"""URL construction for the orderbook API."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from src.cow_orderbook.config.constants import API_V1_PREFIX
from src.cow_orderbook.core.exceptions import EncodingError, MalformedBaseUrlError

# RFC 3986 pchar minus unreserved characters (which quote never escapes)
_PATH_SEGMENT_SAFE = "!$&'()*+,;=:@"


def _split_base(base: str):
    """Split and validate a base URL.

    Raises:
        MalformedBaseUrlError: If the URL is not absolute or has no hierarchical path
    """
    try:
        parts = urlsplit(base)
    except ValueError as e:
        raise MalformedBaseUrlError(f"Invalid base URL: {base!r}") from e

    if not parts.scheme:
        raise MalformedBaseUrlError(f"Base URL is not absolute: {base!r}")

    # "data:," or "mailto:x" cannot have path segments appended
    if not base[len(parts.scheme) + 1 :].startswith("/"):
        raise MalformedBaseUrlError(f"Cannot modify URL segments of base URL: {base!r}")

    if parts.scheme in ("http", "https") and not parts.netloc:
        raise MalformedBaseUrlError(f"Base URL has no host: {base!r}")

    return parts


def _render_query_value(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping | list | tuple | set):
        raise EncodingError(f"Cannot encode nested value for query parameter {key!r}")
    return str(value)


def encode_query(params: Mapping[str, Any] | None) -> str:
    """Form-urlencode query parameters, dropping keys whose value is None.

    Args:
        params: Ordered mapping of parameter name to optional value

    Returns:
        str: Encoded query string (empty when nothing remains)

    Raises:
        EncodingError: If a value cannot be rendered as a scalar
    """
    if not params:
        return ""
    pairs = [
        (key, _render_query_value(key, value)) for key, value in params.items() if value is not None
    ]
    return urlencode(pairs)


def build_url(base: str, path: str, query: Mapping[str, Any] | None = None) -> str:
    """Compose a request URL from a base URL, a path template and query parameters.

    The base URL's own path is kept and the path's non-empty segments are
    appended after it, so a base such as ``https://api.cow.fi/mainnet``
    keeps its environment prefix.

    Args:
        base: Absolute base URL with a hierarchical path
        path: Slash-delimited path; empty segments are ignored
        query: Optional ordered query parameters (None values omitted)

    Returns:
        str: Fully composed absolute URL

    Raises:
        MalformedBaseUrlError: If the base URL cannot carry path segments
        EncodingError: If the query cannot be encoded
    """
    parts = _split_base(base)

    base_segments = [segment for segment in parts.path.split("/") if segment]
    new_segments = [
        quote(segment, safe=_PATH_SEGMENT_SAFE) for segment in path.split("/") if segment
    ]
    full_path = "/" + "/".join(base_segments + new_segments)

    encoded_query = encode_query(query)
    return urlunsplit((parts.scheme, parts.netloc, full_path, encoded_query or parts.query, ""))


class OrderApiUrl:
    """Resource URLs of the orderbook API for one base URL."""

    def __init__(self, base_url: str):
        """Initialize URL builder.

        Args:
            base_url: Orderbook API base URL (e.g. ``https://api.cow.fi/mainnet``)

        Raises:
            MalformedBaseUrlError: If the base URL is unusable
        """
        _split_base(base_url)
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build(self, path: str, query: Mapping[str, Any] | None = None) -> str:
        return build_url(self._base_url, f"{API_V1_PREFIX}/{path}", query)

    def orders(self) -> str:
        return self._build("orders")

    def order_by_id(self, order_uid: Any) -> str:
        return self._build(f"orders/{order_uid}")

    def order_status(self, order_uid: Any) -> str:
        return self._build(f"orders/{order_uid}/status")

    def orders_by_tx_hash(self, tx_hash: Any) -> str:
        return self._build(f"transactions/{tx_hash}/orders")

    def trades(self, query: Mapping[str, Any]) -> str:
        """Trades URL; ``query`` comes from a ``GetTradesQuery`` variant."""
        return self._build("trades", query)

    def auction(self) -> str:
        return self._build("auction")

    def user_orders(self, owner: Any, offset: int | None = None, limit: int | None = None) -> str:
        return self._build(f"account/{owner}/orders", {"offset": offset, "limit": limit})

    def native_price(self, token: Any) -> str:
        return self._build(f"token/{token}/native_price")

    def quote(self) -> str:
        return self._build("quote")

    def solver_competition_by_id(self, auction_id: Any) -> str:
        return self._build(f"solver_competition/{auction_id}")

    def solver_competition_by_tx_hash(self, tx_hash: Any) -> str:
        return self._build(f"solver_competition/by_tx_hash/{tx_hash}")

    def solver_competition_latest(self) -> str:
        return self._build("solver_competition/latest")

    def api_version(self) -> str:
        return self._build("version")

    def app_data(self) -> str:
        return self._build("app_data")

    def app_data_by_hash(self, app_data_hash: Any) -> str:
        return self._build(f"app_data/{app_data_hash}")

    def user_surplus(self, owner: Any) -> str:
        return self._build(f"users/{owner}/total_surplus")
