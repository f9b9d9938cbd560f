"""Order unique identifier."""

from .fixed_bytes import FixedBytes

ORDER_UID_LENGTH = 56


class OrderUid(FixedBytes):
    """56-byte order identifier assigned by the orderbook.

    Canonical text form is ``0x`` followed by 112 lowercase hex characters.
    """

    SIZE = ORDER_UID_LENGTH

    __slots__ = ()
