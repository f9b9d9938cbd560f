"""Fixed-width byte strings with a canonical ``0x`` hex text form."""

import string
from typing import Any, ClassVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from ..core.exceptions import InvalidHexDigitError, InvalidHexLengthError

HEX_DIGITS = frozenset(string.hexdigits)


def decode_hex(text: str, size: int) -> bytes:
    """Decode ``text`` into exactly ``size`` bytes.

    Args:
        text: Hex string, with or without a ``0x`` prefix, any letter case
        size: Expected number of bytes

    Returns:
        bytes: Decoded bytes

    Raises:
        InvalidHexLengthError: If the digit count is not ``2 * size``
        InvalidHexDigitError: If a character is not a hex digit
    """
    digits = text[2:] if text[:2] in ("0x", "0X") else text
    offset = len(text) - len(digits)

    if len(digits) != 2 * size:
        raise InvalidHexLengthError(expected=2 * size, actual=len(digits))

    for index, char in enumerate(digits):
        if char not in HEX_DIGITS:
            raise InvalidHexDigitError(character=char, position=index + offset)

    return bytes.fromhex(digits)


class FixedBytes:
    """Immutable byte string of exactly ``SIZE`` bytes.

    Equality, ordering and hashing are defined over the raw bytes, so two
    texts differing only in letter case parse to equal values.
    """

    SIZE: ClassVar[int] = 0

    __slots__ = ("_data",)

    def __init__(self, data: bytes):
        if not isinstance(data, bytes | bytearray | memoryview):
            raise TypeError(f"{type(self).__name__} expects bytes, got {type(data).__name__}")
        data = bytes(data)
        if len(data) != self.SIZE:
            raise InvalidHexLengthError(expected=2 * self.SIZE, actual=2 * len(data))
        object.__setattr__(self, "_data", data)

    @classmethod
    def parse(cls, text: str):
        """Parse the hex text form (``0x`` prefix optional)."""
        return cls(decode_hex(text, cls.SIZE))

    @classmethod
    def zero(cls):
        return cls(bytes(cls.SIZE))

    def to_text(self) -> str:
        """Return ``0x`` followed by fixed-width lowercase hex."""
        return "0x" + self._data.hex()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._data,))

    def __bytes__(self) -> bytes:
        return self._data

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_text()!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FixedBytes):
            return type(self) is type(other) and self._data == other._data
        if isinstance(other, bytes | bytearray):
            return self._data == bytes(other)
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._data < other._data

    def __le__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._data <= other._data

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._data > other._data

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._data >= other._data

    def __hash__(self) -> int:
        return hash(self._data)

    @classmethod
    def _validate(cls, value: Any):
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, bytes | bytearray):
            return cls(bytes(value))
        raise ValueError(f"Cannot convert {type(value).__name__} to {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate from hex text or raw bytes, serialize to canonical text."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_text(), when_used="json-unless-none"
            ),
        )
