"""Annotated wire types shared by the API models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, PlainSerializer
from web3 import Web3

from .fixed_bytes import FixedBytes

U256_MAX = 2**256 - 1


class TxHash(FixedBytes):
    """32-byte transaction hash."""

    SIZE = 32

    __slots__ = ()


def normalize_address(value: Any) -> str:
    """Validate an account address and return its lowercase hex form.

    Args:
        value: Address as hex text (checksummed or not)

    Returns:
        str: ``0x`` followed by 40 lowercase hex characters

    Raises:
        ValueError: If the value is not a valid address
    """
    if not isinstance(value, str) or not Web3.is_address(value):
        raise ValueError(f"Invalid Ethereum address: {value!r}")
    digits = value[2:] if value[:2] in ("0x", "0X") else value
    return "0x" + digits.lower()


def parse_u256(value: Any) -> int:
    """Parse an unsigned 256-bit amount from a JSON number, decimal or hex text.

    Raises:
        ValueError: If the value is not an integer in ``[0, 2**256)``
    """
    if isinstance(value, bool):
        raise ValueError("Boolean is not a valid amount")
    if isinstance(value, int):
        amount = value
    elif isinstance(value, str):
        text = value.strip()
        if "_" in text:
            raise ValueError(f"Invalid amount: {value!r}")
        try:
            amount = int(text, 16) if text[:2] in ("0x", "0X") else int(text, 10)
        except ValueError as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    else:
        raise ValueError(f"Invalid amount type: {type(value).__name__}")

    if amount < 0 or amount > U256_MAX:
        raise ValueError(f"Amount out of uint256 range: {value!r}")
    return amount


Address = Annotated[str, BeforeValidator(normalize_address)]

# Amounts travel as decimal strings to avoid JSON number precision loss
U256 = Annotated[int, BeforeValidator(parse_u256), PlainSerializer(str, when_used="json")]
