"""Shared type definitions for viewer records.

These types are used across every read projection and the API layer.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# The NONE handle: an unset address slot on a ledger entity
NULL_ADDRESS = "0x0000000000000000000000000000000000000000"


def validate_uint(value: Any) -> int:
    """Validate that a value is a valid uint256.

    Accepts ints and decimal strings (the JSON encoding used by the API).

    Raises:
        ValueError: If value is negative, out of range or not an integer
    """
    if isinstance(value, bool):
        raise ValueError("Uint must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Uint must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Uint cannot be negative: {value}")
    if value > UINT256_MAX:
        raise ValueError(f"Uint overflow: {value} > 2^256-1")
    return value


def validate_address(value: Any) -> str:
    """Validate and normalize an address field."""
    if not isinstance(value, str) or not is_valid_address(normalize_address(value)):
        raise ValueError(f"Invalid address: {value}")
    return normalize_address(value)


# Ledger address, normalized to lowercase
Address = Annotated[str, BeforeValidator(validate_address)]

# 256-bit unsigned integer, held as int and serialized as a decimal string in JSON
Uint = Annotated[
    int,
    BeforeValidator(validate_uint),
    PlainSerializer(str, return_type=str, when_used="json"),
    Field(description="256-bit unsigned integer (decimal string in JSON)"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize a ledger address to lowercase.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False


def is_null_address(address: str) -> bool:
    """True if the address is the NONE handle."""
    return normalize_address(address) == NULL_ADDRESS
