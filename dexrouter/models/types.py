"""Shared type helpers for addresses and on-chain integers.

These helpers are used across encoders, path generation and the API layer.
"""

import re
from typing import Annotated, Any

from pydantic import Field

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

# Maximum uint128 value (V4 quoter exactAmount width)
UINT128_MAX = 2**128 - 1

# The zero address doubles as the native-asset sentinel
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def validate_uint256(value: Any) -> int:
    """Validate that a value is a valid uint256.

    Args:
        value: Value to validate (decimal string or int)

    Returns:
        The value as an int

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    # bool is an int subclass; never a valid amount
    if isinstance(value, bool):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return int_value


# Ethereum address (40 hex chars after 0x prefix)
ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.
                  If False (default), returns normalized form without validation.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address.

    Args:
        address: String to validate

    Returns:
        True if valid Ethereum address format
    """
    if not isinstance(address, str):
        return False
    return _ADDRESS_RE.fullmatch(address) is not None


def is_zero_address(address: str | None) -> bool:
    """True for None, empty string or the zero address."""
    if not address:
        return True
    return normalize_address(address) == ZERO_ADDRESS


def address_to_bytes(address: str) -> bytes:
    """Convert a hex address to its 20 raw bytes for ABI encoding.

    Raises:
        ValueError: If the address is not 20 bytes of hex
    """
    normalized = normalize_address(address, validate=True)
    return bytes.fromhex(normalized[2:])
