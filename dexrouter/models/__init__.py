"""Shared models for route finding."""

from dexrouter.models.route import DexProtocol, Route
from dexrouter.models.types import (
    ADDRESS_PATTERN,
    UINT128_MAX,
    UINT256_MAX,
    ZERO_ADDRESS,
    Address,
    address_to_bytes,
    is_valid_address,
    is_zero_address,
    normalize_address,
    validate_uint256,
)

__all__ = [
    "ADDRESS_PATTERN",
    "Address",
    "DexProtocol",
    "Route",
    "UINT128_MAX",
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "address_to_bytes",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
    "validate_uint256",
]
