"""UniswapV4 pool keys, pool ids and multi-hop path keys.

V4 keeps every pool in one singleton PoolManager, so a pool is identified
by its key rather than an address. Keys are canonical: currency0 is always
the numerically lower address. Every place that builds a key must go
through make_pool_key or lookups silently miss.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from dexrouter.amm.uniswap_v3.constants import tick_spacing_for_fee
from dexrouter.models.types import ZERO_ADDRESS, address_to_bytes, normalize_address


@dataclass(frozen=True)
class PoolKey:
    """Identifies a V4 pool inside the PoolManager."""

    currency0: str
    currency1: str
    fee: int  # uint24
    tick_spacing: int  # int24
    hooks: str = ZERO_ADDRESS

    def as_abi_tuple(self) -> tuple[bytes, bytes, int, int, bytes]:
        return (
            address_to_bytes(self.currency0),
            address_to_bytes(self.currency1),
            self.fee,
            self.tick_spacing,
            address_to_bytes(self.hooks),
        )


@dataclass(frozen=True)
class PathKey:
    """One hop of a V4 multi-hop quote; intermediate_currency is the hop's output."""

    intermediate_currency: str
    fee: int
    tick_spacing: int
    hooks: str = ZERO_ADDRESS
    hook_data: bytes = b""

    def as_abi_tuple(self) -> tuple[bytes, int, int, bytes, bytes]:
        return (
            address_to_bytes(self.intermediate_currency),
            self.fee,
            self.tick_spacing,
            address_to_bytes(self.hooks),
            self.hook_data,
        )


def sort_currencies(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token addresses as (currency0, currency1)."""
    if normalize_address(token_a) < normalize_address(token_b):
        return token_a, token_b
    return token_b, token_a


def make_pool_key(token_a: str, token_b: str, fee: int, hooks: str = ZERO_ADDRESS) -> PoolKey:
    """Build the canonical pool key for a token pair and fee tier.

    Args:
        token_a: Either token of the pair
        token_b: The other token
        fee: Fee tier; tick spacing is derived from it
        hooks: Hooks contract address (zero for hookless pools)

    Raises:
        ValueError: If fee is not a standard tier
    """
    currency0, currency1 = sort_currencies(token_a, token_b)
    return PoolKey(
        currency0=normalize_address(currency0),
        currency1=normalize_address(currency1),
        fee=int(fee),
        tick_spacing=tick_spacing_for_fee(fee),
        hooks=normalize_address(hooks),
    )


def compute_pool_id(key: PoolKey) -> str:
    """keccak256 over the ABI-encoded 5-slot PoolKey struct, as 0x hex."""
    encoded = encode(["address", "address", "uint24", "int24", "address"], list(key.as_abi_tuple()))
    return "0x" + keccak(encoded).hex()


def is_zero_for_one(token_in: str, key: PoolKey) -> bool:
    """True when swapping currency0 for currency1 in this pool."""
    return normalize_address(token_in) == normalize_address(key.currency0)


def build_path_keys(
    path: Sequence[str],
    fees: Sequence[int],
    hooks: str = ZERO_ADDRESS,
) -> list[PathKey]:
    """Build the PathKey list for an exact-input quote along path.

    The input currency is passed separately to the quoter, so there is one
    key per hop, each naming that hop's output currency.

    Raises:
        ValueError: If fees don't match the hop count
    """
    if len(path) < 2:
        raise ValueError(f"Path needs at least 2 tokens, got {len(path)}")
    if len(fees) != len(path) - 1:
        raise ValueError(f"Path/fee lengths do not match: {len(path)} tokens, {len(fees)} fees")

    return [
        PathKey(
            intermediate_currency=normalize_address(path[i + 1]),
            fee=int(fee),
            tick_spacing=tick_spacing_for_fee(fee),
            hooks=normalize_address(hooks),
        )
        for i, fee in enumerate(fees)
    ]


__all__ = [
    "PathKey",
    "PoolKey",
    "build_path_keys",
    "compute_pool_id",
    "is_zero_for_one",
    "make_pool_key",
    "sort_currencies",
]
