"""Route result types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dexrouter.amm.aerodrome import AerodromeHop
    from dexrouter.amm.uniswap_v4.pool_key import PathKey, PoolKey


class DexProtocol(str, Enum):
    """Protocol families a route can be quoted on."""

    CONSTANT_PRODUCT = "uniswap_v2"
    CONCENTRATED_LIQUIDITY = "uniswap_v3"
    SINGLETON_HOOK_POOL = "uniswap_v4"
    STABLE_VOLATILE_FORK = "aerodrome"


@dataclass
class Route:
    """Best route found for a (token_in, amount_in, token_out) request.

    Only the artifacts relevant to the winning protocol are populated:
    - uniswap_v2: path
    - uniswap_v3: path, fees, encoded_path
    - uniswap_v4: path, fees, and pool_key/pool_id (direct) or path_keys (multi-hop)
    - aerodrome: path, aero_routes

    An empty route (amount_out 0, empty path) means no liquidity was found.
    """

    amount_out: int = 0
    path: list[str] = field(default_factory=list)
    fees: list[int] = field(default_factory=list)
    protocol: DexProtocol | None = None
    encoded_path: str | None = None  # V3 packed path, 0x-prefixed hex
    pool_key: PoolKey | None = None  # V4 direct swaps
    pool_id: str | None = None  # keccak256 of pool_key
    path_keys: list[PathKey] | None = None  # V4 multi-hop swaps
    aero_routes: list[AerodromeHop] | None = None

    @classmethod
    def empty(cls, protocol: DexProtocol | None = None) -> Route:
        """Create the sentinel route returned when nothing is quotable."""
        return cls(protocol=protocol)

    def copy(self) -> Route:
        """Return a copy whose lists can be mutated without touching this route."""
        return replace(
            self,
            path=list(self.path),
            fees=list(self.fees),
            path_keys=None if self.path_keys is None else list(self.path_keys),
            aero_routes=None if self.aero_routes is None else list(self.aero_routes),
        )

    @property
    def is_empty(self) -> bool:
        return self.amount_out == 0 or not self.path

    @property
    def hop_count(self) -> int:
        return max(len(self.path) - 1, 0)

    @property
    def is_multihop(self) -> bool:
        """Check if this is a multi-hop route."""
        return len(self.path) > 2


__all__ = ["DexProtocol", "Route"]
