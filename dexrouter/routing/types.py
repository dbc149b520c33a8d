"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass, field

from dexrouter.amm.aerodrome import AerodromeHop
from dexrouter.amm.uniswap_v4.pool_key import PathKey, PoolKey
from dexrouter.multicall.types import CallRequest


@dataclass(frozen=True)
class CandidatePath:
    """A token path worth quoting, before protocol parameters are chosen."""

    path: tuple[str, ...]
    description: str

    @property
    def hop_count(self) -> int:
        return len(self.path) - 1

    @property
    def is_multihop(self) -> bool:
        return len(self.path) > 2


@dataclass
class QuoteContext:
    """One quote request plus the metadata needed to rebuild its Route.

    Contexts are matched to call results purely by position, so the list a
    strategy builds must stay in submission order.
    """

    request_index: int
    request: CallRequest
    path: list[str]
    description: str
    fees: list[int] = field(default_factory=list)
    stable_flags: list[bool] = field(default_factory=list)
    encoded_path: bytes | None = None  # V3 packed path
    pool_key: PoolKey | None = None  # V4 direct
    path_keys: list[PathKey] | None = None  # V4 multi-hop
    aero_routes: list[AerodromeHop] | None = None

    @property
    def hop_count(self) -> int:
        return len(self.path) - 1

    @property
    def is_multihop(self) -> bool:
        return len(self.path) > 2


__all__ = ["CandidatePath", "QuoteContext"]
