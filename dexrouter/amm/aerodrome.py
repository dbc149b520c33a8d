"""Aerodrome (Velodrome V2 fork) router quote encoding.

Every pair can have a stable and a volatile pool, so each hop carries a
stable flag and the pool factory address. Quotes come from
getAmountsOut(amountIn, routes), which returns the amount at every hop.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from eth_abi import encode  # type: ignore[attr-defined]

from dexrouter.amm.base import decode_abi, last_amount, selector
from dexrouter.models.types import address_to_bytes, normalize_address

# getAmountsOut(uint256 amountIn, (address from, address to, bool stable, address factory)[] routes)
GET_AMOUNTS_OUT_SELECTOR = selector("getAmountsOut(uint256,(address,address,bool,address)[])")

# Direct hops try the stable pool first
DIRECT_STABLE_FLAGS: list[tuple[bool]] = [(True,), (False,)]

TWO_HOP_STABLE_COMBINATIONS: list[tuple[bool, bool]] = [
    (False, False),
    (False, True),
    (True, False),
    (True, True),
]

THREE_HOP_STABLE_COMBINATIONS: list[tuple[bool, bool, bool]] = [
    (False, False, False),
    (False, False, True),
    (False, True, False),
    (False, True, True),
    (True, False, False),
    (True, False, True),
    (True, True, False),
    (True, True, True),
]


@dataclass(frozen=True)
class AerodromeHop:
    """One Route struct of an Aerodrome swap."""

    from_token: str
    to_token: str
    stable: bool
    factory: str

    def as_abi_tuple(self) -> tuple[bytes, bytes, bool, bytes]:
        return (
            address_to_bytes(self.from_token),
            address_to_bytes(self.to_token),
            self.stable,
            address_to_bytes(self.factory),
        )


def stable_combinations_for_hops(hops: int) -> list[tuple[bool, ...]]:
    """Return the stable/volatile assignments to try for a hop count.

    Raises:
        ValueError: For hop counts without a table
    """
    if hops == 1:
        return list(DIRECT_STABLE_FLAGS)
    if hops == 2:
        return list(TWO_HOP_STABLE_COMBINATIONS)
    if hops == 3:
        return list(THREE_HOP_STABLE_COMBINATIONS)
    raise ValueError(f"No stable combinations for {hops} hops")


def pool_type_name(flags: Sequence[bool]) -> str:
    """Diagnostic name such as 'stable-volatile'."""
    return "-".join("stable" if flag else "volatile" for flag in flags)


def build_hops(path: Sequence[str], stable_flags: Sequence[bool], factory: str) -> list[AerodromeHop]:
    """Build one Route struct per hop of path.

    Raises:
        ValueError: If flags don't match the hop count
    """
    if len(path) < 2:
        raise ValueError(f"Path needs at least 2 tokens, got {len(path)}")
    if len(stable_flags) != len(path) - 1:
        raise ValueError(
            f"Path/flag lengths do not match: {len(path)} tokens, {len(stable_flags)} flags"
        )
    return [
        AerodromeHop(
            from_token=normalize_address(path[i]),
            to_token=normalize_address(path[i + 1]),
            stable=bool(stable),
            factory=normalize_address(factory),
        )
        for i, stable in enumerate(stable_flags)
    ]


def encode_get_amounts_out(amount_in: int, hops: Sequence[AerodromeHop]) -> bytes:
    """Encode Router.getAmountsOut calldata."""
    encoded_args = encode(
        ["uint256", "(address,address,bool,address)[]"],
        [amount_in, [hop.as_abi_tuple() for hop in hops]],
    )
    return GET_AMOUNTS_OUT_SELECTOR + encoded_args


def decode_get_amounts_out(data: bytes) -> list[int]:
    """Decode getAmountsOut return data into the per-hop amounts."""
    (amounts,) = decode_abi(["uint256[]"], data, "getAmountsOut")
    return [int(amount) for amount in amounts]


class AerodromeQuoteEncoder:
    """Quote encoder for the Aerodrome router.

    Per-hop parameters are stable flags. All hops use the configured
    default pool factory.
    """

    def __init__(self, router_address: str, factory_address: str) -> None:
        self._router_address = router_address
        self._factory_address = factory_address

    @property
    def target(self) -> str:
        return self._router_address

    @property
    def factory(self) -> str:
        return self._factory_address

    def hops(self, path: Sequence[str], stable_flags: Sequence[bool]) -> list[AerodromeHop]:
        return build_hops(path, stable_flags, self._factory_address)

    def encode_direct_quote(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        params: bool,
    ) -> bytes:
        return encode_get_amounts_out(amount_in, self.hops([token_in, token_out], [params]))

    def encode_multihop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        params_per_hop: Sequence[bool],
    ) -> bytes:
        return encode_get_amounts_out(amount_in, self.hops(path, params_per_hop))

    def decode_direct_result(self, data: bytes) -> int:
        return last_amount(decode_get_amounts_out(data), "getAmountsOut")

    def decode_multihop_result(self, data: bytes) -> int:
        return last_amount(decode_get_amounts_out(data), "getAmountsOut")


__all__ = [
    "AerodromeHop",
    "AerodromeQuoteEncoder",
    "DIRECT_STABLE_FLAGS",
    "GET_AMOUNTS_OUT_SELECTOR",
    "THREE_HOP_STABLE_COMBINATIONS",
    "TWO_HOP_STABLE_COMBINATIONS",
    "build_hops",
    "decode_get_amounts_out",
    "encode_get_amounts_out",
    "pool_type_name",
    "stable_combinations_for_hops",
]
