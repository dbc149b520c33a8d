"""UniswapV2 Router02 quote encoding.

Quotes come from getAmountsOut(amountIn, path), which returns the amount
at every hop. The output of the route is the last element.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import encode  # type: ignore[attr-defined]

from dexrouter.amm.base import decode_abi, last_amount, selector
from dexrouter.models.types import address_to_bytes

# getAmountsOut(uint256,address[]) -> uint256[]
GET_AMOUNTS_OUT_SELECTOR = selector("getAmountsOut(uint256,address[])")


def encode_get_amounts_out(amount_in: int, path: Sequence[str]) -> bytes:
    """Encode Router02.getAmountsOut calldata.

    Args:
        amount_in: Exact input amount
        path: Token addresses, input first

    Returns:
        Selector-prefixed calldata
    """
    if len(path) < 2:
        raise ValueError(f"Path needs at least 2 tokens, got {len(path)}")
    encoded_args = encode(
        ["uint256", "address[]"],
        [amount_in, [address_to_bytes(token) for token in path]],
    )
    return GET_AMOUNTS_OUT_SELECTOR + encoded_args


def decode_get_amounts_out(data: bytes) -> list[int]:
    """Decode getAmountsOut return data into the per-hop amounts."""
    (amounts,) = decode_abi(["uint256[]"], data, "getAmountsOut")
    return [int(amount) for amount in amounts]


class UniswapV2QuoteEncoder:
    """Quote encoder for UniswapV2-style routers.

    Direct and multi-hop quotes share one entry point; there are no
    per-hop parameters.
    """

    def __init__(self, router_address: str) -> None:
        self._router_address = router_address

    @property
    def target(self) -> str:
        return self._router_address

    def encode_direct_quote(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        params: Any = None,
    ) -> bytes:
        _ = params  # V2 pools have no per-hop parameters
        return encode_get_amounts_out(amount_in, [token_in, token_out])

    def encode_multihop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        params_per_hop: Sequence[Any] = (),
    ) -> bytes:
        _ = params_per_hop
        return encode_get_amounts_out(amount_in, path)

    def decode_direct_result(self, data: bytes) -> int:
        return last_amount(decode_get_amounts_out(data), "getAmountsOut")

    def decode_multihop_result(self, data: bytes) -> int:
        return last_amount(decode_get_amounts_out(data), "getAmountsOut")


__all__ = [
    "GET_AMOUNTS_OUT_SELECTOR",
    "UniswapV2QuoteEncoder",
    "decode_get_amounts_out",
    "encode_get_amounts_out",
]
