"""QuoterV2 calldata encoding and result decoding.

QuoterV2 simulates swaps by reverting internally, so it is only ever used
through static calls. Both quote functions return the output amount first.
"""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi import encode  # type: ignore[attr-defined]

from dexrouter.amm.base import decode_abi, selector
from dexrouter.models.types import address_to_bytes

from .encoding import encode_path

# quoteExactInputSingle((address tokenIn, address tokenOut, uint256 amountIn,
#                        uint24 fee, uint160 sqrtPriceLimitX96))
QUOTE_EXACT_INPUT_SINGLE_SELECTOR = selector(
    "quoteExactInputSingle((address,address,uint256,uint24,uint160))"
)

# quoteExactInput(bytes path, uint256 amountIn)
QUOTE_EXACT_INPUT_SELECTOR = selector("quoteExactInput(bytes,uint256)")

# (amountOut, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
QUOTE_EXACT_INPUT_SINGLE_OUTPUTS = ["uint256", "uint160", "uint32", "uint256"]

# (amountOut, sqrtPriceX96AfterList, initializedTicksCrossedList, gasEstimate)
QUOTE_EXACT_INPUT_OUTPUTS = ["uint256", "uint160[]", "uint32[]", "uint256"]


def encode_quote_exact_input_single(
    token_in: str,
    token_out: str,
    fee: int,
    amount_in: int,
    sqrt_price_limit_x96: int = 0,
) -> bytes:
    """Encode QuoterV2.quoteExactInputSingle calldata.

    Args:
        token_in: Input token address
        token_out: Output token address
        fee: Pool fee tier (e.g., 3000 for 0.3%)
        amount_in: Exact input amount
        sqrt_price_limit_x96: Price limit (0 = no limit)

    Returns:
        Selector-prefixed calldata
    """
    encoded_params = encode(
        ["(address,address,uint256,uint24,uint160)"],
        [
            (
                address_to_bytes(token_in),
                address_to_bytes(token_out),
                amount_in,
                int(fee),
                sqrt_price_limit_x96,
            )
        ],
    )
    return QUOTE_EXACT_INPUT_SINGLE_SELECTOR + encoded_params


def encode_quote_exact_input(encoded_path: bytes, amount_in: int) -> bytes:
    """Encode QuoterV2.quoteExactInput calldata for a packed path."""
    encoded_params = encode(["bytes", "uint256"], [encoded_path, amount_in])
    return QUOTE_EXACT_INPUT_SELECTOR + encoded_params


def decode_quote_exact_input_single(data: bytes) -> int:
    """Decode the amountOut of a quoteExactInputSingle result."""
    amount_out, _price_after, _ticks, _gas = decode_abi(
        QUOTE_EXACT_INPUT_SINGLE_OUTPUTS, data, "quoteExactInputSingle"
    )
    return int(amount_out)


def decode_quote_exact_input(data: bytes) -> int:
    """Decode the amountOut of a quoteExactInput result."""
    amount_out, _prices_after, _ticks, _gas = decode_abi(
        QUOTE_EXACT_INPUT_OUTPUTS, data, "quoteExactInput"
    )
    return int(amount_out)


class UniswapV3QuoteEncoder:
    """Quote encoder for the UniswapV3 QuoterV2 contract.

    Direct quotes go through quoteExactInputSingle with one fee tier.
    Multi-hop quotes pack the path with one fee per hop and go through
    quoteExactInput, whose result carries per-hop arrays after amountOut.
    """

    def __init__(self, quoter_address: str) -> None:
        self._quoter_address = quoter_address

    @property
    def target(self) -> str:
        return self._quoter_address

    def encode_direct_quote(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        params: int,
    ) -> bytes:
        return encode_quote_exact_input_single(token_in, token_out, params, amount_in)

    def encode_multihop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        params_per_hop: Sequence[int],
    ) -> bytes:
        return encode_quote_exact_input(encode_path(path, params_per_hop), amount_in)

    def decode_direct_result(self, data: bytes) -> int:
        return decode_quote_exact_input_single(data)

    def decode_multihop_result(self, data: bytes) -> int:
        return decode_quote_exact_input(data)


__all__ = [
    "QUOTE_EXACT_INPUT_SELECTOR",
    "QUOTE_EXACT_INPUT_SINGLE_SELECTOR",
    "UniswapV3QuoteEncoder",
    "decode_quote_exact_input",
    "decode_quote_exact_input_single",
    "encode_quote_exact_input",
    "encode_quote_exact_input_single",
]
