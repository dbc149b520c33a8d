"""V4Quoter calldata encoding and result decoding."""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi import encode  # type: ignore[attr-defined]

from dexrouter.amm.base import decode_abi, selector
from dexrouter.models.types import ZERO_ADDRESS, address_to_bytes

from .pool_key import PathKey, PoolKey, build_path_keys, is_zero_for_one, make_pool_key

# quoteExactInputSingle((PoolKey poolKey, bool zeroForOne, uint128 exactAmount, bytes hookData))
QUOTE_EXACT_INPUT_SINGLE_PARAMS = "((address,address,uint24,int24,address),bool,uint128,bytes)"
QUOTE_EXACT_INPUT_SINGLE_SELECTOR = selector(
    f"quoteExactInputSingle({QUOTE_EXACT_INPUT_SINGLE_PARAMS})"
)

# quoteExactInput((Currency exactCurrency, PathKey[] path, uint128 exactAmount))
QUOTE_EXACT_INPUT_PARAMS = "(address,(address,uint24,int24,address,bytes)[],uint128)"
QUOTE_EXACT_INPUT_SELECTOR = selector(f"quoteExactInput({QUOTE_EXACT_INPUT_PARAMS})")

# Both entry points return (uint256 amountOut, uint256 gasEstimate)
QUOTE_OUTPUTS = ["uint256", "uint256"]


def encode_quote_exact_input_single(
    pool_key: PoolKey,
    zero_for_one: bool,
    exact_amount: int,
    hook_data: bytes = b"",
) -> bytes:
    """Encode V4Quoter.quoteExactInputSingle calldata."""
    encoded_params = encode(
        [QUOTE_EXACT_INPUT_SINGLE_PARAMS],
        [(pool_key.as_abi_tuple(), zero_for_one, exact_amount, hook_data)],
    )
    return QUOTE_EXACT_INPUT_SINGLE_SELECTOR + encoded_params


def encode_quote_exact_input(
    exact_currency: str,
    path_keys: Sequence[PathKey],
    exact_amount: int,
) -> bytes:
    """Encode V4Quoter.quoteExactInput calldata."""
    encoded_params = encode(
        [QUOTE_EXACT_INPUT_PARAMS],
        [
            (
                address_to_bytes(exact_currency),
                [key.as_abi_tuple() for key in path_keys],
                exact_amount,
            )
        ],
    )
    return QUOTE_EXACT_INPUT_SELECTOR + encoded_params


def decode_quote_result(data: bytes) -> int:
    """Decode amountOut from either V4 quote result."""
    amount_out, _gas_estimate = decode_abi(QUOTE_OUTPUTS, data, "v4Quote")
    return int(amount_out)


class UniswapV4QuoteEncoder:
    """Quote encoder for the UniswapV4 V4Quoter contract.

    Per-hop parameters are fee tiers. Tick spacing is derived from the fee
    and pools are assumed hookless unless a hooks address is configured.
    """

    def __init__(self, quoter_address: str, hooks: str = ZERO_ADDRESS) -> None:
        self._quoter_address = quoter_address
        self._hooks = hooks

    @property
    def target(self) -> str:
        return self._quoter_address

    def pool_key(self, token_in: str, token_out: str, fee: int) -> PoolKey:
        return make_pool_key(token_in, token_out, fee, self._hooks)

    def path_keys(self, path: Sequence[str], fees: Sequence[int]) -> list[PathKey]:
        return build_path_keys(path, fees, self._hooks)

    def encode_direct_quote(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        params: int,
    ) -> bytes:
        key = self.pool_key(token_in, token_out, params)
        return encode_quote_exact_input_single(key, is_zero_for_one(token_in, key), amount_in)

    def encode_multihop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        params_per_hop: Sequence[int],
    ) -> bytes:
        return encode_quote_exact_input(path[0], self.path_keys(path, params_per_hop), amount_in)

    def decode_direct_result(self, data: bytes) -> int:
        return decode_quote_result(data)

    def decode_multihop_result(self, data: bytes) -> int:
        return decode_quote_result(data)


__all__ = [
    "QUOTE_EXACT_INPUT_SELECTOR",
    "QUOTE_EXACT_INPUT_SINGLE_SELECTOR",
    "UniswapV4QuoteEncoder",
    "decode_quote_result",
    "encode_quote_exact_input",
    "encode_quote_exact_input_single",
]
