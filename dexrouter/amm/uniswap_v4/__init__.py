"""UniswapV4 singleton-pool quoting.

This package provides:
- Canonical pool keys and pool ids
- PathKey construction for multi-hop quotes
- V4Quoter calldata encoding and result decoding
"""

from .pool_key import (
    PathKey,
    PoolKey,
    build_path_keys,
    compute_pool_id,
    is_zero_for_one,
    make_pool_key,
    sort_currencies,
)
from .quoter import (
    QUOTE_EXACT_INPUT_SELECTOR,
    QUOTE_EXACT_INPUT_SINGLE_SELECTOR,
    UniswapV4QuoteEncoder,
    decode_quote_result,
    encode_quote_exact_input,
    encode_quote_exact_input_single,
)

__all__ = [
    # Pool keys
    "PoolKey",
    "PathKey",
    "make_pool_key",
    "compute_pool_id",
    "build_path_keys",
    "is_zero_for_one",
    "sort_currencies",
    # Quoter
    "QUOTE_EXACT_INPUT_SELECTOR",
    "QUOTE_EXACT_INPUT_SINGLE_SELECTOR",
    "UniswapV4QuoteEncoder",
    "encode_quote_exact_input",
    "encode_quote_exact_input_single",
    "decode_quote_result",
]
