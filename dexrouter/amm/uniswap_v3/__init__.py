"""UniswapV3 concentrated liquidity quoting.

This package provides:
- Fee tiers and fee-combination tables
- Packed multi-hop path encoding
- QuoterV2 calldata encoding and result decoding
"""

from .constants import (
    THREE_HOP_FEE_COMBINATIONS,
    TWO_HOP_FEE_COMBINATIONS,
    V3_FEE_TIERS,
    V3_TICK_SPACING,
    FeeAmount,
    fee_combinations_for_hops,
    tick_spacing_for_fee,
)
from .encoding import decode_path, encode_path
from .quoter import (
    QUOTE_EXACT_INPUT_SELECTOR,
    QUOTE_EXACT_INPUT_SINGLE_SELECTOR,
    UniswapV3QuoteEncoder,
    decode_quote_exact_input,
    decode_quote_exact_input_single,
    encode_quote_exact_input,
    encode_quote_exact_input_single,
)

__all__ = [
    # Constants
    "FeeAmount",
    "V3_FEE_TIERS",
    "V3_TICK_SPACING",
    "TWO_HOP_FEE_COMBINATIONS",
    "THREE_HOP_FEE_COMBINATIONS",
    "fee_combinations_for_hops",
    "tick_spacing_for_fee",
    # Path encoding
    "encode_path",
    "decode_path",
    # Quoter
    "QUOTE_EXACT_INPUT_SELECTOR",
    "QUOTE_EXACT_INPUT_SINGLE_SELECTOR",
    "UniswapV3QuoteEncoder",
    "encode_quote_exact_input",
    "encode_quote_exact_input_single",
    "decode_quote_exact_input",
    "decode_quote_exact_input_single",
]
