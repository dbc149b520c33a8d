"""Protocol quote encoders.

One encoder per protocol family. Encoders only build calldata and decode
return data; they never touch the network.
"""

from dexrouter.amm.aerodrome import AerodromeHop, AerodromeQuoteEncoder
from dexrouter.amm.base import QuoteEncoder
from dexrouter.amm.uniswap_v2 import UniswapV2QuoteEncoder
from dexrouter.amm.uniswap_v3 import FeeAmount, UniswapV3QuoteEncoder
from dexrouter.amm.uniswap_v4 import PathKey, PoolKey, UniswapV4QuoteEncoder

__all__ = [
    "AerodromeHop",
    "AerodromeQuoteEncoder",
    "FeeAmount",
    "PathKey",
    "PoolKey",
    "QuoteEncoder",
    "UniswapV2QuoteEncoder",
    "UniswapV3QuoteEncoder",
    "UniswapV4QuoteEncoder",
]
