"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token addresses and common amounts
- factories: Quote result encoders and mock responders
"""

from tests.helpers.constants import (
    BASE_AERO,
    BASE_CBBTC,
    BASE_DAI,
    BASE_USDC,
    BASE_USDT,
    BASE_VIRTUAL,
    BASE_WETH,
    BASE_WSTETH,
    DAI,
    NATIVE,
    ONE_ETH,
    OTHER_TOKEN,
    THOUSAND_USDC,
    USDC,
    USDT,
    WBTC,
    WETH,
)
from tests.helpers.factories import (
    echo_responder,
    make_requests,
    responder_for,
    v2_amounts_result,
    v3_multi_result,
    v3_single_result,
    v4_result,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "USDT",
    "WBTC",
    "BASE_WETH",
    "BASE_USDC",
    "BASE_USDT",
    "BASE_DAI",
    "BASE_CBBTC",
    "BASE_WSTETH",
    "BASE_AERO",
    "BASE_VIRTUAL",
    "NATIVE",
    "OTHER_TOKEN",
    "ONE_ETH",
    "THOUSAND_USDC",
    # Factories
    "v2_amounts_result",
    "v3_single_result",
    "v3_multi_result",
    "v4_result",
    "responder_for",
    "echo_responder",
    "make_requests",
]
