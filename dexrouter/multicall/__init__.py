"""Multicall3 batch aggregation.

This package provides:
- aggregate3 calldata encoding and result decoding
- The CallExecutor capability and its web3 implementation
- Multicall3Client, which batches requests and degrades failed batches
"""

from .client import CallExecutor, MockCallExecutor, Multicall3Client, Web3CallExecutor
from .encoding import (
    AGGREGATE3_SELECTOR,
    decode_aggregate3,
    decode_aggregate3_calls,
    encode_aggregate3,
    encode_aggregate3_results,
)
from .types import CallRequest, CallResult

__all__ = [
    # Types
    "CallRequest",
    "CallResult",
    # Encoding
    "AGGREGATE3_SELECTOR",
    "encode_aggregate3",
    "decode_aggregate3",
    "decode_aggregate3_calls",
    "encode_aggregate3_results",
    # Client
    "CallExecutor",
    "MockCallExecutor",
    "Multicall3Client",
    "Web3CallExecutor",
]
