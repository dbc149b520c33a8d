"""Multicall3 aggregate3 calldata encoding and result decoding."""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi import encode  # type: ignore[attr-defined]

from dexrouter.amm.base import decode_abi, selector
from dexrouter.errors import QuoteDecodeError
from dexrouter.models.types import address_to_bytes

from .types import CallRequest, CallResult

# aggregate3((address target, bool allowFailure, bytes callData)[])
#   -> (bool success, bytes returnData)[]
AGGREGATE3_SELECTOR = selector("aggregate3((address,bool,bytes)[])")


def encode_aggregate3(requests: Sequence[CallRequest]) -> bytes:
    """Encode Multicall3.aggregate3 calldata for a batch of requests."""
    calls = [
        (address_to_bytes(request.target), request.allow_failure, request.call_data)
        for request in requests
    ]
    return AGGREGATE3_SELECTOR + encode(["(address,bool,bytes)[]"], [calls])


def decode_aggregate3_calls(data: bytes) -> list[CallRequest]:
    """Decode aggregate3 calldata back into its requests.

    Raises:
        QuoteDecodeError: If data is not aggregate3 calldata
    """
    if data[:4] != AGGREGATE3_SELECTOR:
        raise QuoteDecodeError(f"aggregate3: unexpected selector 0x{data[:4].hex()}")
    (calls,) = decode_abi(["(address,bool,bytes)[]"], data[4:], "aggregate3 calldata")
    return [
        CallRequest(target=target, call_data=bytes(call_data), allow_failure=bool(allow_failure))
        for target, allow_failure, call_data in calls
    ]


def encode_aggregate3_results(results: Sequence[CallResult]) -> bytes:
    """Encode aggregate3 return data, as the contract would."""
    return encode(
        ["(bool,bytes)[]"], [[(result.success, result.return_data) for result in results]]
    )


def decode_aggregate3(data: bytes, expected_count: int | None = None) -> list[CallResult]:
    """Decode aggregate3 return data.

    Args:
        data: Raw return bytes of the aggregate3 call
        expected_count: Number of calls in the batch, checked when given

    Raises:
        QuoteDecodeError: If the bytes don't decode or the count is off
    """
    (pairs,) = decode_abi(["(bool,bytes)[]"], data, "aggregate3")
    results = [CallResult(success=bool(success), return_data=bytes(ret)) for success, ret in pairs]
    if expected_count is not None and len(results) != expected_count:
        raise QuoteDecodeError(
            f"aggregate3: expected {expected_count} results, got {len(results)}"
        )
    return results


__all__ = [
    "AGGREGATE3_SELECTOR",
    "decode_aggregate3",
    "decode_aggregate3_calls",
    "encode_aggregate3",
    "encode_aggregate3_results",
]
