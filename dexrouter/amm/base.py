"""Shared interface and ABI helpers for protocol quote encoders."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from eth_abi import decode  # type: ignore[attr-defined]
from eth_abi.exceptions import DecodingError
from eth_utils import function_signature_to_4byte_selector

from dexrouter.errors import QuoteDecodeError


class QuoteEncoder(Protocol):
    """Protocol for per-protocol quote call encoders.

    Implementations are stateless apart from the immutable target address.
    Encoding must match the remote contract ABI bit for bit; decoding must
    raise QuoteDecodeError on malformed bytes instead of guessing.
    """

    @property
    def target(self) -> str:
        """Address of the contract that receives the encoded calls."""
        ...

    def encode_direct_quote(
        self,
        token_in: str,
        amount_in: int,
        token_out: str,
        params: Any,
    ) -> bytes:
        """Encode a single-hop exact-input quote."""
        ...

    def encode_multihop_quote(
        self,
        path: Sequence[str],
        amount_in: int,
        params_per_hop: Sequence[Any],
    ) -> bytes:
        """Encode a multi-hop exact-input quote along path."""
        ...

    def decode_direct_result(self, data: bytes) -> int:
        """Decode the output amount of a direct quote."""
        ...

    def decode_multihop_result(self, data: bytes) -> int:
        """Decode the final output amount of a multi-hop quote."""
        ...


def selector(signature: str) -> bytes:
    """Return the 4-byte function selector for a canonical signature."""
    return function_signature_to_4byte_selector(signature)


def decode_abi(types: list[str], data: bytes, what: str) -> tuple[Any, ...]:
    """Decode ABI data, raising QuoteDecodeError on any layout mismatch.

    Args:
        types: ABI output types
        data: Raw return bytes
        what: Call name for the error message
    """
    if not data:
        raise QuoteDecodeError(f"{what}: empty return data")
    try:
        return tuple(decode(types, data))
    except (DecodingError, OverflowError, ValueError) as err:
        raise QuoteDecodeError(f"{what}: {err}") from err


def last_amount(amounts: Sequence[int], what: str) -> int:
    """Return the final element of a getAmountsOut style array."""
    if len(amounts) == 0:
        raise QuoteDecodeError(f"{what}: empty amounts array")
    return int(amounts[-1])


__all__ = ["QuoteEncoder", "decode_abi", "last_amount", "selector"]
