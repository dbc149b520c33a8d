"""Request and result types for aggregated calls."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallRequest:
    """One read call inside an aggregate3 batch.

    allow_failure is always True for quotes: one reverting pool must never
    abort the rest of the batch.
    """

    target: str
    call_data: bytes
    allow_failure: bool = True


@dataclass(frozen=True)
class CallResult:
    """Outcome of one call, positionally matched to its CallRequest."""

    success: bool
    return_data: bytes = b""

    @classmethod
    def failed(cls) -> CallResult:
        """Synthetic result for a call whose batch never came back."""
        return cls(success=False, return_data=b"")


__all__ = ["CallRequest", "CallResult"]
