"""Batched read calls through the Multicall3 aggregate3 contract.

The client is the only network-facing piece of routing. It never raises for
transport problems: a batch that errors, times out, or comes back
undecodable turns into one failed CallResult per request in that batch,
so callers always get exactly one result per request, in request order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Protocol

import structlog
from eth_utils import to_checksum_address
from web3 import AsyncWeb3

from dexrouter.constants import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_BATCH_TIMEOUT_SECONDS,
    DEFAULT_MAX_CONCURRENT_BATCHES,
    MULTICALL3_ADDRESS,
)
from dexrouter.errors import ConfigurationError, QuoteDecodeError

from .encoding import (
    decode_aggregate3,
    decode_aggregate3_calls,
    encode_aggregate3,
    encode_aggregate3_results,
)
from .types import CallRequest, CallResult

logger = structlog.get_logger()


class CallExecutor(Protocol):
    """Capability to run a static (state-non-mutating) call.

    Raises on transport errors; the Multicall3 client turns those into
    failed results.
    """

    async def call(self, to: str, data: bytes) -> bytes:
        """Run eth_call against `to` with `data`, returning raw bytes."""
        ...


class Web3CallExecutor:
    """CallExecutor backed by an AsyncWeb3 HTTP provider."""

    def __init__(self, rpc_url: str | None = None, web3: AsyncWeb3 | None = None):
        """Initialize with an RPC URL or an existing AsyncWeb3 instance.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint
            web3: Pre-built AsyncWeb3 (takes precedence over rpc_url)
        """
        if web3 is None:
            if not rpc_url:
                raise ConfigurationError("Web3CallExecutor needs an rpc_url or a web3 instance")
            web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))
        self._web3 = web3

    @property
    def web3(self) -> AsyncWeb3:
        return self._web3

    async def call(self, to: str, data: bytes) -> bytes:
        result = await self._web3.eth.call({"to": to_checksum_address(to), "data": data})
        return bytes(result)


class MockCallExecutor:
    """Executor that answers aggregate3 calls locally, for tests.

    Each inner request is answered by `responder`; a responder returning None
    (or no responder at all) yields a failed call. Round trips listed in
    `fail_rounds` raise instead of answering, to exercise batch degradation.
    """

    def __init__(
        self,
        responder: Callable[[CallRequest], CallResult | None] | None = None,
        fail_rounds: set[int] | None = None,
        error: Exception | None = None,
    ):
        self.responder = responder
        self.fail_rounds = fail_rounds or set()
        self.error = error or ConnectionError("mock transport failure")
        self.calls: list[tuple[str, bytes]] = []
        self.batches: list[list[CallRequest]] = []

    @property
    def round_trips(self) -> int:
        return len(self.calls)

    @property
    def requests(self) -> list[CallRequest]:
        """Every inner request seen so far, in submission order."""
        return [request for batch in self.batches for request in batch]

    async def call(self, to: str, data: bytes) -> bytes:
        round_index = len(self.calls)
        self.calls.append((to, data))
        batch = decode_aggregate3_calls(data)
        self.batches.append(batch)

        if round_index in self.fail_rounds:
            raise self.error

        results = []
        for request in batch:
            result = self.responder(request) if self.responder is not None else None
            results.append(result if result is not None else CallResult.failed())
        return encode_aggregate3_results(results)


class Multicall3Client:
    """Client for Multicall3.aggregate3 with size-bounded batches.

    Batches run one at a time unless max_concurrent_batches > 1, in which
    case at most that many are in flight; results are reassembled in request
    order either way.
    """

    def __init__(
        self,
        address: str = MULTICALL3_ADDRESS,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_timeout_seconds: float = DEFAULT_BATCH_TIMEOUT_SECONDS,
        max_concurrent_batches: int = DEFAULT_MAX_CONCURRENT_BATCHES,
    ):
        if batch_size < 1:
            raise ConfigurationError(f"batch_size must be >= 1, got {batch_size}")
        if max_concurrent_batches < 1:
            raise ConfigurationError(
                f"max_concurrent_batches must be >= 1, got {max_concurrent_batches}"
            )
        self.address = address
        self.batch_size = batch_size
        self.batch_timeout_seconds = batch_timeout_seconds
        self.max_concurrent_batches = max_concurrent_batches

    def partition(self, requests: Sequence[CallRequest]) -> list[list[CallRequest]]:
        """Split requests into consecutive batches of at most batch_size."""
        return [
            list(requests[start : start + self.batch_size])
            for start in range(0, len(requests), self.batch_size)
        ]

    async def aggregate_calls(
        self,
        executor: CallExecutor,
        requests: Sequence[CallRequest],
    ) -> list[CallResult]:
        """Run every request through aggregate3.

        Args:
            executor: Static-call capability for the target network
            requests: Calls to run, each with allow_failure set

        Returns:
            One CallResult per request, in request order
        """
        if not requests:
            return []

        batches = self.partition(requests)

        if self.max_concurrent_batches == 1:
            per_batch = []
            for index, batch in enumerate(batches):
                per_batch.append(await self._run_batch(executor, index, batch))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrent_batches)

            async def bounded(index: int, batch: list[CallRequest]) -> list[CallResult]:
                async with semaphore:
                    return await self._run_batch(executor, index, batch)

            per_batch = await asyncio.gather(
                *(bounded(index, batch) for index, batch in enumerate(batches))
            )

        results = [result for batch_results in per_batch for result in batch_results]

        logger.debug(
            "multicall_complete",
            requests=len(requests),
            batches=len(batches),
            succeeded=sum(1 for result in results if result.success),
        )
        return results

    async def _run_batch(
        self,
        executor: CallExecutor,
        index: int,
        batch: list[CallRequest],
    ) -> list[CallResult]:
        """Run one aggregate3 round trip, degrading any failure per call."""
        call_data = encode_aggregate3(batch)
        try:
            raw = await asyncio.wait_for(
                executor.call(self.address, call_data),
                timeout=self.batch_timeout_seconds,
            )
            return decode_aggregate3(raw, expected_count=len(batch))
        except TimeoutError:
            logger.warning(
                "multicall_batch_timeout",
                batch_index=index,
                batch_size=len(batch),
                timeout_seconds=self.batch_timeout_seconds,
            )
        except QuoteDecodeError as e:
            logger.warning(
                "multicall_batch_undecodable",
                batch_index=index,
                batch_size=len(batch),
                error=str(e),
            )
        except Exception as e:
            logger.warning(
                "multicall_batch_failed",
                batch_index=index,
                batch_size=len(batch),
                error=str(e),
                error_type=type(e).__name__,
            )
        return [CallResult.failed() for _ in batch]


__all__ = [
    "CallExecutor",
    "MockCallExecutor",
    "Multicall3Client",
    "Web3CallExecutor",
]
