"""Common interface of the per-protocol routing strategies."""

from __future__ import annotations

from typing import Any, Protocol

import structlog

from dexrouter.amm.base import QuoteEncoder
from dexrouter.config import ChainConfig
from dexrouter.models.route import DexProtocol, Route
from dexrouter.multicall.client import CallExecutor, Multicall3Client
from dexrouter.routing.selection import quote_contexts
from dexrouter.routing.types import QuoteContext

logger = structlog.get_logger()


class RoutingStrategy(Protocol):
    """Finds the best exact-input route on one protocol.

    Strategies are stateless between calls: the call executor is passed per
    call rather than stored, so one strategy can serve any number of
    concurrent requests.
    """

    protocol: DexProtocol

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        """Validate the request and build every quote context, in submission order."""
        ...

    async def get_best_route(
        self,
        executor: CallExecutor,
        token_in: str,
        amount_in: Any,
        token_out: str,
    ) -> Route:
        """Quote every candidate and return the best route (or the empty route)."""
        ...


class BaseRoutingStrategy:
    """Base class with the quote-and-select flow shared by every strategy.

    Subclasses set `protocol`, build `chain`, `encoder` and `multicall` in
    their constructor, and provide build_contexts and to_route.
    """

    protocol: DexProtocol
    chain: ChainConfig
    encoder: QuoteEncoder
    multicall: Multicall3Client

    def build_contexts(self, token_in: str, amount_in: Any, token_out: str) -> list[QuoteContext]:
        raise NotImplementedError

    def to_route(self, context: QuoteContext, amount_out: int) -> Route:
        raise NotImplementedError

    def decode(self, context: QuoteContext, data: bytes) -> int:
        if context.is_multihop:
            return self.encoder.decode_multihop_result(data)
        return self.encoder.decode_direct_result(data)

    async def get_best_route(
        self,
        executor: CallExecutor,
        token_in: str,
        amount_in: Any,
        token_out: str,
    ) -> Route:
        contexts = self.build_contexts(token_in, amount_in, token_out)
        logger.debug(
            "route_search_started",
            protocol=self.protocol.value,
            network=self.chain.name,
            candidates=len(contexts),
        )
        return await quote_contexts(
            self.protocol, self.multicall, executor, contexts, self.decode, self.to_route
        )


__all__ = ["BaseRoutingStrategy", "RoutingStrategy"]
