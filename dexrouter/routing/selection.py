"""Shared composition helpers for the per-protocol routing strategies.

Every strategy follows the same flow: validate the request and translate the
native-asset sentinel, build one QuoteContext per (path, parameters) pair,
submit them through Multicall3, then walk contexts and results in lockstep
keeping the best decodable output.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import Any

import structlog

from dexrouter.config import ChainConfig
from dexrouter.errors import InvalidInputError, QuoteDecodeError, RoutingError
from dexrouter.models.route import DexProtocol, Route
from dexrouter.models.types import (
    UINT256_MAX,
    is_valid_address,
    is_zero_address,
    normalize_address,
    validate_uint256,
)
from dexrouter.multicall.client import CallExecutor, Multicall3Client
from dexrouter.multicall.types import CallResult

from .pathfinding import generate_candidate_paths
from .types import CandidatePath, QuoteContext

logger = structlog.get_logger()

ResultDecoder = Callable[[QuoteContext, bytes], int]
RouteBuilder = Callable[[QuoteContext, int], Route]


def resolve_token(chain: ChainConfig, token: str) -> str:
    """Validate a token address and map the native sentinel to wrapped native.

    Raises:
        InvalidInputError: If token is not a 0x-prefixed 20-byte hex address
    """
    if not is_valid_address(token):
        raise InvalidInputError(f"Invalid token address: {token!r}")
    if is_zero_address(token):
        return normalize_address(chain.wrapped_native)
    return normalize_address(token)


def validate_amount(amount_in: Any, max_amount: int = UINT256_MAX) -> int:
    """Validate an exact-input amount.

    Raises:
        InvalidInputError: If amount is not an integer in [1, max_amount]
    """
    try:
        amount = validate_uint256(amount_in)
    except ValueError as e:
        raise InvalidInputError(str(e)) from e
    if amount == 0:
        raise InvalidInputError("amount_in must be positive")
    if amount > max_amount:
        raise InvalidInputError(f"amount_in {amount} exceeds maximum {max_amount}")
    return amount


def prepare_request(
    chain: ChainConfig,
    token_in: str,
    amount_in: Any,
    token_out: str,
    max_amount: int = UINT256_MAX,
) -> tuple[str, int, str]:
    """Validate a quote request before any network call.

    Returns:
        (token_in, amount_in, token_out) with tokens normalized and the
        native sentinel translated

    Raises:
        InvalidInputError: On a malformed address or amount, or when both
            tokens are the same after translation
    """
    resolved_in = resolve_token(chain, token_in)
    resolved_out = resolve_token(chain, token_out)
    amount = validate_amount(amount_in, max_amount)
    if resolved_in == resolved_out:
        raise InvalidInputError(f"token_in and token_out are the same token: {resolved_in}")
    return resolved_in, amount, resolved_out


def candidate_paths(chain: ChainConfig, token_in: str, token_out: str) -> list[CandidatePath]:
    """Direct, one-intermediary, then two-intermediary paths for a chain."""
    intermediaries = [normalize_address(token) for token in chain.intermediary_tokens]
    pairs = [
        (normalize_address(first), normalize_address(second))
        for first, second in chain.intermediary_pairs
    ]
    return generate_candidate_paths(
        token_in, token_out, intermediaries, pairs, label=chain.token_symbol
    )


def expand_parameters(
    paths: Sequence[CandidatePath],
    combinations_for_hops: Callable[[int], Sequence[tuple[Any, ...]]],
) -> Iterator[tuple[CandidatePath, tuple[Any, ...]]]:
    """Cross every path with every parameter assignment for its hop count."""
    for candidate in paths:
        for params in combinations_for_hops(candidate.hop_count):
            yield candidate, params


def is_better(amount_out: int, hops: int, best_amount: int, best_hops: int) -> bool:
    """Whether a candidate beats the current best.

    Strictly more output wins; equal output wins only with strictly fewer
    hops. Zero output never wins.
    """
    if amount_out <= 0:
        return False
    if amount_out > best_amount:
        return True
    return amount_out == best_amount and hops < best_hops


def select_best_route(
    protocol: DexProtocol,
    contexts: Sequence[QuoteContext],
    results: Sequence[CallResult],
    decode: ResultDecoder,
    build_route: RouteBuilder,
) -> Route:
    """Decode results in lockstep with their contexts and keep the best.

    Failed calls are skipped silently; undecodable results are logged and
    skipped. Returns the empty route when nothing produced output.

    Raises:
        RoutingError: If contexts and results are not the same length
    """
    if len(contexts) != len(results):
        raise RoutingError(
            f"Result count mismatch: {len(contexts)} contexts, {len(results)} results"
        )

    best_context: QuoteContext | None = None
    best_amount = 0
    best_hops = 0
    succeeded = 0

    for context, result in zip(contexts, results, strict=True):
        if not result.success:
            continue
        succeeded += 1
        try:
            amount_out = decode(context, result.return_data)
        except QuoteDecodeError as e:
            logger.warning(
                "quote_decode_failed",
                protocol=protocol.value,
                description=context.description,
                error=str(e),
            )
            continue

        if is_better(amount_out, context.hop_count, best_amount, best_hops):
            best_context = context
            best_amount = amount_out
            best_hops = context.hop_count

    if best_context is None:
        logger.info(
            "no_route_found",
            protocol=protocol.value,
            candidates=len(contexts),
            succeeded=succeeded,
        )
        return Route.empty(protocol)

    logger.debug(
        "best_route_selected",
        protocol=protocol.value,
        description=best_context.description,
        amount_out=best_amount,
        candidates=len(contexts),
        succeeded=succeeded,
    )
    return build_route(best_context, best_amount)


async def quote_contexts(
    protocol: DexProtocol,
    multicall: Multicall3Client,
    executor: CallExecutor,
    contexts: Sequence[QuoteContext],
    decode: ResultDecoder,
    build_route: RouteBuilder,
) -> Route:
    """Submit every context through Multicall3 and select the best route."""
    if not contexts:
        return Route.empty(protocol)
    results = await multicall.aggregate_calls(executor, [context.request for context in contexts])
    return select_best_route(protocol, contexts, results, decode, build_route)


__all__ = [
    "candidate_paths",
    "expand_parameters",
    "is_better",
    "prepare_request",
    "quote_contexts",
    "resolve_token",
    "select_best_route",
    "validate_amount",
]
