"""API endpoints for route quotes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from dexrouter.config import RouterConfig, get_chain_config, rpc_url_for
from dexrouter.errors import ConfigurationError, InvalidInputError
from dexrouter.models.quote import QuoteResponse
from dexrouter.models.route import DexProtocol
from dexrouter.models.types import ADDRESS_PATTERN
from dexrouter.multicall.client import Web3CallExecutor
from dexrouter.routing.optimizer import RouteOptimizer
from dexrouter.routing.selection import validate_amount

logger = structlog.get_logger()

router = APIRouter()

# One optimizer (and route cache) per network for the process lifetime
_optimizers: dict[str, RouteOptimizer] = {}


def get_optimizer(network: str) -> RouteOptimizer:
    """Dependency provider for the network's route optimizer.

    Override this in tests to inject an optimizer backed by a mock executor:
        app.dependency_overrides[get_optimizer] = lambda: optimizer

    Raises:
        HTTPException: 404 for an unknown network, 400 when the network has
            no RPC endpoint configured
    """
    network = network.lower()
    optimizer = _optimizers.get(network)
    if optimizer is not None:
        return optimizer

    try:
        chain = get_chain_config(network)
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    try:
        executor = Web3CallExecutor(rpc_url_for(network))
        optimizer = RouteOptimizer(chain, executor, RouterConfig.from_env())
    except ConfigurationError as e:
        logger.error("optimizer_unavailable", network=network, error=str(e))
        raise HTTPException(status_code=400, detail=str(e)) from e

    _optimizers[network] = optimizer
    return optimizer


@router.get("/quote/{network}/{protocol}", response_model_exclude_none=True)
async def quote(
    network: str,
    protocol: DexProtocol,
    token_in: str = Query(pattern=ADDRESS_PATTERN),
    amount_in: str = Query(),
    token_out: str = Query(pattern=ADDRESS_PATTERN),
    optimizer: RouteOptimizer = Depends(get_optimizer),
) -> QuoteResponse:
    """Find the best route for an exact-input swap on one protocol.

    Args:
        network: Network name (e.g., "ethereum", "base", "arbitrum")
        protocol: Protocol to route on (e.g., "uniswap_v3")
        token_in: Input token; the zero address means the native asset
        amount_in: Exact input amount as a decimal string
        token_out: Output token; the zero address means the native asset
        optimizer: Injected route optimizer (via FastAPI Depends)

    Error Handling:
        - Malformed address, amount, or same-token request: 422
        - Protocol not deployed on the network: 400
        - No liquidity: 200 with found=false and amountOut "0"
    """
    try:
        amount = validate_amount(amount_in)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    logger.info(
        "received_quote_request",
        network=network,
        protocol=protocol.value,
        token_in=token_in,
        token_out=token_out,
        amount_in=amount_in,
    )

    try:
        route = await optimizer.get_best_route(protocol, token_in, amount, token_out)
    except InvalidInputError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except ConfigurationError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    return QuoteResponse.from_route(route, network, protocol, token_in, amount, token_out)


__all__ = ["get_optimizer", "router"]
