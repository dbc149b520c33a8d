"""Pydantic models for the quote API response."""

from __future__ import annotations

from pydantic import BaseModel, Field

from dexrouter.models.route import DexProtocol, Route


class PoolKeyModel(BaseModel):
    """V4 pool key."""

    currency0: str
    currency1: str
    fee: int
    tick_spacing: int = Field(alias="tickSpacing")
    hooks: str

    model_config = {"populate_by_name": True}


class PathKeyModel(BaseModel):
    """One hop of a V4 multi-hop path."""

    intermediate_currency: str = Field(alias="intermediateCurrency")
    fee: int
    tick_spacing: int = Field(alias="tickSpacing")
    hooks: str
    hook_data: str = Field(default="0x", alias="hookData")

    model_config = {"populate_by_name": True}


class AerodromeRouteModel(BaseModel):
    """One Aerodrome Route struct."""

    from_token: str = Field(alias="from")
    to_token: str = Field(alias="to")
    stable: bool
    factory: str

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Best route for a quote request.

    Amounts are decimal strings. found is False (and amountOut "0") when no
    candidate produced output. Only the artifacts of the routed protocol are
    present; the rest are omitted from JSON.
    """

    network: str
    protocol: DexProtocol
    token_in: str = Field(alias="tokenIn")
    token_out: str = Field(alias="tokenOut")
    amount_in: str = Field(alias="amountIn")
    amount_out: str = Field(alias="amountOut")
    found: bool
    path: list[str] = Field(default_factory=list)
    fees: list[int] = Field(default_factory=list)
    encoded_path: str | None = Field(default=None, alias="encodedPath")
    pool_id: str | None = Field(default=None, alias="poolId")
    pool_key: PoolKeyModel | None = Field(default=None, alias="poolKey")
    path_keys: list[PathKeyModel] | None = Field(default=None, alias="pathKeys")
    aero_routes: list[AerodromeRouteModel] | None = Field(default=None, alias="aeroRoutes")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_route(
        cls,
        route: Route,
        network: str,
        protocol: DexProtocol,
        token_in: str,
        amount_in: int,
        token_out: str,
    ) -> QuoteResponse:
        pool_key = None
        if route.pool_key is not None:
            pool_key = PoolKeyModel(
                currency0=route.pool_key.currency0,
                currency1=route.pool_key.currency1,
                fee=route.pool_key.fee,
                tick_spacing=route.pool_key.tick_spacing,
                hooks=route.pool_key.hooks,
            )
        path_keys = None
        if route.path_keys is not None:
            path_keys = [
                PathKeyModel(
                    intermediate_currency=key.intermediate_currency,
                    fee=key.fee,
                    tick_spacing=key.tick_spacing,
                    hooks=key.hooks,
                    hook_data="0x" + key.hook_data.hex(),
                )
                for key in route.path_keys
            ]
        aero_routes = None
        if route.aero_routes is not None:
            aero_routes = [
                AerodromeRouteModel(
                    from_token=hop.from_token,
                    to_token=hop.to_token,
                    stable=hop.stable,
                    factory=hop.factory,
                )
                for hop in route.aero_routes
            ]
        return cls(
            network=network,
            protocol=protocol,
            token_in=token_in,
            token_out=token_out,
            amount_in=str(amount_in),
            amount_out=str(route.amount_out),
            found=not route.is_empty,
            path=list(route.path),
            fees=list(route.fees),
            encoded_path=route.encoded_path,
            pool_id=route.pool_id,
            pool_key=pool_key,
            path_keys=path_keys,
            aero_routes=aero_routes,
        )


__all__ = ["AerodromeRouteModel", "PathKeyModel", "PoolKeyModel", "QuoteResponse"]
