"""FastAPI application exposing route quotes."""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI

from dexrouter import __version__
from dexrouter.api.endpoints import router

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DEXROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("DEXROUTER_PORT", "8000"))
DEBUG = os.environ.get("DEXROUTER_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = logging.DEBUG if DEBUG else logging.INFO


def configure_logging(level: int = LOG_LEVEL) -> None:
    """Configure structlog for console output at the given level."""
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )


app = FastAPI(
    title="DEX Route Finder",
    description="Best-route quotes across Uniswap V2/V3/V4 and Aerodrome",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quote API server.

    Configuration via environment variables:
    - DEXROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - DEXROUTER_PORT: Port to bind to (default: 8000)
    - DEXROUTER_DEBUG: Enable debug logging and reload mode (default: false)
    - DEXROUTER_RPC_URL_<NETWORK>: RPC endpoint per network
    """
    configure_logging()
    uvicorn.run(
        "dexrouter.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
