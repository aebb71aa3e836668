"""FastAPI application for the quote oracle."""

import os

import uvicorn
from fastapi import FastAPI

from quote_oracle import __version__
from quote_oracle.api.endpoints import router
from quote_oracle.config import load_config

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("ORACLE_HOST", "127.0.0.1")
PORT = int(os.environ.get("ORACLE_PORT", "8000"))
DEBUG = os.environ.get("ORACLE_DEBUG", "false").lower() in ("true", "1", "yes")

app = FastAPI(
    title="Quote Oracle",
    description="Cross-checks swap quotes from independent quoting backends",
    version=__version__,
)

app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint.

    configured is False until both ORACLE_RPC_URL and ORACLE_ESTIMATOR_ADDRESS
    are set; /check answers 503 until then.
    """
    config = load_config()
    return {
        "status": "ok",
        "version": __version__,
        "configured": bool(config.rpc_url and config.estimator_address),
    }


def run() -> None:
    """Run the oracle API server.

    Configuration via environment variables:
    - ORACLE_HOST: Host to bind to (default: 127.0.0.1)
    - ORACLE_PORT: Port to bind to (default: 8000)
    - ORACLE_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "quote_oracle.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
