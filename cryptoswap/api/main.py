"""FastAPI application for the crypto pool engine.

Exposes the pure solver functions over HTTP. The handlers keep no state;
every request is computed from its own inputs.
"""

import os

import uvicorn
from fastapi import FastAPI

from cryptoswap import __version__
from cryptoswap.api.endpoints import crypto_math_error_handler, router
from cryptoswap.errors import CryptoMathError
from cryptoswap.log_setup import configure_logging

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("CRYPTOSWAP_HOST", "0.0.0.0")
PORT = int(os.environ.get("CRYPTOSWAP_PORT", "8000"))
DEBUG = os.environ.get("CRYPTOSWAP_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("CRYPTOSWAP_LOG_LEVEL", "DEBUG" if DEBUG else "INFO")

app = FastAPI(
    title="cryptoswap",
    description="Invariant and balance solvers for two-coin crypto pools",
    version=__version__,
)

app.add_exception_handler(CryptoMathError, crypto_math_error_handler)
app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - CRYPTOSWAP_HOST: Host to bind to (default: 0.0.0.0)
    - CRYPTOSWAP_PORT: Port to bind to (default: 8000)
    - CRYPTOSWAP_DEBUG: Enable debug/reload mode (default: false)
    - CRYPTOSWAP_LOG_LEVEL: Log level (default: INFO, DEBUG in debug mode)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "cryptoswap.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
