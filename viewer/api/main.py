"""FastAPI application for the basket viewer.

Every endpoint is a pure read; any failure aborts the whole query and is
reported as a JSON error body, never as a partial result.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from viewer import __version__
from viewer.api.endpoints import router
from viewer.errors import (
    BatchPartialFailure,
    EntityReadError,
    InvalidCollateralSet,
    LedgerUnavailable,
    UnrecognizedEntity,
    UnsupportedOperation,
    ViewerError,
)

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("VIEWER_HOST", "0.0.0.0")
PORT = int(os.environ.get("VIEWER_PORT", "8000"))
DEBUG = os.environ.get("VIEWER_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

# Most specific first
ERROR_STATUS: tuple[tuple[type[ViewerError], int], ...] = (
    (UnrecognizedEntity, 404),
    (UnsupportedOperation, 409),
    (InvalidCollateralSet, 422),
    (EntityReadError, 422),
    (LedgerUnavailable, 502),
)

app = FastAPI(
    title="Basket Viewer",
    description="Read-only, versioned basket state aggregation",
    version=__version__,
)


def status_for(error: ViewerError) -> int:
    """HTTP status for a viewer error; batch failures take their cause's."""
    if isinstance(error, BatchPartialFailure):
        return status_for(error.cause)
    for error_type, status in ERROR_STATUS:
        if isinstance(error, error_type):
            return status
    return 500


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(ViewerError)
async def viewer_error_handler(request: Request, exc: ViewerError) -> JSONResponse:
    status = status_for(exc)
    content: dict[str, object] = {"error": type(exc).__name__, "detail": str(exc)}
    if isinstance(exc, BatchPartialFailure):
        content["index"] = exc.index
        content["entity"] = exc.entity
        content["cause"] = type(exc.cause).__name__
    logger.warning("query_failed", path=request.url.path, status=status, **content)
    return JSONResponse(status_code=status, content=content)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Malformed identifiers and mismatched batch inputs."""
    return JSONResponse(
        status_code=422,
        content={"error": "ValueError", "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the viewer API server.

    Configuration via environment variables:
    - VIEWER_RPC_URL: Ledger JSON-RPC endpoint (default: http://localhost:8545)
    - VIEWER_HOST: Host to bind to (default: 0.0.0.0)
    - VIEWER_PORT: Port to bind to (default: 8000)
    - VIEWER_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "viewer.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
