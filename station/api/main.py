"""FastAPI application for Station pool quotes.

Note: Rate limiting is intentionally not implemented at the application level.
It should be handled at the infrastructure layer (reverse proxy / load balancer).
"""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from station import __version__
from station.api.endpoints import router
from station.config import DEBUG, HOST, LOG_LEVEL, PORT
from station.errors import StationMathError
from station.log_config import configure_logging
from station.models import ErrorResponse

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

logger = structlog.get_logger()

app = FastAPI(
    title="Station Pool Quotes",
    description="Oracle-priced swap, join/exit and fee quotes for Station pools",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and not content_length.isdigit():
        return JSONResponse(status_code=400, content={"detail": "Invalid Content-Length"})
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(StationMathError)
async def station_error_handler(request: Request, exc: StationMathError) -> JSONResponse:
    """Return pool math errors as 422 with the error class name."""
    logger.warning(
        "quote_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
    )
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=422, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quoting API server.

    Configuration via environment variables:
    - STATION_HOST: Host to bind to (default: 0.0.0.0)
    - STATION_PORT: Port to bind to (default: 8000)
    - STATION_DEBUG: Enable debug/reload mode (default: false)
    - STATION_LOG_LEVEL: structlog level (default: INFO)
    """
    configure_logging(LOG_LEVEL)
    uvicorn.run(
        "station.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
