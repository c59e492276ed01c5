"""Contacts Gateway - Main application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from contacts_gateway import __version__
from contacts_gateway.api import router
from contacts_gateway.auth import OAuthError
from contacts_gateway.config import settings
from contacts_gateway.schemas import HealthCheckResponse
from contacts_gateway.transport import TransportError, TransportTimeoutError

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging when the server starts."""
    configure_logging(settings.log_level)
    logger.info("%s starting (%s)", settings.service_name, settings.environment)
    yield


# Create FastAPI app
app = FastAPI(
    title="Contacts Gateway",
    version=__version__,
    description="Contact operations backed by the Google People API",
    lifespan=lifespan,
)

# Include API router
app.include_router(router, tags=["contacts"])


@app.exception_handler(OAuthError)
async def oauth_error_handler(request: Request, exc: OAuthError) -> JSONResponse:
    """Authentication failures (missing, revoked or rejected credentials)."""
    logger.warning("Authentication failed: %s", type(exc).__name__)
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "detail": {
                "code": "AUTHENTICATION_FAILED",
                "message": "Google authorization failed. Please reconnect your account",
            }
        },
    )


@app.exception_handler(TransportTimeoutError)
async def transport_timeout_handler(request: Request, exc: TransportTimeoutError) -> JSONResponse:
    """People API did not answer in time."""
    logger.warning("People API timeout: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={
            "detail": {
                "code": "UPSTREAM_TIMEOUT",
                "message": "Google People API timed out. Please retry later",
            }
        },
    )


@app.exception_handler(TransportError)
async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    """People API could not be reached."""
    logger.warning("People API unreachable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": {
                "code": "UPSTREAM_UNAVAILABLE",
                "message": "Google People API is unreachable. Please retry later",
            }
        },
    )


@app.get("/health", response_model=HealthCheckResponse, tags=["health"])
async def health_check() -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse with service status
    """
    return HealthCheckResponse(status="healthy", service=settings.service_name)


@app.get("/")
async def root() -> JSONResponse:
    """Root endpoint with service info."""
    return JSONResponse(
        {
            "service": settings.service_name,
            "version": __version__,
            "status": "running",
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contacts_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=settings.environment == "development",
    )
