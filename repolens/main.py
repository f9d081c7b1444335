import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from repolens.api.router import api_router
from repolens.config import settings
from repolens.services.providers import (
    ProviderAPIError,
    ProviderSchemaError,
    UnsupportedProviderError,
    close_http_client,
)
from repolens.services.timeline import FilterValidationError


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)

    # Quieten uvicorn access logs (we'll log requests ourselves)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    setup_logging()
    logger.info("repolens API starting up")
    yield
    await close_http_client()
    logger.info("repolens API shutting down")


app = FastAPI(
    title="repolens API",
    description="Provider-agnostic repository activity, timeline and diff API",
    version="0.1.0",
    lifespan=lifespan,
)

# Trust X-Forwarded-Proto from a TLS-terminating reverse proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed HTTP requests, skipping OPTIONS preflight and health checks."""
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)
    if response.status_code >= 400:
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


@app.exception_handler(ProviderAPIError)
async def provider_api_error_handler(_request: Request, exc: ProviderAPIError) -> JSONResponse:
    content = {"detail": exc.message, "provider": exc.provider}
    if exc.rate_limit_reset is not None:
        content["rate_limit_reset"] = exc.rate_limit_reset
    return JSONResponse(
        status_code=exc.status_code or status.HTTP_502_BAD_GATEWAY,
        content=content,
    )


@app.exception_handler(ProviderSchemaError)
async def provider_schema_error_handler(
    _request: Request, exc: ProviderSchemaError
) -> JSONResponse:
    logger.warning(f"Malformed provider payload: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "provider": exc.provider, "field": exc.field},
    )


@app.exception_handler(FilterValidationError)
async def filter_validation_error_handler(
    _request: Request, exc: FilterValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "allowed": exc.allowed},
    )


@app.exception_handler(UnsupportedProviderError)
async def unsupported_provider_handler(
    _request: Request, exc: UnsupportedProviderError
) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
