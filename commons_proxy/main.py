"""FastAPI application for the Commons image search proxy."""

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from commons_proxy.config import Settings, get_settings
from commons_proxy.dependencies import build_search_service, get_search_service
from commons_proxy.exceptions import (
    CommonsProxyError,
    NetworkError,
    ParseError,
    UpstreamError,
    ValidationError,
)
from commons_proxy.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from commons_proxy.models import SearchResponse
from commons_proxy.services import ImageSearchService, parse_search_request
from commons_proxy.utils.logging import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, str(exc))


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error(f"search error: upstream status {exc.status_code}: {exc.message}")
    return _error(500, "Upstream search failed")


async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    logger.error(f"search error: {exc}")
    return _error(500, "Invalid response from upstream")


async def network_error_handler(request: Request, exc: NetworkError) -> JSONResponse:
    logger.error(f"search error: {exc}")
    return _error(500, "Upstream search unavailable")


async def search(
    q: str | None = Query(default=None, description="Search query"),
    safe: str | None = Query(default=None, description="Strict, Moderate or Off"),
    page: str | None = Query(default=None, description="1-based page number"),
    per_page: str | None = Query(default=None, description="Results per page (8-48)"),
    service: ImageSearchService = Depends(get_search_service),
):
    """Search Wikimedia Commons for images."""
    search_request = parse_search_request(q, safe, page, per_page)
    try:
        return await service.search(search_request)
    except CommonsProxyError:
        raise
    except Exception:
        logger.exception(f"Unexpected error searching for {search_request.q!r}")
        return _error(500, "Server error")


async def health_check(request: Request):
    """Health check endpoint."""
    settings: Settings = request.app.state.settings
    return {
        "status": "ok",
        "service": "commons-proxy",
        "version": settings.app_version,
    }


def create_limiter(settings: Settings) -> Limiter:
    """Per-client fixed-window limiter shared by every route."""
    return Limiter(
        key_func=get_remote_address,
        application_limits=[settings.rate_limit],
        strategy="fixed-window",
        storage_uri="memory://",
        headers_enabled=True,
    )


def create_app(
    settings: Settings | None = None,
    search_service: ImageSearchService | None = None,
) -> FastAPI:
    """Build the application from settings."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json, settings.log_file)

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        description="Image search proxy for Wikimedia Commons",
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.search_service = search_service or build_search_service(settings)

    limiter = create_limiter(settings)
    limiter.exempt(health_check)
    app.state.limiter = limiter

    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(UpstreamError, upstream_error_handler)
    app.add_exception_handler(ParseError, parse_error_handler)
    app.add_exception_handler(NetworkError, network_error_handler)

    # Added last runs first: logging wraps everything, the limiter runs innermost
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins or ["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_api_route("/health", health_check, methods=["GET"])
    app.add_api_route("/api/search", search, methods=["GET"], response_model=SearchResponse)

    # Frontend bundle; mounted last so API routes take precedence
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")

    logger.info(
        f"{settings.app_title} configured: rate limit {settings.rate_limit}, "
        f"origins {settings.allowed_origins or ['*']}"
    )
    return app


app = create_app()


def run() -> None:
    """Run the server with uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Commons proxy server running on port {settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
