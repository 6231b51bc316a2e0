"""FastAPI dependencies."""

from fastapi import Request

from commons_proxy.commons.client import CommonsClient
from commons_proxy.config import Settings
from commons_proxy.exceptions import ConfigurationError
from commons_proxy.safety import SafeSearchFilter
from commons_proxy.services import ImageSearchService


def build_search_service(settings: Settings) -> ImageSearchService:
    """Wire the search service from settings."""
    if not settings.commons_api_url:
        raise ConfigurationError("COMMONS_API_URL must not be empty")
    client = CommonsClient(
        api_url=settings.commons_api_url,
        timeout=settings.upstream_timeout,
        user_agent=settings.user_agent,
        thumbnail_size=settings.thumbnail_size,
    )
    return ImageSearchService(
        client=client,
        safe_filter=SafeSearchFilter(settings.safe_search_blacklist),
        wiki_url=settings.commons_wiki_url,
    )


def get_search_service(request: Request) -> ImageSearchService:
    """Get the application's search service via dependency injection."""
    return request.app.state.search_service
