"""Business logic services for Commons image search."""

import logging

from commons_proxy.commons.client import CommonsClient
from commons_proxy.commons.normalize import COMMONS_WIKI_URL, normalize_pages
from commons_proxy.exceptions import ValidationError
from commons_proxy.models import (
    DEFAULT_PER_PAGE,
    MAX_PER_PAGE,
    MIN_PER_PAGE,
    SafeSearch,
    SearchRequest,
    SearchResponse,
)
from commons_proxy.safety import SafeSearchFilter

logger = logging.getLogger(__name__)


def _parse_int(name: str, value: str | None, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise ValidationError(f"Invalid {name} parameter") from e


def parse_search_request(
    q: str | None,
    safe: str | None = None,
    page: str | None = None,
    per_page: str | None = None,
) -> SearchRequest:
    """
    Turn raw query-string values into a SearchRequest.

    ``page`` is floored to 1 and ``per_page`` clamped into
    [MIN_PER_PAGE, MAX_PER_PAGE]; out-of-range values are not errors.
    Only plain (optionally signed) integers are accepted: "2.5" or "10abc"
    are rejected rather than truncated.

    Raises:
        ValidationError: If ``q`` is missing/blank or a number is malformed
    """
    query = (q or "").strip()
    if not query:
        raise ValidationError("Missing q parameter")

    page_num = max(1, _parse_int("page", page, 1))
    size = min(MAX_PER_PAGE, max(MIN_PER_PAGE, _parse_int("per_page", per_page, DEFAULT_PER_PAGE)))

    return SearchRequest(
        q=query,
        safe=safe or SafeSearch.STRICT.value,
        page=page_num,
        per_page=size,
    )


class ImageSearchService:
    """Run a search against Commons and shape the response."""

    def __init__(
        self,
        client: CommonsClient,
        safe_filter: SafeSearchFilter | None = None,
        wiki_url: str = COMMONS_WIKI_URL,
    ):
        self.client = client
        self.safe_filter = safe_filter or SafeSearchFilter()
        self.wiki_url = wiki_url

    async def search(self, request: SearchRequest) -> SearchResponse:
        pages = await self.client.search(request.q, request.page, request.per_page)
        normalized = normalize_pages(pages, self.wiki_url)

        # Non-image pages are dropped whatever the safe mode
        with_media = [r for r in normalized if r.has_media]
        results = self.safe_filter.apply(with_media, request.safe)

        logger.info(
            f"Search {request.q!r} page={request.page} safe={request.safe}: "
            f"{len(pages)} upstream, {len(with_media)} with media, {len(results)} returned"
        )
        return SearchResponse(
            query=request.q,
            page=request.page,
            per_page=request.per_page,
            count=len(results),
            results=results,
        )
