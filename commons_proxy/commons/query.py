"""Build MediaWiki API requests for Commons image searches."""

from dataclasses import dataclass, field
from typing import Any

COMMONS_API_URL = "https://commons.wikimedia.org/w/api.php"
THUMBNAIL_SIZE = 640


@dataclass(frozen=True)
class UpstreamQuery:
    """A fully-formed upstream GET request."""

    url: str
    params: dict[str, str] = field(default_factory=dict)


def search_offset(page: int, per_page: int) -> int:
    """Offset of the first result on ``page``; never negative."""
    return max(0, (page - 1) * per_page)


def build_search_query(
    query: str,
    page: int = 1,
    per_page: int = 24,
    api_url: str = COMMONS_API_URL,
    thumbnail_size: int = THUMBNAIL_SIZE,
) -> UpstreamQuery:
    """
    Build the generator=search request for ``query``.

    Pages are found with the search generator, then expanded with
    imageinfo (file url, mime, size, extended metadata), pageimages
    (thumbnail) and info (canonical URL).

    Args:
        query: Search query string
        page: 1-based page number
        per_page: Results per page
        api_url: MediaWiki API endpoint
        thumbnail_size: Requested thumbnail width in pixels

    Returns:
        UpstreamQuery with the URL and string-valued parameters
    """
    params: dict[str, Any] = {
        "action": "query",
        "format": "json",
        "generator": "search",
        "gsrsearch": query,
        "gsrlimit": per_page,
        "gsroffset": search_offset(page, per_page),
        "prop": "imageinfo|pageimages|info",
        "iiprop": "url|mime|size|extmetadata",
        "piprop": "thumbnail",
        "pithumbsize": thumbnail_size,
        "inprop": "url",
        "origin": "*",
    }
    return UpstreamQuery(url=api_url, params={k: str(v) for k, v in params.items()})
