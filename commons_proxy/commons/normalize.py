"""Normalize Commons API page records to the public result shape."""

import re
from typing import Any
from urllib.parse import quote

from commons_proxy.models import NormalizedResult, UpstreamImageInfo, UpstreamPage

COMMONS_WIKI_URL = "https://commons.wikimedia.org/wiki/"

_HTML_TAG_RE = re.compile(r"<[^>]+>")
# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def strip_html(value: Any) -> str:
    """Remove every ``<...>`` span and trim; non-strings become ``""``."""
    if not isinstance(value, str):
        return ""
    return _HTML_TAG_RE.sub("", value).strip()


def wiki_page_url(title: str, wiki_url: str = COMMONS_WIKI_URL) -> str:
    """Construct a wiki page URL from a page title."""
    return f"{wiki_url}{quote(title, safe=_URI_COMPONENT_SAFE)}"


def first_image_info(page: UpstreamPage) -> UpstreamImageInfo | None:
    """Only the first imageinfo revision is used."""
    if page.imageinfo:
        return page.imageinfo[0]
    return None


def extract_description(page: UpstreamPage, info: UpstreamImageInfo | None) -> str:
    raw: Any = None
    if info is not None and info.extmetadata:
        field = info.extmetadata.get("ImageDescription")
        if field is not None:
            raw = field.value
    return strip_html(raw or page.extract or "")


def normalize_page(page: UpstreamPage, wiki_url: str = COMMONS_WIKI_URL) -> NormalizedResult:
    """Normalize one upstream page record."""
    info = first_image_info(page)
    thumbnail = (page.thumbnail.source if page.thumbnail else None) or (
        info.thumburl if info else None
    )
    title = page.title or ""
    return NormalizedResult(
        id=page.pageid,
        title=title,
        thumbnail=thumbnail or None,
        content_url=(info.url if info else None) or None,
        host_page=page.fullurl or wiki_page_url(title, wiki_url),
        width=(info.width if info else None) or None,
        height=(info.height if info else None) or None,
        description=extract_description(page, info),
    )


def normalize_pages(
    pages: list[UpstreamPage], wiki_url: str = COMMONS_WIKI_URL
) -> list[NormalizedResult]:
    """Normalize records, keeping upstream order."""
    return [normalize_page(page, wiki_url) for page in pages]
