"""Wikimedia Commons API access."""

from commons_proxy.commons.client import CommonsClient
from commons_proxy.commons.normalize import normalize_page, normalize_pages
from commons_proxy.commons.query import UpstreamQuery, build_search_query

__all__ = [
    "CommonsClient",
    "UpstreamQuery",
    "build_search_query",
    "normalize_page",
    "normalize_pages",
]
