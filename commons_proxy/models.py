"""Pydantic models for data structures."""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

MIN_PER_PAGE = 8
MAX_PER_PAGE = 48
DEFAULT_PER_PAGE = 24


class SafeSearch(str, Enum):
    """Content filter levels understood by the search endpoint."""

    STRICT = "Strict"
    MODERATE = "Moderate"
    OFF = "Off"


class SearchRequest(BaseModel):
    """Validated parameters of a single search call."""

    q: str = Field(min_length=1, description="Search query string")
    # Unrecognised values are kept as-is and filter nothing
    safe: str = Field(default=SafeSearch.STRICT.value, description="Safe search mode")
    page: int = Field(default=1, ge=1, description="1-based page number")
    per_page: int = Field(
        default=DEFAULT_PER_PAGE, ge=MIN_PER_PAGE, le=MAX_PER_PAGE, description="Results per page"
    )


# --- Upstream (MediaWiki API) payload -------------------------------------
#
# Every field is optional: imageinfo is only present on file pages, and
# pageimages/extracts depend on what the wiki has for the page.


logger = logging.getLogger(__name__)


def _str_or_none(value):
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _int_or_none(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ExtMetadataField(_UpstreamModel):
    value: Any = None
    source: str | None = None

    @field_validator("source", mode="before")
    @classmethod
    def _source_text(cls, value):
        return _str_or_none(value)


class UpstreamImageInfo(_UpstreamModel):
    url: str | None = None
    descriptionurl: str | None = None
    thumburl: str | None = None
    mime: str | None = None
    size: int | None = None
    width: int | None = None
    height: int | None = None
    extmetadata: dict[str, ExtMetadataField] | None = None

    @field_validator("url", "descriptionurl", "thumburl", "mime", mode="before")
    @classmethod
    def _text(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("size", "width", "height", mode="before")
    @classmethod
    def _number(cls, value):
        return _int_or_none(value)

    @field_validator("extmetadata", mode="before")
    @classmethod
    def _metadata_mapping(cls, value):
        # PHP serialises an empty map as []
        if not isinstance(value, dict):
            return None
        return {k: v for k, v in value.items() if isinstance(v, dict)}


class UpstreamThumbnail(_UpstreamModel):
    source: str | None = None
    width: int | None = None
    height: int | None = None

    @field_validator("source", mode="before")
    @classmethod
    def _text(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("width", "height", mode="before")
    @classmethod
    def _number(cls, value):
        return _int_or_none(value)


class UpstreamPage(_UpstreamModel):
    pageid: int | None = None
    ns: int | None = None
    title: str | None = None
    fullurl: str | None = None
    extract: Any = None
    thumbnail: UpstreamThumbnail | None = None
    imageinfo: list[UpstreamImageInfo] | None = None

    @field_validator("pageid", "ns", mode="before")
    @classmethod
    def _number(cls, value):
        return _int_or_none(value)

    @field_validator("title", mode="before")
    @classmethod
    def _title_text(cls, value):
        return _str_or_none(value)

    @field_validator("fullurl", mode="before")
    @classmethod
    def _url_text(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("imageinfo", mode="before")
    @classmethod
    def _imageinfo_list_only(cls, value):
        if not isinstance(value, list):
            return None
        return [item for item in value if isinstance(item, dict)]

    @field_validator("thumbnail", mode="before")
    @classmethod
    def _thumbnail_mapping_only(cls, value):
        return value if isinstance(value, dict) else None


class UpstreamQueryBlock(_UpstreamModel):
    # Keyed by page id; insertion order is the upstream result order.
    # Records stay raw so one bad record cannot fail the whole page.
    pages: dict[str, Any] | list[Any] | None = None


class UpstreamResponse(_UpstreamModel):
    query: UpstreamQueryBlock | None = None

    def records(self) -> list[UpstreamPage]:
        """Return upstream page records in payload order, skipping unusable ones."""
        if self.query is None or not self.query.pages:
            return []
        raw = self.query.pages.values() if isinstance(self.query.pages, dict) else self.query.pages

        pages = []
        for item in raw:
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object Commons page record: {item!r:.200}")
                continue
            try:
                pages.append(UpstreamPage.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping malformed Commons page record {item.get('pageid')!r}: {e}")
        return pages


# --- Responses --------------------------------------------------------------


class NormalizedResult(BaseModel):
    """Uniform image result returned to callers."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    title: str = ""
    thumbnail: str | None = None
    content_url: str | None = Field(default=None, alias="contentUrl")
    host_page: str = Field(alias="hostPage")
    width: int | None = None
    height: int | None = None
    description: str = ""

    @property
    def has_media(self) -> bool:
        return bool(self.thumbnail or self.content_url)


class SearchResponse(BaseModel):
    """Search response data."""

    query: str
    page: int
    per_page: int
    count: int = 0
    results: list[NormalizedResult] = Field(default_factory=list)
