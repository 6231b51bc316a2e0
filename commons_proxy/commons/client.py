"""Wikimedia Commons API client with async patterns."""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from commons_proxy.commons.query import COMMONS_API_URL, THUMBNAIL_SIZE, build_search_query
from commons_proxy.exceptions import NetworkError, ParseError, UpstreamError
from commons_proxy.models import UpstreamPage, UpstreamResponse

logger = logging.getLogger(__name__)


class CommonsClient:
    """Async client for the Commons MediaWiki API."""

    def __init__(
        self,
        api_url: str = COMMONS_API_URL,
        timeout: float = 15.0,
        user_agent: str = "CommonsProxy/1.0",
        thumbnail_size: int = THUMBNAIL_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self.user_agent = user_agent
        self.thumbnail_size = thumbnail_size
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        """Get request headers."""
        return {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    async def search(self, query: str, page: int = 1, per_page: int = 24) -> list[UpstreamPage]:
        """
        Search Commons and return the raw page records.

        Args:
            query: Search query string
            page: 1-based page number
            per_page: Results per page

        Returns:
            Page records in the order the API returned them

        Raises:
            UpstreamError: On non-success status codes
            ParseError: On malformed payloads
            NetworkError: On network errors and timeouts
        """
        request = build_search_query(
            query, page, per_page, api_url=self.api_url, thumbnail_size=self.thumbnail_size
        )
        logger.info(
            f"Commons API request: {request.url} gsrsearch={query!r} "
            f"offset={request.params['gsroffset']} limit={request.params['gsrlimit']}"
        )

        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._headers(),
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(request.url, params=request.params)
            except httpx.RequestError as e:
                logger.error(f"Network error connecting to Commons API: {e!r}")
                raise NetworkError(f"Network error connecting to Commons API: {e!r}") from e

        logger.debug(f"Commons API response: {response.status_code}")

        if not response.is_success:
            error_text = response.text[:1000] if response.text else ""
            logger.error(
                f"Commons API error {response.status_code}: "
                f"URL={request.url}, Params={request.params}, Response={error_text}"
            )
            raise UpstreamError(status_code=response.status_code, response_text=error_text)

        return self._parse(response)

    @staticmethod
    def _parse(response: httpx.Response) -> list[UpstreamPage]:
        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Commons API returned invalid JSON: {response.text[:200]!r}")
            raise ParseError("Commons API returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise ParseError(f"Unexpected Commons API payload type: {type(payload).__name__}")

        # MediaWiki reports bad requests in the body of a 200 response
        api_error = payload.get("error")
        if isinstance(api_error, dict):
            code = api_error.get("code", "unknown")
            info = api_error.get("info", "")
            logger.error(f"Commons API reported error {code}: {info}")
            raise UpstreamError(
                status_code=response.status_code, message=f"{code}: {info}", response_text=str(api_error)
            )

        try:
            return UpstreamResponse.model_validate(payload).records()
        except PydanticValidationError as e:
            logger.error(f"Commons API payload failed validation: {e}")
            raise ParseError("Unexpected Commons API payload structure") from e
