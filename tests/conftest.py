"""Shared fixtures: a canned Commons payload and an app wired to a mock upstream."""

import copy

import httpx
import pytest
from fastapi.testclient import TestClient

from commons_proxy.commons.client import CommonsClient
from commons_proxy.config import Settings
from commons_proxy.main import create_app
from commons_proxy.safety import SafeSearchFilter
from commons_proxy.services import ImageSearchService

COMMONS_PAYLOAD = {
    "batchcomplete": "",
    "continue": {"gsroffset": 24, "continue": "gsroffset||"},
    "query": {
        "pages": {
            "2001": {
                "pageid": 2001,
                "ns": 6,
                "title": "File:Plains zebra grazing.jpg",
                "fullurl": "https://commons.wikimedia.org/wiki/File:Plains_zebra_grazing.jpg",
                "thumbnail": {
                    "source": "https://upload.wikimedia.org/thumb/640px-Plains_zebra_grazing.jpg",
                    "width": 640,
                    "height": 427,
                },
                "imageinfo": [
                    {
                        "url": "https://upload.wikimedia.org/Plains_zebra_grazing.jpg",
                        "width": 4000,
                        "height": 2667,
                        "size": 2048000,
                        "mime": "image/jpeg",
                        "extmetadata": {
                            "ImageDescription": {
                                "value": "<p>A <b>plains zebra</b> grazing</p>\n",
                                "source": "commons-desc-page",
                            }
                        },
                    }
                ],
            },
            "1002": {
                "pageid": 1002,
                "ns": 0,
                "title": "Zebras",
                "fullurl": "https://commons.wikimedia.org/wiki/Zebras",
            },
            "3003": {
                "pageid": 3003,
                "ns": 6,
                "title": "File:Sexton House, Suffolk.jpg",
                "imageinfo": [
                    {
                        "url": "https://upload.wikimedia.org/Sexton_House.jpg",
                        "thumburl": "https://upload.wikimedia.org/thumb/Sexton_House.jpg",
                        "width": 1200,
                        "height": 800,
                    }
                ],
            },
        }
    },
}


@pytest.fixture
def commons_payload():
    """A fresh copy of the canned Commons response."""
    return copy.deepcopy(COMMONS_PAYLOAD)


class UpstreamRecorder:
    """Mock upstream that records requests and replies with a fixed response."""

    def __init__(self, status_code: int = 200, json=None, content: bytes | None = None):
        self.status_code = status_code
        self.json = json
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def upstream(commons_payload):
    return UpstreamRecorder(json=commons_payload)


@pytest.fixture
def settings():
    return Settings(_env_file=None, rate_limit_max=1000, log_json=False, log_level="WARNING")


def build_app(settings: Settings, upstream: UpstreamRecorder):
    service = ImageSearchService(
        client=CommonsClient(api_url=settings.commons_api_url, transport=upstream.transport),
        safe_filter=SafeSearchFilter(settings.safe_search_blacklist),
        wiki_url=settings.commons_wiki_url,
    )
    return create_app(settings, search_service=service)


@pytest.fixture
def client(settings, upstream):
    """Test client backed by the mock upstream."""
    return TestClient(build_app(settings, upstream))


@pytest.fixture
def make_client(upstream):
    """Factory for test clients with custom settings."""

    def _make(**overrides) -> TestClient:
        base = {"_env_file": None, "log_json": False, "log_level": "WARNING"}
        return TestClient(build_app(Settings(**{**base, **overrides}), upstream))

    return _make
