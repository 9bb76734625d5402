"""
Pytest configuration and shared fixtures.
"""

import json
import logging
from typing import Callable, Dict, List
from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from wikitide import EventBus, WikiConfig
from wikitide.capabilities import LinkOpener, PromptSurface, RenderingSurface
from wikitide.wiki import LiveWikiService

# Configure logging for tests
logging.basicConfig(level=logging.INFO)


class FakeWikiApi:
    """
    Stand-in for api.php behind an httpx.MockTransport.

    Each list=allpages request pops the next queued response; parse requests
    are answered from ``pages``. Every request is recorded with its flattened
    query parameters.
    """

    def __init__(self):
        self.listing_responses: List = []
        self.pages: Dict[str, str] = {}
        self.requests: List[Dict[str, str]] = []

    def queue_listing(self, titles: List[str], apcontinue: str = None):
        body = {"batchcomplete": "", "query": {"allpages": [{"pageid": i, "ns": 0, "title": t} for i, t in enumerate(titles)]}}
        if apcontinue is not None:
            body["continue"] = {"apcontinue": apcontinue, "continue": "-||"}
        self.listing_responses.append(body)

    def queue_listing_failure(self, failure):
        """failure is an httpx.Response or an exception instance to raise."""
        self.listing_responses.append(failure)

    @property
    def listing_requests(self) -> List[Dict[str, str]]:
        return [r for r in self.requests if r.get("list") == "allpages"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        params = {k: v[0] for k, v in parse_qs(urlsplit(str(request.url)).query, keep_blank_values=True).items()}
        self.requests.append(params)

        if params.get("list") == "allpages":
            if not self.listing_responses:
                return httpx.Response(500, text="no more queued responses")
            item = self.listing_responses.pop(0)
            if isinstance(item, Exception):
                raise item
            if isinstance(item, httpx.Response):
                return item
            return httpx.Response(200, json=item)

        if params.get("action") == "parse":
            page = params.get("page")
            if page not in self.pages:
                return httpx.Response(200, json={"error": {"code": "missingtitle", "info": "The page you specified doesn't exist."}})
            return httpx.Response(200, json={"parse": {"title": page, "pageid": 1, "text": self.pages[page]}})

        return httpx.Response(400, text=json.dumps({"error": {"info": "unsupported"}}))


@pytest.fixture
def config() -> WikiConfig:
    """Default configuration with a small budget so runaway loops fail fast."""
    return WikiConfig(max_requests=20, fetch_deadline=30.0)

@pytest.fixture
def fake_api() -> FakeWikiApi:
    return FakeWikiApi()

@pytest.fixture
def wiki_service(config: WikiConfig, fake_api: FakeWikiApi) -> LiveWikiService:
    """LiveWikiService wired to the fake API."""
    return LiveWikiService(config, transport=httpx.MockTransport(fake_api.handler))

@pytest.fixture
def event_bus() -> EventBus:
    """Create a fresh EventBus for each test."""
    return EventBus()

@pytest.fixture
def rendering() -> Mock:
    surface = Mock(spec=RenderingSurface)
    surface.can_go_back.return_value = False
    return surface

@pytest.fixture
def prompt() -> Mock:
    surface = Mock(spec=PromptSurface)
    surface.confirm_external_link.return_value = False
    return surface

@pytest.fixture
def link_opener() -> Mock:
    return Mock(spec=LinkOpener)
