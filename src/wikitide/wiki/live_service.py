import logging
import time
import httpx
from typing import Any, Dict, List, Optional

from wikitide.config import WikiConfig
from wikitide.exceptions import (
    WikiNetworkError,
    WikiPageNotFound,
    WikiParseError,
    WikiTideException,
)
from wikitide.models import FetchErrorKind, MainPageInfo, MainPageResult, TitleFetchResult
from wikitide.utils.wiki_helpers import build_title_url, extract_first_line

# API error codes meaning the requested page is not there
MISSING_PAGE_CODES = {"missingtitle", "invalidtitle"}


class LiveWikiService:
    """
    Service for interacting with a MediaWiki action API.
    All network methods are asynchronous.

    Failures are converted into FetchErrorKind values at this boundary:
    ``*_result`` methods report them, the plain methods drop them.
    """
    def __init__(self, config: Optional[WikiConfig] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or WikiConfig()
        self.base_url = self.config.api_url
        self.logger = logging.getLogger(__name__)
        # None means the default network transport
        self._transport = transport

    async def _get_json(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET the API with params and return the decoded JSON object."""
        try:
            async with httpx.AsyncClient(
                timeout=self.config.request_timeout,
                transport=self._transport,
                headers={"User-Agent": self.config.user_agent},
            ) as client:
                response = await client.get(self.base_url, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise WikiNetworkError(f"Wiki API returned HTTP {e.response.status_code}")
        except httpx.RequestError as e:
            raise WikiNetworkError(f"Wiki API request failed: {e}")

        try:
            data = response.json()
        except ValueError as e:
            raise WikiParseError(f"Wiki API returned invalid JSON: {e}")

        if not isinstance(data, dict):
            raise WikiParseError("Wiki API returned a non-object JSON document")
        if "error" in data:
            error = data["error"] if isinstance(data["error"], dict) else {"info": data["error"]}
            if error.get("code") in MISSING_PAGE_CODES:
                raise WikiPageNotFound(f"Page does not exist: {params.get('page')}")
            raise WikiParseError(f"Wiki API error: {error.get('info', 'unknown error')}")
        return data

    # --- Page listing ---

    async def _fetch_title_batch(self, apcontinue: Optional[str],
                                 start_from: Optional[str]) -> tuple:
        """Fetch one allpages batch. Returns (titles, next continuation token or None)."""
        params = {
            "action": "query", "format": "json", "list": "allpages",
            "aplimit": str(self.config.page_limit), "apfilterredir": "nonredirects",
        }
        if start_from:
            params["apfrom"] = start_from
        if apcontinue is not None:
            params["apcontinue"] = apcontinue

        data = await self._get_json(params)
        try:
            titles = [page["title"] for page in data["query"]["allpages"]]
        except (KeyError, TypeError) as e:
            raise WikiParseError(f"Unexpected API response format for allpages: {e!r}")

        continue_data = data.get("continue") or {}
        token = continue_data.get("apcontinue") if isinstance(continue_data, dict) else None
        return titles, token

    async def fetch_titles_result(self, start_from: Optional[str] = None) -> TitleFetchResult:
        """
        Fetch every non-redirect page title, following continuation tokens.

        Stops when a response carries no continuation token, on the first
        failure, or when the request/time budget from the config runs out.
        Titles gathered before a stop are always returned.
        """
        all_titles: List[str] = []
        apcontinue: Optional[str] = None
        requests_made = 0
        deadline = time.monotonic() + self.config.fetch_deadline

        while True:
            if requests_made >= self.config.max_requests or time.monotonic() >= deadline:
                self.logger.warning(
                    f"Title fetch budget exhausted after {requests_made} requests "
                    f"({len(all_titles)} titles so far)"
                )
                return TitleFetchResult(titles=all_titles, requests_made=requests_made,
                                        error=FetchErrorKind.BUDGET_EXHAUSTED)

            requests_made += 1
            try:
                titles, apcontinue = await self._fetch_title_batch(apcontinue, start_from)
            except WikiTideException as e:
                self.logger.error(f"Title fetch aborted on request {requests_made}: {e.message}")
                return TitleFetchResult(titles=all_titles, requests_made=requests_made, error=e.kind)

            all_titles.extend(titles)
            self.logger.debug(f"Fetched batch {requests_made}: {len(titles)} titles, continue={apcontinue!r}")

            if apcontinue is None:
                break

        self.logger.info(f"Fetched {len(all_titles)} titles in {requests_made} requests")
        return TitleFetchResult(titles=all_titles, requests_made=requests_made)

    async def fetch_all_titles(self, start_from: Optional[str] = None) -> List[str]:
        """Fetch all page titles; on failure, whatever was gathered so far."""
        result = await self.fetch_titles_result(start_from=start_from)
        return result.titles

    # --- Page content and main page ---

    async def fetch_page_content(self, page_title: str) -> str:
        """Fetch the rendered HTML of a page via action=parse."""
        params = {
            "action": "parse", "format": "json", "prop": "text",
            "page": page_title, "formatversion": "2",
        }
        data = await self._get_json(params)
        parse = data.get("parse")
        if not isinstance(parse, dict):
            raise WikiParseError(f"Unexpected API response format for parse of '{page_title}'")
        text = parse.get("text")
        if not text:
            raise WikiPageNotFound(f"Page has no content: {page_title}")
        if not isinstance(text, str):
            raise WikiParseError(f"Unexpected text format for parse of '{page_title}'")
        return text

    def build_page_url(self, page_title: str) -> str:
        """Navigable index.php URL for a page title."""
        return build_title_url(self.config.index_url, page_title)

    async def resolve_main_page_result(self) -> MainPageResult:
        """Look up which page is the main page and where to load it from."""
        source = self.config.main_page_source
        try:
            html = await self.fetch_page_content(source)
            title = extract_first_line(html)
            if not title:
                raise WikiPageNotFound(f"No main page title in '{source}'")
            info = MainPageInfo(title=title, url=self.build_page_url(title))
        except WikiTideException as e:
            self.logger.warning(f"Main page unavailable ({e.kind.value}): {e.message}")
            return MainPageResult(error=e.kind)

        self.logger.info(f"Main page resolved: '{info.title}'")
        return MainPageResult(info=info)

    async def resolve_main_page(self) -> Optional[MainPageInfo]:
        """Resolve the main page, or None if it cannot be determined."""
        result = await self.resolve_main_page_result()
        return result.info
