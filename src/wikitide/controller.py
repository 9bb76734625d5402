import asyncio
import logging
from typing import List, Optional

from wikitide.capabilities import LinkOpener, PromptSurface, RenderingSurface
from wikitide.events import EventBus, SessionEvent
from wikitide.models import NavigationAction
from wikitide.navigation import UrlClassifier
from wikitide.search import SearchFilter
from wikitide.session import WikiSession
from wikitide.wiki import LiveWikiService

logger = logging.getLogger(__name__)

NO_PAGES_FOUND = "No available pages found"
FAILED_TO_FETCH_CONTENT = "Failed to fetch content"
CACHE_CLEARED = "Cache cleared"


class NavigationController:
    """
    Glue between the wiki service, the session state and the UI shell.

    Responsibilities:
    - Resolve and load the main page, and fetch the title list, at startup
    - Answer search queries once titles are available
    - Intercept navigations in the rendering surface

    UI callbacks (query changes, selections, interception) are synchronous;
    only startup runs in a background task.
    """

    def __init__(self,
                 wiki_service: LiveWikiService,
                 rendering: RenderingSurface,
                 prompt: PromptSurface,
                 link_opener: LinkOpener,
                 session: Optional[WikiSession] = None,
                 classifier: Optional[UrlClassifier] = None,
                 event_bus: Optional[EventBus] = None):
        self.wiki_service = wiki_service
        self.rendering = rendering
        self.prompt = prompt
        self.link_opener = link_opener
        self.session = session or WikiSession()
        self.classifier = classifier or UrlClassifier.from_config(wiki_service.config)
        self.event_bus = event_bus
        self.search = SearchFilter()
        self.background_task: Optional[asyncio.Task] = None

    # --- Startup ---

    def start(self) -> asyncio.Task:
        """Start the background startup task. Must be called from a running loop."""
        if self.background_task is None:
            self.background_task = asyncio.create_task(self._run_startup())
            logger.info(f"Started session {self.session.session_id}")
        return self.background_task

    async def _run_startup(self):
        try:
            results = await asyncio.gather(self._load_main_page(), self._load_titles(), return_exceptions=True)
        except asyncio.CancelledError:
            logger.info(f"Startup of session {self.session.session_id} cancelled")
            raise

        for step, result in zip(("main page", "title list"), results):
            if isinstance(result, Exception):
                logger.error(f"Loading the {step} failed for session {self.session.session_id}: {result}",
                             exc_info=result)

    async def _load_main_page(self):
        if self.session.current_url is not None:
            logger.debug(f"Restoring {self.session.current_url}, skipping main page lookup")
            return

        result = await self.wiki_service.resolve_main_page_result()
        if result.info is None:
            await self._publish("main_page_unavailable", {"error": result.error.value if result.error else None})
            return

        self.session.main_page = result.info
        self.rendering.set_title(result.info.title)
        self.rendering.load_url(result.info.url)
        await self._publish("main_page_resolved", {"title": result.info.title, "url": result.info.url})

    async def _load_titles(self):
        result = await self.wiki_service.fetch_titles_result()
        self.session.set_titles(result.titles)
        self.search = SearchFilter(self.session.titles)

        if result.error is not None:
            await self._publish("titles_fetch_failed", {
                "error": result.error.value,
                "partial_count": len(result.titles),
            })

        if not result.titles:
            self.rendering.show_message(NO_PAGES_FOUND)
            return

        await self._publish("titles_loaded", {"count": len(result.titles), "complete": result.complete})

    async def _publish(self, event_type: str, data: dict):
        if self.event_bus is None:
            return
        await self.event_bus.publish(SessionEvent(
            type=event_type,
            session_id=self.session.session_id,
            data=data,
        ))

    # --- Search ---

    @property
    def search_enabled(self) -> bool:
        return self.session.titles_loaded and bool(self.session.titles)

    def on_query_changed(self, query: str) -> List[str]:
        """Filtered titles for the current search box text."""
        if not self.search_enabled:
            return []
        return self.search.update_query(query)

    def finish_search(self):
        self.search.clear()

    def on_title_selected(self, page_title: str):
        """Load a page picked from the search results."""
        self.finish_search()
        try:
            url = self.wiki_service.build_page_url(page_title)
        except ValueError as e:
            logger.warning(f"Cannot open selected page {page_title!r}: {e}")
            self.rendering.show_message(FAILED_TO_FETCH_CONTENT)
            return

        self.rendering.load_url(url)
        self.rendering.show_message("")

    # --- Navigation ---

    def should_override_url_loading(self, url: str) -> bool:
        """
        Interception hook called before each navigation in the rendering surface.

        Returns:
            True if the navigation was replaced or blocked, False to let it proceed
        """
        decision = self.classifier.intercept(url)

        if decision.action is NavigationAction.EXTERNAL:
            if self.prompt.confirm_external_link(url):
                logger.info(f"Opening external link: {url}")
                self.link_opener.open(url)
            return True

        if decision.scale_hint is not None:
            self.rendering.apply_scale_hint(decision.scale_hint)

        self.session.current_url = decision.url
        if decision.action is NavigationAction.REPLACE:
            self.rendering.load_url(decision.url)
            return True
        return False

    def handle_back(self) -> bool:
        """
        Back button handling: close the search, then step back in history.

        Returns:
            False when there was nothing to go back to
        """
        if self.search.is_active:
            self.finish_search()
            return True
        if self.rendering.can_go_back():
            self.rendering.go_back()
            return True
        return False

    def refresh(self):
        self.rendering.reload()

    def clear_cache(self):
        self.rendering.clear_cache()
        self.rendering.reload()
        self.rendering.show_message(CACHE_CLEARED)

    # --- Teardown ---

    async def close(self):
        """Cancel startup work still in flight and drop the session state."""
        if self.background_task is not None and not self.background_task.done():
            self.background_task.cancel()
            await asyncio.gather(self.background_task, return_exceptions=True)
        self.background_task = None
        self.search.clear()
        self.session.close()
        logger.info(f"Session {self.session.session_id} closed")
