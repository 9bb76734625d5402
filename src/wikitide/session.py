import asyncio
import logging
import uuid
from typing import Optional, Sequence, Tuple

from wikitide.models import MainPageInfo

logger = logging.getLogger(__name__)


class WikiSession:
    """
    State owned by one app session.

    The title set is written once, when the listing fetch finishes, and is
    read-only afterwards. Re-fetching needs a new session.
    """

    def __init__(self, session_id: Optional[str] = None, current_url: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex
        self.current_url = current_url  # restored from saved state, if any
        self.main_page: Optional[MainPageInfo] = None
        self._titles: Optional[Tuple[str, ...]] = None
        self._titles_event: Optional[asyncio.Event] = None  # created by the first waiter
        self.closed = False

    @property
    def titles(self) -> Tuple[str, ...]:
        return self._titles or ()

    @property
    def titles_loaded(self) -> bool:
        return self._titles is not None

    def set_titles(self, titles: Sequence[str]):
        if self._titles is not None:
            raise RuntimeError(f"Titles already loaded for session {self.session_id}")
        self._titles = tuple(titles)
        if self._titles_event is not None:
            self._titles_event.set()
        logger.debug(f"Session {self.session_id}: {len(self._titles)} titles loaded")

    async def wait_for_titles(self) -> Tuple[str, ...]:
        if self._titles is None:
            if self._titles_event is None:
                self._titles_event = asyncio.Event()
            await self._titles_event.wait()
        return self.titles

    def close(self):
        self._titles = None
        self.main_page = None
        self.current_url = None
        self.closed = True
        logger.debug(f"Session {self.session_id} closed")
