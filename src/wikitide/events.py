import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Callable, Awaitable, Any
from collections import defaultdict
from pydantic import BaseModel, Field

class SessionEvent(BaseModel):
    """Event emitted while a session starts up."""
    type: str = Field(..., min_length=1, description="Event type identifier (e.g., 'main_page_resolved', 'titles_loaded')")
    session_id: str = Field(..., min_length=1, description="Identifier of the session that emitted the event")
    data: Dict[str, Any] = Field(default_factory=dict, description="Event payload")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the event was created")

class EventBus:
    """
    Simple event bus between the navigation controller and an outer shell.

    Supports async event handlers with error isolation - if one handler fails,
    others continue to run.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[SessionEvent], Awaitable[None]]]] = defaultdict(list)
        self.logger = logging.getLogger(__name__)

    def subscribe(self, event_type: str, handler: Callable[[SessionEvent], Awaitable[None]]):
        """Subscribe a handler to an event type."""
        self._subscribers[event_type].append(handler)
        self.logger.debug(f"Subscribed handler to {event_type}")

    async def publish(self, event: SessionEvent):
        """Publish an event to all subscribers."""
        handlers = self._subscribers[event.type]
        if not handlers:
            self.logger.debug(f"No subscribers for event type: {event.type}")
            return

        self.logger.debug(f"Publishing {event.type} to {len(handlers)} handlers")

        results = await asyncio.gather(
            *[self._safe_handle(handler, event) for handler in handlers],
            return_exceptions=True
        )

        for i, result in enumerate(results):
            if isinstance(result, Exception):
                self.logger.error(f"Event handler {i} failed for {event.type}: {result}")

    async def _safe_handle(self, handler: Callable, event: SessionEvent):
        try:
            await handler(event)
        except Exception as e:
            self.logger.error(f"Handler {getattr(handler, '__name__', handler)} failed: {e}", exc_info=True)
            raise

    def get_subscriber_count(self, event_type: str) -> int:
        """Get number of subscribers for an event type (useful for testing)."""
        return len(self._subscribers[event_type])
