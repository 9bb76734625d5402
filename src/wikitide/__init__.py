"""
wikitide - Core Library

Client logic for browsing a MediaWiki wiki family: paginated title listing,
main page lookup, URL classification for in-app navigation and title search.
"""

from .config import WikiConfig
from .events import EventBus, SessionEvent

__all__ = ['EventBus', 'SessionEvent', 'WikiConfig']
