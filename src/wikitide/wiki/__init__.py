"""
Wiki module for wikitide.

This module contains the client for the MediaWiki action API: the paginated
page listing and the main page lookup.
"""

from .live_service import LiveWikiService

__all__ = [
    'LiveWikiService',
]
