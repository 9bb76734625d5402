"""
Exceptions raised by the wiki fetch layer.

None of these cross into the controller: LiveWikiService converts them into
FetchErrorKind values at the fetch boundary.
"""

from wikitide.models import FetchErrorKind


class WikiTideException(Exception):
    """Base exception for the application."""
    kind: FetchErrorKind = FetchErrorKind.NETWORK_FAILURE

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class WikiNetworkError(WikiTideException):
    """Raised when the wiki API is unreachable, times out or returns a non-2xx status."""
    kind = FetchErrorKind.NETWORK_FAILURE


class WikiParseError(WikiTideException):
    """Raised when a response is not JSON or does not have the expected shape."""
    kind = FetchErrorKind.PARSE_FAILURE


class WikiPageNotFound(WikiTideException):
    """Raised when an expected page is missing or has no extractable text."""
    kind = FetchErrorKind.NOT_FOUND
