"""
Helper functions for turning wiki-rendered HTML into plain text and for
building index.php URLs.
"""

import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

# Closing block elements and <br> end a rendered line, so they become line breaks
# before the remaining markup is dropped.
_BLOCK_BREAK_RE = re.compile(
    r"</(?:p|div|li|dd|dt|h[1-6]|tr|table|ul|ol|dl|pre|blockquote)\s*>|<br\s*/?>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<.*?>")
_NAMED_ENTITY_RE = re.compile(r"&[a-zA-Z]+;")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def extract_first_line(html: Optional[str]) -> Optional[str]:
    """Returns the first plain-text line of an HTML fragment.

    Tags are removed, named entity references (``&nbsp;``, ``&amp;``...) are
    replaced by a single space, and the first line is trimmed.

    Args:
      html: The HTML fragment, e.g. the ``parse.text`` of a rendered page.

    Returns:
      The trimmed first line, or None for missing or blank input. The result
      can be an empty string when the first line held only markup; callers
      that need a usable title must check for that themselves.

    Examples:
      "<p>Main Page\\n</p>"          =>   "Main Page"
      "<p>Home</p>&nbsp;extra"      =>   "Home"
      "<b>Tea</b>&amp;Cake"         =>   "Tea Cake"
    """
    if html is None or not html.strip():
        return None

    text = _BLOCK_BREAK_RE.sub("\n", html)
    text = _TAG_RE.sub("", text)
    text = _NAMED_ENTITY_RE.sub(" ", text)

    first_line = _LINE_BREAK_RE.split(text, maxsplit=1)[0]
    return first_line.strip()


def validate_page_title(page_title: str):
    """Validates the provided value is a usable page title.

    Raises:
      ValueError: If the provided page title is not a non-empty string.
    """
    if not page_title or not isinstance(page_title, str) or not page_title.strip():
        raise ValueError(
            f'Invalid page title "{page_title}" provided. Page title must be a non-empty string.'
        )


def append_query_parameter(url: str, name: str, value: str) -> str:
    """Appends ``name=value`` to the query of url, keeping existing parameters and fragment.

    The name and value are percent-encoded; the existing query is left untouched.

    Examples:
      ("https://a.org/wiki/X", "useskin", "vector-2022")   =>   "https://a.org/wiki/X?useskin=vector-2022"
      ("https://a.org/w/index.php?title=X#top", "safemode", "1")
          =>   "https://a.org/w/index.php?title=X&safemode=1#top"
    """
    parts = urlsplit(url)
    pair = f"{quote(name, safe='')}={quote(value, safe='')}"
    query = f"{parts.query}&{pair}" if parts.query else pair
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def build_title_url(index_url: str, page_title: str) -> str:
    """Builds ``<index_url>?title=<page_title>`` for a wiki page.

    Raises:
      ValueError: If the page title is invalid.
    """
    validate_page_title(page_title)
    return append_query_parameter(index_url, "title", page_title)
