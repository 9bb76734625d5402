from typing import List, Sequence, Tuple


def filter_titles(titles: Sequence[str], query: str) -> List[str]:
    """Case-insensitive substring match over titles, in their original order.

    A blank query matches nothing; it does not mean "show everything".
    """
    if not query or not query.strip():
        return []
    needle = query.lower()
    return [title for title in titles if needle in title.lower()]


class SearchFilter:
    """Holds the full title set and the current query of a search box."""

    def __init__(self, titles: Sequence[str] = ()):
        self._titles: Tuple[str, ...] = tuple(titles)
        self.query = ""
        self.results: List[str] = []

    @property
    def titles(self) -> Tuple[str, ...]:
        return self._titles

    @property
    def is_active(self) -> bool:
        return bool(self.results)

    def update_query(self, query: str) -> List[str]:
        """Recompute the results for a new query (called on every keystroke)."""
        self.query = query or ""
        self.results = filter_titles(self._titles, self.query)
        return self.results

    def clear(self):
        self.query = ""
        self.results = []
