"""
URL classification for in-app navigation.

Decides whether a navigation target belongs to the wiki family (and so stays
in the rendering surface, rewritten to carry the app skin) or is external.
"""

import logging
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

from wikitide.config import WikiConfig
from wikitide.models import LinkClass, NavigationAction, NavigationDecision, ScaleHint
from wikitide.utils.wiki_helpers import append_query_parameter

logger = logging.getLogger(__name__)

SKIN_PARAMETER = "useskin"
SAFE_MODE_PARAMETER = "safemode"
SAFE_MODE_VALUE = "1"


def _host_matches_suffix(host: str, suffix: str) -> bool:
    return host == suffix or host.endswith("." + suffix)


class UrlClassifier:
    """
    Classifies and rewrites navigation targets.

    By default a URL is internal when it merely contains the primary wiki
    URL or one of the internal host suffixes anywhere in its text. With
    ``strict=True`` only the parsed host name is compared, so a foreign URL
    that mentions a wiki host in its path or query is external.
    """

    def __init__(self,
                 primary_url: str,
                 internal_hosts: Sequence[str],
                 static_hosts: Sequence[str] = (),
                 skin: str = "vector-2022",
                 initial_scale: int = 30,
                 strict: bool = False,
                 primary_host: Optional[str] = None):
        self.primary_url = primary_url
        self.primary_host = primary_host or urlsplit(primary_url).hostname or primary_url
        self.internal_hosts: List[str] = list(internal_hosts)
        self.static_hosts: List[str] = list(static_hosts)
        self.skin = skin
        self.initial_scale = initial_scale
        self.strict = strict

    @classmethod
    def from_config(cls, config: WikiConfig) -> "UrlClassifier":
        return cls(
            primary_url=config.wiki_url,
            internal_hosts=config.internal_hosts,
            static_hosts=config.static_hosts,
            skin=config.skin,
            initial_scale=config.initial_scale,
            strict=config.strict_host_matching,
            primary_host=config.primary_host,
        )

    @property
    def skin_marker(self) -> str:
        return f"{SKIN_PARAMETER}={self.skin}"

    def classify(self, url: str) -> LinkClass:
        if self.strict:
            return self._classify_by_host(url)
        if self.primary_url in url or any(suffix in url for suffix in self.internal_hosts):
            return LinkClass.INTERNAL
        return LinkClass.EXTERNAL

    def _classify_by_host(self, url: str) -> LinkClass:
        try:
            host = (urlsplit(url).hostname or "").lower()
        except ValueError:
            return LinkClass.EXTERNAL
        if not host:
            return LinkClass.EXTERNAL
        if host == self.primary_host.lower():
            return LinkClass.INTERNAL
        if any(_host_matches_suffix(host, suffix.lower()) for suffix in self.internal_hosts):
            return LinkClass.INTERNAL
        return LinkClass.EXTERNAL

    def is_external(self, url: str) -> bool:
        return self.classify(url) is LinkClass.EXTERNAL

    def rewrite_for_skin(self, url: str) -> str:
        """Append the skin and safe mode parameters unless the URL already carries the skin."""
        if self.skin_marker in url:
            return url
        rewritten = append_query_parameter(url, SKIN_PARAMETER, self.skin)
        return append_query_parameter(rewritten, SAFE_MODE_PARAMETER, SAFE_MODE_VALUE)

    def scale_hint_for(self, url: str) -> Optional[ScaleHint]:
        if any(suffix in url for suffix in self.static_hosts):
            return ScaleHint(initial_scale=self.initial_scale)
        return None

    def intercept(self, url: str) -> NavigationDecision:
        """Decide what to do with a navigation about to happen in the rendering surface."""
        if self.is_external(url):
            logger.debug(f"External navigation: {url}")
            return NavigationDecision(action=NavigationAction.EXTERNAL, url=url)

        scale_hint = self.scale_hint_for(url)
        rewritten = self.rewrite_for_skin(url)
        if rewritten != url:
            logger.debug(f"Rewrote {url} -> {rewritten}")
            return NavigationDecision(action=NavigationAction.REPLACE, url=rewritten, scale_hint=scale_hint)
        return NavigationDecision(action=NavigationAction.ALLOW, url=url, scale_hint=scale_hint)
