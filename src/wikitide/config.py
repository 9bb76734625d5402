import os
from typing import List, Optional
from urllib.parse import urlsplit

from dotenv import load_dotenv
from pydantic import BaseModel, Field

DEFAULT_INTERNAL_HOSTS = ["wikiforge.net", "wikitide.com", "wikitide.org"]
DEFAULT_STATIC_HOSTS = ["static.wikiforge.net"]


def _split_list(value: Optional[str], default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


class WikiConfig(BaseModel):
    """Configuration for talking to the wiki and classifying its URLs."""

    # Wiki location
    wiki_url: str = "https://meta.wikitide.org"
    script_path: str = "/w/"
    skin: str = "vector-2022"
    main_page_source: str = "MediaWiki:Mainpage"

    # Domain family
    internal_hosts: List[str] = Field(default_factory=lambda: list(DEFAULT_INTERNAL_HOSTS))
    static_hosts: List[str] = Field(default_factory=lambda: list(DEFAULT_STATIC_HOSTS))
    strict_host_matching: bool = False

    # Listing API
    page_limit: int = Field(500, gt=0, le=500)
    request_timeout: float = Field(10.0, gt=0)
    max_requests: int = Field(200, gt=0)
    fetch_deadline: float = Field(120.0, gt=0)

    # Display
    initial_scale: int = Field(30, gt=0)

    log_level: str = "INFO"
    user_agent: str = "wikitide/0.1 (https://meta.wikitide.org)"

    @property
    def api_url(self) -> str:
        return f"{self.wiki_url}{self.script_path}api.php"

    @property
    def index_url(self) -> str:
        return f"{self.wiki_url}{self.script_path}index.php"

    @property
    def primary_host(self) -> str:
        """Host name of wiki_url, used by strict host matching."""
        return urlsplit(self.wiki_url).hostname or ""

    @classmethod
    def from_env(cls) -> "WikiConfig":
        """Create config from environment variables (and a .env file, if present)."""
        load_dotenv()
        defaults = cls()
        return cls(
            wiki_url=os.getenv("WIKITIDE_URL", defaults.wiki_url),
            script_path=os.getenv("WIKITIDE_SCRIPT_PATH", defaults.script_path),
            skin=os.getenv("WIKITIDE_SKIN", defaults.skin),
            main_page_source=os.getenv("WIKITIDE_MAIN_PAGE_SOURCE", defaults.main_page_source),
            internal_hosts=_split_list(os.getenv("WIKITIDE_INTERNAL_HOSTS"), DEFAULT_INTERNAL_HOSTS),
            static_hosts=_split_list(os.getenv("WIKITIDE_STATIC_HOSTS"), DEFAULT_STATIC_HOSTS),
            strict_host_matching=os.getenv("WIKITIDE_STRICT_HOSTS", "false").lower() == "true",
            page_limit=int(os.getenv("WIKITIDE_PAGE_LIMIT", str(defaults.page_limit))),
            request_timeout=float(os.getenv("WIKITIDE_REQUEST_TIMEOUT", str(defaults.request_timeout))),
            max_requests=int(os.getenv("WIKITIDE_MAX_REQUESTS", str(defaults.max_requests))),
            fetch_deadline=float(os.getenv("WIKITIDE_FETCH_DEADLINE", str(defaults.fetch_deadline))),
            initial_scale=int(os.getenv("WIKITIDE_INITIAL_SCALE", str(defaults.initial_scale))),
            log_level=os.getenv("WIKITIDE_LOG_LEVEL", defaults.log_level),
        )
