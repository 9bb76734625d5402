from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field

# --- Enums ---

class FetchErrorKind(Enum):
    """Why a fetch ended early or produced nothing."""
    NETWORK_FAILURE = "network_failure"
    PARSE_FAILURE = "parse_failure"
    NOT_FOUND = "not_found"
    BUDGET_EXHAUSTED = "budget_exhausted"

class LinkClass(Enum):
    """Whether a URL belongs to the wiki family."""
    INTERNAL = "internal"
    EXTERNAL = "external"

class NavigationAction(Enum):
    """What the interception hook decided for a navigation."""
    ALLOW = "allow"          # load the URL as requested
    REPLACE = "replace"      # load decision.url instead
    EXTERNAL = "external"    # leave the app, after asking the user

# --- Fetch results ---

class MainPageInfo(BaseModel):
    """The wiki's landing page, resolved once at startup."""
    title: str = Field(..., min_length=1, description="Title named by the main page system message.")
    url: str = Field(..., description="Navigable index.php URL for the title.")

class TitleFetchResult(BaseModel):
    """Outcome of the paginated allpages listing."""
    titles: List[str] = Field(default_factory=list, description="Titles in API return order, possibly partial.")
    requests_made: int = Field(0, ge=0, description="Number of listing requests issued.")
    error: Optional[FetchErrorKind] = Field(None, description="Set when the loop stopped before the last page.")

    @property
    def complete(self) -> bool:
        return self.error is None

class MainPageResult(BaseModel):
    """Outcome of main page resolution."""
    info: Optional[MainPageInfo] = None
    error: Optional[FetchErrorKind] = None

# --- Navigation ---

class ScaleHint(BaseModel):
    """Display hint for static asset hosts; not a navigation decision."""
    initial_scale: int = Field(30, gt=0)
    use_wide_viewport: bool = True
    load_with_overview_mode: bool = True

class NavigationDecision(BaseModel):
    """Result of running a navigation target through the URL classifier."""
    action: NavigationAction
    url: str = Field(..., description="URL to load (the rewritten one for REPLACE).")
    scale_hint: Optional[ScaleHint] = None

    @property
    def intercepted(self) -> bool:
        """True when the original navigation must not proceed as-is."""
        return self.action is not NavigationAction.ALLOW
