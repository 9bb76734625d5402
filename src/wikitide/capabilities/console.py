"""
Terminal implementations of the collaborator surfaces, used by ``wikitide browse``.
"""

import logging
import webbrowser
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from wikitide.capabilities.surfaces import LinkOpener, PromptSurface, RenderingSurface
from wikitide.models import ScaleHint

logger = logging.getLogger(__name__)


class ConsoleRenderingSurface(RenderingSurface):
    """Prints what a web view would display and keeps a navigation history."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.history: List[str] = []
        self.title: Optional[str] = None
        self.message = ""
        self.scale_hint: Optional[ScaleHint] = None

    @property
    def current_url(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def load_url(self, url: str) -> None:
        self.history.append(url)
        self.console.print(f"[bold cyan]→[/] {escape(url)}")

    def reload(self) -> None:
        if self.current_url:
            self.console.print(f"[dim]reloading[/] {escape(self.current_url)}")

    def can_go_back(self) -> bool:
        return len(self.history) > 1

    def go_back(self) -> None:
        self.history.pop()
        self.console.print(f"[bold cyan]←[/] {escape(self.current_url or '')}")

    def set_title(self, title: str) -> None:
        self.title = title
        self.console.rule(title)

    def show_message(self, message: str) -> None:
        self.message = message
        if message:
            self.console.print(f"[yellow]{escape(message)}[/]")

    def apply_scale_hint(self, hint: ScaleHint) -> None:
        self.scale_hint = hint
        self.console.print(f"[dim]initial scale {hint.initial_scale}%, wide viewport[/]")

    def clear_cache(self) -> None:
        logger.debug("Console surface has no cache to clear")


class ConsolePromptSurface(PromptSurface):
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def confirm_external_link(self, url: str) -> bool:
        self.console.print(f"[bold]External link[/]: {escape(url)}")
        return Confirm.ask("Open in browser?", console=self.console, default=False)


class BrowserLinkOpener(LinkOpener):
    def open(self, url: str) -> None:
        if not webbrowser.open(url):
            logger.warning(f"No browser available to open {url}")
