"""
Collaborator interfaces

Defines what the navigation controller needs from the UI shell without
coupling to a specific toolkit (web view, terminal, test double).
"""

from abc import ABC, abstractmethod

from wikitide.models import ScaleHint


class RenderingSurface(ABC):
    """The surface that displays wiki pages (a web view in a GUI shell)."""

    @abstractmethod
    def load_url(self, url: str) -> None:
        pass

    @abstractmethod
    def reload(self) -> None:
        pass

    @abstractmethod
    def can_go_back(self) -> bool:
        pass

    @abstractmethod
    def go_back(self) -> None:
        pass

    @abstractmethod
    def set_title(self, title: str) -> None:
        pass

    @abstractmethod
    def show_message(self, message: str) -> None:
        """
        Show a static status message in place of content.

        An empty message clears it.
        """
        pass

    @abstractmethod
    def apply_scale_hint(self, hint: ScaleHint) -> None:
        pass

    @abstractmethod
    def clear_cache(self) -> None:
        pass


class PromptSurface(ABC):
    """Asks the user before leaving the app for an external link."""

    @abstractmethod
    def confirm_external_link(self, url: str) -> bool:
        """
        Returns:
            True if the user chose to open the link externally, False on cancel
        """
        pass


class LinkOpener(ABC):
    """Hands a URL to the system (browser, desktop opener...)."""

    @abstractmethod
    def open(self, url: str) -> None:
        pass
