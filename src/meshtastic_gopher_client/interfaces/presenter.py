"""Abstract interfaces for the presentation layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.entry import DirectoryEntry
    from ..core.paginator import Page
    from ..errors import GopherError


class Presenter(ABC):
    """Receives the results of navigation.

    The navigation engine calls these; it never renders anything itself.
    Callbacks may arrive on a fetch worker thread.
    """

    @abstractmethod
    def on_listing_ready(self, page: Page, entry: DirectoryEntry | None) -> None:
        """A page of a menu listing is ready. ``entry`` is None for home."""
        pass

    @abstractmethod
    def on_text_ready(self, page: Page, entry: DirectoryEntry) -> None:
        """A page of document lines is ready."""
        pass

    @abstractmethod
    def on_image_ready(self, data: bytes, entry: DirectoryEntry) -> None:
        """Raw image bytes are ready for an image decoder."""
        pass

    @abstractmethod
    def on_failure(self, error: GopherError) -> None:
        """A navigation failed. Prior state is unchanged."""
        pass

    @abstractmethod
    def on_history_changed(self, history: tuple[DirectoryEntry | None, ...]) -> None:
        """The history stack changed. None marks the home listing."""
        pass

    @abstractmethod
    def on_notice(self, message: str) -> None:
        """An informational notice, such as an unsupported item."""
        pass

    @abstractmethod
    def on_query_requested(self, entry: DirectoryEntry) -> None:
        """A search entry was activated and needs query text."""
        pass

    def on_navigating(self, entry: DirectoryEntry) -> None:
        """A fetch for ``entry`` has started."""
        pass


class LinkHandler(ABC):
    """Opens non-Gopher links (web pages) outside the client."""

    @abstractmethod
    def open_external(self, url: str) -> None:
        """Hand ``url`` to an external handler.

        Raises:
            NoHandlerFound: If nothing can open the link.
        """
        pass
