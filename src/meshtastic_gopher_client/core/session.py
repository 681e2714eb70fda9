"""Navigation state for one browsing session."""

from dataclasses import dataclass, field, replace
from enum import Enum

from .entry import DirectoryEntry, Listing
from .paginator import PaginationState


class View(Enum):
    """What the session is currently showing."""

    HOME = "home"
    LISTING = "listing"
    DOCUMENT = "document"
    IMAGE = "image"
    AWAITING_QUERY = "awaiting_query"
    NAVIGATING = "navigating"


@dataclass(frozen=True)
class HistoryFrame:
    """A history checkpoint and the listing that was shown for it.

    ``entry`` is None for the built-in home listing. ``listing`` is None
    once the cached listing has been evicted.
    """

    entry: DirectoryEntry | None = None
    listing: Listing | None = None

    @property
    def is_home(self) -> bool:
        return self.entry is None


HOME_FRAME = HistoryFrame()


@dataclass(frozen=True)
class NavigationState:
    """Session state (immutable).

    Every change produces a new state, so a state is never seen half
    updated. The history is never empty and starts with the home frame.
    """

    history: tuple[HistoryFrame, ...] = (HOME_FRAME,)
    view: View = View.HOME
    listing: PaginationState = field(default_factory=PaginationState)
    text: PaginationState = field(default_factory=PaginationState)
    document: DirectoryEntry | None = None
    pending_query: DirectoryEntry | None = None

    def __post_init__(self):
        history = tuple(self.history)
        if not history or not history[0].is_home:
            history = (HOME_FRAME,) + history
        object.__setattr__(self, "history", history)

    @property
    def top(self) -> HistoryFrame:
        return self.history[-1]

    @property
    def current_listing(self) -> Listing:
        return self.listing.items

    @property
    def previous_listing(self) -> Listing | None:
        """Listing of the frame below the top, if still cached."""
        if len(self.history) < 2:
            return None
        return self.history[-2].listing

    def history_entries(self) -> tuple[DirectoryEntry | None, ...]:
        return tuple(frame.entry for frame in self.history)

    def show_listing(self, listing: Listing, view: View = View.LISTING) -> "NavigationState":
        """Display a listing from page 1, closing any document or query."""
        return replace(
            self,
            view=view,
            listing=PaginationState(items=listing, page_size=self.listing.page_size),
            document=None,
            pending_query=None,
        )

    def push(self, entry: DirectoryEntry | None, listing: Listing | None, max_cached: int) -> "NavigationState":
        """Add a history frame, evicting listings deeper than ``max_cached``."""
        return replace(self, history=_evict(self.history + (HistoryFrame(entry, listing),), max_cached))

    def pop(self) -> "NavigationState":
        """Drop the top frame. The home frame is never dropped."""
        if len(self.history) <= 1:
            return self
        return replace(self, history=self.history[:-1])

    def replace_top(self, listing: Listing) -> "NavigationState":
        """Store a freshly fetched listing in the top frame."""
        frame = replace(self.top, listing=listing)
        return replace(self, history=self.history[:-1] + (frame,))

    def show_document(self, entry: DirectoryEntry, lines: tuple[str, ...]) -> "NavigationState":
        return replace(
            self,
            view=View.DOCUMENT,
            text=PaginationState(items=lines, page_size=self.text.page_size),
            document=entry,
            pending_query=None,
        )

    def show_image(self, entry: DirectoryEntry) -> "NavigationState":
        return replace(self, view=View.IMAGE, document=entry, pending_query=None)

    def await_query(self, entry: DirectoryEntry) -> "NavigationState":
        return replace(self, view=View.AWAITING_QUERY, pending_query=entry)

    def close_overlay(self) -> "NavigationState":
        """Leave a document, image or query prompt, back to the listing."""
        view = View.HOME if self.top.is_home else View.LISTING
        return replace(self, view=view, document=None, pending_query=None)

    def with_listing_cursor(self, cursor: PaginationState) -> "NavigationState":
        return replace(self, listing=cursor)

    def with_text_cursor(self, cursor: PaginationState) -> "NavigationState":
        return replace(self, text=cursor)


def _evict(history: tuple[HistoryFrame, ...], max_cached: int) -> tuple[HistoryFrame, ...]:
    """Drop cached listings of frames more than ``max_cached`` below the top."""
    cutoff = len(history) - max_cached
    if cutoff <= 0:
        return history
    return tuple(
        replace(frame, listing=None) if i < cutoff and not frame.is_home else frame
        for i, frame in enumerate(history)
    )
