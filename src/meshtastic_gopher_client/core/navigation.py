"""Navigation engine: history, dispatch by item type, and fetch coordination."""

import logging
import threading
from importlib import resources
from typing import Callable

from ..errors import FetchError, FetchErrorKind, InvalidUrl, NoHandlerFound
from ..interfaces.presenter import LinkHandler, Presenter
from . import item_types, menu_parser, url_parser
from .entry import DirectoryEntry, Listing
from .fetch_client import ContentKind, FetchHandle, FetchRequest
from .item_types import Category
from .paginator import PaginationState
from .session import NavigationState, View

logger = logging.getLogger(__name__)


def default_home_text() -> str:
    """The home listing shipped with the package."""
    return resources.files("meshtastic_gopher_client").joinpath("data/home.txt").read_text(encoding="utf-8")


class NavigationEngine:
    """Drives a browsing session.

    Owns the NavigationState and is the only thing that changes it. At
    most one fetch is in flight; each fetch gets a new token and only the
    outcome carrying the latest token is applied. Results are reported to
    the presenter, which may be called from a fetch worker thread.
    """

    def __init__(
        self,
        fetcher,
        presenter: Presenter,
        home_text: str | None = None,
        link_handler: LinkHandler | None = None,
        listing_page_size: int = 25,
        text_page_size: int = 25,
        max_cached_listings: int = 16,
    ):
        """
        Initialize the engine showing the home listing.

        Args:
            fetcher: Object with ``submit(request, on_done) -> FetchHandle``,
                     normally a FetchClient.
            presenter: Receives listings, documents and failures.
            home_text: Raw menu text for the home listing. Defaults to the
                       packaged one.
            link_handler: Opens web links. Without one, web links only
                          produce a notice.
            listing_page_size: Entries per listing page.
            text_page_size: Lines per document page.
            max_cached_listings: History frames that keep their listing.
        """
        if max_cached_listings < 1:
            raise ValueError("max_cached_listings must be >= 1")

        self.fetcher = fetcher
        self.presenter = presenter
        self.link_handler = link_handler
        self.max_cached_listings = max_cached_listings
        self.home_listing: Listing = menu_parser.parse_listing(
            default_home_text() if home_text is None else home_text
        )

        self._lock = threading.RLock()
        self._token = 0
        self._in_flight: FetchHandle | None = None
        self._state = NavigationState(
            listing=PaginationState(items=self.home_listing, page_size=listing_page_size),
            text=PaginationState(page_size=text_page_size),
        )

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def status(self) -> View:
        """The current view, or NAVIGATING while a fetch is outstanding."""
        with self._lock:
            if self._in_flight is not None:
                return View.NAVIGATING
            return self._state.view

    def history(self) -> tuple[DirectoryEntry | None, ...]:
        return self._state.history_entries()

    # Navigation operations

    def go_home(self) -> None:
        """Show the built-in home listing and record it in history."""
        with self._lock:
            self._cancel_in_flight()
            logger.info("Navigating home")
            state = self._state.push(None, None, self.max_cached_listings)
            self._commit(state.show_listing(self.home_listing, View.HOME))
            self._emit_listing()
            self._emit_history()

    def activate(self, entry: DirectoryEntry) -> None:
        """
        Act on an entry according to its item type.

        Directories and text files are fetched; search entries prompt for a
        query; images are fetched as bytes; web links are handed to the link
        handler; everything else only produces a notice.
        """
        with self._lock:
            logger.info(f"Activating [{entry.item_type}] {entry.display_text!r} ({entry.describe()})")

            if entry.item_type == item_types.QUERY:
                self._cancel_in_flight()
                self._commit(self._state.await_query(entry))
                self.presenter.on_query_requested(entry)
                return

            if entry.item_type == item_types.WEB_LINK:
                self._open_external(entry.selector or "")
                return

            category = entry.category
            if category is Category.NAVIGABLE:
                self._start_fetch(entry, ContentKind.TEXT, self._apply_directory)
            elif category is Category.LEAF:
                self._start_fetch(entry, ContentKind.TEXT, self._apply_document)
            elif category is Category.BINARY and entry.item_type in item_types.IMAGE_TYPES:
                self._start_fetch(entry, ContentKind.BINARY, self._apply_image)
            elif category in (Category.INFO, Category.ERROR):
                logger.debug(f"Ignoring non-actionable entry {entry.display_text!r}")
            else:
                logger.info(f"Unsupported item type {entry.item_type!r}")
                self.presenter.on_notice(f"Unsupported item type {entry.label or entry.item_type}")

    def open_url(self, url: str) -> None:
        """Parse a typed URL and activate its target."""
        try:
            entry = url_parser.parse(url)
        except InvalidUrl as e:
            logger.warning(str(e))
            self.presenter.on_failure(e)
            return
        self.activate(entry)

    def submit_query(self, query: str) -> None:
        """Send the pending search with ``query`` appended to its selector."""
        with self._lock:
            pending = self._state.pending_query
            if pending is None:
                self.presenter.on_notice("No search in progress")
                return
            self._start_fetch(pending.with_query(query), ContentKind.TEXT, self._apply_directory)

    def cancel_query(self) -> None:
        with self._lock:
            if self._state.view is View.AWAITING_QUERY:
                self._commit(self._state.close_overlay())
                self._emit_listing()

    def go_back(self) -> None:
        """
        Step back.

        Leaving a document, image or query prompt returns to the listing
        that showed it. Otherwise the top history frame is dropped and the
        frame below is shown: home is rebuilt locally, a cached listing is
        redisplayed, and an evicted one is fetched again. With only the home
        frame left this does nothing.
        """
        with self._lock:
            self._cancel_in_flight()
            state = self._state

            if state.view in (View.DOCUMENT, View.IMAGE, View.AWAITING_QUERY):
                self._commit(state.close_overlay())
                self._emit_listing()
                return

            if len(state.history) <= 1:
                logger.debug("Already at the bottom of history")
                return

            popped = state.pop()
            frame = popped.top
            if frame.is_home:
                logger.info("Back to home listing")
                self._commit(popped.show_listing(self.home_listing, View.HOME))
            elif frame.listing is not None:
                logger.info(f"Back to {frame.entry.describe()} (cached)")
                self._commit(popped.show_listing(frame.listing))
            else:
                logger.info(f"Back to {frame.entry.describe()} (refetching)")
                self._start_fetch(frame.entry, ContentKind.TEXT, self._apply_revisit)
                return

            self._emit_listing()
            self._emit_history()

    def stop(self) -> None:
        """Cancel the in-flight fetch, if any, and report it once."""
        with self._lock:
            if self._cancel_in_flight():
                self.presenter.on_failure(FetchError(FetchErrorKind.CANCELLED))

    def close(self) -> None:
        """Cancel the in-flight fetch without reporting anything."""
        with self._lock:
            self._cancel_in_flight()

    # Pagination

    def next_page(self) -> None:
        self._move_cursor(lambda cursor: cursor.next())

    def previous_page(self) -> None:
        self._move_cursor(lambda cursor: cursor.previous())

    def go_to_page(self, page: int) -> None:
        self._move_cursor(lambda cursor: cursor.go_to(page))

    def refresh(self) -> None:
        """Report the current view again without changing anything."""
        with self._lock:
            view = self._state.view
            if view is View.DOCUMENT:
                self._emit_text()
            elif view is View.AWAITING_QUERY:
                self.presenter.on_query_requested(self._state.pending_query)
            else:
                self._emit_listing()

    def entry_on_page(self, index: int) -> DirectoryEntry | None:
        """
        Get the actionable entry at a 1-based index on the current page.

        Informational lines are not counted. Returns None if out of range.
        """
        entries = [e for e in self._state.listing.current().items if e.is_actionable]
        if index < 1 or index > len(entries):
            return None
        return entries[index - 1]

    def _move_cursor(self, move: Callable[[PaginationState], PaginationState]) -> None:
        with self._lock:
            state = self._state
            if state.view is View.DOCUMENT:
                self._commit(state.with_text_cursor(move(state.text)))
                self._emit_text()
            else:
                self._commit(state.with_listing_cursor(move(state.listing)))
                self._emit_listing()

    # Fetch coordination

    def _start_fetch(
        self,
        entry: DirectoryEntry,
        kind: ContentKind,
        apply: Callable[[DirectoryEntry, str | bytes], None],
    ) -> None:
        self._cancel_in_flight()
        if not entry.hostname:
            logger.info(f"Entry {entry.display_text!r} has no host")
            self.presenter.on_notice(f"Cannot open {entry.display_text or entry.label}: no host")
            return

        self._token += 1
        token = self._token
        request = FetchRequest(entry.hostname, entry.port, entry.selector or "", kind)

        logger.debug(f"Starting fetch #{token} for {entry.describe()}")
        self.presenter.on_navigating(entry)
        handle = self.fetcher.submit(
            request, lambda done: self._on_fetch_done(token, entry, done, apply)
        )
        # The outcome may already have been applied if the fetcher finished inline
        if token == self._token and not handle.done:
            self._in_flight = handle

    def _on_fetch_done(
        self,
        token: int,
        entry: DirectoryEntry,
        handle: FetchHandle,
        apply: Callable[[DirectoryEntry, str | bytes], None],
    ) -> None:
        with self._lock:
            if token != self._token:
                logger.debug(f"Discarding outcome of superseded fetch #{token}")
                return
            self._in_flight = None

            try:
                content = handle.result()
            except FetchError as e:
                if e.kind is FetchErrorKind.CANCELLED:
                    logger.debug(f"Fetch #{token} cancelled")
                    return
                logger.warning(f"Fetch #{token} failed: {e}")
                self.presenter.on_failure(e)
                return

            apply(entry, content)

    def _cancel_in_flight(self) -> bool:
        # Any outcome still on its way is stale from here on
        self._token += 1
        handle = self._in_flight
        if handle is None:
            return False
        logger.info(f"Cancelling fetch of {handle.request.selector!r}")
        self._in_flight = None
        handle.cancel()
        return True

    def _apply_directory(self, entry: DirectoryEntry, content: str) -> None:
        listing = menu_parser.parse_listing(content)
        logger.info(f"Directory {entry.describe()} has {len(listing)} entries")
        state = self._state.push(entry, listing, self.max_cached_listings)
        self._commit(state.show_listing(listing))
        self._emit_listing()
        self._emit_history()

    def _apply_revisit(self, entry: DirectoryEntry, content: str) -> None:
        listing = menu_parser.parse_listing(content)
        state = self._state.pop().replace_top(listing)
        self._commit(state.show_listing(listing))
        self._emit_listing()
        self._emit_history()

    def _apply_document(self, entry: DirectoryEntry, content: str) -> None:
        lines = menu_parser.split_document(content)
        logger.info(f"Document {entry.describe()} has {len(lines)} lines")
        self._commit(self._state.show_document(entry, lines))
        self._emit_text()

    def _apply_image(self, entry: DirectoryEntry, content: bytes) -> None:
        logger.info(f"Image {entry.describe()} is {len(content)} bytes")
        self._commit(self._state.show_image(entry))
        self.presenter.on_image_ready(content, entry)

    def _open_external(self, url: str) -> None:
        if self.link_handler is None:
            self.presenter.on_notice(f"Cannot open external link: {url}")
            return
        try:
            self.link_handler.open_external(url)
        except NoHandlerFound as e:
            logger.info(str(e))
            self.presenter.on_notice(f"Cannot open external link: {url}")

    # State and presenter plumbing

    def _commit(self, state: NavigationState) -> None:
        self._state = state

    def _emit_listing(self) -> None:
        self.presenter.on_listing_ready(self._state.listing.current(), self._state.top.entry)

    def _emit_text(self) -> None:
        self.presenter.on_text_ready(self._state.text.current(), self._state.document)

    def _emit_history(self) -> None:
        self.presenter.on_history_changed(self._state.history_entries())
