"""Tests for the Session module."""

from meshtastic_gopher_client.core.entry import DirectoryEntry
from meshtastic_gopher_client.core.paginator import PaginationState
from meshtastic_gopher_client.core.session import HOME_FRAME, HistoryFrame, NavigationState, View


DOCS = DirectoryEntry("1", "Documents", "/docs", "example.org", 70)
MORE = DirectoryEntry("1", "More", "/more", "example.org", 70)
README = DirectoryEntry("0", "Readme", "/readme.txt", "example.org", 70)
SEARCH = DirectoryEntry("7", "Search", "/search", "example.org", 70)

LISTING_A = (README,)
LISTING_B = (MORE, README)


class TestHistoryFrame:
    """Tests for HistoryFrame."""

    def test_home_frame(self):
        """A frame without an entry is the home frame."""
        assert HOME_FRAME.is_home is True
        assert HistoryFrame(DOCS).is_home is False


class TestNavigationState:
    """Tests for NavigationState."""

    def test_default_values(self):
        """A new state shows home with a home-only history."""
        state = NavigationState()
        assert state.view is View.HOME
        assert state.history == (HOME_FRAME,)
        assert state.document is None
        assert state.pending_query is None

    def test_home_frame_always_at_bottom(self):
        """A history given without a home frame gets one."""
        state = NavigationState(history=(HistoryFrame(DOCS),))
        assert state.history[0].is_home
        assert state.history_entries() == (None, DOCS)

    def test_push(self):
        """push adds a frame carrying its listing."""
        state = NavigationState().push(DOCS, LISTING_A, 16)
        assert state.top == HistoryFrame(DOCS, LISTING_A)
        assert state.history_entries() == (None, DOCS)

    def test_push_is_immutable(self):
        """The original state is unchanged by push."""
        state = NavigationState()
        state.push(DOCS, LISTING_A, 16)
        assert len(state.history) == 1

    def test_pop(self):
        """pop drops the top frame."""
        state = NavigationState().push(DOCS, LISTING_A, 16).push(MORE, LISTING_B, 16)
        assert state.pop().top.entry == DOCS

    def test_pop_never_drops_home(self):
        """pop on a home-only history returns the same state."""
        state = NavigationState()
        assert state.pop() is state

    def test_previous_listing(self):
        """previous_listing is the listing one frame down."""
        state = NavigationState().push(DOCS, LISTING_A, 16).push(MORE, LISTING_B, 16)
        assert state.previous_listing == LISTING_A
        assert NavigationState().previous_listing is None

    def test_eviction(self):
        """Listings deeper than max_cached are dropped, entries kept."""
        state = NavigationState()
        state = state.push(DOCS, LISTING_A, 2)
        state = state.push(MORE, LISTING_B, 2)
        state = state.push(README, LISTING_A, 2)

        assert state.history_entries() == (None, DOCS, MORE, README)
        assert state.history[1].listing is None
        assert state.history[2].listing == LISTING_B
        assert state.top.listing == LISTING_A

    def test_replace_top(self):
        """replace_top refills the top frame's listing."""
        state = NavigationState().push(DOCS, None, 16)
        assert state.replace_top(LISTING_A).top == HistoryFrame(DOCS, LISTING_A)

    def test_show_listing_resets_page(self):
        """show_listing starts on page 1 and keeps the page size."""
        state = NavigationState(listing=PaginationState(items=(), page_size=3))
        state = state.show_listing(LISTING_B * 3).with_listing_cursor(
            PaginationState(items=LISTING_B * 3, page_size=3, page=2)
        )
        shown = state.show_listing(LISTING_B * 3)
        assert shown.listing.page == 1
        assert shown.listing.page_size == 3
        assert shown.view is View.LISTING

    def test_show_document(self):
        """show_document pages the lines with the text page size."""
        state = NavigationState(text=PaginationState(page_size=2))
        state = state.show_document(README, ("a", "b", "c"))
        assert state.view is View.DOCUMENT
        assert state.document == README
        assert state.text.total_pages() == 2

    def test_await_query_and_close(self):
        """A query prompt closes back to the listing view."""
        state = NavigationState().push(DOCS, LISTING_A, 16).show_listing(LISTING_A)
        prompt = state.await_query(SEARCH)
        assert prompt.view is View.AWAITING_QUERY
        assert prompt.pending_query == SEARCH

        closed = prompt.close_overlay()
        assert closed.view is View.LISTING
        assert closed.pending_query is None

    def test_close_overlay_at_home(self):
        """Closing an overlay over the home frame returns to HOME."""
        state = NavigationState().show_image(README)
        assert state.view is View.IMAGE
        assert state.close_overlay().view is View.HOME

    def test_cursors_independent(self):
        """Moving the text cursor leaves the listing cursor alone."""
        state = NavigationState(
            listing=PaginationState(items=LISTING_B, page_size=1),
            text=PaginationState(items=("a", "b"), page_size=1),
        )
        moved = state.with_text_cursor(state.text.next())
        assert moved.text.page == 2
        assert moved.listing.page == 1
