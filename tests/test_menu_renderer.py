"""Tests for the MenuRenderer module."""

import pytest
from meshtastic_gopher_client.core.entry import DirectoryEntry
from meshtastic_gopher_client.core.paginator import Page, paginate
from meshtastic_gopher_client.core.menu_renderer import MenuRenderer


class TestMenuRenderer:
    """Tests for MenuRenderer."""

    @pytest.fixture
    def renderer(self):
        """Create a MenuRenderer instance."""
        return MenuRenderer()

    @pytest.fixture
    def sample_entries(self):
        """Sample directory entries."""
        return [
            DirectoryEntry("i", "Welcome"),
            DirectoryEntry("1", "Documents", "/docs", "example.org", 70),
            DirectoryEntry("0", "Readme", "/readme.txt", "example.org", 70),
            DirectoryEntry("i", ""),
            DirectoryEntry("7", "Search", "/search", "example.org", 70),
        ]

    def test_empty_listing(self, renderer):
        """Empty listing renders an empty marker."""
        result = renderer.render_listing(paginate([], 5, 1))
        assert "(empty)" in result

    def test_only_actionable_entries_numbered(self, renderer, sample_entries):
        """Info lines are shown without numbers."""
        result = renderer.render_listing(paginate(sample_entries, 10, 1))
        assert result.split("\n") == [
            "Welcome",
            "1. [DIR] Documents",
            "2. [TXT] Readme",
            "",
            "3. [QRY] Search",
        ]

    def test_title(self, renderer, sample_entries):
        """A title is shown in brackets on the first line."""
        result = renderer.render_listing(paginate(sample_entries, 10, 1), title="Home")
        assert result.startswith("[Home]\n")

    def test_single_page_has_no_page_line(self, renderer, sample_entries):
        """The page indicator only appears with more than one page."""
        result = renderer.render_listing(paginate(sample_entries, 10, 1))
        assert "Page" not in result

    def test_page_indicator(self, renderer, sample_entries):
        """Multi-page listings show the page number."""
        result = renderer.render_listing(paginate(sample_entries, 2, 2))
        assert "Page 2/3" in result

    def test_numbering_restarts_per_page(self, renderer, sample_entries):
        """Numbers count from 1 on every page."""
        result = renderer.render_listing(paginate(sample_entries, 2, 2))
        assert "1. [TXT] Readme" in result

    def test_hints_first_page(self, renderer, sample_entries):
        """The first of several pages offers next but not prev."""
        result = renderer.render_listing(paginate(sample_entries, 2, 1), include_hints=True)
        assert result.endswith("n=next b=back h=home ?=help")

    def test_hints_last_page(self, renderer, sample_entries):
        """The last page offers prev but not next."""
        result = renderer.render_listing(paginate(sample_entries, 2, 3), include_hints=True)
        assert result.endswith("p=prev b=back h=home ?=help")

    def test_no_hints_by_default(self, renderer, sample_entries):
        """Hints are left out unless requested."""
        result = renderer.render_listing(paginate(sample_entries, 10, 1))
        assert "help" not in result

    def test_unknown_type_label(self, renderer):
        """Unknown types show a placeholder label."""
        entry = DirectoryEntry("X", "Odd", "/odd", "example.org", 70)
        assert renderer.format_entry(entry) == "[???] Odd"

    def test_render_text(self, renderer):
        """Document pages list their lines with a footer."""
        page = Page(items=("one", "two"), page_number=1, page_count=2)
        result = renderer.render_text(page, title="Readme")
        assert result.split("\n") == [
            "[Readme]",
            "Page 1/2",
            "one",
            "two",
            "[n=next p=prev b=back]",
        ]

    def test_render_text_last_page(self, renderer):
        """The last document page says so."""
        page = Page(items=("end",), page_number=1, page_count=1)
        assert renderer.render_text(page) == "end\n[End, b=back]"

    def test_render_history(self, renderer):
        """History lists home and entries in order."""
        docs = DirectoryEntry("1", "Documents", "/docs", "example.org", 70)
        unnamed = DirectoryEntry("1", "", "/x", "example.org", 70)
        result = renderer.render_history((None, docs, unnamed))
        assert result.split("\n") == [
            "History:",
            "1. (home)",
            "2. Documents",
            "3. gopher://example.org:70/1//x",
        ]
