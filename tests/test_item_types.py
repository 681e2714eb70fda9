"""Tests for the item type registry and DirectoryEntry."""

import pytest
from meshtastic_gopher_client.core.entry import DirectoryEntry
from meshtastic_gopher_client.core.item_types import Category, classify


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "code,label,category",
        [
            ("0", "[TXT]", Category.LEAF),
            ("1", "[DIR]", Category.NAVIGABLE),
            ("3", "[ERR]", Category.ERROR),
            ("5", "[ZIP]", Category.BINARY),
            ("7", "[QRY]", Category.NAVIGABLE),
            ("9", "[BIN]", Category.BINARY),
            ("g", "[GIF]", Category.BINARY),
            ("h", "[WWW]", Category.LEAF),
            ("i", "", Category.INFO),
            ("I", "[IMG]", Category.BINARY),
        ],
    )
    def test_registered_codes(self, code, label, category):
        """Known codes map to their label and category."""
        info = classify(code)
        assert info.label == label
        assert info.category is category

    def test_unknown_code_is_unsupported(self):
        """Unknown codes are labelled [???] and unsupported."""
        info = classify("X")
        assert info.label == "[???]"
        assert info.category is Category.UNSUPPORTED

    def test_codes_are_case_sensitive(self):
        """'i' and 'I' are different types."""
        assert classify("i").category is Category.INFO
        assert classify("I").category is Category.BINARY


class TestDirectoryEntry:
    """Tests for DirectoryEntry."""

    def test_defaults(self):
        """Entries default to port 70 with no selector or host."""
        entry = DirectoryEntry(item_type="i")
        assert entry.port == 70
        assert entry.selector is None
        assert entry.hostname is None
        assert entry.display_text == ""

    def test_info_and_error_not_actionable(self):
        """Info and error entries have no action."""
        assert DirectoryEntry(item_type="i").is_actionable is False
        assert DirectoryEntry(item_type="3").is_actionable is False
        assert DirectoryEntry(item_type="1").is_actionable is True
        assert DirectoryEntry(item_type="X").is_actionable is True

    def test_with_query_extends_selector(self):
        """with_query appends a tab and the query text."""
        entry = DirectoryEntry("7", "Search", "/search", "example.org", 70)
        assert entry.with_query("q").selector == "/search\tq"

    def test_with_query_leaves_original_untouched(self):
        """with_query returns a new entry."""
        entry = DirectoryEntry("7", "Search", "/search", "example.org", 70)
        entry.with_query("q")
        assert entry.selector == "/search"

    def test_entries_are_immutable(self):
        """Entries cannot be modified in place."""
        entry = DirectoryEntry("1", "Menu", "/", "example.org")
        with pytest.raises(AttributeError):
            entry.selector = "/other"

    def test_label_from_registry(self):
        """label comes from the registry."""
        assert DirectoryEntry(item_type="1").label == "[DIR]"
        assert DirectoryEntry(item_type="?").label == "[???]"

    def test_describe(self):
        """describe shows host, port and selector."""
        entry = DirectoryEntry("1", "Menu", "/menu", "example.org", 7070)
        assert entry.describe() == "example.org 7070 /menu"
