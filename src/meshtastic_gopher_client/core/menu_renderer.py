"""Renders listing and document pages as plain text."""

from .entry import DirectoryEntry
from .paginator import Page
from .url_parser import format_url


class MenuRenderer:
    """Renders pages as numbered menus for small text displays."""

    def render_listing(
        self,
        page: Page,
        title: str | None = None,
        include_hints: bool = False,
    ) -> str:
        """
        Render a page of a listing.

        Only actionable entries are numbered, in the order they appear on
        the page; informational lines are shown as plain text.

        Args:
            page: The listing page.
            title: Optional header, such as the directory location.
            include_hints: Whether to include navigation hints.

        Returns:
            Formatted menu string.
        """
        lines = []
        if title:
            lines.append(f"[{title}]")
        if page.page_count > 1:
            lines.append(f"Page {page.page_number}/{page.page_count}")

        if not page.items:
            lines.append("(empty)")

        number = 0
        for entry in page.items:
            if entry.is_actionable:
                number += 1
                lines.append(f"{number}. {self.format_entry(entry)}")
            else:
                lines.append(self.format_entry(entry))

        if include_hints:
            lines.append("")
            lines.append(self._hints(page))

        return "\n".join(lines)

    def render_text(self, page: Page, title: str | None = None) -> str:
        """Render a page of document lines."""
        lines = []
        if title:
            lines.append(f"[{title}]")
        if page.page_count > 1:
            lines.append(f"Page {page.page_number}/{page.page_count}")
        lines.extend(page.items)
        lines.append("[n=next p=prev b=back]" if not page.is_last else "[End, b=back]")
        return "\n".join(lines)

    def render_history(self, history: tuple[DirectoryEntry | None, ...]) -> str:
        """Render the history stack, most recent last."""
        lines = ["History:"]
        for i, entry in enumerate(history, 1):
            if entry is None:
                lines.append(f"{i}. (home)")
            else:
                lines.append(f"{i}. {entry.display_text or format_url(entry)}")
        return "\n".join(lines)

    def format_entry(self, entry: DirectoryEntry) -> str:
        label = entry.label
        return f"{label} {entry.display_text}" if label else entry.display_text

    def _hints(self, page: Page) -> str:
        hints = []
        if not page.is_last:
            hints.append("n=next")
        if page.page_number > 1:
            hints.append("p=prev")
        hints.extend(["b=back", "h=home", "?=help"])
        return " ".join(hints)
