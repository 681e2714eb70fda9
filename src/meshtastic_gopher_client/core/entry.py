"""Directory entries: references to remote Gopher resources."""

from dataclasses import dataclass, replace

from . import item_types
from .item_types import Category

DEFAULT_PORT = 70


@dataclass(frozen=True)
class DirectoryEntry:
    """A single menu item or typed URL target (immutable).

    Informational and error entries carry no selector, host or port
    obligations; nothing is ever fetched for them.
    """

    item_type: str
    display_text: str = ""
    selector: str | None = None
    hostname: str | None = None
    port: int = DEFAULT_PORT

    @property
    def category(self) -> Category:
        return item_types.classify(self.item_type).category

    @property
    def label(self) -> str:
        return item_types.classify(self.item_type).label

    @property
    def is_actionable(self) -> bool:
        """Whether selecting this entry does anything at all."""
        return self.category not in (Category.INFO, Category.ERROR)

    def with_query(self, query: str) -> "DirectoryEntry":
        """Return a new entry whose selector carries a search query."""
        return replace(self, selector=f"{self.selector or ''}\t{query}")

    def describe(self) -> str:
        """Short location string: host, port and selector."""
        return f"{self.hostname or ''} {self.port} {self.selector or ''}".strip()


# A listing is an ordered, server-authoritative tuple of entries
Listing = tuple[DirectoryEntry, ...]
