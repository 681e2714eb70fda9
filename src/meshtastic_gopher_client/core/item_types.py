"""Registry of Gopher item-type codes."""

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    """How the client interacts with an item."""

    NAVIGABLE = "navigable"
    LEAF = "leaf"
    BINARY = "binary"
    INFO = "info"
    ERROR = "error"
    UNSUPPORTED = "unsupported"


TEXT = "0"
DIRECTORY = "1"
ERROR = "3"
ARCHIVE = "5"
QUERY = "7"
BINARY = "9"
GIF = "g"
WEB_LINK = "h"
INFO = "i"
IMAGE = "I"

UNKNOWN_LABEL = "[???]"


@dataclass(frozen=True)
class ItemTypeInfo:
    """Display label and interaction category for one item-type code."""

    label: str
    category: Category


_REGISTRY: dict[str, ItemTypeInfo] = {
    TEXT: ItemTypeInfo("[TXT]", Category.LEAF),
    DIRECTORY: ItemTypeInfo("[DIR]", Category.NAVIGABLE),
    ERROR: ItemTypeInfo("[ERR]", Category.ERROR),
    ARCHIVE: ItemTypeInfo("[ZIP]", Category.BINARY),
    QUERY: ItemTypeInfo("[QRY]", Category.NAVIGABLE),
    BINARY: ItemTypeInfo("[BIN]", Category.BINARY),
    GIF: ItemTypeInfo("[GIF]", Category.BINARY),
    WEB_LINK: ItemTypeInfo("[WWW]", Category.LEAF),
    INFO: ItemTypeInfo("", Category.INFO),
    IMAGE: ItemTypeInfo("[IMG]", Category.BINARY),
}

_UNSUPPORTED = ItemTypeInfo(UNKNOWN_LABEL, Category.UNSUPPORTED)

# Binary types the client can actually fetch and hand to an image decoder
IMAGE_TYPES = frozenset({GIF, IMAGE})


def classify(code: str) -> ItemTypeInfo:
    """Look up the label and category for an item-type code.

    Unknown codes map to an UNSUPPORTED entry labelled ``[???]``.
    """
    return _REGISTRY.get(code, _UNSUPPORTED)

