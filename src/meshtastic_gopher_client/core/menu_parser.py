"""Parser for Gopher menu listings and text documents."""

import logging
from typing import Iterator

from . import item_types
from .entry import DEFAULT_PORT, DirectoryEntry, Listing

logger = logging.getLogger(__name__)

TERMINATOR = "."
URL_PREFIX = "URL:"


def normalize_line_endings(raw: str) -> str:
    """Turn CRLF and lone CR line breaks into LF."""
    return raw.replace("\r\n", "\n").replace("\r", "\n")


def parse_listing(raw: str) -> Listing:
    """
    Parse a raw menu response into an ordered listing.

    Parsing is lenient: servers are not always well-formed and the menu
    must still render. Nothing in here raises on bad input.

    Args:
        raw: The full server response, already decoded to text.

    Returns:
        Tuple of entries in the order the server sent them.
    """
    return tuple(iter_listing(raw))


def iter_listing(raw: str) -> Iterator[DirectoryEntry]:
    """Yield entries from a menu response in a single pass."""
    if not raw:
        return

    for line in normalize_line_endings(raw).split("\n"):
        if line == TERMINATOR:
            break
        if not line:
            continue
        yield parse_line(line)


def parse_line(line: str) -> DirectoryEntry:
    """
    Parse a single menu line.

    Format: type char + display text, then tab-separated selector,
    hostname and port. Fields past the fourth are ignored.
    """
    fields = line.split("\t")
    label = fields[0]

    if not label:
        # No type code at all; show whatever follows as plain text
        return DirectoryEntry(item_type=item_types.INFO, display_text=" ".join(fields[1:]))

    item_type = label[0]
    display_text = label[1:]

    if item_type in (item_types.INFO, item_types.ERROR) or len(fields) < 2:
        return DirectoryEntry(item_type=item_type, display_text=display_text)

    selector = fields[1]
    if item_type == item_types.WEB_LINK and selector.startswith(URL_PREFIX):
        selector = selector[len(URL_PREFIX):]

    hostname = fields[2] if len(fields) > 2 else None
    port = _parse_port(fields[3]) if len(fields) > 3 else DEFAULT_PORT

    return DirectoryEntry(
        item_type=item_type,
        display_text=display_text,
        selector=selector,
        hostname=hostname,
        port=port,
    )


def _parse_port(port_text: str) -> int:
    try:
        port = int(port_text.strip())
    except ValueError:
        logger.debug(f"Unparsable port {port_text!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.debug(f"Port {port} out of range, using {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


def split_document(raw: str) -> tuple[str, ...]:
    """
    Split a text document into lines.

    A trailing line holding only ``.`` is the end-of-transfer marker and
    is dropped.
    """
    if not raw:
        return ()

    lines = normalize_line_endings(raw).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    if lines and lines[-1] == TERMINATOR:
        lines.pop()
    return tuple(lines)
