"""Parser for typed gopher:// URLs."""

from ..errors import InvalidUrl
from . import item_types
from .entry import DEFAULT_PORT, DirectoryEntry

SCHEME = "gopher://"


def parse(url: str) -> DirectoryEntry:
    """
    Parse a Gopher URL into a directory entry.

    Format: ``[gopher://]host[:port][/T/selector]``. The character after
    the type code is a separator and is skipped; the selector is taken
    verbatim, slashes included. Without a path the entry is a directory
    with an empty selector.

    Args:
        url: The URL as typed by the user.

    Returns:
        A DirectoryEntry for the URL target.

    Raises:
        InvalidUrl: If the host is empty or the port is not a valid number.
    """
    text = url.lstrip()
    position = len(SCHEME) if text.lower().startswith(SCHEME) else 0

    next_slash = text.find("/", position)
    if next_slash == -1:
        next_slash = len(text)
    next_colon = text.find(":", position, next_slash)

    port = DEFAULT_PORT
    if next_colon != -1:
        end_of_host = next_colon
        port = _parse_port(url, text[next_colon + 1:next_slash])
    else:
        end_of_host = next_slash

    hostname = text[position:end_of_host]
    if not hostname:
        raise InvalidUrl(url, "missing host")

    position = next_slash + 1
    item_type = item_types.DIRECTORY
    if position < len(text):
        item_type = text[position]
        position += 2  # type code and its separator

    selector = text[position:] if position < len(text) else ""

    return DirectoryEntry(
        item_type=item_type,
        selector=selector,
        hostname=hostname,
        port=port,
    )


def _parse_port(url: str, port_text: str) -> int:
    try:
        port = int(port_text)
    except ValueError:
        raise InvalidUrl(url, f"bad port {port_text!r}") from None
    if not 0 < port < 65536:
        raise InvalidUrl(url, f"port out of range: {port}")
    return port


def format_url(entry: DirectoryEntry) -> str:
    """Build a gopher:// URL that parses back to the same target."""
    return f"{SCHEME}{entry.hostname or ''}:{entry.port}/{entry.item_type}/{entry.selector or ''}"
