"""Configuration handling for the Meshtastic Gopher client."""

from dataclasses import dataclass
from pathlib import Path
import yaml


@dataclass
class Config:
    """Configuration settings for the Gopher client.

    Attributes:
        home_listing: Menu file shown as the home listing (None for the
                      built-in one).
        start_url: Gopher URL opened for a node on first contact, if any.
        listing_page_size: Menu entries per page.
        text_page_size: Document lines per page.
        encoding: Text encoding of Gopher responses.
        connect_timeout: Seconds to wait for a server connection (None waits
                         indefinitely).
        max_cached_listings: History frames that keep their listing.
        connection_type: Meshtastic connection type (serial, ble, tcp).
        device: Device path, BLE address, or hostname.
        max_message_size: Maximum characters per mesh message.
        ack_timeout_seconds: Seconds to wait for a message ACK.
        session_timeout_minutes: Session inactivity timeout.
    """

    home_listing: str | None = None
    start_url: str | None = None
    listing_page_size: int = 8
    text_page_size: int = 10
    encoding: str = "utf-8"
    connect_timeout: float | None = None
    max_cached_listings: int = 16
    connection_type: str = "serial"
    device: str | None = None
    max_message_size: int = 230
    ack_timeout_seconds: float = 30.0
    session_timeout_minutes: int = 30

    def load_home_text(self) -> str | None:
        """Read the configured home listing, or None to use the built-in one."""
        if self.home_listing is None:
            return None
        return Path(self.home_listing).expanduser().read_text(encoding=self.encoding, errors="replace")


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    gopher = data.get("gopher") or {}
    meshtastic = data.get("meshtastic") or {}
    session = data.get("session") or {}

    return Config(
        home_listing=gopher.get("home_listing", Config.home_listing),
        start_url=gopher.get("start_url", Config.start_url),
        listing_page_size=gopher.get("listing_page_size", Config.listing_page_size),
        text_page_size=gopher.get("text_page_size", Config.text_page_size),
        encoding=gopher.get("encoding", Config.encoding),
        connect_timeout=gopher.get("connect_timeout", Config.connect_timeout),
        max_cached_listings=gopher.get("max_cached_listings", Config.max_cached_listings),
        connection_type=meshtastic.get("connection_type", Config.connection_type),
        device=meshtastic.get("device", Config.device),
        max_message_size=meshtastic.get("max_message_size", Config.max_message_size),
        ack_timeout_seconds=meshtastic.get("ack_timeout_seconds", Config.ack_timeout_seconds),
        session_timeout_minutes=session.get("timeout_minutes", Config.session_timeout_minutes),
    )
