"""Abstract interfaces for the Meshtastic Gopher client."""

from .connector import Connector, Stream
from .message_transport import MessageTransport
from .presenter import LinkHandler, Presenter

__all__ = ["Connector", "Stream", "LinkHandler", "MessageTransport", "Presenter"]
