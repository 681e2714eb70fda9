"""Concrete implementations of the stream connector."""

from .socket_connector import SocketConnector, SocketStream

__all__ = ["SocketConnector", "SocketStream"]
