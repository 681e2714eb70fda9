"""Abstract interface for the mesh message transport."""

from abc import ABC, abstractmethod
from typing import Callable


class MessageTransport(ABC):
    """Sends and receives direct text messages between mesh nodes."""

    @abstractmethod
    def send(self, node_id: str, message: str) -> None:
        """Send a message to a node without waiting for delivery."""
        pass

    @abstractmethod
    def send_and_wait(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """Send a message and block until it is acknowledged.

        Messages to one node are sent this way so they arrive in order.

        Returns:
            True if the node acknowledged the message within ``timeout``.
        """
        pass

    @abstractmethod
    def on_message(self, callback: Callable[[str, str], None]) -> None:
        """Register a callback receiving (node_id, message) for direct messages."""
        pass

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass
