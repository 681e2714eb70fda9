"""Meshtastic-based message transport."""

import logging
import threading
from typing import Callable
from pubsub import pub

from meshtastic import serial_interface, tcp_interface, ble_interface

from ..interfaces import MessageTransport

logger = logging.getLogger(__name__)

RECEIVE_TOPIC = "meshtastic.receive.text"


class MeshtasticTransport(MessageTransport):
    """Direct-message transport over a Meshtastic radio.

    Supports Serial, BLE, and TCP connection types.
    """

    def __init__(self, connection_type: str = "serial", device: str | None = None):
        """
        Args:
            connection_type: Type of connection - "serial", "ble", or "tcp".
            device: Device path, BLE address, or hostname depending on type.
                   If None, serial connections auto-detect the device.
        """
        self.connection_type = connection_type
        self.device = device
        self._interface = None
        self._callbacks: list[Callable[[str, str], None]] = []

    def send(self, node_id: str, message: str) -> None:
        """
        Raises:
            RuntimeError: If not connected.
        """
        self._require_interface().sendText(message, destinationId=node_id)

    def send_and_wait(self, node_id: str, message: str, timeout: float = 30.0) -> bool:
        """
        Send a message and wait for the radio-level acknowledgment.

        Returns:
            True if ACK received, False on timeout or NAK.

        Raises:
            RuntimeError: If not connected.
        """
        interface = self._require_interface()
        acked = threading.Event()
        outcome = {"ok": False}

        # The meshtastic library dispatches ACK/NAK to a callback named onAckNak
        def onAckNak(packet):
            error_reason = packet.get("decoded", {}).get("routing", {}).get("errorReason", "NONE")
            outcome["ok"] = error_reason == "NONE"
            if not outcome["ok"]:
                logger.warning(f"[{node_id}] NAK received: {error_reason}")
            acked.set()

        interface.sendText(message, destinationId=node_id, wantAck=True, onResponse=onAckNak)

        if not acked.wait(timeout=timeout):
            logger.warning(f"[{node_id}] No ACK after {timeout}s")
            return False
        return outcome["ok"]

    def on_message(self, callback: Callable[[str, str], None]) -> None:
        self._callbacks.append(callback)

    def connect(self) -> None:
        """
        Open the radio interface for the configured connection type.

        Raises:
            ValueError: If the connection type is unknown.
        """
        factories = {
            "serial": lambda: serial_interface.SerialInterface(devPath=self.device),
            "ble": lambda: ble_interface.BLEInterface(address=self.device),
            "tcp": lambda: tcp_interface.TCPInterface(hostname=self.device),
        }
        if self.connection_type not in factories:
            raise ValueError(f"Unknown connection type: {self.connection_type}")

        logger.info(f"Opening {self.connection_type} interface ({self.device or 'auto'})")
        self._interface = factories[self.connection_type]()
        pub.subscribe(self._handle_receive, RECEIVE_TOPIC)

    def disconnect(self) -> None:
        if self._interface is None:
            return
        try:
            pub.unsubscribe(self._handle_receive, RECEIVE_TOPIC)
        except Exception as e:
            logger.debug(f"Unsubscribe failed: {e}")
        self._interface.close()
        self._interface = None

    def is_connected(self) -> bool:
        return self._interface is not None

    def _require_interface(self):
        if self._interface is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._interface

    def _handle_receive(self, packet: dict, interface) -> None:
        """
        pubsub listener for received text packets.

        Only direct messages reach the callbacks; broadcasts on the
        channel are ignored.
        """
        from_id = packet.get("fromId")
        text = packet.get("decoded", {}).get("text")
        if not from_id or not text:
            return

        my_num = getattr(getattr(interface, "myInfo", None), "my_node_num", None)
        if isinstance(my_num, int) and packet.get("to") != my_num:
            logger.debug(f"[{from_id}] Ignoring non-direct message")
            return

        for callback in self._callbacks:
            try:
                callback(from_id, text)
            except Exception:
                logger.exception(f"[{from_id}] Message handler failed")
