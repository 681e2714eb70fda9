"""TCP socket implementation of the stream connector."""

import logging
import socket
import threading

from ..interfaces import Connector, Stream

logger = logging.getLogger(__name__)


class SocketStream(Stream):
    """Stream over a connected TCP socket."""

    def __init__(self, sock: socket.socket):
        self._sock = sock
        self._closed = False
        self._lock = threading.Lock()

    def write(self, data: bytes) -> None:
        self._sock.sendall(data)

    def flush(self) -> None:
        # Half-close so servers waiting for end of request start replying
        try:
            self._sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            logger.debug(f"Half-close failed: {e}")

    def read(self, size: int) -> bytes:
        return self._sock.recv(size)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        try:
            # Wakes up a recv() blocked in another thread
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # Already disconnected
        self._sock.close()


class SocketConnector(Connector):
    """Opens plain TCP connections.

    There is no read timeout: a hung transfer ends only when it is
    cancelled or the connection fails.
    """

    def __init__(self, connect_timeout: float | None = None):
        """
        Args:
            connect_timeout: Seconds to wait for the connection to be
                             established, or None to wait indefinitely.
        """
        self.connect_timeout = connect_timeout

    def open_stream(self, host: str, port: int) -> SocketStream:
        logger.debug(f"Connecting to {host}:{port}")
        sock = socket.create_connection((host, port), timeout=self.connect_timeout)
        sock.settimeout(None)
        return SocketStream(sock)
