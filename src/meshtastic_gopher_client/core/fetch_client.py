"""Fetching Gopher resources over an injected stream connector."""

import logging
import threading
from concurrent.futures import Future
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..errors import FetchError, FetchErrorKind
from ..interfaces.connector import Connector, Stream

logger = logging.getLogger(__name__)


class ContentKind(Enum):
    """How a response body is handed back."""

    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class FetchRequest:
    """One request: where to connect and what to ask for."""

    host: str
    port: int
    selector: str
    kind: ContentKind = ContentKind.TEXT


class FetchHandle:
    """A cancellable, single-result fetch.

    The outcome is held in ``future``: the content on success, or a
    FetchError on failure or cancellation.
    """

    def __init__(self, request: FetchRequest):
        self.request = request
        self.future: Future = Future()
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._stream: Stream | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self.future.done()

    def cancel(self) -> None:
        """Abort the fetch, closing the connection if one is open."""
        self._cancelled.set()
        with self._lock:
            stream = self._stream
        if stream is not None:
            logger.debug(f"Closing stream to {self.request.host}:{self.request.port}")
            stream.close()

    def result(self, timeout: float | None = None) -> str | bytes:
        """Wait for and return the content.

        Raises:
            FetchError: If the fetch failed or was cancelled.
        """
        return self.future.result(timeout)

    def attach(self, stream: Stream) -> None:
        """Associate an open stream so cancel() can close it."""
        with self._lock:
            self._stream = stream
        if self.cancelled:
            stream.close()
            raise FetchError(FetchErrorKind.CANCELLED)

    def detach(self) -> None:
        with self._lock:
            self._stream = None


class FetchClient:
    """Sends a selector and reads the whole response.

    The protocol has no length header: the server closes the connection
    when it is done.
    """

    def __init__(self, connector: Connector, encoding: str = "utf-8", chunk_size: int = 4096):
        """
        Initialize the fetch client.

        Args:
            connector: Opens streams to servers.
            encoding: Text encoding for TEXT responses. Undecodable bytes
                      are replaced rather than rejected.
            chunk_size: Bytes requested per read.
        """
        self.connector = connector
        self.encoding = encoding
        self.chunk_size = chunk_size

    def fetch(
        self,
        host: str,
        port: int,
        selector: str,
        kind: ContentKind = ContentKind.TEXT,
        handle: FetchHandle | None = None,
    ) -> str | bytes:
        """
        Fetch a resource, blocking until the server closes the connection.

        Args:
            host: Server hostname.
            port: Server port.
            selector: Selector sent verbatim.
            kind: TEXT to decode the response, BINARY for raw bytes.
            handle: Optional handle whose cancel() aborts this fetch.

        Returns:
            Decoded text or raw bytes.

        Raises:
            FetchError: On any I/O error, permission denial or cancellation.
        """
        logger.info(f"Fetching {selector!r} from {host}:{port}")
        try:
            data = self._transfer(host, port, selector, handle)
        except FetchError:
            raise
        except PermissionError as e:
            raise self._failure(FetchErrorKind.SECURITY_DENIED, e, handle) from e
        except (OSError, ValueError, OverflowError) as e:
            # Unencodable hostnames surface as UnicodeError, bad ports as OverflowError
            raise self._failure(FetchErrorKind.NETWORK_FAILURE, e, handle) from e

        if handle is not None and handle.cancelled:
            raise FetchError(FetchErrorKind.CANCELLED)

        logger.debug(f"Received {len(data)} bytes from {host}:{port}")
        if kind is ContentKind.BINARY:
            return data
        return data.decode(self.encoding, errors="replace")

    def submit(
        self,
        request: FetchRequest,
        on_done: Callable[[FetchHandle], None] | None = None,
    ) -> FetchHandle:
        """
        Run a fetch on a worker thread.

        ``on_done`` is called exactly once with the handle when the fetch
        succeeds, fails or is cancelled.
        """
        handle = FetchHandle(request)

        def run():
            try:
                content = self.fetch(
                    request.host, request.port, request.selector, request.kind, handle
                )
            except FetchError as e:
                handle.future.set_exception(e)
            except Exception as e:
                logger.exception(f"Unexpected error fetching {request.selector!r} from {request.host}")
                handle.future.set_exception(self._failure(FetchErrorKind.NETWORK_FAILURE, e, handle))
            else:
                handle.future.set_result(content)
            finally:
                if on_done is not None:
                    on_done(handle)

        thread = threading.Thread(
            target=run, name=f"gopher-fetch-{request.host}", daemon=True
        )
        thread.start()
        return handle

    def _transfer(
        self, host: str, port: int, selector: str, handle: FetchHandle | None
    ) -> bytes:
        if handle is not None and handle.cancelled:
            raise FetchError(FetchErrorKind.CANCELLED)

        with self.connector.open_stream(host, port) as stream:
            if handle is not None:
                handle.attach(stream)
            try:
                stream.write(f"{selector}\r\n".encode(self.encoding, errors="replace"))
                stream.flush()

                chunks = []
                while True:
                    chunk = stream.read(self.chunk_size)
                    if not chunk:
                        break
                    chunks.append(chunk)
                    if handle is not None and handle.cancelled:
                        raise FetchError(FetchErrorKind.CANCELLED)
                return b"".join(chunks)
            finally:
                if handle is not None:
                    handle.detach()

    def _failure(
        self, kind: FetchErrorKind, error: Exception, handle: FetchHandle | None
    ) -> FetchError:
        if handle is not None and handle.cancelled:
            return FetchError(FetchErrorKind.CANCELLED)
        logger.warning(f"Fetch failed ({kind.value}): {error}")
        return FetchError(kind, str(error))
