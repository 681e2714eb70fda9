"""Abstract interface for opening byte streams to Gopher servers."""

from abc import ABC, abstractmethod


class Stream(ABC):
    """A bidirectional byte stream to a server.

    Usable as a context manager; leaving the block closes the stream.
    """

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Write all of ``data`` to the stream."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Push buffered output and signal end of request to the peer."""
        pass

    @abstractmethod
    def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes; an empty result means end of stream."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the stream. Safe to call more than once, from any thread."""
        pass

    def __enter__(self) -> "Stream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class Connector(ABC):
    """Opens streams to ``host:port``."""

    @abstractmethod
    def open_stream(self, host: str, port: int) -> Stream:
        """Open a stream.

        Raises:
            OSError: If the connection cannot be established.
        """
        pass
