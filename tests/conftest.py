"""Pytest configuration and fixtures."""

import pytest

from meshtastic_gopher_client.core.fetch_client import FetchHandle
from meshtastic_gopher_client.interfaces import Connector, Presenter, Stream


SAMPLE_LISTING = (
    "iWelcome to the test server\t\terror.host\t1\r\n"
    "1Documents\t/docs\texample.org\t70\r\n"
    "0Readme\t/readme.txt\texample.org\t70\r\n"
    "7Search\t/search\texample.org\t70\r\n"
    "hHomepage\tURL:http://example.com\texample.org\t70\r\n"
    "IPicture\t/pic.png\texample.org\t70\r\n"
    "9Binary\t/file.bin\texample.org\t70\r\n"
    ".\r\n"
)

HOME_LISTING = (
    "iTest home\t\t\t\r\n"
    "1Example\t/\texample.org\t70\r\n"
    ".\r\n"
)


class FakeStream(Stream):
    """In-memory stream returning a canned response in small chunks."""

    def __init__(self, response: bytes = b"", chunk_size: int = 8, error: Exception | None = None):
        self.response = response
        self.chunk_size = chunk_size
        self.error = error
        self.written = b""
        self.flushed = False
        self.closed = False
        self._position = 0

    def write(self, data: bytes) -> None:
        self.written += data

    def flush(self) -> None:
        self.flushed = True

    def read(self, size: int) -> bytes:
        if self.error is not None:
            raise self.error
        if self.closed:
            return b""
        size = min(size, self.chunk_size)
        chunk = self.response[self._position:self._position + size]
        self._position += len(chunk)
        return chunk

    def close(self) -> None:
        self.closed = True


class FakeConnector(Connector):
    """Connector handing out prepared streams and recording connections."""

    def __init__(self, stream: FakeStream | None = None, error: Exception | None = None):
        self.stream = stream or FakeStream()
        self.error = error
        self.connections = []

    def open_stream(self, host: str, port: int) -> FakeStream:
        self.connections.append((host, port))
        if self.error is not None:
            raise self.error
        return self.stream


class ManualFetcher:
    """Fetcher whose fetches finish only when a test resolves them."""

    def __init__(self):
        self.pending = []

    def submit(self, request, on_done=None):
        handle = FetchHandle(request)
        self.pending.append((handle, on_done))
        return handle

    @property
    def requests(self):
        return [handle.request for handle, _ in self.pending]

    def resolve(self, index: int, content) -> None:
        handle, on_done = self.pending[index]
        handle.future.set_result(content)
        on_done(handle)

    def fail(self, index: int, error: Exception) -> None:
        handle, on_done = self.pending[index]
        handle.future.set_exception(error)
        on_done(handle)


class RecordingPresenter(Presenter):
    """Presenter that records every call as (name, args)."""

    def __init__(self):
        self.calls = []

    def on_listing_ready(self, page, entry):
        self.calls.append(("listing", page, entry))

    def on_text_ready(self, page, entry):
        self.calls.append(("text", page, entry))

    def on_image_ready(self, data, entry):
        self.calls.append(("image", data, entry))

    def on_failure(self, error):
        self.calls.append(("failure", error))

    def on_history_changed(self, history):
        self.calls.append(("history", history))

    def on_notice(self, message):
        self.calls.append(("notice", message))

    def on_query_requested(self, entry):
        self.calls.append(("query", entry))

    def names(self):
        return [call[0] for call in self.calls]

    def last(self, name):
        for call in reversed(self.calls):
            if call[0] == name:
                return call
        return None


@pytest.fixture
def sample_listing_text():
    return SAMPLE_LISTING


@pytest.fixture
def home_listing_text():
    return HOME_LISTING


@pytest.fixture
def fetcher():
    return ManualFetcher()


@pytest.fixture
def presenter():
    return RecordingPresenter()
