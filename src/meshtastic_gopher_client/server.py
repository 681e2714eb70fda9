"""GopherMeshClient - lets mesh nodes browse Gopherspace over direct messages."""

import logging

from .config import Config
from .core import (
    BackCommand,
    CommandParser,
    FetchClient,
    GoCommand,
    HelpCommand,
    HistoryCommand,
    HomeCommand,
    InvalidCommand,
    MenuRenderer,
    MessageSplitter,
    NavigationEngine,
    NextCommand,
    Page,
    PreviousCommand,
    QueryCommand,
    SelectCommand,
    SessionManager,
    StopCommand,
    View,
)
from .core.entry import DirectoryEntry
from .errors import FetchError, FetchErrorKind, GopherError, InvalidUrl, NoHandlerFound
from .interfaces import LinkHandler, MessageTransport, Presenter

logger = logging.getLogger(__name__)


class MeshPresenter(Presenter, LinkHandler):
    """Presents one node's navigation results as mesh messages.

    Web links cannot be opened on the radio, so they are forwarded to the
    node as text.
    """

    def __init__(
        self,
        node_id: str,
        transport: MessageTransport,
        renderer: MenuRenderer,
        splitter: MessageSplitter,
        ack_timeout: float = 30.0,
    ):
        self.node_id = node_id
        self.transport = transport
        self.renderer = renderer
        self.splitter = splitter
        self.ack_timeout = ack_timeout
        self.history: tuple[DirectoryEntry | None, ...] = (None,)

    def on_listing_ready(self, page: Page, entry: DirectoryEntry | None) -> None:
        title = "Home" if entry is None else (entry.display_text or entry.describe())
        self.send(self.renderer.render_listing(page, title=title, include_hints=True))

    def on_text_ready(self, page: Page, entry: DirectoryEntry) -> None:
        title = entry.display_text or entry.describe()
        self.send(self.renderer.render_text(page, title=title))

    def on_image_ready(self, data: bytes, entry: DirectoryEntry) -> None:
        self.send(f"[Image {entry.display_text or entry.describe()}: {len(data)} bytes, not shown on radio]")

    def on_failure(self, error: GopherError) -> None:
        if isinstance(error, FetchError) and error.kind is FetchErrorKind.CANCELLED:
            self.send("Stopped.")
        elif isinstance(error, InvalidUrl):
            self.send(f"Invalid URL: {error.reason}")
        else:
            self.send(f"Can't fetch the requested item ({error})")

    def on_history_changed(self, history: tuple[DirectoryEntry | None, ...]) -> None:
        self.history = history

    def on_notice(self, message: str) -> None:
        self.send(message)

    def on_query_requested(self, entry: DirectoryEntry) -> None:
        self.send(f"Search: {entry.display_text or entry.describe()}\nSend your query (b=cancel)")

    def on_navigating(self, entry: DirectoryEntry) -> None:
        logger.debug(f"[{self.node_id}] Loading {entry.describe()}")

    def open_external(self, url: str) -> None:
        if not url:
            raise NoHandlerFound(url)
        self.send(f"Web link (open on a phone or PC):\n{url}")

    def send(self, text: str) -> None:
        """Send text to the node, split into ordered, acknowledged messages."""
        messages = self.splitter.split(text)
        logger.info(f"[{self.node_id}] Sending {len(messages)} message(s)")
        for i, message in enumerate(messages, 1):
            if not self.transport.send_and_wait(self.node_id, message, timeout=self.ack_timeout):
                logger.warning(f"[{self.node_id}] Message {i}/{len(messages)} not acknowledged")


class GopherMeshClient:
    """Main orchestrator.

    Receives commands from mesh nodes, drives each node's navigation
    engine and lets the engine's presenter reply.
    """

    HELP_TEXT = """Gopher Client Help:
[num] - Open item
b - Back
h - Home
n/p - Next/prev page
s - Stop loading
l - History
g <url> - Open gopher URL
q <text> - Search
? - This help"""

    def __init__(
        self,
        transport: MessageTransport,
        fetcher: FetchClient,
        config: Config | None = None,
    ):
        """
        Initialize the client.

        Args:
            transport: Transport for sending/receiving mesh messages.
            fetcher: Performs Gopher fetches for all sessions.
            config: Client configuration (uses defaults if None).
        """
        self.transport = transport
        self.fetcher = fetcher
        self.config = config or Config()
        self.home_text = self.config.load_home_text()

        self.parser = CommandParser()
        self.renderer = MenuRenderer()
        self.splitter = MessageSplitter(max_size=self.config.max_message_size)
        self.session_manager = SessionManager(
            self._create_engine,
            timeout_seconds=self.config.session_timeout_minutes * 60,
        )

        self.transport.on_message(self._handle_message)

    def start(self) -> None:
        logger.info("Starting Gopher mesh client...")
        self.transport.connect()
        logger.info("Client started and listening for messages")

    def stop(self) -> None:
        logger.info("Stopping Gopher mesh client...")
        for node_id in self.session_manager.list_nodes():
            self.session_manager.remove_session(node_id)
        self.transport.disconnect()
        logger.info("Client stopped")

    def _create_engine(self, node_id: str) -> NavigationEngine:
        presenter = MeshPresenter(
            node_id,
            self.transport,
            self.renderer,
            self.splitter,
            ack_timeout=self.config.ack_timeout_seconds,
        )
        return NavigationEngine(
            self.fetcher,
            presenter,
            home_text=self.home_text,
            link_handler=presenter,
            listing_page_size=self.config.listing_page_size,
            text_page_size=self.config.text_page_size,
            max_cached_listings=self.config.max_cached_listings,
        )

    def _handle_message(self, node_id: str, message: str) -> None:
        """
        Handle an incoming direct message from a node.

        The first message from a node opens its session on the home
        listing (or the configured start URL) before the command runs.
        """
        logger.info(f"[{node_id}] Received: {message!r}")
        self.session_manager.cleanup_expired()

        try:
            engine, created = self.session_manager.get_engine(node_id)
            if created:
                self._welcome(engine)

            command = self.parser.parse(
                message, awaiting_query=engine.state.view is View.AWAITING_QUERY
            )
            logger.info(f"[{node_id}] Command: {command.__class__.__name__}")
            self._process_command(node_id, command, engine)
        except Exception as e:
            logger.exception(f"[{node_id}] Error handling message")
            self._send_error(node_id, str(e))

    def _welcome(self, engine: NavigationEngine) -> None:
        if self.config.start_url:
            engine.open_url(self.config.start_url)
        else:
            engine.refresh()

    def _process_command(self, node_id: str, command, engine: NavigationEngine) -> None:
        presenter = engine.presenter

        if isinstance(command, HelpCommand):
            presenter.send(self.HELP_TEXT)
        elif isinstance(command, InvalidCommand):
            logger.debug(f"Invalid command: {command.original_input}")
            presenter.send(f"{command.reason}: {command.original_input}\nSend ? for help")
        elif isinstance(command, HomeCommand):
            engine.go_home()
        elif isinstance(command, BackCommand):
            engine.go_back()
        elif isinstance(command, NextCommand):
            engine.next_page()
        elif isinstance(command, PreviousCommand):
            engine.previous_page()
        elif isinstance(command, StopCommand):
            if engine.status is View.NAVIGATING:
                engine.stop()
            else:
                presenter.send("Nothing is loading")
        elif isinstance(command, HistoryCommand):
            presenter.send(self.renderer.render_history(engine.history()))
        elif isinstance(command, GoCommand):
            engine.open_url(command.url)
        elif isinstance(command, QueryCommand):
            engine.submit_query(command.text)
        elif isinstance(command, SelectCommand):
            self._handle_select(command.index, engine, presenter)

    def _handle_select(self, index: int, engine: NavigationEngine, presenter: MeshPresenter) -> None:
        if engine.state.view not in (View.HOME, View.LISTING):
            presenter.send("Numbers select menu items; send b to return to the menu")
            return

        entry = engine.entry_on_page(index)
        if entry is None:
            logger.debug(f"Invalid selection: {index}")
            presenter.send(f"Invalid selection: {index}")
            return

        logger.info(f"Selected [{index}]: {entry.display_text}")
        engine.activate(entry)

    def _send_error(self, node_id: str, error: str) -> None:
        message = f"Error: {error}"
        if len(message) > self.config.max_message_size:
            message = message[: self.config.max_message_size - 3] + "..."
        self.transport.send(node_id, message)
