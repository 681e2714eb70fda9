"""Per-node browsing sessions with inactivity expiry."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from .navigation import NavigationEngine

logger = logging.getLogger(__name__)


@dataclass
class SessionEntry:
    """Internal record of a node's engine and when it was last used."""

    engine: NavigationEngine
    last_access: float  # Unix timestamp


class SessionManager:
    """Keeps one NavigationEngine per mesh node.

    Engines are built on first contact by ``engine_factory`` and dropped
    after ``timeout_seconds`` without activity.
    """

    def __init__(
        self,
        engine_factory: Callable[[str], NavigationEngine],
        timeout_seconds: int = 1800,
    ):
        """
        Args:
            engine_factory: Builds the engine for a node id.
            timeout_seconds: Seconds of inactivity before a session expires.
        """
        self._factory = engine_factory
        self._sessions: dict[str, SessionEntry] = {}
        self._timeout = timeout_seconds
        self._lock = threading.Lock()

    def get_engine(self, node_id: str) -> tuple[NavigationEngine, bool]:
        """
        Get the engine for a node, creating it on first contact.

        Returns:
            The engine and whether it was just created.
        """
        with self._lock:
            entry = self._sessions.get(node_id)
            if entry is not None:
                entry.last_access = time.time()
                return entry.engine, False

            logger.info(f"[{node_id}] New session")
            engine = self._factory(node_id)
            self._sessions[node_id] = SessionEntry(engine=engine, last_access=time.time())
            return engine, True

    def remove_session(self, node_id: str) -> None:
        with self._lock:
            entry = self._sessions.pop(node_id, None)
        if entry is not None:
            entry.engine.close()

    def cleanup_expired(self) -> int:
        """
        Remove expired sessions, stopping any fetch they still run.

        Returns:
            Number of sessions removed.
        """
        now = time.time()
        with self._lock:
            expired = [
                node_id
                for node_id, entry in self._sessions.items()
                if now - entry.last_access > self._timeout
            ]
            removed = [self._sessions.pop(node_id) for node_id in expired]

        for node_id, entry in zip(expired, removed):
            logger.info(f"[{node_id}] Session expired")
            entry.engine.close()

        return len(expired)

    def session_count(self) -> int:
        return len(self._sessions)

    def list_nodes(self) -> list[str]:
        return list(self._sessions.keys())
