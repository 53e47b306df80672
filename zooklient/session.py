"""Session management for the console.

The SessionManager owns the one live NodeStore, remembers the last server
that accepted a connection and keeps the command history. The command
loop creates one and hands it to the CommandRouter.
"""

from collections import deque
from typing import Callable, Deque, Iterator, Optional, Tuple

from .config import ClientConfig
from .core.adapter import NodeStore
from .errors import ConnectionTimeoutError, NotConnectedError


StoreFactory = Callable[[str, ClientConfig], NodeStore]


def kazoo_store_factory(address: str, config: ClientConfig) -> NodeStore:
    # Imported lazily so the core stays usable without kazoo configured
    from .adapters.kazoo_store import KazooNodeStore
    return KazooNodeStore(address, session_timeout=config.session_timeout)


class HistoryRing:
    """Fixed-capacity command history.

    Every line gets an absolute sequence number; once the ring is full the
    oldest entry is overwritten.
    """

    def __init__(self, capacity: int = 10):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._entries: Deque[Tuple[int, str]] = deque(maxlen=capacity)
        self._next = 0

    def add(self, line: str) -> int:
        """Record a line and return its sequence number."""
        number = self._next
        self._entries.append((number, line))
        self._next += 1
        return number

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class SessionManager:
    """Owns the connection to the node store."""

    def __init__(self, config: ClientConfig,
                 store_factory: StoreFactory = kazoo_store_factory):
        """Initialize without connecting.

        Args:
            config: Client configuration
            store_factory: Builds a NodeStore for an address
        """
        self.config = config
        self.store_factory = store_factory
        self.store: Optional[NodeStore] = None
        self.last_server = ""
        self.history = HistoryRing(config.history_size)

    @property
    def connected(self) -> bool:
        return self.store is not None and self.store.connected

    def require_store(self) -> NodeStore:
        """Return the live store.

        Raises:
            NotConnectedError: If there is no live session
        """
        if not self.connected:
            raise NotConnectedError()
        return self.store

    def connect(self, address: Optional[str] = None) -> None:
        """Open a session, closing the current one first.

        Args:
            address: host:port; defaults to the last server that accepted
                a connection, then to the configured server

        Raises:
            ConnectionTimeoutError: If no session was established within
                ``config.connect_timeout``; the manager is then disconnected
            ValidationError: If the store rejects ``address``; the current
                session is kept
        """
        address = address or self.last_server or self.config.server
        store = self.store_factory(address, self.config)
        self.close()

        try:
            store.start(self.config.connect_timeout)
        except ConnectionTimeoutError:
            store.close()
            raise
        self.store = store
        self.last_server = address

    def close(self) -> None:
        if self.store is not None:
            self.store.close()
            self.store = None
