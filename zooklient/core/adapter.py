"""NodeStore abstraction for zooklient.

The NodeStore is what makes the tree algorithms independent of the
transport. The walker, the deleter and the command router only ever call
these methods; KazooNodeStore implements them against a real ZooKeeper
ensemble and InMemoryNodeStore implements them in-process.
"""

from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence, Tuple

from .acl import ACLEntry
from .create_mode import CreateFlags
from .node import ANY_VERSION, DeleteOp, NodeStat


Watcher = Callable[[object], None]


class NodeStore(ABC):
    """Abstract remote node store.

    Every method raises a RemoteError subclass on failure, e.g. NoNodeError
    when the path is absent or BadVersionError when an expected version
    does not match.
    """

    # Session lifecycle

    @abstractmethod
    def start(self, timeout: float) -> None:
        """Establish the session, waiting at most ``timeout`` seconds.

        Raises:
            ConnectionTimeoutError: If no session was established in time
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the session. Safe to call more than once."""
        pass

    @property
    @abstractmethod
    def connected(self) -> bool:
        """True while the store holds a live session."""
        pass

    # Reads

    @abstractmethod
    def get_children(self, path: str, watch: Optional[Watcher] = None) -> Tuple[List[str], NodeStat]:
        """List the child names of ``path`` in server order.

        Args:
            path: Parent path
            watch: One-shot watcher for child changes

        Returns:
            Tuple of (child names, stat of ``path``)
        """
        pass

    @abstractmethod
    def get(self, path: str, watch: Optional[Watcher] = None) -> Tuple[Optional[bytes], NodeStat]:
        """Read a node's payload and stat. Payload is None when unset."""
        pass

    @abstractmethod
    def exists(self, path: str, watch: Optional[Watcher] = None) -> Optional[NodeStat]:
        """Return the node's stat, or None if it does not exist."""
        pass

    @abstractmethod
    def get_acls(self, path: str) -> Tuple[List[ACLEntry], NodeStat]:
        pass

    # Writes

    @abstractmethod
    def set(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        """Replace a node's payload if its version matches."""
        pass

    @abstractmethod
    def create(self, path: str, data: bytes, flags: CreateFlags,
               acl: Sequence[ACLEntry]) -> str:
        """Create a node and return the path actually assigned.

        The assigned path differs from ``path`` only for sequential modes,
        where the server appends a counter suffix. An empty ``acl`` raises
        InvalidACLError.
        """
        pass

    @abstractmethod
    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        pass

    @abstractmethod
    def set_acls(self, path: str, acl: Sequence[ACLEntry], version: int = ANY_VERSION) -> NodeStat:
        pass

    @abstractmethod
    def multi(self, ops: Sequence[DeleteOp]) -> None:
        """Apply a batch of deletes atomically.

        Either every operation is applied or none is; on failure the error
        of the first operation that failed is raised.
        """
        pass

    @abstractmethod
    def sync(self, path: str) -> None:
        """Block until this client's view of ``path`` is up to date."""
        pass
