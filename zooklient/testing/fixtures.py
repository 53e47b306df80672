"""Test fixtures for zooklient consumers.

InMemoryNodeStore is a NodeStore that keeps the whole tree in a dict. It
follows the server's rules closely enough to exercise the walker, the
deleter and the command router without a running ensemble: versions are
checked, sequential names use the parent's cversion, ephemeral nodes go
away with the session and multi() is all-or-nothing.
"""

import copy
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..core.acl import ACLEntry, OPEN_ACL_UNSAFE
from ..core.adapter import NodeStore, Watcher
from ..core.create_mode import CreateFlags, CreateMode
from ..core.node import ANY_VERSION, DeleteOp, NodeStat
from ..core.paths import ROOT, join_path, split_path, validate_path
from ..errors import (
    BadVersionError,
    ConnectionTimeoutError,
    InvalidACLError,
    NoNodeError,
    NodeExistsError,
    NotConnectedError,
    NotEmptyError,
    RemoteError,
)


@dataclass(frozen=True)
class WatchEvent:
    """Event delivered to watchers, shaped like kazoo's WatchedEvent."""
    type: str
    state: str
    path: str


@dataclass
class _Entry:
    data: Optional[bytes]
    acl: List[ACLEntry]
    stat: NodeStat
    mode: CreateMode = CreateMode.PERSISTENT
    children: List[str] = field(default_factory=list)


def _parent_of(path: str) -> str:
    parent = path.rsplit('/', 1)[0]
    return parent or ROOT


class InMemoryNodeStore(NodeStore):
    """In-process NodeStore for tests and examples.

    Example:
        store = InMemoryNodeStore()
        store.start(timeout=1)
        store.ensure_path('/app/config')
        assert store.get_children('/app')[0] == ['config']
    """

    def __init__(self, session_id: int = 0x1000, fail_on_start: bool = False):
        """Initialize an empty tree holding only the root.

        Args:
            session_id: Owner id stamped on ephemeral nodes
            fail_on_start: Make start() time out, to test connect failures
        """
        self.session_id = session_id
        self.fail_on_start = fail_on_start
        self.calls: List[str] = []
        # Paths whose children cannot be listed, as if deleted mid-walk
        self.fail_children: Set[str] = set()

        self._connected = False
        self._zxid = 0
        self._nodes: Dict[str, _Entry] = {
            ROOT: _Entry(data=None, acl=list(OPEN_ACL_UNSAFE), stat=NodeStat())
        }
        self._data_watches: Dict[str, List[Watcher]] = {}
        self._child_watches: Dict[str, List[Watcher]] = {}
        self._pending: List[Tuple[Dict[str, List[Watcher]], str, str]] = []

    # Session lifecycle

    def start(self, timeout: float) -> None:
        self.calls.append('start')
        if self.fail_on_start:
            raise ConnectionTimeoutError("Connection time-out")
        self._connected = True

    def close(self) -> None:
        self.calls.append('close')
        if not self._connected:
            return
        owned = [path for path, entry in self._nodes.items()
                 if entry.stat.ephemeral_owner == self.session_id]
        for path in owned:
            self._remove(path)
        self._flush_watches()
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    # Helpers

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if not self._connected:
            raise NotConnectedError()

    def _entry(self, path: str) -> _Entry:
        entry = self._nodes.get(path)
        if entry is None:
            raise NoNodeError(path)
        return entry

    def _next_zxid(self) -> int:
        self._zxid += 1
        return self._zxid

    @staticmethod
    def _now() -> int:
        return int(time.time() * 1000)

    @staticmethod
    def _check_version(entry_version: int, expected: int, path: str) -> None:
        if expected != ANY_VERSION and expected != entry_version:
            raise BadVersionError(path)

    def _watch(self, table: Dict[str, List[Watcher]], path: str, watch: Optional[Watcher]) -> None:
        if watch is not None:
            table.setdefault(path, []).append(watch)

    def _trigger(self, table: Dict[str, List[Watcher]], path: str, event_type: str) -> None:
        self._pending.append((table, path, event_type))

    def _flush_watches(self) -> None:
        pending, self._pending = self._pending, []
        for table, path, event_type in pending:
            for watcher in table.pop(path, []):
                watcher(WatchEvent(type=event_type, state='CONNECTED', path=path))

    def _remove(self, path: str) -> None:
        entry = self._entry(path)
        if entry.children:
            raise NotEmptyError(path)
        parent_path = _parent_of(path)
        parent = self._nodes[parent_path]
        parent.children.remove(path.rsplit('/', 1)[1])
        zxid = self._next_zxid()
        parent.stat = replace(parent.stat,
                              cversion=parent.stat.cversion + 1,
                              pzxid=zxid,
                              num_children=len(parent.children))
        del self._nodes[path]
        self._trigger(self._data_watches, path, 'DELETED')
        self._trigger(self._child_watches, path, 'DELETED')
        self._trigger(self._child_watches, parent_path, 'CHILD')

    def ensure_path(self, path: str, data: bytes = b"") -> None:
        """Create ``path`` and any missing ancestors, like kazoo's ensure_path."""
        current = ROOT
        for name in split_path(path):
            current = join_path(current, name)
            if current not in self._nodes:
                self.create(current, data, CreateFlags(), OPEN_ACL_UNSAFE)

    # Reads

    def get_children(self, path: str, watch: Optional[Watcher] = None) -> Tuple[List[str], NodeStat]:
        self._check('get_children')
        if path in self.fail_children:
            raise NoNodeError(path)
        entry = self._entry(path)
        self._watch(self._child_watches, path, watch)
        return list(entry.children), entry.stat

    def get(self, path: str, watch: Optional[Watcher] = None) -> Tuple[Optional[bytes], NodeStat]:
        self._check('get')
        entry = self._entry(path)
        self._watch(self._data_watches, path, watch)
        return entry.data, entry.stat

    def exists(self, path: str, watch: Optional[Watcher] = None) -> Optional[NodeStat]:
        self._check('exists')
        self._watch(self._data_watches, path, watch)
        entry = self._nodes.get(path)
        return entry.stat if entry is not None else None

    def get_acls(self, path: str) -> Tuple[List[ACLEntry], NodeStat]:
        self._check('get_acls')
        entry = self._entry(path)
        return list(entry.acl), entry.stat

    # Writes

    def set(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        self._check('set')
        entry = self._entry(path)
        self._check_version(entry.stat.version, version, path)
        entry.data = data
        entry.stat = replace(entry.stat,
                             version=entry.stat.version + 1,
                             mzxid=self._next_zxid(),
                             mtime=self._now(),
                             data_length=len(data or b""))
        self._trigger(self._data_watches, path, 'CHANGED')
        self._flush_watches()
        return entry.stat

    def create(self, path: str, data: bytes, flags: CreateFlags,
               acl: Sequence[ACLEntry]) -> str:
        self._check('create')
        validate_path(path, sequential=flags.mode.is_sequential)
        if not acl:
            raise InvalidACLError(path)
        if path == ROOT and not flags.mode.is_sequential:
            raise NodeExistsError(path)
        parent_path = _parent_of(path)
        parent = self._entry(parent_path)
        if parent.mode.is_ephemeral:
            raise RemoteError(f"Ephemeral nodes may not have children: {parent_path}")

        mode = flags.mode
        if mode.is_sequential:
            path = f"{path}{parent.stat.cversion:010d}"
        if path in self._nodes:
            raise NodeExistsError(path)

        zxid = self._next_zxid()
        now = self._now()
        self._nodes[path] = _Entry(
            data=data,
            acl=list(acl),
            mode=mode,
            stat=NodeStat(
                czxid=zxid, mzxid=zxid, pzxid=zxid,
                ctime=now, mtime=now,
                ephemeral_owner=self.session_id if mode.is_ephemeral else 0,
                data_length=len(data or b""),
            ),
        )
        parent.children.append(path.rsplit('/', 1)[1])
        parent.stat = replace(parent.stat,
                              cversion=parent.stat.cversion + 1,
                              pzxid=zxid,
                              num_children=len(parent.children))
        self._trigger(self._data_watches, path, 'CREATED')
        self._trigger(self._child_watches, parent_path, 'CHILD')
        self._flush_watches()
        return path

    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        self._check('delete')
        entry = self._entry(path)
        self._check_version(entry.stat.version, version, path)
        self._remove(path)
        self._flush_watches()

    def set_acls(self, path: str, acl: Sequence[ACLEntry], version: int = ANY_VERSION) -> NodeStat:
        self._check('set_acls')
        if not acl:
            raise InvalidACLError(path)
        entry = self._entry(path)
        self._check_version(entry.stat.aversion, version, path)
        entry.acl = list(acl)
        entry.stat = replace(entry.stat, aversion=entry.stat.aversion + 1)
        return entry.stat

    def multi(self, ops: Sequence[DeleteOp]) -> None:
        self._check('multi')
        snapshot = copy.deepcopy(self._nodes)
        zxid = self._zxid
        try:
            for op in ops:
                entry = self._entry(op.path)
                self._check_version(entry.stat.version, op.version, op.path)
                self._remove(op.path)
        except RemoteError:
            self._nodes = snapshot
            self._zxid = zxid
            self._pending = []
            raise
        self._flush_watches()

    def sync(self, path: str) -> None:
        self._check('sync')
        self._entry(path)

    # Inspection helpers for tests

    def paths(self) -> List[str]:
        """All paths currently in the tree, sorted."""
        return sorted(self._nodes)
