"""ZooKeeper node store backed by kazoo.

This adapter enables zooklient to talk to a real ZooKeeper ensemble. kazoo
owns the session: handshake, heartbeats, watch delivery and reconnection.
Here we only translate between zooklient's value types and kazoo's, and
map kazoo exceptions onto zooklient's RemoteError family.
"""

import functools
from typing import List, Optional, Sequence, Tuple

from kazoo.client import KazooClient
from kazoo.exceptions import (
    BadVersionError as KazooBadVersionError,
    InvalidACLError as KazooInvalidACLError,
    KazooException,
    NoNodeError as KazooNoNodeError,
    NodeExistsError as KazooNodeExistsError,
    NotEmptyError as KazooNotEmptyError,
    RolledBackError,
)
from kazoo.security import ACL, Id

from ..core.acl import ACLEntry, Perms
from ..core.adapter import NodeStore, Watcher
from ..core.create_mode import CreateFlags
from ..core.node import ANY_VERSION, DeleteOp, NodeStat
from ..errors import (
    BadVersionError,
    ConnectionTimeoutError,
    InvalidACLError,
    NoNodeError,
    NodeExistsError,
    NotConnectedError,
    NotEmptyError,
    RemoteError,
    ValidationError,
)


_ERROR_MAP = {
    KazooNoNodeError: NoNodeError,
    KazooNodeExistsError: NodeExistsError,
    KazooBadVersionError: BadVersionError,
    KazooNotEmptyError: NotEmptyError,
    KazooInvalidACLError: InvalidACLError,
}


def translate_error(error: Exception, path: str) -> RemoteError:
    """Map a kazoo exception onto the matching RemoteError."""
    for kazoo_type, our_type in _ERROR_MAP.items():
        if isinstance(error, kazoo_type):
            return our_type(path)
    detail = str(error) or type(error).__name__
    return RemoteError(f"{detail}: {path}")


def _translated(method):
    """Wrap a store method so kazoo errors surface as RemoteErrors."""
    @functools.wraps(method)
    def wrapper(self, path, *args, **kwargs):
        if not self.connected:
            raise NotConnectedError()
        try:
            return method(self, path, *args, **kwargs)
        except KazooException as e:
            raise translate_error(e, path) from e
    return wrapper


def to_node_stat(stat) -> NodeStat:
    """Convert a kazoo ZnodeStat."""
    return NodeStat(
        czxid=stat.czxid,
        mzxid=stat.mzxid,
        ctime=stat.ctime,
        mtime=stat.mtime,
        version=stat.version,
        cversion=stat.cversion,
        aversion=stat.aversion,
        ephemeral_owner=stat.ephemeralOwner,
        data_length=stat.dataLength,
        num_children=stat.numChildren,
        pzxid=stat.pzxid,
    )


def to_kazoo_acl(entries: Sequence[ACLEntry]) -> List[ACL]:
    return [ACL(int(entry.perms), Id(entry.scheme, entry.identity)) for entry in entries]


def from_kazoo_acl(acls) -> List[ACLEntry]:
    return [ACLEntry(acl.id.scheme, acl.id.id, Perms(acl.perms)) for acl in acls]


class KazooNodeStore(NodeStore):
    """NodeStore implementation for ZooKeeper using a KazooClient."""

    def __init__(self, hosts: str, session_timeout: float = 10.0,
                 client: Optional[KazooClient] = None):
        """Initialize the store. No connection is made until start().

        Args:
            hosts: Comma separated host:port list
            session_timeout: ZooKeeper session timeout in seconds
            client: Pre-built KazooClient (mainly for tests)
        """
        self.hosts = hosts
        if client is None:
            try:
                client = KazooClient(hosts=hosts, timeout=session_timeout)
            except ValueError as e:
                raise ValidationError(f"Invalid server address \"{hosts}\": {e}") from e
        self.client = client

    def start(self, timeout: float) -> None:
        try:
            self.client.start(timeout=timeout)
        except self.client.handler.timeout_exception as e:
            raise ConnectionTimeoutError(f"Failed to connect to {self.hosts}: {e}") from e

    def close(self) -> None:
        self.client.stop()
        self.client.close()

    @property
    def connected(self) -> bool:
        return bool(self.client.connected)

    @_translated
    def get_children(self, path: str, watch: Optional[Watcher] = None) -> Tuple[List[str], NodeStat]:
        children, stat = self.client.get_children(path, watch=watch, include_data=True)
        return list(children), to_node_stat(stat)

    @_translated
    def get(self, path: str, watch: Optional[Watcher] = None) -> Tuple[Optional[bytes], NodeStat]:
        data, stat = self.client.get(path, watch=watch)
        return data, to_node_stat(stat)

    @_translated
    def exists(self, path: str, watch: Optional[Watcher] = None) -> Optional[NodeStat]:
        stat = self.client.exists(path, watch=watch)
        return to_node_stat(stat) if stat is not None else None

    @_translated
    def get_acls(self, path: str) -> Tuple[List[ACLEntry], NodeStat]:
        acls, stat = self.client.get_acls(path)
        return from_kazoo_acl(acls), to_node_stat(stat)

    @_translated
    def set(self, path: str, data: bytes, version: int = ANY_VERSION) -> NodeStat:
        return to_node_stat(self.client.set(path, data, version=version))

    @_translated
    def create(self, path: str, data: bytes, flags: CreateFlags,
               acl: Sequence[ACLEntry]) -> str:
        # kazoo swaps an empty list for its default (open) ACL
        if not acl:
            raise InvalidACLError(path)
        mode = flags.mode
        return self.client.create(
            path, data,
            acl=to_kazoo_acl(acl),
            ephemeral=mode.is_ephemeral,
            sequence=mode.is_sequential,
            container=mode.is_container,
            ttl=flags.ttl or 0,
        )

    @_translated
    def delete(self, path: str, version: int = ANY_VERSION) -> None:
        self.client.delete(path, version=version)

    @_translated
    def set_acls(self, path: str, acl: Sequence[ACLEntry], version: int = ANY_VERSION) -> NodeStat:
        if not acl:
            raise InvalidACLError(path)
        return to_node_stat(self.client.set_acls(path, to_kazoo_acl(acl), version=version))

    def multi(self, ops: Sequence[DeleteOp]) -> None:
        if not self.connected:
            raise NotConnectedError()
        transaction = self.client.transaction()
        for op in ops:
            transaction.delete(op.path, version=op.version)
        try:
            results = transaction.commit()
        except KazooException as e:
            raise translate_error(e, ops[0].path if ops else "/") from e

        # kazoo reports per-operation failures in the result list
        for op, result in zip(ops, results):
            if isinstance(result, Exception) and not isinstance(result, RolledBackError):
                raise translate_error(result, op.path) from result

    @_translated
    def sync(self, path: str) -> None:
        self.client.sync(path)
