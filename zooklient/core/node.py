"""Value types exchanged with a node store.

These are plain data containers; everything that talks to the server goes
through the NodeStore, which is what lets the same walker and deleter run
against a real ensemble or the in-memory store.
"""

from dataclasses import dataclass


# Version sentinel: match whatever version the node currently has
ANY_VERSION = -1


@dataclass(frozen=True)
class NodeStat:
    """Metadata the server keeps for every znode.

    Times are milliseconds since the epoch; zxids are 64-bit transaction ids.
    """
    czxid: int = 0
    mzxid: int = 0
    ctime: int = 0
    mtime: int = 0
    version: int = 0
    cversion: int = 0
    aversion: int = 0
    ephemeral_owner: int = 0
    data_length: int = 0
    num_children: int = 0
    pzxid: int = 0


@dataclass(frozen=True)
class DeleteOp:
    """A single delete inside an atomic batch."""
    path: str
    version: int = ANY_VERSION
