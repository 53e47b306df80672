"""Node store adapters.

Adapters implement the NodeStore interface for a concrete transport.
"""

from .kazoo_store import KazooNodeStore

__all__ = [
    "KazooNodeStore",
]
