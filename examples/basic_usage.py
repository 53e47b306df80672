#!/usr/bin/env python3
"""
Basic zooklient example: recursive listing and atomic deletion.

This example demonstrates:
- Building a tree in the in-memory store (or a real server)
- Listing a subtree breadth-first
- Deleting a subtree in one atomic batch

Usage:
    python examples/basic_usage.py              # in-memory store
    python examples/basic_usage.py zk1:2181     # real ZooKeeper server
"""

import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from zooklient.api import delete_subtree, list_subtree, visit_subtree
from zooklient.core import CreateFlags, OPEN_ACL_UNSAFE, encode_create_mode
from zooklient.testing import InMemoryNodeStore


def open_store():
    if len(sys.argv) > 1:
        from zooklient.adapters import KazooNodeStore
        store = KazooNodeStore(sys.argv[1])
    else:
        store = InMemoryNodeStore()
    store.start(timeout=5)
    return store


def main():
    store = open_store()
    try:
        for path in ["/demo", "/demo/config", "/demo/config/db", "/demo/workers"]:
            store.create(path, b"", CreateFlags(), OPEN_ACL_UNSAFE)

        # Sequential children get a counter suffix from the server
        flags = encode_create_mode(sequential=True)
        for _ in range(3):
            created = store.create("/demo/workers/w-", b"", flags, OPEN_ACL_UNSAFE)
            print(f"Created {created}")

        print("\nBreadth-first:")
        for path in list_subtree(store, "/demo"):
            print(f"  {path}")

        print("\nDisplay order (as `ls -R` prints it):")
        visit_subtree(store, "/demo", lambda path: print(f"  {path}"))

        deleted = delete_subtree(store, "/demo")
        print(f"\nDeleted {len(deleted)} nodes in one batch, leaves first:")
        for path in deleted:
            print(f"  {path}")
    finally:
        store.close()


if __name__ == "__main__":
    main()
