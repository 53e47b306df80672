"""High-level API for zooklient.

This module provides simple, functional interfaces for the recursive tree
operations. These functions wrap SubtreeWalker and RecursiveDeleter for
ease of use in simple cases.
"""

from typing import Callable, List, Optional

from .core.adapter import NodeStore
from .core.deleter import RecursiveDeleter
from .core.traverser import SubtreeWalker
from .error_policies import ErrorPolicy


def list_subtree(store: NodeStore, root: str,
                 policy: Optional[ErrorPolicy] = None) -> List[str]:
    """List every path under ``root``, breadth-first, root first.

    Args:
        store: NodeStore to read from
        root: Root of the subtree
        policy: Handles nodes whose children cannot be listed

    Returns:
        Paths in discovery order

    Example:
        >>> from zooklient.testing import InMemoryNodeStore
        >>> store = InMemoryNodeStore()
        >>> store.start(timeout=1)
        >>> store.ensure_path('/x/a/b')
        >>> list_subtree(store, '/x')
        ['/x', '/x/a', '/x/a/b']
    """
    return SubtreeWalker(store, policy).list_subtree(root)


def visit_subtree(store: NodeStore, root: str, visit: Callable[[str], None],
                  policy: Optional[ErrorPolicy] = None) -> None:
    """Report every path under ``root`` in display order (sorted siblings)."""
    SubtreeWalker(store, policy).visit_subtree(root, visit)


def delete_subtree(store: NodeStore, root: str,
                   policy: Optional[ErrorPolicy] = None) -> List[str]:
    """Delete ``root`` and everything below it in one atomic batch.

    Returns:
        The deleted paths, leaves first
    """
    return RecursiveDeleter(store, policy).delete(root)
