"""Atomic recursive deletion.

A subtree is deleted with a single multi-operation so that a failure (a node
modified or created concurrently) leaves the tree untouched rather than
half deleted.
"""

from typing import List, Optional

from .adapter import NodeStore
from .node import ANY_VERSION, DeleteOp
from .paths import ROOT, validate_path
from .traverser import SubtreeWalker
from ..error_policies import ErrorPolicy


class RecursiveDeleter:
    """Deletes a znode together with all of its descendants."""

    def __init__(self, store: NodeStore, policy: Optional[ErrorPolicy] = None):
        self.store = store
        self.walker = SubtreeWalker(store, policy)

    def plan(self, root: str) -> List[DeleteOp]:
        """Build the delete batch for ``root``.

        Breadth-first discovery never yields a child before its parent, so
        the reversed discovery order lists every node after all of its
        descendants.

        The root znode itself cannot be deleted; for ``/`` the batch covers
        its descendants only.

        Raises:
            PathValidationError: If ``root`` is not a valid path
        """
        validate_path(root)
        paths = self.walker.list_subtree(root)
        return [DeleteOp(path, ANY_VERSION) for path in reversed(paths) if path != ROOT]

    def delete(self, root: str) -> List[str]:
        """Delete ``root`` and its subtree in one atomic batch.

        Returns:
            Deleted paths, in the order they were submitted

        Raises:
            PathValidationError: Before any remote call if ``root`` is invalid
            RemoteError: Whatever the store raised for the rejected batch;
                in that case nothing was deleted
        """
        ops = self.plan(root)
        if ops:
            self.store.multi(ops)
        return [op.path for op in ops]
