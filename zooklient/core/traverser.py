"""Subtree traversal for zooklient.

The walker enumerates every path below a root by repeatedly asking the
NodeStore for children. It never prints anything itself: callers either
take the list of paths or pass a visit callback.
"""

from collections import deque
from typing import Callable, Deque, Iterator, List, Optional

from .adapter import NodeStore
from .paths import join_path, validate_path
from ..errors import RemoteError
from ..error_policies import ErrorPolicy, ContinueOnErrorsPolicy


class SubtreeWalker:
    """Breadth-first enumeration of a znode subtree.

    A node whose children cannot be listed (it was deleted concurrently,
    for instance) is handed to the error policy. The default policy logs a
    warning and treats the node as childless, so the walk carries on.
    """

    def __init__(self, store: NodeStore, policy: Optional[ErrorPolicy] = None):
        """Initialize walker with a store.

        Args:
            store: NodeStore used to list children
            policy: Handles child-listing failures (default: ContinueOnErrorsPolicy)
        """
        self.store = store
        self.policy = policy or ContinueOnErrorsPolicy()

    def _children(self, path: str) -> List[str]:
        try:
            children, _ = self.store.get_children(path)
        except RemoteError as e:
            return self.policy.handle(e, 'get_children', path)
        return children

    def iter_subtree(self, root: str) -> Iterator[str]:
        """Yield ``root`` and then every descendant, breadth-first.

        Children are yielded in the order the store returned them, so a
        node is always yielded before any of its descendants.

        Raises:
            PathValidationError: If ``root`` is not a valid path
        """
        validate_path(root)

        queue: Deque[str] = deque([root])
        yield root

        while queue:
            node = queue.popleft()
            for child in self._children(node):
                child_path = join_path(node, child)
                queue.append(child_path)
                yield child_path

    def list_subtree(self, root: str) -> List[str]:
        """Return every path in the subtree, root first, breadth-first."""
        return list(self.iter_subtree(root))

    def visit_subtree(self, root: str, visit: Callable[[str], None]) -> None:
        """Visit the subtree for display.

        ``visit`` is called for the root, then, for each node, for all of its
        children in sorted order before descending into them (again in
        sorted order). Paths are reported as soon as they are discovered.
        """
        validate_path(root)
        visit(root)
        self._visit_below(root, visit)

    def _visit_below(self, path: str, visit: Callable[[str], None]) -> None:
        children = sorted(self._children(path))
        for child in children:
            visit(join_path(path, child))
        for child in children:
            self._visit_below(join_path(path, child), visit)
