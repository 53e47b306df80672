"""
Tests for subtree enumeration.

Trees are built in an InMemoryNodeStore; the walker must return the root
first, never a child before its parent, and skip nodes whose children
cannot be listed.
"""

import doctest
import io
import sys
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from zooklient import api
from zooklient.api import list_subtree, visit_subtree
from zooklient.core.node import NodeStat
from zooklient.core.traverser import SubtreeWalker
from zooklient.error_policies import CollectErrorsPolicy, FailFastPolicy
from zooklient.errors import NoNodeError, PathValidationError
from zooklient.testing import InMemoryNodeStore


def build_store(*paths):
    store = InMemoryNodeStore()
    store.start(timeout=1)
    for path in paths:
        store.ensure_path(path)
    return store


class TestListSubtree(unittest.TestCase):

    def setUp(self):
        """Create a test tree:
            /app
            ├── b
            │   └── leaf
            └── a
                ├── x
                └── y
        """
        self.store = build_store('/app/b/leaf', '/app/a/x', '/app/a/y')

    def test_root_first_then_breadth_first(self):
        paths = SubtreeWalker(self.store).list_subtree('/app')
        self.assertEqual(paths, ['/app', '/app/b', '/app/a', '/app/b/leaf', '/app/a/x', '/app/a/y'])

    def test_parent_before_child(self):
        paths = list_subtree(self.store, '/app')
        for path in paths[1:]:
            parent = path.rsplit('/', 1)[0]
            self.assertLess(paths.index(parent), paths.index(path))

    def test_each_path_once(self):
        paths = list_subtree(self.store, '/')
        self.assertEqual(len(paths), len(set(paths)))
        self.assertEqual(sorted(paths), self.store.paths())

    def test_leaf_root(self):
        self.assertEqual(list_subtree(self.store, '/app/a/x'), ['/app/a/x'])

    def test_root_path_joins_without_double_slash(self):
        paths = list_subtree(self.store, '/')
        self.assertEqual(paths[:2], ['/', '/app'])

    def test_invalid_root_raises_before_any_call(self):
        self.store.calls.clear()
        with self.assertRaises(PathValidationError):
            list_subtree(self.store, 'app')
        self.assertEqual(self.store.calls, [])

    def test_iter_is_lazy(self):
        walker = SubtreeWalker(self.store)
        self.store.calls.clear()
        iterator = walker.iter_subtree('/app')
        self.assertEqual(next(iterator), '/app')
        self.assertEqual(self.store.calls, [])


class TestWalkFailures(unittest.TestCase):
    """A node that disappears mid-walk is skipped, not fatal."""

    def setUp(self):
        self.store = build_store('/r/gone/deep', '/r/kept/child')
        self.store.fail_children.add('/r/gone')

    def test_missing_root_yields_only_root(self):
        policy = CollectErrorsPolicy()
        paths = list_subtree(self.store, '/absent', policy)
        self.assertEqual(paths, ['/absent'])
        self.assertEqual(len(policy.errors), 1)
        self.assertIsInstance(policy.errors[0]['error'], NoNodeError)

    def test_failed_node_treated_as_childless(self):
        policy = CollectErrorsPolicy()
        paths = list_subtree(self.store, '/r', policy)
        self.assertIn('/r/gone', paths)
        self.assertNotIn('/r/gone/deep', paths)
        self.assertIn('/r/kept/child', paths)
        self.assertEqual(policy.skipped_paths, ['/r/gone'])

    def test_default_policy_prints_warning(self):
        with patch('sys.stderr', new_callable=io.StringIO) as stderr:
            list_subtree(self.store, '/r')
        self.assertIn("WARNING: Node does not exist: /r/gone", stderr.getvalue())

    def test_fail_fast_propagates(self):
        with self.assertRaises(NoNodeError):
            list_subtree(self.store, '/r', FailFastPolicy())

    def test_uses_store_order(self):
        store = Mock()
        store.get_children.side_effect = lambda path: {
            '/q': (['z', 'a'], NodeStat()),
        }.get(path, ([], NodeStat()))
        self.assertEqual(SubtreeWalker(store).list_subtree('/q'), ['/q', '/q/z', '/q/a'])


class TestVisitSubtree(unittest.TestCase):

    def test_display_order(self):
        """Siblings are sorted and reported before their own children."""
        store = build_store('/t/b/y', '/t/a/x', '/t/a/w')
        seen = []
        visit_subtree(store, '/t', seen.append)
        self.assertEqual(seen, ['/t', '/t/a', '/t/b', '/t/a/w', '/t/a/x', '/t/b/y'])

    def test_visit_skips_unreadable_nodes(self):
        store = build_store('/t/a/x', '/t/b')
        store.fail_children.add('/t/a')
        seen = []
        visit_subtree(store, '/t', seen.append, CollectErrorsPolicy())
        self.assertEqual(seen, ['/t', '/t/a', '/t/b'])

    def test_visit_validates_root(self):
        store = build_store()
        seen = []
        with self.assertRaises(PathValidationError):
            visit_subtree(store, '/t/', seen.append)
        self.assertEqual(seen, [])



class TestApiExamples(unittest.TestCase):

    def test_docstring_examples_run(self):
        result = doctest.testmod(api)
        self.assertGreater(result.attempted, 0)
        self.assertEqual(result.failed, 0)


if __name__ == '__main__':
    unittest.main()
