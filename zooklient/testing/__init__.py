"""Testing utilities for zooklient."""

from .fixtures import InMemoryNodeStore, WatchEvent

__all__ = ['InMemoryNodeStore', 'WatchEvent']
