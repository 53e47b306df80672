"""Core algorithms for zooklient.

Nothing in this package performs I/O directly: remote calls go through the
NodeStore abstraction.
"""

from .paths import validate_path, is_valid_path, join_path, split_path, ROOT
from .acl import ACLEntry, Perms, OPEN_ACL_UNSAFE, parse_acl, parse_perms, format_perms
from .create_mode import CreateMode, CreateFlags, MAX_TTL, encode_create_mode
from .node import NodeStat, DeleteOp, ANY_VERSION
from .adapter import NodeStore
from .traverser import SubtreeWalker
from .deleter import RecursiveDeleter

__all__ = [
    "validate_path",
    "is_valid_path",
    "join_path",
    "split_path",
    "ROOT",
    "ACLEntry",
    "Perms",
    "OPEN_ACL_UNSAFE",
    "parse_acl",
    "parse_perms",
    "format_perms",
    "CreateMode",
    "CreateFlags",
    "MAX_TTL",
    "encode_create_mode",
    "NodeStat",
    "DeleteOp",
    "ANY_VERSION",
    "NodeStore",
    "SubtreeWalker",
    "RecursiveDeleter",
]
