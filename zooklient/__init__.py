"""zooklient - ZooKeeper console client.

zooklient provides path validation, ACL and creation-mode encoding and
recursive tree operations (listing and atomic deletion) over an abstract
NodeStore, plus an interactive console built on top of them.

Core algorithms:
    from zooklient.core import validate_path, parse_acl, encode_create_mode

Tree operations:
    from zooklient.api import list_subtree, delete_subtree

Stores:
    from zooklient.adapters import KazooNodeStore        # real ZooKeeper
    from zooklient.testing import InMemoryNodeStore      # in-process
"""

__version__ = "0.1.0"

from . import core
from . import api
from .errors import (
    ZooklientError,
    CommandSyntaxError,
    ValidationError,
    PathValidationError,
    CreateModeError,
    RemoteError,
    PartialDataWarning,
)

__all__ = [
    "__version__",
    "core",
    "api",
    "ZooklientError",
    "CommandSyntaxError",
    "ValidationError",
    "PathValidationError",
    "CreateModeError",
    "RemoteError",
    "PartialDataWarning",
]
