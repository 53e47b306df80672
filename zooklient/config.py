"""Configuration system for zooklient.

This module defines how the console client is configured: which server to
connect to, how long to wait for a session and how much history to keep.
"""

from dataclasses import dataclass, field
from typing import List

from .core.acl import ACLEntry, OPEN_ACL_UNSAFE


DEFAULT_SERVER = "127.0.0.1:2181"


@dataclass
class ClientConfig:
    """Complete configuration for a console session."""

    server: str = DEFAULT_SERVER        # host:port (comma separated for an ensemble)
    session_timeout: float = 10.0       # ZooKeeper session timeout, seconds
    connect_timeout: float = 5.0        # How long connect blocks, seconds
    history_size: int = 10              # Commands kept by `history`

    # ACL applied by `create` when none is given
    default_acl: List[ACLEntry] = field(default_factory=lambda: list(OPEN_ACL_UNSAFE))

    # Print partial-data warnings (bad ACL entries, vanished nodes) to stderr
    verbose_warnings: bool = True

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.server.strip():
            errors.append("server cannot be empty")

        if self.session_timeout <= 0:
            errors.append("session_timeout must be positive")

        if self.connect_timeout <= 0:
            errors.append("connect_timeout must be positive")

        if self.history_size <= 0:
            errors.append("history_size must be positive")

        return errors
