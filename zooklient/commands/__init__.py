"""Console commands: syntax, dispatch and display."""

from .parser import (
    Command,
    LsCommand,
    GetCommand,
    StatCommand,
    SetCommand,
    DeleteCommand,
    DeleteAllCommand,
    CreateCommand,
    SyncCommand,
    CloseCommand,
    GetAclCommand,
    SetAclCommand,
    COMMANDS,
    parse_command,
)
from .router import CommandRouter, UNSUPPORTED

__all__ = [
    "Command",
    "LsCommand",
    "GetCommand",
    "StatCommand",
    "SetCommand",
    "DeleteCommand",
    "DeleteAllCommand",
    "CreateCommand",
    "SyncCommand",
    "CloseCommand",
    "GetAclCommand",
    "SetAclCommand",
    "COMMANDS",
    "parse_command",
    "CommandRouter",
    "UNSUPPORTED",
]
