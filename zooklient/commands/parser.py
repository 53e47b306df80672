"""Command syntax for the console.

Each console command has its own dataclass carrying the parsed flags and
arguments. Parsing uses argparse with one parser per command; any syntax
problem raises CommandSyntaxError carrying the command's usage string.
"""

import argparse
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from ..core.create_mode import CreateFlags, encode_create_mode
from ..core.node import ANY_VERSION
from ..errors import CommandSyntaxError


class _CommandParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting."""

    def error(self, message):
        raise CommandSyntaxError(self.usage, message)


def _parser(name: str, usage: str) -> _CommandParser:
    return _CommandParser(prog=name, usage=usage, add_help=False)


@dataclass
class Command:
    """Base class for parsed commands."""

    name = ""
    usage = ""

    @classmethod
    def build_parser(cls) -> argparse.ArgumentParser:
        raise NotImplementedError

    @classmethod
    def parse(cls, args: List[str]) -> "Command":
        """Parse the arguments that followed the command name."""
        namespace = cls.build_parser().parse_args(args)
        return cls(**vars(namespace))


@dataclass
class LsCommand(Command):
    path: str
    with_stat: bool = False
    watch: bool = False
    recursive: bool = False

    name = "ls"
    usage = "ls [-s] [-w] [-R] path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="with_stat", action="store_true")
        parser.add_argument("-w", dest="watch", action="store_true")
        parser.add_argument("-R", dest="recursive", action="store_true")
        parser.add_argument("path")
        return parser


@dataclass
class GetCommand(Command):
    path: str
    with_stat: bool = False
    watch: bool = False

    name = "get"
    usage = "get [-s] [-w] path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="with_stat", action="store_true")
        parser.add_argument("-w", dest="watch", action="store_true")
        parser.add_argument("path")
        return parser


@dataclass
class StatCommand(Command):
    path: str
    watch: bool = False

    name = "stat"
    usage = "stat [-w] path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-w", dest="watch", action="store_true")
        parser.add_argument("path")
        return parser


@dataclass
class SetCommand(Command):
    path: str
    data: str
    with_stat: bool = False
    version: int = ANY_VERSION

    name = "set"
    usage = "set [-s] [-v version] path data"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="with_stat", action="store_true")
        parser.add_argument("-v", dest="version", type=int, default=ANY_VERSION)
        parser.add_argument("path")
        parser.add_argument("data")
        return parser

    @classmethod
    def parse(cls, args):
        command = super().parse(args)
        if not command.data:
            raise CommandSyntaxError(cls.usage, "data cannot be empty")
        return command


@dataclass
class DeleteCommand(Command):
    path: str
    version: int = ANY_VERSION

    name = "delete"
    usage = "delete [-v version] path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-v", dest="version", type=int, default=ANY_VERSION)
        parser.add_argument("path")
        return parser


@dataclass
class DeleteAllCommand(Command):
    path: str

    name = "deleteall"
    usage = "deleteall path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("path")
        return parser


@dataclass
class CreateCommand(Command):
    path: str
    data: str = ""
    acl: str = ""
    sequential: bool = False
    ephemeral: bool = False
    container: bool = False
    ttl: Optional[int] = None  # None when -t was not given

    name = "create"
    usage = "create [-s] [-e] [-c] [-t ttl] path [data] [acl]"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="sequential", action="store_true")
        parser.add_argument("-e", dest="ephemeral", action="store_true")
        parser.add_argument("-c", dest="container", action="store_true")
        parser.add_argument("-t", dest="ttl", type=int, default=None)
        parser.add_argument("path")
        parser.add_argument("data", nargs="?", default="")
        parser.add_argument("acl", nargs="?", default="")
        return parser

    def create_flags(self) -> CreateFlags:
        """Encode the -s/-e/-c/-t switches. Raises CreateModeError."""
        return encode_create_mode(
            sequential=self.sequential,
            ephemeral=self.ephemeral,
            container=self.container,
            ttl=self.ttl,
        )


@dataclass
class SyncCommand(Command):
    path: str

    name = "sync"
    usage = "sync path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("path")
        return parser


@dataclass
class CloseCommand(Command):
    name = "close"
    usage = "close"

    @classmethod
    def build_parser(cls):
        return _parser(cls.name, cls.usage)


@dataclass
class GetAclCommand(Command):
    path: str
    with_stat: bool = False

    name = "getAcl"
    usage = "getAcl [-s] path"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="with_stat", action="store_true")
        parser.add_argument("path")
        return parser


@dataclass
class SetAclCommand(Command):
    path: str
    acl: str
    with_stat: bool = False
    version: int = ANY_VERSION

    name = "setAcl"
    usage = "setAcl [-s] [-v version] path acl"

    @classmethod
    def build_parser(cls):
        parser = _parser(cls.name, cls.usage)
        parser.add_argument("-s", dest="with_stat", action="store_true")
        parser.add_argument("-v", dest="version", type=int, default=ANY_VERSION)
        parser.add_argument("path")
        parser.add_argument("acl")
        return parser


# Store commands in the order they are listed by the usage text
COMMANDS: Dict[str, Type[Command]] = {
    cmd.name: cmd for cmd in (
        LsCommand,
        GetCommand,
        StatCommand,
        SetCommand,
        DeleteCommand,
        CreateCommand,
        DeleteAllCommand,
        SyncCommand,
        CloseCommand,
        GetAclCommand,
        SetAclCommand,
    )
}


def parse_command(name: str, args: List[str]) -> Command:
    """Parse a store command.

    Raises:
        KeyError: If ``name`` is not a store command
        CommandSyntaxError: If the arguments do not match the usage
    """
    return COMMANDS[name].parse(args)
