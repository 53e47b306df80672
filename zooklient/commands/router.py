"""Command dispatch for the console.

The CommandRouter turns one console line into calls on the session's
NodeStore. Session commands (connect, history, quit) work without a live
session; every other command is parsed into its command dataclass and
dispatched through a table keyed by command type.
"""

import shlex
import sys
from typing import Callable, Dict, List, Optional, TextIO, Type

from .formatting import format_acl, format_children, format_data, format_stat
from .parser import (
    COMMANDS,
    CloseCommand,
    Command,
    CreateCommand,
    DeleteAllCommand,
    DeleteCommand,
    GetAclCommand,
    GetCommand,
    LsCommand,
    SetAclCommand,
    SetCommand,
    StatCommand,
    SyncCommand,
    parse_command,
)
from ..core.acl import ACLEntry, parse_acl
from ..core.adapter import NodeStore
from ..core.deleter import RecursiveDeleter
from ..core.paths import validate_path
from ..core.traverser import SubtreeWalker
from ..errors import (
    CommandSyntaxError,
    ConnectionTimeoutError,
    NoNodeError,
    ValidationError,
    ZooklientError,
)
from ..error_policies import ErrorPolicy, ContinueOnErrorsPolicy
from ..session import SessionManager


# Recognised but not implemented by this client
UNSUPPORTED = ("setquota", "listquota", "delquota", "addauth", "config")


class CommandRouter:
    """Executes console commands against a SessionManager."""

    def __init__(self, session: SessionManager,
                 out: Optional[TextIO] = None,
                 policy: Optional[ErrorPolicy] = None):
        """Initialize the router.

        Args:
            session: Owns the live NodeStore and the history
            out: Where command output goes (default: stdout)
            policy: Receives partial-data problems such as malformed ACL
                entries or nodes that vanish during a walk. When omitted,
                each command gets a fresh ContinueOnErrorsPolicy.
        """
        self.session = session
        self.out = out or sys.stdout
        self._shared_policy = policy
        self.policy = self._new_policy()

        self._handlers: Dict[Type[Command], Callable[[NodeStore, Command], None]] = {
            LsCommand: self._ls,
            GetCommand: self._get,
            StatCommand: self._stat,
            SetCommand: self._set,
            CreateCommand: self._create,
            DeleteCommand: self._delete,
            DeleteAllCommand: self._delete_all,
            SyncCommand: self._sync,
            CloseCommand: self._close,
            GetAclCommand: self._get_acl,
            SetAclCommand: self._set_acl,
        }
        self._session_handlers: Dict[str, Callable[[List[str]], bool]] = {
            "connect": self._connect,
            "history": self._history,
            "quit": self._quit,
        }

    def _new_policy(self) -> ErrorPolicy:
        if self._shared_policy is not None:
            return self._shared_policy
        return ContinueOnErrorsPolicy(verbose=self.session.config.verbose_warnings)

    def show_output(self, line: str = "") -> None:
        print(line, file=self.out)

    def report_error(self, error: ZooklientError) -> None:
        if isinstance(error, CommandSyntaxError):
            self.show_output(error.usage)
        else:
            self.show_output(str(error))

    def print_usage(self) -> None:
        self.show_output("ZooKeeper -server host:port cmd args")
        self.show_output("\tconnect host:port")
        self.show_output("\thistory")
        self.show_output("\tquit")
        for command in COMMANDS.values():
            self.show_output("\t" + command.usage)

    def execute_line(self, line: str) -> bool:
        """Run one console line, reporting errors instead of raising them.

        Returns:
            False once the user asked to quit, True otherwise
        """
        line = line.strip()
        if not line:
            return True

        try:
            words = shlex.split(line)
        except ValueError as e:
            self.show_output(f"Cannot parse command line: {e}")
            return True

        try:
            if words[0] in self._session_handlers:
                return self._session_handlers[words[0]](words[1:])
            self.execute(words[0], words[1:])
        except ZooklientError as e:
            self.report_error(e)
        finally:
            self.session.history.add(line)
        return True

    def execute(self, name: str, args: List[str]) -> None:
        """Run a store command.

        Raises:
            CommandSyntaxError: Malformed arguments
            ValidationError: Invalid path or flag combination
            RemoteError: The store rejected the request, or there is no
                live session
        """
        if name in UNSUPPORTED:
            self.show_output("Not supported yet")
            return
        if name not in COMMANDS:
            self.print_usage()
            self.show_output(f"Command not found: {name}")
            return

        command = parse_command(name, args)
        self._validate(command)

        store = self.session.require_store()
        self.policy = self._new_policy()
        self._handlers[type(command)](store, command)

    def _validate(self, command: Command) -> None:
        """Local checks that need no session."""
        if isinstance(command, CreateCommand):
            flags = command.create_flags()
            validate_path(command.path, sequential=flags.mode.is_sequential)
        elif getattr(command, "path", None) is not None:
            validate_path(command.path)

    def watcher(self, event) -> None:
        """Print a triggered watch."""
        self.show_output("WATCHER::")
        self.show_output()
        self.show_output(f"WatchedEvent state:{event.state} type:{event.type} path:{event.path}")

    def _watch_for(self, command: Command):
        return self.watcher if getattr(command, "watch", False) else None

    # Session commands

    def _connect(self, args: List[str]) -> bool:
        try:
            self.session.connect(args[0] if args else None)
        except ConnectionTimeoutError:
            self.show_output("Failed to connect zk server, please try later")
        else:
            self.show_output("zookeeper connected")
        return True

    def _history(self, args: List[str]) -> bool:
        for number, line in self.session.history:
            self.show_output(f"{number} - {line}")
        return True

    def _quit(self, args: List[str]) -> bool:
        return False

    # Store commands

    def _print_stat(self, stat) -> None:
        for line in format_stat(stat):
            self.show_output(line)

    def _ls(self, store: NodeStore, command: LsCommand) -> None:
        if command.recursive:
            SubtreeWalker(store, self.policy).visit_subtree(command.path, self.show_output)
            return
        children, stat = store.get_children(command.path, watch=self._watch_for(command))
        self.show_output(format_children(children))
        if command.with_stat:
            self._print_stat(stat)

    def _get(self, store: NodeStore, command: GetCommand) -> None:
        data, stat = store.get(command.path, watch=self._watch_for(command))
        self.show_output(format_data(data))
        if command.with_stat:
            self._print_stat(stat)

    def _stat(self, store: NodeStore, command: StatCommand) -> None:
        stat = store.exists(command.path, watch=self._watch_for(command))
        if stat is None:
            raise NoNodeError(command.path)
        self._print_stat(stat)

    def _set(self, store: NodeStore, command: SetCommand) -> None:
        stat = store.set(command.path, command.data.encode("utf-8"), command.version)
        if command.with_stat:
            self._print_stat(stat)

    def _create(self, store: NodeStore, command: CreateCommand) -> None:
        flags = command.create_flags()
        acl = self._parse_acl(command.acl) if command.acl else self.session.config.default_acl
        created = store.create(command.path, command.data.encode("utf-8"), flags, acl)
        self.show_output(f"Created {created}")

    def _parse_acl(self, text: str) -> List[ACLEntry]:
        acl = parse_acl(text, self.policy)
        if not acl:
            raise ValidationError(f"No valid ACL entries in {text}")
        return acl

    def _delete(self, store: NodeStore, command: DeleteCommand) -> None:
        store.delete(command.path, command.version)

    def _delete_all(self, store: NodeStore, command: DeleteAllCommand) -> None:
        RecursiveDeleter(store, self.policy).delete(command.path)

    def _sync(self, store: NodeStore, command: SyncCommand) -> None:
        store.sync(command.path)
        self.show_output("Sync is OK")

    def _close(self, store: NodeStore, command: CloseCommand) -> None:
        self.session.close()

    def _get_acl(self, store: NodeStore, command: GetAclCommand) -> None:
        acl, stat = store.get_acls(command.path)
        for line in format_acl(acl):
            self.show_output(line)
        if command.with_stat:
            self._print_stat(stat)

    def _set_acl(self, store: NodeStore, command: SetAclCommand) -> None:
        stat = store.set_acls(command.path, self._parse_acl(command.acl), command.version)
        if command.with_stat:
            self._print_stat(stat)
