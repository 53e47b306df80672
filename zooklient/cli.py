"""Console entry point.

Usage:
    zooklient [-server host:port] [--timeout seconds]           # interactive
    zooklient [-server host:port] [--timeout seconds] cmd args  # one-shot
"""

import argparse
import sys
from typing import List, Optional

from .commands.router import CommandRouter
from .config import ClientConfig, DEFAULT_SERVER
from .errors import ConnectionTimeoutError, ZooklientError
from .session import SessionManager, StoreFactory, kazoo_store_factory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zooklient",
        description="Interactive ZooKeeper console",
        allow_abbrev=False,
    )
    parser.add_argument("-server", "--server", dest="server", default=DEFAULT_SERVER,
                        help="host:port to connect to (default: %(default)s)")
    parser.add_argument("--timeout", type=float, default=5.0,
                        help="seconds to wait for a session (default: %(default)s)")
    parser.add_argument("--session-timeout", type=float, default=10.0,
                        help="ZooKeeper session timeout in seconds (default: %(default)s)")
    parser.add_argument("--quiet", action="store_true",
                        help="do not print warnings for skipped data")
    parser.add_argument("command", nargs=argparse.REMAINDER,
                        help="run a single command and exit")
    return parser


def loop(router: CommandRouter) -> None:
    """Read commands from stdin until `quit` or end of input."""
    while True:
        try:
            line = input()
        except EOFError:
            break
        except KeyboardInterrupt:
            print()
            continue
        if not router.execute_line(line):
            break


def main(argv: Optional[List[str]] = None,
         store_factory: StoreFactory = kazoo_store_factory) -> int:
    args = build_parser().parse_args(argv)

    config = ClientConfig(
        server=args.server,
        connect_timeout=args.timeout,
        session_timeout=args.session_timeout,
        verbose_warnings=not args.quiet,
    )
    errors = config.validate()
    if errors:
        print(f"Invalid configuration: {'; '.join(errors)}", file=sys.stderr)
        return 1

    session = SessionManager(config, store_factory)
    router = CommandRouter(session)

    try:
        session.connect(config.server)
        router.show_output("zookeeper connected")
    except ConnectionTimeoutError:
        router.show_output("Failed to connect zk server, please try later")
    except ZooklientError as e:
        router.report_error(e)

    try:
        if not args.command:
            loop(router)
            return 0

        try:
            router.execute(args.command[0], args.command[1:])
        except ZooklientError as e:
            router.report_error(e)
            return 1
        return 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
