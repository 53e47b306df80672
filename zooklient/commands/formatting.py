"""Display formatting for command results."""

from datetime import datetime
from typing import Iterable, List, Optional

from ..core.acl import ACLEntry, format_perms
from ..core.node import NodeStat


def format_children(children: Iterable[str]) -> str:
    """``[a, b, c]`` with names sorted for stable output."""
    return "[" + ", ".join(sorted(children)) + "]"


def format_data(data: Optional[bytes]) -> str:
    if data is None:
        return "null"
    return data.decode("utf-8", errors="replace")


def format_time(millis: int) -> str:
    return datetime.fromtimestamp(millis / 1000).astimezone().strftime("%a %b %d %H:%M:%S %Z %Y")


def format_stat(stat: NodeStat) -> List[str]:
    """Render a stat the way the ZooKeeper CLI does."""
    return [
        f"cZxid = {stat.czxid:#x}",
        f"ctime = {format_time(stat.ctime)}",
        f"mZxid = {stat.mzxid:#x}",
        f"mtime = {format_time(stat.mtime)}",
        f"pZxid = {stat.pzxid:#x}",
        f"cversion = {stat.cversion}",
        f"dataVersion = {stat.version}",
        f"aclVersion = {stat.aversion}",
        f"ephemeralOwner = {stat.ephemeral_owner:#x}",
        f"dataLength = {stat.data_length}",
        f"numChildren = {stat.num_children}",
    ]


def format_acl(entries: Iterable[ACLEntry]) -> List[str]:
    lines = []
    for entry in entries:
        lines.append(f"'{entry.scheme},'{entry.identity}")
        lines.append(f": {format_perms(entry.perms)}")
    return lines
