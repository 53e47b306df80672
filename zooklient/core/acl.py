"""ACL notation for znodes.

Users write ACLs as ``scheme:identity:perms`` entries separated by commas,
for example ``world:anyone:r,digest:bob:PKQ1ZBpX6CkIaXX1l9oo2uWNJf8=:cdrwa``.
The identity may itself contain colons, so the scheme ends at the first
colon and the permissions start after the last one.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import List, Optional

from ..errors import ACLFormatError, UnknownPermissionError
from ..error_policies import ErrorPolicy, ContinueOnErrorsPolicy


class Perms(IntFlag):
    """Permission bits, using ZooKeeper's wire values."""
    READ = 1
    WRITE = 2
    CREATE = 4
    DELETE = 8
    ADMIN = 16
    ALL = 31


_PERM_CHARS = {
    'r': Perms.READ,
    'w': Perms.WRITE,
    'c': Perms.CREATE,
    'd': Perms.DELETE,
    'a': Perms.ADMIN,
}

# Display order used by the ZooKeeper CLI
_DISPLAY_ORDER = 'cdrwa'


@dataclass(frozen=True)
class ACLEntry:
    """One access control entry applied to a znode."""
    scheme: str
    identity: str
    perms: Perms


OPEN_ACL_UNSAFE = [ACLEntry('world', 'anyone', Perms.ALL)]


def parse_perms(text: str, policy: Optional[ErrorPolicy] = None) -> Perms:
    """Turn a permission string like ``rwa`` into a Perms bitmask.

    Unknown characters are reported to the policy and ignored.
    """
    policy = policy or ContinueOnErrorsPolicy()
    perms = Perms(0)
    for char in text:
        bit = _PERM_CHARS.get(char)
        if bit is None:
            policy.handle(UnknownPermissionError(f"Unknown perm type: {char}"), 'parse_perms', text)
            continue
        perms |= bit
    return perms


def parse_acl(text: str, policy: Optional[ErrorPolicy] = None) -> List[ACLEntry]:
    """Decode a comma-separated ACL string.

    Malformed entries are reported to the policy and skipped; the entries
    that did parse are always returned.

    Args:
        text: ACL notation, e.g. ``world:anyone:cdrwa``
        policy: Where to report malformed input (defaults to
            ContinueOnErrorsPolicy, which prints a warning)

    Returns:
        Entries in input order
    """
    policy = policy or ContinueOnErrorsPolicy()
    entries = []
    for part in text.split(','):
        first = part.find(':')
        last = part.rfind(':')
        if first == -1 or first == last:
            policy.handle(ACLFormatError(f"{part} does not have the form scheme:id:perm"),
                          'parse_acl', part)
            continue
        entries.append(ACLEntry(
            scheme=part[:first],
            identity=part[first + 1:last],
            perms=parse_perms(part[last + 1:], policy),
        ))
    return entries


def format_perms(perms: int) -> str:
    """Render a bitmask as a permission string in ``cdrwa`` order."""
    return ''.join(c for c in _DISPLAY_ORDER if perms & _PERM_CHARS[c])
