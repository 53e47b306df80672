"""Creation modes for new znodes.

The ``create`` command takes independent -s/-e/-c/-t switches, while the
server expects a single mode code. encode_create_mode rejects the
combinations the server would refuse and picks the code.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from ..errors import CreateModeError


# The top byte of a zxid is reserved for extensions and the next two bytes
# are reserved as well, so a TTL can only use the remaining 40 bits.
EXTENDED_MASK = 0xff00000000000000
RESERVED_BITS_MASK = 0x00ffff0000000000
MAX_TTL = ~(EXTENDED_MASK | RESERVED_BITS_MASK) & 0xffffffffffffffff


class CreateMode(IntEnum):
    """Creation mode codes as sent on the wire."""
    PERSISTENT = 0
    EPHEMERAL = 1
    PERSISTENT_SEQUENTIAL = 2
    EPHEMERAL_SEQUENTIAL = 3
    CONTAINER = 4
    PERSISTENT_WITH_TTL = 5
    PERSISTENT_SEQUENTIAL_WITH_TTL = 6

    @property
    def is_ephemeral(self) -> bool:
        return self in (CreateMode.EPHEMERAL, CreateMode.EPHEMERAL_SEQUENTIAL)

    @property
    def is_sequential(self) -> bool:
        return self in (CreateMode.PERSISTENT_SEQUENTIAL,
                        CreateMode.EPHEMERAL_SEQUENTIAL,
                        CreateMode.PERSISTENT_SEQUENTIAL_WITH_TTL)

    @property
    def is_container(self) -> bool:
        return self is CreateMode.CONTAINER

    @property
    def is_ttl(self) -> bool:
        return self in (CreateMode.PERSISTENT_WITH_TTL,
                        CreateMode.PERSISTENT_SEQUENTIAL_WITH_TTL)


@dataclass(frozen=True)
class CreateFlags:
    """A creation mode plus the TTL (milliseconds) for TTL modes."""
    mode: CreateMode = CreateMode.PERSISTENT
    ttl: Optional[int] = None


def encode_create_mode(sequential: bool = False,
                       ephemeral: bool = False,
                       container: bool = False,
                       ttl: Optional[int] = None) -> CreateFlags:
    """Combine create switches into a single creation mode.

    Args:
        sequential: -s, append a monotonically increasing suffix
        ephemeral: -e, remove the node when the session ends
        container: -c, remove the node once it has no children
        ttl: -t value; None when no TTL was requested

    Returns:
        CreateFlags carrying the mode and the TTL

    Raises:
        CreateModeError: If the switches cannot be combined or the TTL is
            out of range
    """
    has_ttl = ttl is not None

    if container and (ephemeral or sequential):
        raise CreateModeError(
            "-c cannot be combined with -s or -e. containers cannot be ephemeral or sequential")
    if has_ttl and ephemeral:
        raise CreateModeError("TTLs cannot be used with Ephemeral znodes")
    if has_ttl and container:
        raise CreateModeError("TTLs cannot be used with Container znodes")
    if has_ttl and (ttl <= 0 or ttl > MAX_TTL):
        raise CreateModeError(f"ttl must be positive and cannot be larger than: {MAX_TTL}")

    if ephemeral and sequential:
        mode = CreateMode.EPHEMERAL_SEQUENTIAL
    elif ephemeral:
        mode = CreateMode.EPHEMERAL
    elif sequential:
        mode = CreateMode.PERSISTENT_SEQUENTIAL_WITH_TTL if has_ttl else CreateMode.PERSISTENT_SEQUENTIAL
    elif container:
        mode = CreateMode.CONTAINER
    elif has_ttl:
        mode = CreateMode.PERSISTENT_WITH_TTL
    else:
        mode = CreateMode.PERSISTENT

    return CreateFlags(mode=mode, ttl=ttl if has_ttl else None)
