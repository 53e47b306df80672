"""Znode path grammar.

A znode path is either exactly ``/`` or a slash-separated sequence of
non-empty node names. Relative components (``.`` and ``..``), NUL and a few
reserved unicode ranges are not allowed.
"""

from typing import List

from ..errors import PathValidationError


ROOT = "/"


def _is_invalid_char(c: str) -> bool:
    code = ord(c)
    return (0x0001 <= code <= 0x001F
            or 0x007F <= code <= 0x009F
            or 0xD800 <= code <= 0xF8FF
            or 0xFFF0 <= code <= 0xFFFF)


def validate_path(path: str, sequential: bool = False) -> None:
    """Check that ``path`` is a legal znode path.

    Args:
        path: The candidate path
        sequential: The path is a prefix for a sequential create, so a
            trailing ``/`` is allowed (the server appends the counter)

    Raises:
        PathValidationError: With the reason and the character offset of
            the first violation
    """
    if sequential and path:
        try:
            validate_path(path + "1")
        except PathValidationError as e:
            raise PathValidationError(path, e.reason, e.offset) from None
        return
    if not path:
        raise PathValidationError(path, "path cannot be empty", 0)
    if path[0] != "/":
        raise PathValidationError(path, "path must start with / character", 0)
    if len(path) == 1:
        return
    if path[-1] == "/":
        raise PathValidationError(path, "path must not end with / character", len(path) - 1)

    length = len(path)
    last = "/"
    for i in range(1, length):
        c = path[i]
        at_end = i + 1 == length or path[i + 1] == "/"
        if c == "\x00":
            raise PathValidationError(path, "null character not allowed", i)
        elif c == "/" and last == "/":
            raise PathValidationError(path, "empty node name specified", i)
        elif c == "." and last == ".":
            if path[i - 2] == "/" and at_end:
                raise PathValidationError(path, "relative paths not allowed", i)
        elif c == ".":
            if path[i - 1] == "/" and at_end:
                raise PathValidationError(path, "relative paths not allowed", i)
        elif _is_invalid_char(c):
            raise PathValidationError(path, "invalid character", i)
        last = c


def is_valid_path(path: str) -> bool:
    """Return True if ``path`` passes validate_path."""
    try:
        validate_path(path)
    except PathValidationError:
        return False
    return True


def join_path(parent: str, child: str) -> str:
    """Join a child name onto a parent path without doubling the root slash."""
    if parent == ROOT:
        return ROOT + child
    return parent + "/" + child


def split_path(path: str) -> List[str]:
    """Split a path into its node names (``/`` -> ``[]``)."""
    return [part for part in path.split("/") if part]
