"""Exception hierarchy for zooklient.

Errors fall into four groups:

- CommandSyntaxError: the command line could not be parsed
- ValidationError: a path or flag combination was rejected locally,
  before anything was sent to the server
- RemoteError: the node store reported a failure
- PartialDataWarning: non-fatal problems handed to an error policy
"""


class ZooklientError(Exception):
    """Base class for every error raised by zooklient."""
    pass


class CommandSyntaxError(ZooklientError):
    """Raised when a command's flags or arguments are malformed."""

    def __init__(self, usage: str, detail: str = ""):
        self.usage = usage
        self.detail = detail
        super().__init__(usage)


class ValidationError(ZooklientError):
    """Raised when input is rejected before contacting the server."""
    pass


class PathValidationError(ValidationError):
    """Raised when a string is not a legal znode path."""

    def __init__(self, path: str, reason: str, offset: int):
        self.path = path
        self.reason = reason
        self.offset = offset
        super().__init__(f'Invalid path string "{path}" caused by {reason} @{offset}')


class CreateModeError(ValidationError):
    """Raised when create flags cannot be combined."""
    pass


class RemoteError(ZooklientError):
    """A failure reported by the node store."""
    pass


class _PathError(RemoteError):
    message = "{path}"

    def __init__(self, path: str):
        self.path = path
        super().__init__(self.message.format(path=path))


class NoNodeError(_PathError):
    message = "Node does not exist: {path}"


class NodeExistsError(_PathError):
    message = "Node already exists: {path}"


class BadVersionError(_PathError):
    message = "Version mismatch for {path}"


class NotEmptyError(_PathError):
    message = "Node not empty: {path}"


class InvalidACLError(_PathError):
    message = "Invalid ACL for {path}"


class NotConnectedError(RemoteError):
    """Raised when a store command is issued without a live session."""

    def __init__(self, message: str = "Not connected, use `connect` command to connect to a server"):
        super().__init__(message)


class ConnectionTimeoutError(RemoteError):
    pass


class PartialDataWarning(ZooklientError):
    """Non-fatal problem: reported to an error policy, then skipped."""
    pass


class ACLFormatError(PartialDataWarning):
    pass


class UnknownPermissionError(PartialDataWarning):
    pass
