"""
Error handling policies for zooklient.

Tree walks and ACL decoding hit problems that should not abort the whole
command: a znode that vanished between listing its parent and listing it,
or one malformed entry in a comma-separated ACL. Those problems are handed
to an ErrorPolicy, which decides whether to stop (re-raise) or to record
the problem and return a default that lets the operation continue.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List
import sys


def _default_for(method_name: str) -> Any:
    """Value that lets the calling operation carry on."""
    if method_name in ('get_children', 'list_children'):
        return []  # Treat the node as childless
    return None


def _describe(node: Any) -> Any:
    if node is None:
        return None
    return getattr(node, 'path', node)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for handling errors raised
    while walking a subtree or decoding user input.
    """

    @abstractmethod
    def handle(self, error: Exception, method_name: str, node: Any) -> Any:
        """
        Handle an error that occurred during an operation.

        Args:
            error: The exception that was raised
            method_name: Name of the operation that failed (e.g., 'get_children')
            node: The path or input fragment being processed

        Returns:
            A sensible default value that allows the operation to continue,
            or re-raises the exception to stop it.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error.

    Useful when partial results are not acceptable.
    """

    def handle(self, error: Exception, method_name: str, node: Any) -> Any:
        """Re-raise the error immediately."""
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that logs errors and continues.

    Errors are collected for later inspection and a warning is printed to
    stderr. This is the default for subtree walks and ACL decoding.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    def handle(self, error: Exception, method_name: str, node: Any) -> Any:
        """
        Log the error and return a sensible default.

        Returns:
            - Empty list for get_children
            - None for everything else
        """
        path = _describe(node)

        self.errors.append({
            'path': path,
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error)
        })

        if method_name in ('get_children', 'list_children') and path:
            self.skipped_paths.append(path)

        if self.verbose:
            print(f"WARNING: {error}", file=sys.stderr)

        return _default_for(method_name)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return {
            'total_errors': len(self.errors),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors
        }


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all errors without logging.

    Useful for presenting every problem at the end, and in tests.
    """

    def __init__(self):
        super().__init__(verbose=False)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails.

    Some vanished nodes are expected on a busy tree, but too many indicate
    a systemic problem (lost connection, missing permissions).
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[Exception] = []

    def handle(self, error: Exception, method_name: str, node: Any) -> Any:
        """Handle error if under threshold, otherwise raise."""
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            print(f"WARNING [{self.error_count}/{self.max_errors}]: Error in {method_name} "
                  f"for '{_describe(node)}': {error}", file=sys.stderr)

        return _default_for(method_name)
