"""
Error types raised while resolving configuration values.

Every error carries the identifier of the source that caused it (a path,
URL, or the raw literal passed on the command line) so callers can report
which input failed rather than a bare "merge failed".

Hierarchy:
- StratumError
  - RetrievalError: bytes could not be fetched (file, URL, stdin)
  - TraversalError: a values directory could not be listed
  - FormatError: a document or JSON payload could not be parsed
  - AssignmentSyntaxError: an inline assignment could not be applied
  - MergeCancelledError: the caller cancelled the merge
"""


class StratumError(Exception):
    """Base class for all errors raised by Stratum."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(message)


class RetrievalError(StratumError):
    """Error reading raw bytes from a path, URL, or standard input."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(source, f"failed to read {source!r}: {message}")


class TraversalError(StratumError):
    """Error listing files below a values directory."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(source, f"failed to list files in directory {source!r}: {message}")


class FormatError(StratumError):
    """Error parsing a values document or a raw JSON payload."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(source, f"failed to parse {source}: {message}")


class AssignmentSyntaxError(StratumError):
    """Error applying an inline ``key=value`` assignment."""

    def __init__(self, source: str, message: str, *, flag: str = "--set") -> None:
        self.flag = flag
        super().__init__(source, f"failed parsing {flag} data {source!r}: {message}")


class MergeCancelledError(StratumError):
    """The merge was cancelled before all tiers were applied."""

    def __init__(self, source: str) -> None:
        super().__init__(source, f"merge cancelled before processing {source!r}")
