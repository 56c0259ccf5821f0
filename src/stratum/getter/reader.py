"""
Resolve a source reference to raw bytes.

Resolution order:
1. The stdin sentinel ``-`` reads standard input.
2. A reference whose scheme has a registered provider is fetched by it.
3. Anything else (no scheme, or an unknown one) is read as a local path.

Standard input is read to exhaustion. Using ``-`` a second time in the
same process returns empty content; this is not treated as an error.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import re as _re
import sys as _sys
import typing as _typing
import urllib.parse as _urlparse

import stratum.constants as constants
import stratum.errors as errors
import stratum.getter.registry as registry

_logger = _logging.getLogger(__name__)

# A "%" must introduce a two-digit hex escape in a valid locator
_BAD_PERCENT_ESCAPE = _re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_locator(reference: str) -> _urlparse.SplitResult:
    """
    Parse a reference as a URL-like locator.

    Args:
        reference: Path or URL.

    Returns:
        The split locator. Plain paths have an empty scheme.

    Raises:
        ValueError: If the reference is not a valid locator (for example an
            invalid percent escape like ``%a.txt``).
    """
    match = _BAD_PERCENT_ESCAPE.search(reference)
    if match:
        raise ValueError(f"invalid URL escape {reference[match.start() : match.start() + 3]!r}")
    return _urlparse.urlsplit(reference)


def read_stdin(stdin: _typing.BinaryIO | None = None) -> bytes:
    """
    Read all of standard input.

    Args:
        stdin: Stream to read instead of the process's stdin.

    Returns:
        Everything left in the stream.

    Raises:
        stratum.errors.RetrievalError: If the stream cannot be read.
    """
    stream = stdin if stdin is not None else _sys.stdin.buffer
    try:
        return stream.read()
    except (OSError, ValueError) as e:
        raise errors.RetrievalError(constants.STDIN_REFERENCE, f"cannot read stdin: {e}") from e


def read_source(
    reference: str,
    providers: registry.Providers | None = None,
    *,
    stdin: _typing.BinaryIO | None = None,
) -> bytes:
    """
    Load the bytes behind a reference from stdin, a provider, or the filesystem.

    Args:
        reference: ``-``, a URL, or a filesystem path.
        providers: Registry consulted for scheme-qualified references.
            When omitted, every reference is read from the filesystem.
        stdin: Stream used for the ``-`` sentinel (defaults to sys.stdin).

    Returns:
        Raw content.

    Raises:
        stratum.errors.RetrievalError: If the reference cannot be parsed or
            its content cannot be fetched.
    """
    if reference.strip() == constants.STDIN_REFERENCE:
        _logger.debug("Reading values from stdin")
        return read_stdin(stdin)

    try:
        locator = parse_locator(reference)
    except ValueError as e:
        raise errors.RetrievalError(reference, str(e)) from e

    provider = providers.get(locator.scheme) if providers is not None and locator.scheme else None
    if provider is not None:
        _logger.debug("Reading %s with %s", reference, type(provider).__name__)
        try:
            return provider.get(reference)
        except errors.RetrievalError:
            raise
        except Exception as e:
            raise errors.RetrievalError(reference, str(e) or type(e).__name__) from e

    _logger.debug("Reading %s from the local filesystem", reference)
    try:
        return _pathlib.Path(reference).read_bytes()
    except OSError as e:
        raise errors.RetrievalError(reference, e.strerror or str(e)) from e
