"""
Retrieval of raw bytes from stdin, URLs and local paths.

Providers handle scheme-qualified references; anything without a
registered scheme is read from the local filesystem.
"""

from stratum.getter.base import Provider
from stratum.getter.http import HTTPProvider
from stratum.getter.reader import parse_locator, read_source, read_stdin
from stratum.getter.registry import Providers, default_providers

__all__ = [
    "HTTPProvider",
    "Provider",
    "Providers",
    "default_providers",
    "parse_locator",
    "read_source",
    "read_stdin",
]
