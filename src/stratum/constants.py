"""
Shared constants for Stratum.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Source references
STDIN_REFERENCE = "-"
"""Reference that reads a document from standard input."""

DEFAULT_DOCUMENT_EXTENSION = ".yaml"
"""Extension of values documents collected from values directories."""

# Retrieval defaults
DEFAULT_HTTP_TIMEOUT = 30.0
"""Default timeout in seconds for fetching values over HTTP(S)."""

DEFAULT_USER_AGENT = "stratum"
"""User-Agent header sent by the HTTP provider."""

# Inline assignment limits
MAX_LIST_INDEX = 65536
"""Largest list index accepted in an inline assignment key (e.g. ``a[3]``).

Guards against ``--set a[999999999]=x`` allocating a huge padded list.
"""

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
"""Default root log level for the CLI."""
