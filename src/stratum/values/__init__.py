"""
Values resolution: directories, values files, JSON and inline overrides.
"""

from stratum.values.loader import ResolvedDocument, fetch_document, load_document, load_values
from stratum.values.options import CancelToken, Tier, ValueOptions, merge_values
from stratum.values.walker import list_files_recursive

__all__ = [
    "CancelToken",
    "ResolvedDocument",
    "Tier",
    "ValueOptions",
    "fetch_document",
    "list_files_recursive",
    "load_document",
    "load_values",
    "merge_values",
]
