"""
Utility functions for Stratum.

General-purpose utilities that don't belong to a specific domain.
"""

from stratum.utils.merge import ValueKind, kind_of, merge_maps

__all__ = ["ValueKind", "kind_of", "merge_maps"]
