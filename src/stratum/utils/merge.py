"""
Deep merge of configuration trees.

Two trees are combined key by key. When both sides hold a mapping at the
same key the mappings are merged recursively; in every other case the
overlay value replaces the base value wholesale. Lists are never merged
element-wise.

Example:
    >>> base = {"model": {"name": "llama", "size": "7b"}, "tags": ["a"]}
    >>> overlay = {"model": {"size": "70b"}, "tags": ["b"]}
    >>> merge_maps(base, overlay)
    {'model': {'name': 'llama', 'size': '70b'}, 'tags': ['b']}
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing


class ValueKind(_enum.Enum):
    """Variant of a configuration value."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def kind_of(value: _typing.Any) -> ValueKind:
    """
    Classify a configuration value.

    Strings and bytes are scalars even though they are sequences.

    Args:
        value: Any value found in a parsed document.

    Returns:
        The ValueKind of the value.
    """
    if isinstance(value, _abc.Mapping):
        return ValueKind.MAPPING
    if isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def merge_maps(
    base: _abc.Mapping[str, _typing.Any],
    overlay: _abc.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge ``overlay`` onto ``base`` and return a new tree.

    Neither input is modified. Nested mappings that are not merged are
    shared with the inputs, not copied.

    Args:
        base: Lower-priority tree.
        overlay: Higher-priority tree; wins on conflicts.

    Returns:
        The merged tree.
    """
    result: dict[str, _typing.Any] = dict(base)
    for key, value in overlay.items():
        if kind_of(value) is ValueKind.MAPPING and key in result:
            existing = result[key]
            if kind_of(existing) is ValueKind.MAPPING:
                result[key] = merge_maps(existing, value)
                continue
        result[key] = value
    return result
