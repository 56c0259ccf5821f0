"""
Load values documents into trees.

A values document is YAML. It may contain several ``---`` separated
documents; they are merged in order, later documents winning. Empty
documents contribute nothing.

Parsed documents are rebuilt as plain trees: mapping keys become strings
(``1`` -> ``"1"``, ``true`` -> ``"true"``) and every anchor use gets its
own copy, so an in-place assignment never reaches an aliased node.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import yaml as _yaml

import stratum.errors as errors
import stratum.getter as getter
import stratum.utils as utils


@_dataclasses.dataclass(frozen=True, slots=True)
class ResolvedDocument:
    """Raw bytes of a values document and the reference they came from."""

    reference: str
    data: bytes


def _key_text(key: _typing.Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def _to_tree(value: _typing.Any) -> _typing.Any:
    """Copy a parsed YAML node into a tree of fresh dicts and lists."""
    if isinstance(value, dict):
        return {_key_text(key): _to_tree(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_tree(item) for item in value]
    return value


def load_values(data: bytes | str, source: str) -> dict[str, _typing.Any]:
    """
    Parse a values document.

    Args:
        data: YAML content.
        source: Identifier used in error messages (path, URL, or ``-``).

    Returns:
        The merged mapping of all documents in ``data``.

    Raises:
        stratum.errors.FormatError: If the YAML is malformed or a document is
            not a mapping.
    """
    values: dict[str, _typing.Any] = {}
    try:
        for document in _yaml.safe_load_all(data):
            if document is None:
                continue
            if not isinstance(document, dict):
                type_name = type(document).__name__
                raise errors.FormatError(
                    source, f"values must be a YAML mapping (dict), got {type_name}"
                )
            values = utils.merge_maps(values, _to_tree(document))
    except _yaml.YAMLError as e:
        raise errors.FormatError(source, f"invalid YAML: {e}") from e
    return values


def fetch_document(
    reference: str,
    providers: getter.Providers | None = None,
    *,
    stdin: _typing.BinaryIO | None = None,
) -> ResolvedDocument:
    """Fetch the raw bytes of a values document."""
    return ResolvedDocument(reference, getter.read_source(reference, providers, stdin=stdin))


def load_document(
    reference: str,
    providers: getter.Providers | None = None,
    *,
    stdin: _typing.BinaryIO | None = None,
) -> dict[str, _typing.Any]:
    """
    Fetch and parse a values document.

    Raises:
        stratum.errors.RetrievalError: If the document cannot be fetched.
        stratum.errors.FormatError: If it cannot be parsed.
    """
    document = fetch_document(reference, providers, stdin=stdin)
    return load_values(document.data, document.reference)
