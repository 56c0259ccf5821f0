"""
Collect values from every source and merge them into one tree.

Sources are applied in the following order; later sources overwrite
earlier ones when the same key appears more than once:

1. -d / --values-directory   values files found in one or more directories
2. -f / --values             values files, URLs, or ``-`` for stdin
3.      --set-json           raw JSON objects or ``key=<json>`` assignments
4.      --set                inline ``key=value`` assignments
5.      --set-string         inline assignments whose values stay strings
6.      --set-file           values read from the referenced files
7.      --set-literal        a single assignment kept verbatim

Within a tier, entries are applied in the order they were given, and the
files of one directory are applied in lexicographic path order. For
example, if ``captain: luffy`` comes from a values directory and
``captain: usopp`` from a values file, the merged value is ``usopp``.

Mappings from documents and JSON objects are deep-merged into the
accumulated tree. Inline assignments write into that same tree in place;
since every later write wins, this gives the same precedence as merging
each assignment as its own overlay.
"""

from __future__ import annotations

import enum as _enum
import json as _json
import logging as _logging
import typing as _typing

import pydantic as _pydantic

import stratum.constants as constants
import stratum.errors as errors
import stratum.getter as getter
import stratum.strvals as strvals
import stratum.utils as utils
import stratum.values.loader as loader
import stratum.values.walker as walker

_logger = _logging.getLogger(__name__)

_Apply = _typing.Callable[[str, dict[str, _typing.Any]], None]


class CancelToken(_typing.Protocol):
    """Anything with ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool: ...


class Tier(_enum.IntEnum):
    """Precedence tiers; a higher value is applied later and wins."""

    DIRECTORIES = 1
    VALUE_FILES = 2
    JSON_VALUES = 3
    VALUES = 4
    STRING_VALUES = 5
    FILE_VALUES = 6
    LITERAL_VALUES = 7

    @property
    def flag(self) -> str:
        """Command-line flag that feeds this tier."""
        return _TIER_FLAGS[self]


_TIER_FLAGS: dict[Tier, str] = {
    Tier.DIRECTORIES: "--values-directory",
    Tier.VALUE_FILES: "--values",
    Tier.JSON_VALUES: "--set-json",
    Tier.VALUES: "--set",
    Tier.STRING_VALUES: "--set-string",
    Tier.FILE_VALUES: "--set-file",
    Tier.LITERAL_VALUES: "--set-literal",
}


class ValueOptions(_pydantic.BaseModel):
    """The different ways to specify values, one list per tier."""

    model_config = _pydantic.ConfigDict(extra="forbid")

    values_directories: list[str] = _pydantic.Field(default_factory=list)
    """-d / --values-directory"""

    value_files: list[str] = _pydantic.Field(default_factory=list)
    """-f / --values"""

    json_values: list[str] = _pydantic.Field(default_factory=list)
    """--set-json"""

    values: list[str] = _pydantic.Field(default_factory=list)
    """--set"""

    string_values: list[str] = _pydantic.Field(default_factory=list)
    """--set-string"""

    file_values: list[str] = _pydantic.Field(default_factory=list)
    """--set-file"""

    literal_values: list[str] = _pydantic.Field(default_factory=list)
    """--set-literal"""

    def is_empty(self) -> bool:
        """True when no tier has any entry."""
        return not any(getattr(self, name) for name in type(self).model_fields)

    def collect_files(
        self,
        extension: str = constants.DEFAULT_DOCUMENT_EXTENSION,
    ) -> list[str]:
        """
        Build the ordered list of documents for the first two tiers.

        All files of each values directory come first (directories in the
        given order), followed by the explicit values files.

        Raises:
            stratum.errors.TraversalError: If a directory cannot be listed.
        """
        files: list[str] = []
        for directory in self.values_directories:
            found = walker.list_files_recursive(directory, extension)
            files.extend(str(path) for path in found)
        files.extend(self.value_files)
        return files

    def merge_values(
        self,
        providers: getter.Providers | None = None,
        *,
        stdin: _typing.BinaryIO | None = None,
        cancel: CancelToken | None = None,
        extension: str = constants.DEFAULT_DOCUMENT_EXTENSION,
    ) -> dict[str, _typing.Any]:
        """
        Merge the values from all tiers into a single tree.

        Args:
            providers: Registry for scheme-qualified references. Without one,
                every reference is read from the filesystem (or stdin).
            stdin: Stream used for the ``-`` reference.
            cancel: Checked before each entry; when set, the merge stops.
            extension: Extension of files collected from values directories.

        Returns:
            The merged values.

        Raises:
            stratum.errors.TraversalError: A values directory cannot be listed.
            stratum.errors.RetrievalError: A document cannot be fetched.
            stratum.errors.FormatError: A document or JSON object is malformed.
            stratum.errors.AssignmentSyntaxError: An inline assignment fails.
            stratum.errors.MergeCancelledError: ``cancel`` was set.
        """
        base: dict[str, _typing.Any] = {}

        # Tiers 1 and 2: documents, directory files first
        for directory in self.values_directories:
            _check_cancelled(cancel, directory)
        files = self.collect_files(extension)
        for path in files:
            _check_cancelled(cancel, path)
            _logger.debug("Merging values file %s", path)
            base = utils.merge_maps(base, loader.load_document(path, providers, stdin=stdin))

        # Tier 3: --set-json
        for value in self.json_values:
            _check_cancelled(cancel, value)
            base = _apply_json(value, base)

        # Tiers 4-7: inline assignments, applied in place
        def read_file(reference: str) -> str:
            return getter.read_source(reference, providers, stdin=stdin).decode("utf-8")

        inline: list[tuple[Tier, list[str], _Apply]] = [
            (Tier.VALUES, self.values, strvals.parse_into),
            (Tier.STRING_VALUES, self.string_values, strvals.parse_into_string),
            (
                Tier.FILE_VALUES,
                self.file_values,
                lambda text, dest: strvals.parse_into_file(text, dest, read_file),
            ),
            (Tier.LITERAL_VALUES, self.literal_values, strvals.parse_literal_into),
        ]
        for tier, entries, apply in inline:
            for entry in entries:
                _check_cancelled(cancel, entry)
                _logger.debug("Applying %s %s", tier.flag, entry)
                try:
                    apply(entry, base)
                except (ValueError, errors.RetrievalError) as e:
                    raise errors.AssignmentSyntaxError(entry, str(e), flag=tier.flag) from e

        return base


def _check_cancelled(cancel: CancelToken | None, source: str) -> None:
    if cancel is not None and cancel.is_set():
        _logger.debug("Merge cancelled at %s", source)
        raise errors.MergeCancelledError(source)


def _apply_json(value: str, base: dict[str, _typing.Any]) -> dict[str, _typing.Any]:
    """Merge a JSON object, or apply a ``key=<json>`` assignment in place."""
    trimmed = value.strip()
    if trimmed.startswith("{"):
        try:
            payload = _json.loads(trimmed)
        except _json.JSONDecodeError as e:
            raise errors.FormatError(
                value, f"invalid --set-json data JSON: {e.msg} at position {e.pos}"
            ) from e
        _logger.debug("Merging --set-json object")
        return utils.merge_maps(base, payload)

    _logger.debug("Applying --set-json %s", value)
    try:
        strvals.parse_json(value, base)
    except strvals.ParseError as e:
        raise errors.AssignmentSyntaxError(value, str(e), flag=Tier.JSON_VALUES.flag) from e
    return base


def merge_values(
    options: ValueOptions,
    providers: getter.Providers | None = None,
    *,
    stdin: _typing.BinaryIO | None = None,
    cancel: CancelToken | None = None,
    extension: str = constants.DEFAULT_DOCUMENT_EXTENSION,
) -> dict[str, _typing.Any]:
    """Merge ``options`` into one tree. See ValueOptions.merge_values."""
    return options.merge_values(providers, stdin=stdin, cancel=cancel, extension=extension)

