"""
Deterministic recursive listing of values directories.

Entries are visited in lexicographic order at every level, so for

    foo/
    ├── bar/
    │   └── bar.yaml
    ├── baz/
    │   ├── baz.yaml
    │   └── qux.yaml
    ├── baz.txt
    └── foo.yaml

``list_files_recursive("foo", ".yaml")`` returns
``foo/bar/bar.yaml, foo/baz/baz.yaml, foo/baz/qux.yaml, foo/foo.yaml``.
The merge order of a values directory depends on this ordering.
"""

from __future__ import annotations

import logging as _logging
import os as _os
import pathlib as _pathlib
import stat as _stat

import stratum.errors as errors

_logger = _logging.getLogger(__name__)


def _describe(e: OSError) -> str:
    return e.strerror or str(e)


def _extension(name: str) -> str:
    """Text from the last dot of ``name`` on, so ``.yaml`` is its own extension."""
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _matches(name: str, extension: str) -> bool:
    return not extension or _extension(name) == extension


def list_files_recursive(
    directory: str | _os.PathLike[str],
    extension: str = "",
) -> list[_pathlib.Path]:
    """
    List files below a directory, sorted lexicographically per level.

    A root that is a file is returned on its own when it matches
    ``extension``.

    Symlinks are listed as files and are not followed into directories, but
    they must resolve.

    Args:
        directory: Root directory to walk.
        extension: Suffix to keep, including the dot (e.g. ``".yaml"``).
            An empty string keeps every file.

    Returns:
        Paths of the matching files, each starting with ``directory``.

    Raises:
        stratum.errors.TraversalError: If the root is missing or any entry
            below it cannot be read.
    """
    root = _pathlib.Path(directory)
    source = _os.fspath(directory)
    try:
        root_stat = root.stat()
    except OSError as e:
        raise errors.TraversalError(
            source, f"failed to read file info for {str(root)!r}: {_describe(e)}"
        ) from e
    if not _stat.S_ISDIR(root_stat.st_mode):
        # A file root lists itself
        return [root] if _matches(root.name, extension) else []

    files: list[_pathlib.Path] = []
    _walk(root, extension, files, source)
    _logger.debug("Found %d file(s) in %s", len(files), source)
    return files


def _walk(
    path: _pathlib.Path,
    extension: str,
    files: list[_pathlib.Path],
    source: str,
) -> None:
    try:
        with _os.scandir(path) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise errors.TraversalError(
            source, f"failed to read file info for {str(path)!r}: {_describe(e)}"
        ) from e

    for entry in entries:
        entry_path = path / entry.name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            if not is_dir:
                entry.stat()
        except OSError as e:
            raise errors.TraversalError(
                source, f"failed to read file info for {str(entry_path)!r}: {_describe(e)}"
            ) from e

        if is_dir:
            _walk(entry_path, extension, files, source)
        elif _matches(entry.name, extension):
            files.append(entry_path)
