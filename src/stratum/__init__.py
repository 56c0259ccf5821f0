"""
Stratum - layered configuration value resolution.

Collects values from directories of YAML documents, explicit values files,
JSON payloads and inline assignments, and folds them into one tree in a
fixed precedence order.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("stratum")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Stratum Contributors"

from stratum.config import Settings  # noqa: E402
from stratum.values import ValueOptions, merge_values  # noqa: E402

__all__ = ["__version__", "__version_info__", "Settings", "ValueOptions", "merge_values"]
