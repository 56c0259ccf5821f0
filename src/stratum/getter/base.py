"""
Base class for retrieval providers.

A provider fetches the raw bytes behind a reference for one or more URL
schemes (e.g. ``http`` and ``https``). Providers are collected in a
``Providers`` registry and selected by the scheme of the reference.
"""

from __future__ import annotations

import abc as _abc


class Provider(_abc.ABC):
    """Fetches raw bytes for references with a supported scheme."""

    schemes: tuple[str, ...] = ()
    """URL schemes this provider handles, lowercase."""

    @_abc.abstractmethod
    def get(self, reference: str) -> bytes:
        """
        Fetch the bytes behind ``reference``.

        Args:
            reference: Full reference including the scheme.

        Returns:
            Raw content.

        Raises:
            stratum.errors.RetrievalError: If the content cannot be fetched. Other
                exceptions are wrapped in RetrievalError by read_source.
        """
