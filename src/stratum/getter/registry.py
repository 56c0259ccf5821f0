"""
Provider registry keyed by URL scheme.

The registry is always passed explicitly to the functions that read
sources; there is no process-wide default instance.
"""

from __future__ import annotations

import logging as _logging
import typing as _typing

import stratum.getter.base as base
import stratum.getter.http as http

if _typing.TYPE_CHECKING:
    import stratum.config as config

_logger = _logging.getLogger(__name__)


class Providers:
    """
    Registry of retrieval providers.

    Each scheme maps to exactly one provider. A provider that handles
    several schemes is registered under all of them.
    """

    def __init__(self, providers: _typing.Iterable[base.Provider] = ()) -> None:
        self._by_scheme: dict[str, base.Provider] = {}
        for provider in providers:
            self.register(provider)

    def register(self, provider: base.Provider) -> None:
        """
        Register a provider for all of its schemes.

        Args:
            provider: Provider instance to register

        Raises:
            ValueError: If one of its schemes is already registered
        """
        for scheme in provider.schemes:
            if scheme.lower() in self._by_scheme:
                raise ValueError(f"Scheme '{scheme}' is already registered")
        for scheme in provider.schemes:
            self._by_scheme[scheme.lower()] = provider
        _logger.debug(
            "Registered %s for schemes: %s",
            type(provider).__name__,
            ", ".join(provider.schemes),
        )

    def get(self, scheme: str) -> base.Provider | None:
        """
        Get the provider for a scheme.

        Args:
            scheme: URL scheme (case-insensitive)

        Returns:
            Provider instance or None if no provider handles the scheme
        """
        return self._by_scheme.get(scheme.lower())

    def by_scheme(self, scheme: str) -> base.Provider:
        """
        Get the provider for a scheme, raising if not found.

        Args:
            scheme: URL scheme (case-insensitive)

        Returns:
            Provider instance

        Raises:
            KeyError: If no provider handles the scheme
        """
        provider = self.get(scheme)
        if provider is None:
            available = ", ".join(self.schemes())
            raise KeyError(f"No provider for scheme '{scheme}'. Available: {available}")
        return provider

    def schemes(self) -> list[str]:
        """
        List registered schemes.

        Returns:
            Sorted list of schemes
        """
        return sorted(self._by_scheme)

    def __len__(self) -> int:
        return len(self._by_scheme)

    def __contains__(self, scheme: str) -> bool:
        return scheme.lower() in self._by_scheme


def default_providers(settings: config.Settings | None = None) -> Providers:
    """
    Build the registry used by the CLI.

    Args:
        settings: Settings supplying the HTTP timeout and User-Agent.
            Defaults are used when omitted.

    Returns:
        Registry with the HTTP(S) provider registered.
    """
    if settings is None:
        return Providers([http.HTTPProvider()])
    return Providers(
        [http.HTTPProvider(timeout=settings.http_timeout, user_agent=settings.user_agent)]
    )
