"""Tests for the provider registry."""

import pytest as _pytest

import stratum.config as config
import stratum.getter as getter


class _FakeProvider(getter.Provider):
    schemes = ("fake", "FAKE2")

    def get(self, reference: str) -> bytes:
        return reference.encode()


class _OtherProvider(getter.Provider):
    schemes = ("fake",)

    def get(self, reference: str) -> bytes:
        return b""


class TestProviders:
    """Tests for Providers."""

    def test_create_empty_registry(self) -> None:
        registry = getter.Providers()
        assert len(registry) == 0
        assert registry.schemes() == []

    def test_register_all_schemes(self) -> None:
        """A provider is registered under each of its schemes, lowercased."""
        provider = _FakeProvider()
        registry = getter.Providers([provider])

        assert registry.schemes() == ["fake", "fake2"]
        assert registry.get("fake") is provider
        assert registry.get("Fake2") is provider
        assert "FAKE" in registry

    def test_register_duplicate_raises(self) -> None:
        registry = getter.Providers([_FakeProvider()])
        with _pytest.raises(ValueError, match="already registered"):
            registry.register(_OtherProvider())

    def test_get_unknown_returns_none(self) -> None:
        assert getter.Providers().get("ftp") is None

    def test_by_scheme_unknown_raises(self) -> None:
        registry = getter.Providers([_FakeProvider()])
        with _pytest.raises(KeyError, match="Available: fake, fake2"):
            registry.by_scheme("ftp")

    def test_default_providers_handle_http(self) -> None:
        registry = getter.default_providers()
        assert registry.schemes() == ["http", "https"]
        assert isinstance(registry.by_scheme("https"), getter.HTTPProvider)

    def test_default_providers_from_settings(self, clean_settings: config.Settings) -> None:
        registry = getter.default_providers(clean_settings)
        assert "http" in registry
