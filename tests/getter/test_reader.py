"""Tests for resolving references to bytes."""

import io as _io
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import stratum.errors as errors
import stratum.getter as getter


class _RecordingProvider(getter.Provider):
    """Provider that records requests and returns canned content."""

    schemes = ("mem",)

    def __init__(
        self,
        content: bytes = b"a: 1\n",
        fail: bool = False,
        error: Exception | None = None,
    ) -> None:
        self.requests: list[str] = []
        self._content = content
        self._fail = fail
        self._error = error

    def get(self, reference: str) -> bytes:
        self.requests.append(reference)
        if self._fail:
            raise errors.RetrievalError(reference, "backend unavailable")
        if self._error is not None:
            raise self._error
        return self._content


class _BrokenStream(_io.BytesIO):
    def read(self, size: int | None = -1) -> bytes:
        raise OSError("stream closed")


class TestParseLocator:
    """Tests for parse_locator."""

    def test_plain_path_has_no_scheme(self) -> None:
        assert getter.parse_locator("values/prod.yaml").scheme == ""

    def test_url_scheme(self) -> None:
        assert getter.parse_locator("https://example.com/v.yaml").scheme == "https"

    def test_invalid_percent_escape(self) -> None:
        with _pytest.raises(ValueError, match="invalid URL escape"):
            getter.parse_locator("%a.txt")

    def test_valid_percent_escape(self) -> None:
        assert getter.parse_locator("file%20name.yaml").path == "file%20name.yaml"


class TestReadSource:
    """Tests for read_source resolution order."""

    def test_reads_local_file(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "values.yaml"
        path.write_bytes(b"name: value\n")
        assert getter.read_source(str(path)) == b"name: value\n"

    def test_missing_file_raises(self, tmp_path: _pathlib.Path) -> None:
        missing = str(tmp_path / "missing.yaml")
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source(missing)
        assert exc_info.value.source == missing
        assert missing in str(exc_info.value)

    def test_invalid_locator_raises(self) -> None:
        """A reference that is not a valid locator is a retrieval error."""
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source("%a.txt", getter.Providers())
        assert exc_info.value.source == "%a.txt"

    def test_stdin_sentinel(self) -> None:
        stream = _io.BytesIO(b"from: stdin\n")
        assert getter.read_source("-", stdin=stream) == b"from: stdin\n"

    def test_stdin_sentinel_is_trimmed(self) -> None:
        stream = _io.BytesIO(b"x: 1\n")
        assert getter.read_source("  -  ", stdin=stream) == b"x: 1\n"

    def test_second_stdin_read_is_empty(self) -> None:
        """Reading stdin twice yields nothing the second time."""
        stream = _io.BytesIO(b"x: 1\n")
        assert getter.read_source("-", stdin=stream) == b"x: 1\n"
        assert getter.read_source("-", stdin=stream) == b""

    def test_stdin_failure_raises(self) -> None:
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source("-", stdin=_typing.cast(_typing.BinaryIO, _BrokenStream()))
        assert exc_info.value.source == "-"

    def test_registered_scheme_uses_provider(self) -> None:
        provider = _RecordingProvider(b"remote: true\n")
        registry = getter.Providers([provider])

        content = getter.read_source("mem://bucket/values.yaml", registry)

        assert content == b"remote: true\n"
        assert provider.requests == ["mem://bucket/values.yaml"]

    def test_provider_error_propagates(self) -> None:
        registry = getter.Providers([_RecordingProvider(fail=True)])
        with _pytest.raises(errors.RetrievalError, match="backend unavailable"):
            getter.read_source("mem://x", registry)

    def test_provider_error_is_not_wrapped_twice(self) -> None:
        registry = getter.Providers([_RecordingProvider(fail=True)])
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source("mem://x", registry)
        assert exc_info.value.message == "failed to read 'mem://x': backend unavailable"

    @_pytest.mark.parametrize(
        "error",
        [OSError("disk gone"), RuntimeError("client crashed"), ValueError("bad reply")],
    )
    def test_any_provider_error_becomes_retrieval_error(self, error: Exception) -> None:
        registry = getter.Providers([_RecordingProvider(error=error)])
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source("mem://x", registry)
        assert exc_info.value.source == "mem://x"
        assert str(error) in str(exc_info.value)
        assert exc_info.value.__cause__ is error

    def test_unknown_scheme_falls_back_to_filesystem(self) -> None:
        """Without a provider for the scheme, the reference is read as a path."""
        registry = getter.Providers([_RecordingProvider()])
        with _pytest.raises(errors.RetrievalError) as exc_info:
            getter.read_source("ftp://example.com/values.yaml", registry)
        assert exc_info.value.source == "ftp://example.com/values.yaml"

    def test_plain_path_skips_providers(self, tmp_path: _pathlib.Path) -> None:
        provider = _RecordingProvider()
        path = tmp_path / "local.yaml"
        path.write_bytes(b"local: 1\n")

        content = getter.read_source(str(path), getter.Providers([provider]))

        assert content == b"local: 1\n"
        assert provider.requests == []
