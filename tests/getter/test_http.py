"""Tests for the HTTP(S) provider using a mocked httpx transport."""

import httpx as _httpx
import pytest as _pytest

import stratum.errors as errors
import stratum.getter as getter


def _provider(handler: object, **kwargs: object) -> getter.HTTPProvider:
    transport = _httpx.MockTransport(handler)  # type: ignore[arg-type]
    return getter.HTTPProvider(transport=transport, **kwargs)  # type: ignore[arg-type]


class TestHTTPProvider:
    """Tests for HTTPProvider.get."""

    def test_schemes(self) -> None:
        assert getter.HTTPProvider.schemes == ("http", "https")

    def test_returns_body(self) -> None:
        def handler(request: _httpx.Request) -> _httpx.Response:
            return _httpx.Response(200, content=b"replicas: 3\n")

        assert _provider(handler).get("https://example.com/values.yaml") == b"replicas: 3\n"

    def test_sends_user_agent(self) -> None:
        seen: list[str] = []

        def handler(request: _httpx.Request) -> _httpx.Response:
            seen.append(request.headers["User-Agent"])
            return _httpx.Response(200, content=b"")

        _provider(handler, user_agent="stratum-test").get("http://example.com/v.yaml")
        assert seen == ["stratum-test"]

    def test_http_error_status(self) -> None:
        def handler(request: _httpx.Request) -> _httpx.Response:
            return _httpx.Response(404)

        with _pytest.raises(errors.RetrievalError, match="HTTP 404") as exc_info:
            _provider(handler).get("https://example.com/missing.yaml")
        assert exc_info.value.source == "https://example.com/missing.yaml"

    def test_transport_error(self) -> None:
        def handler(request: _httpx.Request) -> _httpx.Response:
            raise _httpx.ConnectError("connection refused", request=request)

        with _pytest.raises(errors.RetrievalError, match="connection refused"):
            _provider(handler).get("https://unreachable.invalid/values.yaml")

    def test_used_by_read_source(self) -> None:
        def handler(request: _httpx.Request) -> _httpx.Response:
            return _httpx.Response(200, content=b"from: url\n")

        registry = getter.Providers([_provider(handler)])
        assert getter.read_source("https://example.com/v.yaml", registry) == b"from: url\n"
