"""
HTTP(S) retrieval provider backed by httpx.
"""

from __future__ import annotations

import logging as _logging

import httpx as _httpx

import stratum.constants as constants
import stratum.errors as errors
import stratum.getter.base as base

_logger = _logging.getLogger(__name__)


class HTTPProvider(base.Provider):
    """
    Fetch values documents over HTTP(S).

    Redirects are followed. Any transport error or non-2xx response is a
    RetrievalError; nothing is retried.
    """

    schemes = ("http", "https")

    def __init__(
        self,
        *,
        timeout: float = constants.DEFAULT_HTTP_TIMEOUT,
        user_agent: str = constants.DEFAULT_USER_AGENT,
        transport: _httpx.BaseTransport | None = None,
    ) -> None:
        """
        Initialize the provider.

        Args:
            timeout: Request timeout in seconds.
            user_agent: Value of the User-Agent header.
            transport: Optional httpx transport (used by tests to mock responses).
        """
        self._timeout = timeout
        self._user_agent = user_agent
        self._transport = transport

    def get(self, reference: str) -> bytes:
        _logger.debug("Fetching %s", reference)
        try:
            with _httpx.Client(
                timeout=self._timeout,
                headers={"User-Agent": self._user_agent},
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(reference)
                response.raise_for_status()
        except _httpx.HTTPStatusError as e:
            raise errors.RetrievalError(
                reference, f"HTTP {e.response.status_code} {e.response.reason_phrase}"
            ) from e
        except _httpx.HTTPError as e:
            raise errors.RetrievalError(reference, str(e) or type(e).__name__) from e
        return response.content
