"""HTTP transport for search and document calls.

Sends one request and returns status + body. No retries: callers own retry
policy. Network errors are wrapped in `TransportFailure`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

import requests

from CloudSearchKit.errors import TransportFailure
from CloudSearchKit.utils.log import log

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "cloudsearch-kit/0.1",
    "Accept": "application/json",
}


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw HTTP response."""

    status: int
    reason: str
    body: bytes

    @property
    def ok(self) -> bool:
        return self.status == 200

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8") or "null")


class Transport(Protocol):
    """Protocol for the HTTP capability used by the client."""

    def get(self, url: str, *, headers: Mapping[str, str] | None = None, timeout: float | None = None) -> TransportResponse:
        raise NotImplementedError

    def post(
        self,
        url: str,
        *,
        body: bytes,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError


class HttpTransport:
    """`requests`-backed transport with a reusable session."""

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, session: requests.Session | None = None) -> None:
        """Initialize the transport.

        Args:
            timeout: Default timeout in seconds for every request.
            session: Optional pre-configured session.
        """
        self._timeout = timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the underlying HTTP session and release pooled connections.
        """
        self._session.close()

    def __enter__(self) -> HttpTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def get(self, url: str, *, headers: Mapping[str, str] | None = None, timeout: float | None = None) -> TransportResponse:
        return self._send("GET", url, body=None, headers=headers, timeout=timeout)

    def post(
        self,
        url: str,
        *,
        body: bytes,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> TransportResponse:
        return self._send("POST", url, body=body, headers=headers, timeout=timeout)

    def _send(
        self,
        method: str,
        url: str,
        *,
        body: bytes | None,
        headers: Mapping[str, str] | None,
        timeout: float | None,
    ) -> TransportResponse:
        merged = dict(HEADERS)
        if headers:
            merged.update(headers)
        try:
            resp = self._session.request(
                method,
                url,
                data=body,
                headers=merged,
                timeout=timeout or self._timeout,
            )
        except requests.exceptions.RequestException as e:
            log.debug("Transport %s failed: url=%s error=%s", method, url, e)
            raise TransportFailure(method, url, e) from e
        log.debug("Transport %s: status=%s bytes=%s", method, resp.status_code, len(resp.content))
        return TransportResponse(status=resp.status_code, reason=resp.reason or "", body=resp.content)
