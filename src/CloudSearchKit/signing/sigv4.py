"""AWS Signature Version 4 request signer.

Only the ``host`` header is signed. The canonical request is::

    <METHOD>
    <path>
    <canonical query>
    host:<host>
    <empty line>
    host
    <hex sha256 of body>

and the signing key is derived with the HMAC-SHA256 chain
date -> region -> service -> ``aws4_request``.
"""

from __future__ import annotations

import hashlib
import hmac
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Final, Union
from urllib.parse import urlsplit

from CloudSearchKit.errors import MalformedHostError
from CloudSearchKit.query.escape import canonicalize_query
from CloudSearchKit.signing.credentials import Credential

ALGORITHM: Final[str] = "AWS4-HMAC-SHA256"
TERMINATOR: Final[str] = "aws4_request"
SIGNED_HEADERS: Final[str] = "host"

AUTHORIZATION_HEADER: Final[str] = "Authorization"
DATE_HEADER: Final[str] = "X-Amz-Date"
SECURITY_TOKEN_HEADER: Final[str] = "X-Amz-Security-Token"

_HOST_RE = re.compile(r"^.+\.(?P<region>[^.]+)\.(?P<service>[^.]+)\.amazonaws\.com$")

Clock = Callable[[], datetime]
Body = Union[bytes, str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _hmac(key: bytes, message: str) -> bytes:
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _to_utc_seconds(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).replace(microsecond=0)


def parse_scope(host: str) -> tuple[str, str]:
    """Extract ``(region, service)`` from ``<prefix>.<region>.<service>.amazonaws.com``.

    Raises:
        MalformedHostError: If the host does not have that shape.
    """
    match = _HOST_RE.match(host or "")
    if match is None:
        raise MalformedHostError(host)
    return match.group("region"), match.group("service")


def signing_key(secret_access_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Derive the per-day, per-region, per-service signing key."""
    k_date = _hmac(("AWS4" + secret_access_key).encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


@dataclass(frozen=True, slots=True)
class RequestSigner:
    """Signature for one HTTP request.

    Attributes:
        method: HTTP method, e.g. ``POST``.
        url: Full target URL including any query string.
        body: Request body.
        timestamp: Signing time; truncated to whole seconds in UTC.
    """

    method: str
    url: str
    body: bytes
    timestamp: datetime

    def __post_init__(self) -> None:
        body = self.body.encode("utf-8") if isinstance(self.body, str) else bytes(self.body or b"")
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "timestamp", _to_utc_seconds(self.timestamp))

    @property
    def host(self) -> str:
        return urlsplit(self.url).hostname or ""

    @property
    def region(self) -> str:
        return parse_scope(self.host)[0]

    @property
    def service(self) -> str:
        return parse_scope(self.host)[1]

    @property
    def amz_date(self) -> str:
        return self.timestamp.strftime("%Y%m%dT%H%M%SZ")

    @property
    def date_stamp(self) -> str:
        return self.timestamp.strftime("%Y%m%d")

    @property
    def credential_scope(self) -> str:
        region, service = parse_scope(self.host)
        return f"{self.date_stamp}/{region}/{service}/{TERMINATOR}"

    def canonical_request(self) -> str:
        parts = urlsplit(self.url)
        return "\n".join(
            [
                self.method,
                parts.path or "/",
                canonicalize_query(parts.query),
                f"host:{self.host}\n",
                SIGNED_HEADERS,
                _sha256_hex(self.body),
            ]
        )

    def string_to_sign(self) -> str:
        return "\n".join(
            [
                ALGORITHM,
                self.amz_date,
                self.credential_scope,
                _sha256_hex(self.canonical_request().encode("utf-8")),
            ]
        )

    def signature(self, credential: Credential) -> str:
        region, service = parse_scope(self.host)
        key = signing_key(credential.secret_access_key, self.date_stamp, region, service)
        return hmac.new(key, self.string_to_sign().encode("utf-8"), hashlib.sha256).hexdigest()

    def headers(self, credential: Credential) -> dict[str, str]:
        """Return the headers that authenticate this request.

        Args:
            credential: Credential to sign with.

        Returns:
            ``Authorization`` and ``X-Amz-Date``, plus ``X-Amz-Security-Token``
            when the credential carries a session token.
        """
        authorization = (
            f"{ALGORITHM} Credential={credential.access_key_id}/{self.credential_scope}, "
            f"SignedHeaders={SIGNED_HEADERS}, Signature={self.signature(credential)}"
        )
        headers = {
            AUTHORIZATION_HEADER: authorization,
            DATE_HEADER: self.amz_date,
        }
        if credential.session_token:
            headers[SECURITY_TOKEN_HEADER] = credential.session_token
        return headers


def sign(
    method: str,
    url: str,
    body: Body,
    credential: Credential,
    clock: Clock | None = None,
) -> dict[str, str]:
    """Sign one request and return its authentication headers.

    Args:
        method: HTTP method.
        url: Full target URL.
        body: Request body.
        credential: Credential to sign with.
        clock: Zero-argument callable returning the signing time;
            defaults to the current UTC time.

    Returns:
        Header mapping to merge into the outgoing request.

    Raises:
        MalformedHostError: If region/service cannot be read from the URL host.
    """
    signer = RequestSigner(method=method, url=url, body=body, timestamp=(clock or utc_now)())
    return signer.headers(credential)
