"""SigV4 request signing and credential providers."""

from __future__ import annotations

from CloudSearchKit.signing.credentials import (
    Credential,
    CredentialProvider,
    SessionCredentialProvider,
    StaticCredentialProvider,
)
from CloudSearchKit.signing.sigv4 import RequestSigner, sign

__all__ = [
    "Credential",
    "CredentialProvider",
    "RequestSigner",
    "SessionCredentialProvider",
    "StaticCredentialProvider",
    "sign",
]
