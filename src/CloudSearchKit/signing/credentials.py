"""Credentials and credential providers for request signing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError

from CloudSearchKit.errors import MissingCredentialsError


@dataclass(frozen=True, slots=True)
class Credential:
    """Access key pair, optionally with a temporary session token."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)


class CredentialProvider(Protocol):
    """Anything that can hand out a credential for one signing operation."""

    def __call__(self) -> Credential:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class StaticCredentialProvider:
    """Provider that always returns the same credential."""

    credential: Credential

    def __call__(self) -> Credential:
        return self.credential


class SessionCredentialProvider:
    """Resolve credentials through the boto3 default credential chain.

    The chain covers environment variables, the shared credentials and config
    files, and container or instance roles. Temporary credentials are
    refreshed by botocore; each call takes a frozen snapshot so the key, secret
    and token used for one signature always belong together.
    """

    def __init__(self, *, profile_name: str | None = None, session: boto3.Session | None = None) -> None:
        """Initialize the provider.

        Args:
            profile_name: Named profile from the shared config files.
            session: Pre-built session; created on first use when omitted.
        """
        self._profile_name = profile_name
        self._session = session

    @property
    def session(self) -> boto3.Session:
        if self._session is None:
            self._session = boto3.Session(profile_name=self._profile_name)
        return self._session

    def __call__(self) -> Credential:
        try:
            resolved = self.session.get_credentials()
        except BotoCoreError as e:
            raise MissingCredentialsError(f"Could not resolve AWS credentials: {e}") from e
        if resolved is None:
            raise MissingCredentialsError(
                "No AWS credentials found; set AWS_ACCESS_KEY_ID/AWS_SECRET_ACCESS_KEY or configure a profile"
            )
        frozen = resolved.get_frozen_credentials()
        if not frozen.access_key or not frozen.secret_key:
            raise MissingCredentialsError("Resolved AWS credentials are incomplete")
        return Credential(frozen.access_key, frozen.secret_key, frozen.token or None)
