"""Command runner for coordinating CLI execution.

Configures logging, builds the domain client from config, runs a command,
and maps failures to `click.Abort`.
"""

from __future__ import annotations

from typing import Callable, Protocol

import click

from CloudSearchKit.client.search import CloudSearchClient
from CloudSearchKit.client.transport import HttpTransport, Transport
from CloudSearchKit.config import AppConfig
from CloudSearchKit.signing.credentials import CredentialProvider, SessionCredentialProvider
from CloudSearchKit.utils.log import configure_logging, log


class Command(Protocol):
    def execute(self) -> None:
        raise NotImplementedError


class CommandRunner:
    """Orchestrates command execution with proper resource management."""

    def __init__(
        self,
        config: AppConfig,
        *,
        transport: Transport | None = None,
        credentials: CredentialProvider | None = None,
    ) -> None:
        """Initialize command runner.

        Args:
            config: Application configuration.
            transport: Optional transport override (tests use a stub).
            credentials: Optional credential provider override.
        """
        self.config = config
        self.transport = transport
        self.credentials = credentials or SessionCredentialProvider(profile_name=config.domain.profile)

    def create_client(self) -> CloudSearchClient:
        domain = self.config.domain
        return CloudSearchClient(
            domain.name,
            region=domain.region,
            api_version=domain.api_version,
            transport=self.transport or HttpTransport(timeout=domain.timeout),
            credentials=self.credentials,
            mode=domain.mode,
            timeout=domain.timeout,
        )

    def run(self, action: str, build: Callable[[CloudSearchClient], Command]) -> None:
        """Execute one command with logging configured and the client closed afterwards.

        Args:
            action: The CLI command name (e.g., 'search').
            build: Factory producing the command for a ready client.

        Raises:
            click.Abort: When the command fails.
        """

        def execute() -> None:
            with self.create_client() as client:
                build(client).execute()

        self._guarded(action, execute)

    def run_local(self, action: str, command: Command) -> None:
        """Execute a command that needs no client or HTTP session.

        Raises:
            click.Abort: When the command fails.
        """
        self._guarded(action, command.execute)

    def _guarded(self, action: str, execute: Callable[[], None]) -> None:
        configure_logging(
            level=self.config.runtime.level,
            action=action,
            log_to_file=self.config.runtime.to_file,
            log_dir=self.config.runtime.dir,
        )
        try:
            execute()
        except Exception as e:  # noqa: BLE001 - cli boundary
            log.error("%s failed: %s", action.capitalize(), e)
            raise click.Abort from e
