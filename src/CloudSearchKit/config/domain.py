"""Search domain configuration: endpoint identity, mode, and request timeout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CloudSearchKit.client.search import ClientMode
from CloudSearchKit.config.common import (
    expect_choice,
    expect_float,
    expect_str,
    get_required_value,
    get_section,
)
from CloudSearchKit.query.url import DEFAULT_API_VERSION, DEFAULT_REGION

_ALLOWED_MODES = frozenset(mode.value for mode in ClientMode)


@dataclass(frozen=True, slots=True)
class DomainConfig:
    """Store validated domain settings."""

    name: str
    region: str = DEFAULT_REGION
    api_version: str = DEFAULT_API_VERSION
    mode: str = ClientMode.LIVE.value
    timeout: float = 30.0
    profile: str | None = None


def load_domain(raw: Mapping[str, Any]) -> DomainConfig:
    """Load the required ``domain`` section.

    Args:
        raw: Root configuration mapping.

    Returns:
        Parsed domain configuration.

    Raises:
        TypeError: If config types are invalid.
        ValueError: If ``domain.name`` is missing or ``domain.mode`` is unknown.
    """
    section = get_section(raw, "domain", required=True)
    return DomainConfig(
        name=expect_str(get_required_value(section, "name", "domain.name"), "domain.name").strip(),
        region=expect_str(section.get("region", DEFAULT_REGION), "domain.region").strip(),
        api_version=expect_str(section.get("api_version", DEFAULT_API_VERSION), "domain.api_version").strip(),
        mode=expect_choice(section.get("mode", ClientMode.LIVE.value), _ALLOWED_MODES, "domain.mode"),
        timeout=expect_float(section.get("timeout", 30.0), "domain.timeout"),
        profile=_optional_profile(section.get("profile")),
    )


def _optional_profile(value: Any) -> str | None:
    if value is None:
        return None
    return expect_str(value, "domain.profile").strip() or None


def check_domain(config: DomainConfig) -> None:
    """Validate domain constraints.

    Raises:
        ValueError: If values violate domain constraints.
    """
    if not config.name:
        raise ValueError("domain.name must not be empty")
    if not config.region:
        raise ValueError("domain.region must not be empty")
    if not config.api_version:
        raise ValueError("domain.api_version must not be empty")
    if config.timeout <= 0:
        raise ValueError("domain.timeout must be positive")
