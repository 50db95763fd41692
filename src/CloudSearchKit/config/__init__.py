from __future__ import annotations

"""Public configuration API for CloudSearchKit."""

from CloudSearchKit.config.app import (
    AppConfig,
    load_config,
    load_config_with_defaults,
    merge_config_dicts,
    parse_config_dict,
)
from CloudSearchKit.config.domain import DomainConfig
from CloudSearchKit.config.runtime import RuntimeConfig
from CloudSearchKit.config.search import SearchConfig

__all__ = [
    "AppConfig",
    "DomainConfig",
    "RuntimeConfig",
    "SearchConfig",
    "load_config",
    "load_config_with_defaults",
    "merge_config_dicts",
    "parse_config_dict",
]
