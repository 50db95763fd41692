"""Search defaults configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from CloudSearchKit.config.common import (
    expect_int,
    expect_str_list,
    get_section,
)
from CloudSearchKit.core.request import DEFAULT_PAGE_SIZE


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Defaults applied to CLI searches when no option overrides them."""

    page_size: int = DEFAULT_PAGE_SIZE
    return_fields: tuple[str, ...] = ()


def load_search(raw: Mapping[str, Any]) -> SearchConfig:
    """Load the optional ``search`` section."""
    section = get_section(raw, "search", required=False)
    return SearchConfig(
        page_size=expect_int(section.get("page_size", DEFAULT_PAGE_SIZE), "search.page_size"),
        return_fields=tuple(expect_str_list(section.get("return_fields", []), "search.return_fields")),
    )


def check_search(config: SearchConfig) -> None:
    if config.page_size <= 0:
        raise ValueError("search.page_size must be positive")
    for idx, name in enumerate(config.return_fields):
        if not name.strip():
            raise ValueError(f"search.return_fields[{idx}] must not be empty")
