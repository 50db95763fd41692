"""Facet parameter compiler."""

from __future__ import annotations

from typing import Any, Mapping

from CloudSearchKit.core.request import FacetSpec
from CloudSearchKit.query.escape import escape

_EMPTY_OPTIONS = escape("{}")


def _option_literal(options: Mapping[str, Any]) -> str:
    """Render an options mapping as ``{key:'text',key:5}``.

    String values are single-quoted, numbers are bare, anything else is dropped.
    """
    pairs: list[str] = []
    for name, value in options.items():
        if isinstance(value, str):
            pairs.append(f"{name}:'{value}'")
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            pairs.append(f"{name}:{value}")
    return "{" + ",".join(pairs) + "}"


def compile_facets(spec: FacetSpec) -> str:
    """Compile a facet spec into ``&facet.<field>=<options>`` fragments.

    Args:
        spec: Facet request.

    Returns:
        Concatenated fragments in field order; empty for an empty spec.
    """
    parts: list[str] = []
    for name in spec.fields:
        options = spec.options.get(name)
        if options is None:
            parts.append(f"&facet.{name}={_EMPTY_OPTIONS}")
        else:
            parts.append(f"&facet.{name}={escape(_option_literal(options))}")
    return "".join(parts)
