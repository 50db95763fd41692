"""Structured-query compiler.

Compiles `FilterExpression` trees into the service's structured query
grammar, already percent-encoded for the ``fq`` parameter.

Rules
- Group    -> ``(<op>%20<child><child>...)``; children that render empty are
  dropped, and a group with no surviving child renders empty.
- Equality -> ``field:<int>`` for integers, ``field:'<text>'`` otherwise;
  ``None`` / ``""`` render empty. Booleans use their lowercase text form.
- Range    -> the encoded fragment ``(range field=<f> [<min>, <max>])``.
- AnyOf    -> ``(or%20field:'a'%20field:'b')``; strings quoted, others bare.

Children and values keep their input order; nothing is sorted or deduplicated.
"""

from __future__ import annotations

from typing import Iterable

from CloudSearchKit.core.filters import AnyOf, Equality, FilterExpression, Group, Range
from CloudSearchKit.query.escape import escape

SPACE = "%20"


def _text(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _compile_group(group: Group) -> str:
    joined = compile_filters(group.children)
    if not joined:
        return ""
    return f"({group.operator}{SPACE}{joined})"


def _compile_equality(term: Equality) -> str:
    value = term.value
    if isinstance(value, int) and not isinstance(value, bool):
        return f"{term.field}:{escape(value)}"
    text = "" if value is None else _text(value)
    if not text:
        return ""
    return f"{term.field}:'{escape(text)}'"


def _compile_range(term: Range) -> str:
    return escape(f"(range field={term.field} [{term.min}, {term.max}])")


def _compile_any_of(term: AnyOf) -> str:
    if not term.values:
        return ""
    parts = []
    for value in term.values:
        if isinstance(value, str):
            parts.append(f"{term.field}:'{escape(value)}'")
        else:
            parts.append(f"{term.field}:{escape(_text(value))}")
    return f"(or{SPACE}" + SPACE.join(parts) + ")"


def compile_filter(expr: FilterExpression) -> str:
    """Compile one filter expression.

    Args:
        expr: Filter expression tree.

    Returns:
        Encoded structured query fragment, possibly empty.

    Raises:
        TypeError: If ``expr`` is not a filter expression.
    """
    if isinstance(expr, Group):
        return _compile_group(expr)
    if isinstance(expr, Equality):
        return _compile_equality(expr)
    if isinstance(expr, Range):
        return _compile_range(expr)
    if isinstance(expr, AnyOf):
        return _compile_any_of(expr)
    raise TypeError(f"Not a filter expression: {type(expr).__name__}")


def compile_filters(exprs: Iterable[FilterExpression]) -> str:
    """Compile expressions and concatenate the non-empty results in order."""
    return "".join(compile_filter(expr) for expr in exprs)
