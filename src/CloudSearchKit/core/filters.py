"""Structured filter expressions.

A filter is a small tree of frozen dataclasses:

- `Group`: ``and`` / ``or`` / ``not`` over ordered children
- `Equality`: ``field:value``
- `Range`: inclusive numeric range on one field
- `AnyOf`: any of several values on one field

Trees are built either with the helper constructors (`and_`, `or_`, `not_`,
`eq`, `between`, `any_of`) or from a nested mapping with
`filter_from_mapping`. How a tree maps to the service query grammar is
handled by `CloudSearchKit.query.boolean`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from CloudSearchKit.errors import UnsupportedValueTypeError

Scalar = Union[str, int, float, bool]
Number = Union[int, float]

OPERATORS = ("and", "or", "not")


@dataclass(frozen=True, slots=True)
class Group:
    """Boolean group over ordered child expressions."""

    operator: str
    children: tuple[FilterExpression, ...] = ()

    def __post_init__(self) -> None:
        op = str(self.operator).lower()
        if op not in OPERATORS:
            raise ValueError(f"Unsupported group operator: {self.operator!r}")
        object.__setattr__(self, "operator", op)
        object.__setattr__(self, "children", tuple(self.children))


@dataclass(frozen=True, slots=True)
class Equality:
    """Field equals value.

    ``None`` and ``""`` are accepted and render to nothing, so optional
    form values can be passed straight through.
    """

    field: str
    value: Scalar | None

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, (str, int, float)):
            raise UnsupportedValueTypeError(self.field, self.value)


@dataclass(frozen=True, slots=True)
class Range:
    """Inclusive numeric range on a field."""

    field: str
    min: Number
    max: Number

    def __post_init__(self) -> None:
        for bound in (self.min, self.max):
            if isinstance(bound, bool) or not isinstance(bound, (int, float)):
                raise UnsupportedValueTypeError(self.field, bound)


@dataclass(frozen=True, slots=True)
class AnyOf:
    """Field matches any of the given values, in the given order."""

    field: str
    values: tuple[Scalar, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))
        for value in self.values:
            if not isinstance(value, (str, int, float)):
                raise UnsupportedValueTypeError(self.field, value)


FilterExpression = Union[Group, Equality, Range, AnyOf]


def and_(*children: FilterExpression) -> Group:
    return Group("and", children)


def or_(*children: FilterExpression) -> Group:
    return Group("or", children)


def not_(*children: FilterExpression) -> Group:
    return Group("not", children)


def eq(field: str, value: Scalar | None) -> Equality:
    return Equality(field, value)


def between(field: str, low: Number, high: Number) -> Range:
    return Range(field, low, high)


def any_of(field: str, values: Sequence[Scalar]) -> AnyOf:
    return AnyOf(field, tuple(values))


def filter_from_mapping(terms: Mapping[str, Any]) -> tuple[FilterExpression, ...]:
    """Build filter expressions from a nested mapping.

    Reserved keys ``and`` / ``or`` / ``not`` with a mapping value become
    groups; every other key is a field name whose value decides the node:

    - `range` -> `Range` (min/max of the range)
    - list or tuple -> `AnyOf`
    - str / int / float / bool / None -> `Equality`

    Mapping order is preserved.

    Args:
        terms: Nested filter mapping, e.g. ``{"and": {"type": "donuts"}}``.

    Returns:
        Expressions in mapping order.

    Raises:
        UnsupportedValueTypeError: If a value has no filter representation.
    """
    out: list[FilterExpression] = []
    for key, value in terms.items():
        name = str(key)
        if name.lower() in OPERATORS and isinstance(value, Mapping):
            out.append(Group(name, filter_from_mapping(value)))
        elif isinstance(value, (Group, Equality, Range, AnyOf)):
            out.append(value)
        elif isinstance(value, range):
            if len(value) == 0:
                raise ValueError(f"Empty range for field {name!r}")
            out.append(Range(name, min(value), max(value)))
        elif isinstance(value, (list, tuple)):
            out.append(AnyOf(name, tuple(value)))
        else:
            out.append(Equality(name, value))
    return tuple(out)
