from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Sequence, Union

from CloudSearchKit.core.filters import AnyOf, Equality, FilterExpression, Group, Range, filter_from_mapping

DEFAULT_PAGE_SIZE = 10
SORT_DIRECTIONS = ("asc", "desc")

FacetOptionValue = Union[str, int, float]
FilterInput = Union[FilterExpression, Mapping[str, Any], Sequence[FilterExpression]]


@dataclass(frozen=True, slots=True)
class FacetSpec:
    """Facet request over one or more fields.

    Either a plain field list (each rendered with empty options) or a mapping
    from field name to an options mapping such as ``{"sort": "count", "size": 5}``.
    Field order and option order are preserved.

    Attributes:
        fields: Field names in request order.
        options: Per-field options; empty for plain field facets.
    """

    fields: tuple[str, ...]
    options: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(str(f) for f in self.fields))
        object.__setattr__(
            self,
            "options",
            MappingProxyType({str(k): MappingProxyType(dict(v)) for k, v in self.options.items()}),
        )

    @classmethod
    def of_fields(cls, names: Iterable[str]) -> FacetSpec:
        return cls(fields=tuple(names))

    @classmethod
    def of_options(cls, options: Mapping[str, Mapping[str, Any]]) -> FacetSpec:
        return cls(fields=tuple(options.keys()), options=options)

    @classmethod
    def coerce(cls, value: FacetSpec | Mapping[str, Mapping[str, Any]] | Iterable[str]) -> FacetSpec:
        """Accept a FacetSpec, an options mapping, or a list of field names."""
        if isinstance(value, FacetSpec):
            return value
        if isinstance(value, Mapping):
            return cls.of_options(value)
        if isinstance(value, str):
            return cls.of_fields((value,))
        return cls.of_fields(value)


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Sort directive: field plus ``asc`` (default) or ``desc``."""

    field: str
    direction: str = "asc"

    def __post_init__(self) -> None:
        direction = str(self.direction or "asc").lower()
        if direction not in SORT_DIRECTIONS:
            raise ValueError(f"Sort direction must be one of {SORT_DIRECTIONS}: {self.direction!r}")
        object.__setattr__(self, "direction", direction)

    @classmethod
    def coerce(cls, value: SortSpec | str | Sequence[str]) -> SortSpec:
        """Accept a SortSpec, a bare field name, or a ``(field[, direction])`` sequence."""
        if isinstance(value, SortSpec):
            return value
        if isinstance(value, str):
            return cls(value)
        parts = list(value)
        if not parts or len(parts) > 2:
            raise ValueError(f"Sort must be (field[, direction]): {value!r}")
        return cls(*parts)


@dataclass(frozen=True, slots=True)
class PageSpec:
    """1-based page number and page size."""

    page: int
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        object.__setattr__(self, "page", int(self.page))
        object.__setattr__(self, "page_size", int(self.page_size))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Normalized search intent passed to the URL builder.

    Build instances with `by_term` or `by_filter` rather than the raw
    constructor so option coercion happens in one place.

    Attributes:
        term: Free-text search term; empty for filter-only searches.
        filters: Top-level filter expressions, rendered back to back.
        facets: Optional facet request.
        sort: Optional sort directive.
        page: Optional 1-based page number.
        page_size: Results per page.
        return_fields: Optional field names to return with each hit.
    """

    term: str = ""
    filters: tuple[FilterExpression, ...] = ()
    facets: FacetSpec | None = None
    sort: SortSpec | None = None
    page: int | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    return_fields: tuple[str, ...] | None = None

    @property
    def page_spec(self) -> PageSpec | None:
        if self.page is None:
            return None
        return PageSpec(self.page, self.page_size)

    @classmethod
    def by_term(
        cls,
        term: str,
        *,
        filter: FilterInput | None = None,  # noqa: A002 - mirrors the service parameter name
        facets: FacetSpec | Mapping[str, Mapping[str, Any]] | Iterable[str] | None = None,
        sort: SortSpec | str | Sequence[str] | None = None,
        page: int | None = None,
        page_size: int | None = None,
        return_fields: Iterable[str] | None = None,
    ) -> SearchRequest:
        """Build a request for a free-text term with optional options."""
        return cls(
            term="" if term is None else str(term),
            filters=_coerce_filters(filter),
            facets=FacetSpec.coerce(facets) if facets is not None else None,
            sort=SortSpec.coerce(sort) if sort is not None else None,
            page=int(page) if page is not None else None,
            page_size=DEFAULT_PAGE_SIZE if page_size is None else int(page_size),
            return_fields=tuple(str(f) for f in return_fields) if return_fields is not None else None,
        )

    @classmethod
    def by_filter(cls, filter: FilterInput, **options: Any) -> SearchRequest:  # noqa: A002
        """Build a filter-only request; the search term is empty."""
        return cls.by_term("", filter=filter, **options)


def _coerce_filters(value: FilterInput | None) -> tuple[FilterExpression, ...]:
    if value is None:
        return ()
    if isinstance(value, (Group, Equality, Range, AnyOf)):
        return (value,)
    if isinstance(value, Mapping):
        return filter_from_mapping(value)
    return tuple(value)
