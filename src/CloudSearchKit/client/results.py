"""Search result page."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence, Union

from CloudSearchKit.core.request import DEFAULT_PAGE_SIZE

Hit = Union[str, Mapping[str, Mapping[str, Any]]]


@dataclass(frozen=True, slots=True)
class SearchPage(Sequence[str]):
    """One page of matching document ids.

    When the service returns field data for hits (``return`` parameter),
    `fields` maps each id to its returned fields.

    Attributes:
        ids: Document ids in service order.
        total_entries: Total number of matches across all pages.
        offset: Zero-based index of the first hit on this page.
        page_size: Requested page size.
        fields: Returned fields per id; empty when none were requested.
    """

    ids: tuple[str, ...]
    total_entries: int
    offset: int
    page_size: int = DEFAULT_PAGE_SIZE
    fields: Mapping[str, Mapping[str, Any]] | None = None

    @classmethod
    def empty(cls, page_size: int = DEFAULT_PAGE_SIZE) -> SearchPage:
        return cls(ids=(), total_entries=0, offset=0, page_size=page_size)

    @classmethod
    def from_payload(cls, payload: Any, page_size: int = DEFAULT_PAGE_SIZE) -> SearchPage:
        """Build a page from a decoded search response.

        Args:
            payload: Decoded JSON body, ``{"hits": {"found", "start", "hit": [...]}}``.
            page_size: Page size the request was made with.

        Returns:
            Parsed page; malformed parts are treated as empty.
        """
        hits = payload.get("hits", {}) if isinstance(payload, Mapping) else {}
        if not isinstance(hits, Mapping):
            hits = {}
        raw_hits = hits.get("hit", [])
        if not isinstance(raw_hits, list):
            raw_hits = []

        ids: list[str] = []
        fields: dict[str, Mapping[str, Any]] = {}
        for hit in raw_hits:
            if not isinstance(hit, Mapping) or "id" not in hit:
                continue
            doc_id = str(hit["id"])
            ids.append(doc_id)
            if isinstance(hit.get("fields"), Mapping):
                fields[doc_id] = dict(hit["fields"])

        return cls(
            ids=tuple(ids),
            total_entries=int(hits.get("found", len(ids)) or 0),
            offset=int(hits.get("start", 0) or 0),
            page_size=int(page_size),
            fields=fields or None,
        )

    @property
    def current_page(self) -> int:
        return self.offset // self.page_size + 1

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total_entries / self.page_size))

    @property
    def next_page(self) -> int | None:
        return self.current_page + 1 if self.current_page < self.total_pages else None

    @property
    def previous_page(self) -> int | None:
        return self.current_page - 1 if self.current_page > 1 else None

    def __len__(self) -> int:
        return len(self.ids)

    def __getitem__(self, index):  # type: ignore[override]
        return self.ids[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)
