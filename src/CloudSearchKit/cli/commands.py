"""Command implementations for the CloudSearchKit CLI.

Encapsulates the work behind each CLI command, separated from click
parameter handling.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from CloudSearchKit.client.search import CloudSearchClient
from CloudSearchKit.core.request import SearchRequest
from CloudSearchKit.query.url import build_search_url
from CloudSearchKit.signing.credentials import CredentialProvider
from CloudSearchKit.signing.sigv4 import sign
from CloudSearchKit.utils.log import log

Echo = Callable[[str], None]


@dataclass(slots=True)
class SearchCommand:
    """Run one search and print the resulting page as JSON.

    With ``print_url`` set, only the compiled URL is printed and no request
    is sent.
    """

    client: CloudSearchClient
    request: SearchRequest
    echo: Echo
    print_url: bool = False

    def execute(self) -> None:
        url = build_search_url(self.client.search_url, self.request)
        if self.print_url:
            self.echo(url)
            return

        log.info("Searching domain=%s term=%r", self.client.domain, self.request.term)
        page = self.client.search(self.request)
        log.info("Found %d documents (page %d/%d)", page.total_entries, page.current_page, page.total_pages)
        result: dict[str, Any] = {
            "found": page.total_entries,
            "page": page.current_page,
            "total_pages": page.total_pages,
            "ids": list(page.ids),
        }
        if page.fields:
            result["fields"] = {doc_id: dict(values) for doc_id, values in page.fields.items()}
        self.echo(json.dumps(result, ensure_ascii=False, indent=2, default=str))


@dataclass(slots=True)
class AddCommand:
    """Add (or replace) one document."""

    client: CloudSearchClient
    doc_id: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def execute(self) -> None:
        log.info("Adding document id=%s fields=%s", self.doc_id, sorted(self.fields))
        self.client.add_item(self.doc_id, self.fields)
        log.info("Document %s submitted", self.doc_id)


@dataclass(slots=True)
class RemoveCommand:
    """Remove one document."""

    client: CloudSearchClient
    doc_id: str

    def execute(self) -> None:
        log.info("Removing document id=%s", self.doc_id)
        self.client.remove_item(self.doc_id)
        log.info("Document %s removed", self.doc_id)


@dataclass(slots=True)
class SignCommand:
    """Print the SigV4 headers for an arbitrary request without sending it."""

    method: str
    url: str
    body: str
    credentials: CredentialProvider
    echo: Echo

    def execute(self) -> None:
        headers = sign(self.method, self.url, self.body, self.credentials())
        for name, value in headers.items():
            self.echo(f"{name}: {value}")
