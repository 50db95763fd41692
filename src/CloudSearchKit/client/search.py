"""Client facade for one search domain.

Builds URLs with the query compiler, signs document batches, sends requests
through a `Transport`, and turns responses into `SearchPage` results.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from CloudSearchKit.client.results import SearchPage
from CloudSearchKit.client.transport import HttpTransport, Transport, TransportResponse
from CloudSearchKit.core.request import FilterInput, SearchRequest
from CloudSearchKit.documents import add_operation, delete_operation, encode_batch
from CloudSearchKit.errors import DocumentUpdateError, MissingSearchDomainError, SearchError, TransportFailure
from CloudSearchKit.query.url import (
    DEFAULT_API_VERSION,
    DEFAULT_REGION,
    build_search_url,
    document_endpoint,
    search_endpoint,
)
from CloudSearchKit.signing.credentials import CredentialProvider, SessionCredentialProvider
from CloudSearchKit.signing.sigv4 import Clock, sign
from CloudSearchKit.utils.log import log


class ClientMode(str, Enum):
    """``live`` talks to the service; ``sandbox`` returns empty results offline."""

    LIVE = "live"
    SANDBOX = "sandbox"


class CloudSearchClient:
    """Search and document operations against one search domain."""

    def __init__(
        self,
        domain: str,
        *,
        region: str = DEFAULT_REGION,
        api_version: str = DEFAULT_API_VERSION,
        transport: Transport | None = None,
        credentials: CredentialProvider | None = None,
        mode: ClientMode | str = ClientMode.LIVE,
        timeout: float | None = None,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            domain: Search domain name.
            region: Region of the domain.
            api_version: Service API version path segment.
            transport: HTTP transport; a `HttpTransport` is created when omitted.
            credentials: Provider used to sign document batches; defaults to
                the boto3 default credential chain.
            mode: ``live`` or ``sandbox``.
            timeout: Per-request timeout in seconds.
            clock: Signing clock; defaults to current UTC time.

        Raises:
            MissingSearchDomainError: If ``domain`` is empty.
        """
        if not domain:
            raise MissingSearchDomainError()
        self.domain = domain
        self.region = region or DEFAULT_REGION
        self.api_version = api_version or DEFAULT_API_VERSION
        self.mode = ClientMode(mode)
        self.timeout = timeout
        self._transport = transport
        self._credentials = credentials or SessionCredentialProvider()
        self._clock = clock

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpTransport()
        return self._transport

    @property
    def search_url(self) -> str:
        return search_endpoint(self.domain, self.region, self.api_version)

    @property
    def document_url(self) -> str:
        return document_endpoint(self.domain, self.region, self.api_version)

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()

    def __enter__(self) -> CloudSearchClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def search_by_term(self, term: str, **options: Any) -> SearchPage:
        """Search for a free-text term.

        Args:
            term: Search term.
            **options: ``filter``, ``facets``, ``sort``, ``page``, ``page_size``,
                ``return_fields`` as accepted by `SearchRequest.by_term`.

        Returns:
            Page of matching document ids.

        Raises:
            SearchError: If the request fails or the service returns non-200.
        """
        return self.search(SearchRequest.by_term(term, **options))

    def search_by_filter(self, filter: FilterInput, **options: Any) -> SearchPage:  # noqa: A002
        """Search with a structured filter and an empty term."""
        return self.search(SearchRequest.by_filter(filter, **options))

    def search(self, request: SearchRequest) -> SearchPage:
        """Run a prepared search request."""
        if self.mode is ClientMode.SANDBOX:
            return SearchPage.empty(request.page_size)

        url = build_search_url(self.search_url, request)
        log.debug("Search request: url=%s", url)
        try:
            resp = self.transport.get(url, timeout=self.timeout)
        except TransportFailure as e:
            raise SearchError(f"{e} ({url})") from e

        if not resp.ok:
            raise SearchError(f"{resp.status}: {resp.reason} ({url})")
        try:
            payload = resp.json()
        except ValueError as e:
            raise SearchError(f"Invalid search response: {e} ({url})") from e
        page = SearchPage.from_payload(payload, request.page_size)
        log.debug("Search response: found=%d returned=%d", page.total_entries, len(page))
        return page

    def add_item(self, doc_id: object, fields: Mapping[str, Any]) -> None:
        """Add a document, replacing any existing document with the same id.

        Args:
            doc_id: Document id.
            fields: Field values; dates and datetimes are sent as epoch seconds.

        Raises:
            DocumentUpdateError: If the request fails or the service returns non-200.
        """
        if self.mode is ClientMode.SANDBOX:
            return None
        self._send_batch(add_operation(doc_id, fields))
        return None

    def update_item(self, doc_id: object, fields: Mapping[str, Any]) -> None:
        """Update a document; the service treats this the same as an add."""
        return self.add_item(doc_id, fields)

    def remove_item(self, doc_id: object) -> None:
        """Remove a document; removing a missing id still succeeds."""
        if self.mode is ClientMode.SANDBOX:
            return None
        self._send_batch(delete_operation(doc_id))
        return None

    def _send_batch(self, operation: Mapping[str, Any]) -> TransportResponse:
        url = self.document_url
        body = encode_batch([operation])
        headers = {"Content-Type": "application/json"}
        headers.update(sign("POST", url, body, self._credentials(), self._clock))

        log.debug("Document batch: type=%s id=%s", operation.get("type"), operation.get("id"))
        try:
            resp = self.transport.post(url, body=body, headers=headers, timeout=self.timeout)
        except TransportFailure as e:
            raise DocumentUpdateError(str(e)) from e
        if not resp.ok:
            raise DocumentUpdateError(f"{resp.status}: {resp.reason}")
        return resp
