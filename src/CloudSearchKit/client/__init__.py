"""Client layer for CloudSearchKit.

Provides the domain client, the HTTP transport it sends through, and the
result page returned by searches.
"""

from __future__ import annotations

from CloudSearchKit.client.results import SearchPage
from CloudSearchKit.client.search import ClientMode, CloudSearchClient
from CloudSearchKit.client.transport import HttpTransport, Transport, TransportResponse

__all__ = [
    "ClientMode",
    "CloudSearchClient",
    "HttpTransport",
    "SearchPage",
    "Transport",
    "TransportResponse",
]
