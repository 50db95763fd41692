"""Search URL builder.

Composes a `SearchRequest` into the full search URL. Parameter order is fixed:
``q``, ``fq``, facets, ``size``, ``return``, ``start``, ``sort``.
"""

from __future__ import annotations

from CloudSearchKit.core.request import SearchRequest
from CloudSearchKit.query.boolean import compile_filters
from CloudSearchKit.query.escape import escape
from CloudSearchKit.query.facets import compile_facets

DEFAULT_REGION = "us-east-1"
DEFAULT_API_VERSION = "2013-01-01"


def search_endpoint(domain: str, region: str = DEFAULT_REGION, api_version: str = DEFAULT_API_VERSION) -> str:
    """Return the search endpoint URL of a domain."""
    return f"http://search-{domain}.{region}.cloudsearch.amazonaws.com/{api_version}/search"


def document_endpoint(domain: str, region: str = DEFAULT_REGION, api_version: str = DEFAULT_API_VERSION) -> str:
    """Return the document batch endpoint URL of a domain."""
    return f"http://doc-{domain}.{region}.cloudsearch.amazonaws.com/{api_version}/documents/batch"


def build_query_string(request: SearchRequest) -> str:
    """Compile a request into its query string, including the leading ``?``.

    Args:
        request: Normalized search request.

    Returns:
        Encoded query string.
    """
    page_size = int(request.page_size)

    query = f"?q={escape(request.term)}"
    if request.filters:
        compiled = compile_filters(request.filters)
        if compiled:
            query += f"&fq={compiled}"
    if request.facets is not None:
        query += compile_facets(request.facets)
    query += f"&size={page_size}"
    if request.return_fields is not None:
        query += "&return=" + ",".join(request.return_fields)
    page = request.page_spec
    if page is not None:
        query += f"&start={page.offset}"
    if request.sort is not None:
        query += f"&sort={request.sort.field}%20{request.sort.direction}"
    return query


def build_search_url(base_url: str, request: SearchRequest) -> str:
    """Return ``base_url`` followed by the compiled query string."""
    return base_url + build_query_string(request)
