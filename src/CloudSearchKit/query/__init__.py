"""Query compilation: filters, facets, and search URLs."""

from __future__ import annotations

from CloudSearchKit.query.boolean import compile_filter, compile_filters
from CloudSearchKit.query.escape import canonicalize_query, escape
from CloudSearchKit.query.facets import compile_facets
from CloudSearchKit.query.url import build_query_string, build_search_url, document_endpoint, search_endpoint

__all__ = [
    "build_query_string",
    "build_search_url",
    "canonicalize_query",
    "compile_facets",
    "compile_filter",
    "compile_filters",
    "document_endpoint",
    "escape",
    "search_endpoint",
]
