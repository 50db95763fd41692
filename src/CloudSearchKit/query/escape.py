"""Percent-encoding helpers.

Two encoders live here because the service and the request signer disagree on
which reserved characters must be escaped:

- `escape` is the form encoding used when building query strings
  (space -> ``+``; everything except ``A-Za-z0-9_.-~`` -> ``%XX``).
- `canonicalize_query` produces the query component of a SigV4 canonical
  request from an already-encoded query string.
"""

from __future__ import annotations

from typing import Final
from urllib.parse import quote, quote_plus, unquote_to_bytes

# Characters left alone by the generic URI encoder (RFC 2396 unreserved + reserved).
_URI_SAFE: Final[str] = "-_.!~*'();/?:@&=+$,[]"

# Reserved characters the signature service expects escaped even after URI encoding.
_CANONICAL_EXTRA: Final[tuple[tuple[str, str], ...]] = (
    ("(", "%28"),
    (")", "%29"),
    ("[", "%5B"),
    ("]", "%5D"),
    (":", "%3A"),
    ("'", "%27"),
    (",", "%2C"),
)


def escape(value: object) -> str:
    """Form-encode a value for use inside a query string.

    Args:
        value: Any value; converted with ``str``.

    Returns:
        Encoded text.
    """
    return quote_plus(str(value), safe="")


def canonicalize_query(query: str) -> str:
    """Return the SigV4 canonical form of an encoded query string.

    Parameters are sorted by name (stable for repeated names), the result is
    decoded and re-encoded with the URI encoder, then the extra reserved
    characters are escaped.

    Args:
        query: Query component without the leading ``?``.

    Returns:
        Canonical query string; empty when ``query`` is empty.
    """
    if not query:
        return ""
    pairs = [part.split("=", 1) for part in query.split("&") if part]
    pairs.sort(key=lambda pair: pair[0])
    joined = "&".join("=".join(pair) for pair in pairs)

    encoded = quote(unquote_to_bytes(joined), safe=_URI_SAFE)
    for char, replacement in _CANONICAL_EXTRA:
        encoded = encoded.replace(char, replacement)
    return encoded
