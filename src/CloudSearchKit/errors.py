"""Exception types raised by CloudSearchKit."""

from __future__ import annotations


class CloudSearchError(Exception):
    """Base class for every error raised by this package."""


class MissingSearchDomainError(CloudSearchError, ValueError):
    """Raised when a client is built without a search domain name."""

    def __init__(self) -> None:
        super().__init__("A search domain name is required")


class MissingCredentialsError(CloudSearchError):
    """Raised when a credential provider cannot produce a credential."""


class MalformedHostError(CloudSearchError, ValueError):
    """Raised when region and service cannot be derived from a request host."""

    def __init__(self, host: str) -> None:
        super().__init__(f"Cannot derive region/service from host: {host!r}")
        self.host = host


class UnsupportedValueTypeError(CloudSearchError, TypeError):
    """Raised when a filter value has a type the query compiler cannot render."""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Unsupported value type for field {field!r}: {type(value).__name__}")
        self.field = field
        self.value = value


class TransportFailure(CloudSearchError):
    """Network-level failure reported by the HTTP transport."""

    def __init__(self, method: str, url: str, cause: Exception) -> None:
        super().__init__(f"{method} {url} failed: {cause.__class__.__name__}: {cause}")
        self.method = method
        self.url = url
        self.cause = cause


class SearchError(CloudSearchError):
    """Raised when a search request fails at the service or network level."""


class DocumentUpdateError(CloudSearchError):
    """Raised when a document batch request fails at the service or network level."""
