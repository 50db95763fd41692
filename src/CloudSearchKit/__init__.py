"""CloudSearchKit: structured query compiler and SigV4-signed client for CloudSearch domains."""

from __future__ import annotations

__version__ = "0.1.0"
