"""Error types surfaced by the catalog pipeline."""
from __future__ import annotations


class CatalogServiceError(RuntimeError):
    """Base error; ``kind`` tags the failure for the HTTP adapter and logs."""

    kind = "internal"


class FetchError(CatalogServiceError):
    """The remote catalog could not be reached or answered with an error status."""

    kind = "fetch"


class ParseError(CatalogServiceError):
    """The remote catalog body is not a JSON document."""

    kind = "parse"


class InternalError(CatalogServiceError):
    """Unexpected failure while filtering, summarizing or highlighting."""

    kind = "internal"
