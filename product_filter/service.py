"""Fetch, filter, summarize, highlight and cache catalog queries."""
from __future__ import annotations

import logging
from time import perf_counter
from typing import Protocol

from .aggregator import summarize
from .cache import CacheBackend, InMemoryCache, build_cache, make_cache_key
from .config import Settings, settings as default_settings
from .errors import CatalogServiceError, FetchError, InternalError, ParseError
from .fetcher import CatalogFetcher, FetchResult
from .filters import apply_filters
from .highlighter import highlight_products
from .models import FilterCriteria, QueryResult

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self) -> FetchResult: ...

    async def close(self) -> None: ...


class ProductFilterService:
    """Owns the catalog fetcher and result cache for the lifetime of the app."""

    def __init__(
        self,
        fetcher: Fetcher,
        cache: CacheBackend | None = None,
        config: Settings | None = None,
    ) -> None:
        self.settings = config or default_settings
        self.fetcher = fetcher
        self.cache = cache if cache is not None else InMemoryCache(self.settings.cache_ttl_seconds)

    @classmethod
    def from_settings(cls, config: Settings) -> "ProductFilterService":
        return cls(CatalogFetcher(config), build_cache(config), config)

    async def get_filtered_products(self, criteria: FilterCriteria) -> QueryResult:
        cache_key = make_cache_key(criteria)
        cache_start = perf_counter()
        cached = self.cache.get(cache_key)
        if cached is not None:
            total_ms = (perf_counter() - cache_start) * 1000
            logger.info("timing: total=%.2fms cache_hit=1 key=%s", total_ms, cache_key)
            return cached

        t0 = perf_counter()
        outcome = await self.fetcher.fetch()
        if isinstance(outcome, (FetchError, ParseError)):
            logger.warning("Catalog unavailable (%s): %s", outcome.kind, outcome)
            raise outcome
        catalog = outcome
        t1 = perf_counter()

        try:
            result = self._build_result(catalog, criteria)
        except CatalogServiceError:
            raise
        except Exception as exc:
            raise InternalError(f"Failed to process catalog: {exc}") from exc
        t2 = perf_counter()

        logger.info(
            "timing: total=%.2fms fetch=%.2fms process=%.2fms key=%s catalog=%s filtered=%s",
            (t2 - t0) * 1000,
            (t1 - t0) * 1000,
            (t2 - t1) * 1000,
            cache_key,
            len(catalog),
            len(result.filteredProducts),
        )

        self.cache.put(cache_key, result, self.settings.cache_ttl_seconds)
        logger.debug("cache_store key=%s ttl=%s", cache_key, self.settings.cache_ttl_seconds)
        return result

    def _build_result(self, catalog, criteria: FilterCriteria) -> QueryResult:
        filtered = apply_filters(catalog, criteria)
        summary = summarize(catalog, filtered)
        highlighted = highlight_products(
            filtered,
            criteria.highlight_terms,
            self.settings.highlight_open_tag,
            self.settings.highlight_close_tag,
        )
        return QueryResult(filteredProducts=highlighted, filter=summary)

    async def close(self) -> None:
        await self.fetcher.close()
        # Shared backends outlive this process.
        if isinstance(self.cache, InMemoryCache):
            self.cache.clear()
