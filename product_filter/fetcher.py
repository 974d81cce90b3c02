"""Remote catalog retrieval.

The catalog lives at a single unauthenticated URL and is fetched on every
cache miss. Failures are returned rather than raised so the caller decides how
to surface them; a document without a usable ``products`` list is treated as an
empty catalog.
"""
from __future__ import annotations

import json
import logging
from typing import List, Union

import httpx
from pydantic import ValidationError

from .config import Settings, settings as default_settings
from .errors import FetchError, ParseError
from .models import Product

logger = logging.getLogger(__name__)

FetchResult = Union[List[Product], FetchError, ParseError]


def parse_catalog(body: str) -> List[Product] | ParseError:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        return ParseError(f"Catalog response is not valid JSON: {exc}")
    if payload is None:
        logger.warning("Catalog response is null; treating catalog as empty")
        return []
    if not isinstance(payload, dict):
        return ParseError(f"Catalog response must be a JSON object, got {type(payload).__name__}")

    raw_products = payload.get("products")
    if not isinstance(raw_products, list):
        logger.warning("Catalog response has no usable products list; treating catalog as empty")
        return []

    products: List[Product] = []
    for index, raw in enumerate(raw_products):
        try:
            products.append(Product.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping malformed product #%s: %s", index, exc.errors()[:1])
    return products


class CatalogFetcher:
    def __init__(
        self,
        config: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = config or default_settings
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.fetch_timeout_seconds),
            follow_redirects=True,
        )

    @property
    def url(self) -> str:
        return self.settings.catalog_url

    async def fetch(self) -> FetchResult:
        try:
            response = await self._client.get(self.url)
        except httpx.TimeoutException as exc:
            logger.warning("Catalog fetch timed out: %s", exc)
            return FetchError(f"Catalog request to {self.url} timed out")
        except httpx.HTTPError as exc:
            logger.warning("Catalog fetch failed: %s", exc)
            return FetchError(f"Catalog request to {self.url} failed: {exc}")

        body = response.text
        logger.info(
            "Catalog response status=%s bytes=%s url=%s",
            response.status_code,
            len(response.content),
            self.url,
        )
        self._log_preview(body)

        if response.status_code >= 400:
            return FetchError(f"Catalog request to {self.url} returned HTTP {response.status_code}")
        return parse_catalog(body)

    def _log_preview(self, body: str) -> None:
        limit = self.settings.response_log_preview_chars
        if limit <= 0 or not logger.isEnabledFor(logging.DEBUG):
            return
        suffix = "..." if len(body) > limit else ""
        logger.debug("Catalog response preview: %s%s", body[:limit], suffix)

    async def close(self) -> None:
        await self._client.aclose()

