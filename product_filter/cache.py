"""Result caching with an in-memory store and optional Redis backend."""
from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Dict, Optional, Protocol

import redis
from pydantic import ValidationError

from .config import Settings
from .models import FilterCriteria, QueryResult

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "filtered-products:"


def _canonical_decimal(value: Decimal | None) -> str | None:
    """Exact digits and exponent with trailing zeros stripped; never rounds or expands."""
    if value is None:
        return None
    sign, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int):
        return str(value)
    digits = list(digits)
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1
    if digits == [0]:
        return "0"
    return f"{'-' if sign else ''}{''.join(map(str, digits))}e{exponent}"


def make_cache_key(criteria: FilterCriteria) -> str:
    """Encode the criteria as a canonical key; absent values become ``null``."""
    fields = [
        _canonical_decimal(criteria.min_price),
        _canonical_decimal(criteria.max_price),
        criteria.size,
        list(criteria.highlight_terms),
    ]
    return CACHE_KEY_PREFIX + json.dumps(fields, separators=(",", ":"), ensure_ascii=False)


class CacheBackend(Protocol):
    name: str

    def get(self, key: str) -> Optional[QueryResult]: ...

    def put(self, key: str, value: QueryResult, ttl: Optional[int] = None) -> None: ...

    def clear(self) -> None: ...


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: QueryResult
    expires_at: float


class InMemoryCache:
    name = "memory"

    def __init__(self, default_ttl: int = 300, clock: Callable[[], float] = time.monotonic) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[QueryResult]:
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                self._store.pop(key, None)
                return None
            return entry.value

    def put(self, key: str, value: QueryResult, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + (self.default_ttl if ttl is None else ttl)
        with self._lock:
            self._store[key] = CacheEntry(key=key, value=value, expires_at=expires_at)

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.expires_at <= now]
            for key in expired:
                del self._store[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()

    def __len__(self) -> int:
        self.purge_expired()
        with self._lock:
            return len(self._store)


@dataclass
class RedisCache:
    client: redis.Redis
    default_ttl: int = 300
    name = "redis"

    def get(self, key: str) -> Optional[QueryResult]:
        try:
            data = self.client.get(key)
        except redis.RedisError as exc:
            logger.warning("Redis get failed: %s", exc)
            return None
        if not data:
            return None
        try:
            return QueryResult.model_validate_json(data)
        except ValidationError:
            logger.warning("Discarding undecodable cache entry %s", key)
            return None

    def put(self, key: str, value: QueryResult, ttl: Optional[int] = None) -> None:
        try:
            # Decimals are stored as strings so prices round-trip exactly.
            payload = json.dumps(value.model_dump(), default=str)
            self.client.setex(key, self.default_ttl if ttl is None else ttl, payload)
        except redis.RedisError as exc:
            logger.warning("Redis set failed: %s", exc)

    def clear(self) -> None:
        try:
            keys = list(self.client.scan_iter(match=f"{CACHE_KEY_PREFIX}*"))
            if keys:
                self.client.delete(*keys)
        except redis.RedisError as exc:
            logger.warning("Redis clear failed: %s", exc)


def build_cache(config: Settings) -> CacheBackend:
    if config.cache_backend == "redis":
        try:
            client = redis.Redis(host=config.redis_host, port=config.redis_port, decode_responses=False)
            client.ping()
            logger.info("Using Redis cache at %s:%s", config.redis_host, config.redis_port)
            return RedisCache(client, default_ttl=config.cache_ttl_seconds)
        except redis.RedisError:
            logger.warning("Redis not available, using in-memory cache")
    elif config.cache_backend != "memory":
        logger.warning("Unknown cache backend %r, using in-memory cache", config.cache_backend)
    return InMemoryCache(default_ttl=config.cache_ttl_seconds)
