"""Summary metadata returned next to the filtered products."""
from __future__ import annotations

from collections import Counter
from typing import Iterable, List, Sequence

from .models import FilterSummary, Product

# The most frequent words are dominated by stop words, so they are skipped.
COMMON_WORDS_SKIP = 5
COMMON_WORDS_TAKE = 10


def common_words(
    descriptions: Iterable[str],
    skip: int = COMMON_WORDS_SKIP,
    take: int = COMMON_WORDS_TAKE,
) -> List[str]:
    counts: Counter[str] = Counter()
    for description in descriptions:
        if description:
            counts.update(description.split())
    # most_common keeps first-seen order among equal counts.
    ranked = counts.most_common()
    return [word for word, _ in ranked[skip : skip + take]]


def distinct_sizes(catalog: Iterable[Product]) -> List[str]:
    seen: dict[str, None] = {}
    for product in catalog:
        for size in product.sizes:
            seen.setdefault(size, None)
    return list(seen)


def summarize(full_catalog: Sequence[Product], filtered: Sequence[Product]) -> FilterSummary:
    """Price bounds describe ``filtered``; sizes and words describe ``full_catalog``."""
    prices = [product.price for product in filtered]
    return FilterSummary(
        minPrice=min(prices) if prices else None,
        maxPrice=max(prices) if prices else None,
        sizes=distinct_sizes(full_catalog),
        commonWords=common_words(product.description for product in full_catalog),
    )
