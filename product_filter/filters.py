"""Price and size filtering over a catalog."""
from __future__ import annotations

from typing import List, Sequence

from .models import FilterCriteria, Product


def _has_size(product: Product, size: str) -> bool:
    wanted = size.casefold()
    return any(candidate.casefold() == wanted for candidate in product.sizes)


def apply_filters(catalog: Sequence[Product], criteria: FilterCriteria) -> List[Product]:
    """Return the products matching every present criterion, in catalog order.

    Highlight terms never narrow the result: without a price bound or size the
    full catalog comes back.
    """
    filtered = list(catalog)
    if not criteria.has_filters:
        return filtered

    if criteria.min_price is not None:
        filtered = [p for p in filtered if p.price >= criteria.min_price]
    if criteria.max_price is not None:
        filtered = [p for p in filtered if p.price <= criteria.max_price]
    if criteria.size is not None:
        filtered = [p for p in filtered if _has_size(p, criteria.size)]
    return filtered
