"""Keyword highlighting inside product descriptions."""
from __future__ import annotations

import re
from typing import List, Sequence

from .models import Product

DEFAULT_OPEN_TAG = "<em>"
DEFAULT_CLOSE_TAG = "</em>"


def highlight_text(text: str, terms: Sequence[str], open_tag: str, close_tag: str) -> str:
    """Wrap every case-insensitive occurrence of each term, keeping the matched casing.

    Terms are applied one after another, so a later term can match inside the
    markers inserted for an earlier one.
    """
    for term in terms:
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        text = pattern.sub(lambda match: f"{open_tag}{match.group(0)}{close_tag}", text)
    return text


def highlight_products(
    products: Sequence[Product],
    terms: Sequence[str],
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
) -> List[Product]:
    if not terms:
        return list(products)
    return [
        product.model_copy(
            update={"description": highlight_text(product.description, terms, open_tag, close_tag)},
            deep=True,
        )
        for product in products
    ]
