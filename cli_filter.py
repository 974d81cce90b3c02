"""Terminal client that reuses the in-process filter pipeline."""
from __future__ import annotations

import argparse
import asyncio
import json
from decimal import Decimal, InvalidOperation
from typing import Iterable

from product_filter.config import settings
from product_filter.errors import CatalogServiceError
from product_filter.models import FilterCriteria, QueryResult
from product_filter.service import ProductFilterService

MAX_RESULTS = 100
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc


async def perform_query(criteria: FilterCriteria) -> QueryResult:
    service = ProductFilterService.from_settings(settings)
    try:
        return await service.get_filtered_products(criteria)
    finally:
        await service.close()


def pretty_print_result(result: QueryResult) -> None:
    summary = result.filter
    products = result.filteredProducts
    color = GREEN if products else RED
    print(f"{color}{len(products)} products{RESET} | price {summary.minPrice} - {summary.maxPrice}")
    print(f"  sizes: {', '.join(summary.sizes) or '-'}")
    print(f"  common words: {', '.join(summary.commonWords) or '-'}")
    for idx, product in enumerate(products[:MAX_RESULTS], start=1):
        print(f"  {idx:02d}. {product.price:>8} | {'/'.join(product.sizes)} | {product.title}")
        if product.description:
            print(f"      {product.description}")


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the product filter service")
    parser.add_argument("--min-price", type=_decimal, help="Inclusive lower price bound")
    parser.add_argument("--max-price", type=_decimal, help="Inclusive upper price bound")
    parser.add_argument("--size", help="Size to match, case-insensitive")
    parser.add_argument("--highlight", help="Comma separated words to highlight")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON result")
    args = parser.parse_args(list(argv) if argv is not None else None)

    criteria = FilterCriteria.from_query(args.min_price, args.max_price, args.size, args.highlight)
    try:
        result = asyncio.run(perform_query(criteria))
    except CatalogServiceError as exc:
        print(f"{RED}{exc.kind} error: {exc}{RESET}")
        return 1
    if args.json:
        print(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        pretty_print_result(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
