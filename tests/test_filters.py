"""Price and size filtering."""

from decimal import Decimal

import pytest

from product_filter.filters import apply_filters
from product_filter.models import FilterCriteria


def titles(products):
    return [product.title for product in products]


def test_no_criteria_returns_full_catalog(forty_eight_products):
    """Without filters every product comes back in catalog order."""

    filtered = apply_filters(forty_eight_products, FilterCriteria())

    assert len(filtered) == 48
    assert titles(filtered) == titles(forty_eight_products)


def test_highlight_only_does_not_filter(three_products):
    """Highlight terms alone never narrow the catalog."""

    criteria = FilterCriteria.from_query(highlight="nothing-matches-this")

    assert titles(apply_filters(three_products, criteria)) == ["Product1", "Product2", "Product3"]


def test_min_price_is_inclusive(three_products):
    criteria = FilterCriteria(min_price=Decimal("20"))

    assert titles(apply_filters(three_products, criteria)) == ["Product2", "Product3"]


def test_max_price_is_inclusive(three_products):
    criteria = FilterCriteria(max_price=Decimal("20"))

    assert titles(apply_filters(three_products, criteria)) == ["Product1", "Product2"]


def test_min_price_excludes_cheaper_items(product_factory):
    catalog = [product_factory("Product1", 10, ["medium"]), product_factory("Product2", 20, ["large"])]

    filtered = apply_filters(catalog, FilterCriteria(min_price=Decimal("15")))

    assert titles(filtered) == ["Product2"]


def test_min_price_and_size_combine(three_products):
    """Criteria are applied conjunctively."""

    criteria = FilterCriteria.from_query(min_price=Decimal("15"), size="medium")

    assert titles(apply_filters(three_products, criteria)) == ["Product3"]


def test_size_match_ignores_case(three_products):
    criteria = FilterCriteria.from_query(size="LARGE")

    assert titles(apply_filters(three_products, criteria)) == ["Product2"]


def test_empty_size_counts_as_absent(three_products):
    criteria = FilterCriteria.from_query(size="")

    assert criteria.size is None
    assert len(apply_filters(three_products, criteria)) == 3


def test_no_match_returns_empty_list(product_factory):
    catalog = [product_factory("Product1", 10)]

    assert apply_filters(catalog, FilterCriteria(min_price=Decimal("50"))) == []


@pytest.mark.parametrize(
    "criteria",
    [
        FilterCriteria(),
        FilterCriteria(min_price=Decimal("15")),
        FilterCriteria(max_price=Decimal("25"), size="medium"),
        FilterCriteria(min_price=Decimal("10"), max_price=Decimal("30"), size="Large"),
    ],
)
def test_filtering_is_idempotent(three_products, criteria):
    once = apply_filters(three_products, criteria)
    twice = apply_filters(once, criteria)

    assert titles(once) == titles(twice)
    assert titles(once) == titles(apply_filters(three_products, criteria))


def test_filtering_does_not_modify_catalog(three_products):
    snapshot = [product.model_copy(deep=True) for product in three_products]

    apply_filters(three_products, FilterCriteria(min_price=Decimal("15")))

    assert three_products == snapshot
