"""Shared fixtures: catalog builders and a fetcher that never hits the network."""

from decimal import Decimal

import pytest

from product_filter.models import Product


def make_product(title, price, sizes=("medium",), description=""):
    return Product(title=title, price=Decimal(str(price)), sizes=list(sizes), description=description)


class StubFetcher:
    """Returns a fresh copy of a fixed catalog and counts calls."""

    def __init__(self, products=None, error=None):
        self.products = list(products or [])
        self.error = error
        self.calls = 0
        self.closed = False

    async def fetch(self):
        self.calls += 1
        if self.error is not None:
            return self.error
        return [product.model_copy(deep=True) for product in self.products]

    async def close(self):
        self.closed = True


@pytest.fixture
def product_factory():
    return make_product


@pytest.fixture
def three_products():
    return [
        make_product("Product1", 10, ["medium"], "A great product."),
        make_product("Product2", 20, ["large"], "Another great product."),
        make_product("Product3", 30, ["medium"], "Yet another great product."),
    ]


@pytest.fixture
def forty_eight_products():
    return [
        make_product(f"Product{i}", i * 10, ["medium"], f"Description for Product{i}.")
        for i in range(1, 49)
    ]


@pytest.fixture
def stub_fetcher_factory():
    return StubFetcher
