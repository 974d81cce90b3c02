"""CLI client running the pipeline in-process."""

import json

import cli_filter
from product_filter.cache import InMemoryCache
from product_filter.errors import FetchError
from product_filter.service import ProductFilterService


def patch_service(monkeypatch, fetcher):
    monkeypatch.setattr(
        cli_filter.ProductFilterService,
        "from_settings",
        classmethod(lambda cls, config: ProductFilterService(fetcher, InMemoryCache(), config)),
    )


def test_json_output(monkeypatch, capsys, stub_fetcher_factory, three_products):
    patch_service(monkeypatch, stub_fetcher_factory(three_products))

    assert cli_filter.main(["--min-price", "15", "--size", "MEDIUM", "--json"]) == 0

    payload = json.loads(capsys.readouterr().out)
    assert [p["title"] for p in payload["filteredProducts"]] == ["Product3"]


def test_pretty_output_lists_products(monkeypatch, capsys, stub_fetcher_factory, three_products):
    patch_service(monkeypatch, stub_fetcher_factory(three_products))

    assert cli_filter.main(["--highlight", "great"]) == 0

    out = capsys.readouterr().out
    assert "3 products" in out
    assert "A <em>great</em> product." in out


def test_fetch_error_exits_non_zero(monkeypatch, capsys, stub_fetcher_factory):
    patch_service(monkeypatch, stub_fetcher_factory(error=FetchError("offline")))

    assert cli_filter.main([]) == 1
    assert "offline" in capsys.readouterr().out
