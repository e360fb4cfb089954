"""End-to-end tests for the command-line interface against a temporary data dir."""

import json

import pytest
from click.testing import CliRunner

from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli import main

PRODUCTS = [
    {"id": "miniskotvaska", "name": "Miniskötväska", "price": 500, "stock": 10,
     "available_fabrics": ["noel", "olivia"], "has_lining_option": True},
    {"id": "puffkorg", "name": "Puffkorg", "price": 250, "stock": 5,
     "available_fabrics": ["noel"]},
]
FABRICS = [
    {"id": "noel", "name": "Noel", "type": "outer"},
    {"id": "olivia", "name": "Olivia", "type": "outer"},
    {"id": "vit", "name": "Vit", "type": "inner"},
]


def _last_json(output):
    return json.loads(output.strip().splitlines()[-1])


@pytest.fixture
def run(tmp_path, monkeypatch):
    (tmp_path / "products.json").write_text(json.dumps(PRODUCTS), encoding="utf-8")
    (tmp_path / "fabrics.json").write_text(json.dumps(FABRICS), encoding="utf-8")
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    for name in ("STRIPE_SECRET_KEY", "STRIPE_WEBHOOK_SECRET", "SITE_URL", "CATALOG_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main, "configure_logging", lambda level=None: None)
    bootstrap.settings.cache_clear()
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(main.cli, list(args))

    yield invoke
    bootstrap.settings.cache_clear()


class TestCartCommands:

    def test_add_and_show(self, run):
        assert run("cart", "add", "--product", "miniskotvaska", "--fabric", "noel",
                   "--lining", "vit", "--quantity", "2").exit_code == 0
        assert run("cart", "add", "--product", "puffkorg", "--fabric", "noel").exit_code == 0

        result = run("cart", "show")

        assert result.exit_code == 0, result.output
        assert "Miniskötväska" in result.output
        assert "1250 SEK" in result.output

    def test_quantity_bounds_enforced(self, run):
        result = run("cart", "add", "--product", "puffkorg", "--fabric", "noel", "--quantity", "11")
        assert result.exit_code != 0

    def test_update_to_zero_removes(self, run):
        run("cart", "add", "--product", "puffkorg", "--fabric", "noel")
        run("cart", "update", "--product", "puffkorg", "--fabric", "noel", "--quantity", "0")
        assert "Cart is empty." in run("cart", "show").output

    def test_reconcile_drops_unknown_products(self, run):
        run("cart", "add", "--product", "retired", "--fabric", "noel")
        run("cart", "add", "--product", "puffkorg", "--fabric", "noel")
        result = run("cart", "reconcile")
        assert "Removed 1 invalid cart item(s)." in result.output

    def test_clear(self, run):
        run("cart", "add", "--product", "puffkorg", "--fabric", "noel")
        assert run("cart", "clear").exit_code == 0
        assert "Cart is empty." in run("cart", "show").output

    def test_out_of_stock_product_rejected(self, run):
        run("product", "set-stock", "--id", "puffkorg", "--quantity", "0")

        result = run("cart", "add", "--product", "puffkorg", "--fabric", "noel", "--quantity", "5")

        assert result.exit_code == 1
        assert "Out of stock: puffkorg" in result.output
        assert "Cart is empty." in run("cart", "show").output

    def test_add_beyond_stock_rejected(self, run):
        assert run("cart", "add", "--product", "puffkorg", "--fabric", "noel",
                   "--quantity", "3").exit_code == 0

        result = run("cart", "add", "--product", "puffkorg", "--fabric", "noel", "--quantity", "3")

        assert result.exit_code == 1
        assert "Only 5 of puffkorg in stock" in result.output

    def test_update_beyond_stock_rejected(self, run):
        run("cart", "add", "--product", "puffkorg", "--fabric", "noel")
        result = run("cart", "update", "--product", "puffkorg", "--fabric", "noel", "--quantity", "6")
        assert result.exit_code == 1
        assert "Only 5 of puffkorg in stock" in result.output


class TestProductCommands:

    def test_list(self, run):
        result = run("product", "list")
        assert result.exit_code == 0
        assert "miniskotvaska" in result.output

    def test_set_stock(self, run, tmp_path):
        assert run("product", "set-stock", "--id", "puffkorg", "--quantity", "9").exit_code == 0
        stored = json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))
        assert next(p for p in stored if p["id"] == "puffkorg")["stock"] == 9

    def test_set_stock_unknown_product(self, run):
        result = run("product", "set-stock", "--id", "ghost", "--quantity", "1")
        assert result.exit_code == 1
        assert "Product not found" in result.output


class TestCatalogCommands:

    def test_export(self, run):
        result = run("catalog", "export")
        payload = json.loads(result.output)
        assert payload["success"] is True
        assert [f["id"] for f in payload["fabrics"]["inner"]] == ["vit"]

    def test_refresh_writes_snapshot(self, run, tmp_path):
        assert run("catalog", "refresh").exit_code == 0
        assert (tmp_path / "catalog_cache.json").exists()


class TestCheckoutCommand:

    def test_unconfigured_server(self, run, tmp_path):
        body = tmp_path / "body.json"
        body.write_text(
            json.dumps({"items": [{"productId": "puffkorg", "selectedFabric": "noel", "quantity": 1}]}),
            encoding="utf-8",
        )
        result = run("checkout", "--file", str(body))
        assert result.exit_code == 2
        assert _last_json(result.output) == {"error": "Server configuration error"}

    def test_client_error(self, run, tmp_path, monkeypatch):
        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_test")
        monkeypatch.setenv("SITE_URL", "https://shop.example")
        bootstrap.settings.cache_clear()
        body = tmp_path / "body.json"
        body.write_text(json.dumps({"items": []}), encoding="utf-8")

        result = run("checkout", "--file", str(body))

        assert result.exit_code == 1
        assert _last_json(result.output) == {"error": "No items in cart"}
