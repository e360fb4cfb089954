"""Unit tests for the Catalog snapshot and Product rules."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.fabric import Fabric, FabricType
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import sample_catalog, sample_fabrics, sample_products


class TestCatalogBuild:

    def test_inactive_entries_dropped(self):
        products = sample_products() + [
            Product(id="retired", name="Retired", price=Money(100), is_active=False)
        ]
        fabrics = sample_fabrics() + [
            Fabric("gammal", "Gammal", "", FabricType.OUTER, is_active=False)
        ]
        catalog = Catalog.build(products, fabrics)
        assert catalog.product("retired") is None
        assert catalog.outer_fabric("gammal") is None

    def test_fabrics_split_by_role(self):
        catalog = sample_catalog()
        assert {f.id for f in catalog.outer_fabrics} == {"blomster", "noel", "olivia"}
        assert {f.id for f in catalog.inner_fabrics} == {"vit", "sand", "rosa"}

    def test_empty(self):
        assert Catalog.empty().is_empty
        assert not sample_catalog().is_empty


class TestCatalogResolves:

    def test_valid_selection(self):
        assert sample_catalog().resolves("miniskotvaska", "noel")

    def test_valid_selection_with_lining(self):
        assert sample_catalog().resolves("miniskotvaska", "noel", "sand")

    def test_unknown_product(self):
        assert not sample_catalog().resolves("nope", "noel")

    def test_fabric_not_offered_by_product(self):
        assert not sample_catalog().resolves("mini-pouch", "noel")

    def test_inner_fabric_as_outer_does_not_resolve(self):
        assert not sample_catalog().resolves("miniskotvaska", "vit")

    def test_outer_fabric_as_lining_does_not_resolve(self):
        assert not sample_catalog().resolves("miniskotvaska", "noel", "blomster")

    def test_lining_on_product_without_option(self):
        assert not sample_catalog().resolves("puffkorg", "noel", "vit")

    def test_lining_outside_product_inner_list(self):
        catalog = sample_catalog()
        assert catalog.resolves("mini-pouch", "blomster", "vit")
        assert not catalog.resolves("mini-pouch", "blomster", "sand")


class TestProductStock:

    def _product(self, stock=10):
        return Product(id="p", name="P", price=Money(100), stock=stock)

    def test_deduct(self):
        p = self._product()
        assert p.deduct_stock(3) == 7
        assert p.stock == 7

    def test_deduct_clamps_at_zero(self):
        p = self._product(stock=2)
        assert p.deduct_stock(5) == 0

    def test_deduct_non_positive_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            self._product().deduct_stock(0)

    def test_set_stock(self):
        p = self._product()
        p.set_stock(42)
        assert p.stock == 42

    def test_set_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            self._product().set_stock(-1)
