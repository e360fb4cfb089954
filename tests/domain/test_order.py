"""Unit tests for the Order aggregate and shipping rules."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.order import (
    MAX_LINE_ITEMS,
    Order,
    OrderLine,
    shipping_options_for,
)
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import sample_catalog


def _order_line(product="miniskotvaska", fabric="noel", quantity=1, lining=None, notes=None):
    catalog = sample_catalog()
    return OrderLine(
        product=catalog.product(product),
        fabric=catalog.outer_fabric(fabric),
        quantity=Quantity(quantity),
        lining=catalog.inner_fabric(lining) if lining else None,
        notes=notes,
    )


class TestOrderCreation:

    def test_create(self):
        order = Order.create([_order_line(quantity=2)])
        assert order.subtotal == Money(1000)
        assert order.currency == "SEK"

    def test_empty_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create([])

    def test_too_many_lines_rejected(self):
        with pytest.raises(ValidationError, match="Maximum"):
            Order.create([_order_line() for _ in range(MAX_LINE_ITEMS + 1)])

    def test_exactly_max_lines_accepted(self):
        assert len(Order.create([_order_line() for _ in range(MAX_LINE_ITEMS)]).lines) == 20


class TestShipping:

    def test_below_threshold_standard_only(self):
        options = shipping_options_for(Money(499))
        assert [(o.display_name, o.amount.amount) for o in options] == [("Standard frakt", 49)]

    def test_at_threshold_free_first(self):
        options = shipping_options_for(Money(500))
        assert [(o.display_name, o.amount.amount) for o in options] == [
            ("Fri frakt", 0),
            ("Standard frakt", 49),
        ]
        assert options[0].is_free

    def test_delivery_estimate(self):
        (option,) = shipping_options_for(Money(100))
        assert (option.min_business_days, option.max_business_days) == (3, 7)

    def test_order_gets_options_from_subtotal(self):
        assert len(Order.create([_order_line(product="puffkorg")]).shipping_options) == 1
        assert len(Order.create([_order_line()]).shipping_options) == 2


class TestOrderLine:

    def test_description(self):
        line = _order_line(lining="vit", notes="Initialer AB")
        assert line.description == "Tyg: Noel | Foder: Vit | Önskemål: Initialer AB"

    def test_description_without_lining(self):
        assert _order_line().description == "Tyg: Noel"

    def test_amount_from_catalog_price(self):
        line = _order_line(product="puffkorg", quantity=3)
        assert line.unit_price == Money(250)
        assert line.amount == Money(750)


class TestOrderMetadata:

    def test_flat_item_keys(self):
        order = Order.create(
            [_order_line(quantity=2, lining="sand", notes="Tack"), _order_line(product="puffkorg")]
        )
        assert order.metadata() == {
            "item_0_product": "Miniskötväska",
            "item_0_productSlug": "miniskotvaska",
            "item_0_fabric": "noel",
            "item_0_lining": "sand",
            "item_0_quantity": "2",
            "item_0_notes": "Tack",
            "item_1_product": "Puffkorg",
            "item_1_productSlug": "puffkorg",
            "item_1_fabric": "noel",
            "item_1_quantity": "1",
        }

    def test_values_are_strings(self):
        metadata = Order.create([_order_line(quantity=4)]).metadata()
        assert all(isinstance(v, str) for v in metadata.values())

    def test_product_metadata(self):
        assert _order_line(lining="vit").product_metadata() == {
            "productId": "miniskotvaska",
            "fabric": "noel",
            "fabricName": "Noel",
            "lining": "vit",
            "liningName": "Vit",
            "customerNotes": "",
        }
