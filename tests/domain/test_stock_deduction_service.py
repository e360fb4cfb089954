"""Unit tests for the StockDeductionService domain service."""

from storefront.domain.model.fulfillment import FulfillmentLine
from storefront.domain.service.stock_deduction_service import StockDeductionService
from tests.fakes import FakeProductRepository, sample_products


def _svc():
    repo = FakeProductRepository(sample_products())
    return StockDeductionService(repo), repo


class TestParseLines:

    def test_indices_sorted(self):
        metadata = {
            "item_10_productSlug": "a",
            "item_2_productSlug": "b",
            "item_0_quantity": "1",
            "other": "x",
        }
        assert StockDeductionService.item_indices(metadata) == [0, 2, 10]

    def test_parses_complete_lines(self):
        metadata = {
            "item_0_product": "Miniskötväska",
            "item_0_productSlug": "miniskotvaska",
            "item_0_quantity": "2",
            "item_1_productSlug": "puffkorg",
            "item_1_quantity": " 1 ",
        }
        assert StockDeductionService.parse_lines(metadata) == [
            FulfillmentLine(0, "miniskotvaska", 2, "Miniskötväska"),
            FulfillmentLine(1, "puffkorg", 1, None),
        ]

    def test_skips_malformed_lines(self):
        metadata = {
            "item_0_productSlug": "miniskotvaska",
            "item_0_quantity": "2",
            "item_1_product": "No slug",
            "item_1_quantity": "1",
            "item_2_productSlug": "puffkorg",
            "item_3_productSlug": "puffkorg",
            "item_3_quantity": "abc",
            "item_4_productSlug": "puffkorg",
            "item_4_quantity": "0",
            "item_5_productSlug": "puffkorg",
            "item_5_quantity": "-3",
        }
        lines = StockDeductionService.parse_lines(metadata)
        assert [l.index for l in lines] == [0]

    def test_quantity_reads_leading_integer(self):
        metadata = {
            "item_0_productSlug": "miniskotvaska",
            "item_0_quantity": "3.5",
            "item_1_productSlug": "puffkorg",
            "item_1_quantity": "2abc",
            "item_2_productSlug": "puffkorg",
            "item_2_quantity": "x2",
        }
        lines = StockDeductionService.parse_lines(metadata)
        assert [(l.index, l.quantity) for l in lines] == [(0, 3), (1, 2)]

    def test_empty_metadata(self):
        assert StockDeductionService.parse_lines({}) == []


class TestDeduct:

    def test_deducts_each_line(self):
        svc, repo = _svc()
        results = svc.deduct(
            [FulfillmentLine(0, "miniskotvaska", 3), FulfillmentLine(1, "puffkorg", 1)]
        )
        assert [r.success for r in results] == [True, True]
        assert repo.get_by_id("miniskotvaska").stock == 7
        assert repo.get_by_id("puffkorg").stock == 4
        assert results[0].new_stock == 7

    def test_clamps_at_zero(self):
        svc, repo = _svc()
        (result,) = svc.deduct([FulfillmentLine(0, "puffkorg", 9)])
        assert result.success
        assert repo.get_by_id("puffkorg").stock == 0

    def test_unknown_product_fails_only_that_line(self):
        svc, repo = _svc()
        results = svc.deduct(
            [FulfillmentLine(0, "ghost", 1), FulfillmentLine(1, "miniskotvaska", 1)]
        )
        assert not results[0].success
        assert results[0].error == "Product not found"
        assert results[1].success
        assert repo.get_by_id("miniskotvaska").stock == 9

    def test_storage_failure_fails_only_that_line(self):
        class FlakyRepo(FakeProductRepository):
            def save(self, product):
                if product.id == "puffkorg":
                    raise OSError("disk full")
                super().save(product)

        repo = FlakyRepo(sample_products())
        results = StockDeductionService(repo).deduct(
            [FulfillmentLine(0, "puffkorg", 1), FulfillmentLine(1, "mini-pouch", 2)]
        )
        assert [r.success for r in results] == [False, True]
        assert "disk full" in results[0].error

    def test_lookup_failure_fails_only_that_line(self):
        class UnreadableRepo(FakeProductRepository):
            def get_by_id(self, product_id):
                if product_id == "miniskotvaska":
                    raise OSError("disk read failed")
                return super().get_by_id(product_id)

        repo = UnreadableRepo(sample_products())
        results = StockDeductionService(repo).deduct(
            [FulfillmentLine(0, "miniskotvaska", 1), FulfillmentLine(1, "puffkorg", 1)]
        )
        assert [r.success for r in results] == [False, True]
        assert "disk read failed" in results[0].error
        assert repo.get_by_id("puffkorg").stock == 4

    def test_corrupt_record_fails_only_that_line(self):
        class CorruptRepo(FakeProductRepository):
            def get_by_id(self, product_id):
                if product_id == "puffkorg":
                    raise KeyError("price")
                return super().get_by_id(product_id)

        repo = CorruptRepo(sample_products())
        results = StockDeductionService(repo).deduct(
            [FulfillmentLine(0, "puffkorg", 1), FulfillmentLine(1, "mini-pouch", 2)]
        )
        assert [r.success for r in results] == [False, True]
        assert repo.get_by_id("mini-pouch").stock == 18
