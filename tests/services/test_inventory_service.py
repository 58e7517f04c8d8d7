"""
Tests for the InventoryService stock and cost basis rules.
"""

from decimal import Decimal

import pytest

from pos_ledger.exceptions import NotFoundError
from pos_ledger.models.purchase import Purchase
from pos_ledger.services.inventory_service import InventoryService
from pos_ledger.schemas.purchase import PurchaseItemCreate


def make_purchase(db, vendor, invoice="INV-1"):
    purchase = Purchase(
        invoice_number=invoice,
        vendor_id=vendor.id,
        tax_amount=Decimal("0"),
        total_amount=Decimal("1.00"),
    )
    db.add(purchase)
    db.flush()
    return purchase


def item(product, quantity, unit_cost):
    return PurchaseItemCreate(
        product_id=product.id, quantity=quantity, unit_cost=Decimal(unit_cost)
    )


class TestLoadProducts:

    def test_missing_product_rejected(self, db_session, product):
        service = InventoryService(db_session)
        with pytest.raises(NotFoundError, match=r"Products not found: \[404\]"):
            service.load_products([product.id, 404])


class TestApplyPurchase:

    def test_stock_and_cost_basis_updated(self, db_session, vendor, product):
        purchase = make_purchase(db_session, vendor)

        total = InventoryService(db_session).apply_purchase(
            purchase, [item(product, 10, "50.00")]
        )

        assert total == Decimal("500.00")
        assert product.stock == 10
        assert product.cost_price == Decimal("50.00")
        assert len(purchase.items) == 1
        assert purchase.items[0].line_total == Decimal("500.00")

    def test_cost_basis_is_last_write_wins(self, db_session, vendor, product):
        service = InventoryService(db_session)
        service.apply_purchase(
            make_purchase(db_session, vendor, "INV-1"), [item(product, 10, "50.00")]
        )
        service.apply_purchase(
            make_purchase(db_session, vendor, "INV-2"), [item(product, 1, "70.00")]
        )

        assert product.stock == 11
        assert product.cost_price == Decimal("70.00")


class TestRevisePurchase:

    def test_stock_moves_by_quantity_difference(
        self, db_session, vendor, product
    ):
        service = InventoryService(db_session)
        purchase = make_purchase(db_session, vendor)
        service.apply_purchase(purchase, [item(product, 10, "50.00")])

        total = service.revise_purchase(purchase, [item(product, 6, "55.00")])

        assert total == Decimal("330.00")
        assert product.stock == 6
        assert product.cost_price == Decimal("55.00")
        assert [i.quantity for i in purchase.items] == [6]

    def test_unchanged_quantity_keeps_cost_basis(
        self, db_session, vendor, product
    ):
        service = InventoryService(db_session)
        purchase = make_purchase(db_session, vendor)
        service.apply_purchase(purchase, [item(product, 10, "50.00")])

        service.revise_purchase(purchase, [item(product, 10, "45.00")])

        assert product.stock == 10
        assert product.cost_price == Decimal("50.00")
        assert purchase.items[0].unit_cost == Decimal("45.00")

    def test_dropped_product_leaves_stock(
        self, db_session, vendor, product, second_product
    ):
        service = InventoryService(db_session)
        purchase = make_purchase(db_session, vendor)
        service.apply_purchase(purchase, [
            item(product, 10, "50.00"),
            item(second_product, 4, "12.00"),
        ])

        service.revise_purchase(purchase, [item(product, 10, "50.00")])

        assert product.stock == 10
        assert second_product.stock == 5


class TestReleasePurchase:

    def test_release_takes_quantities_back_out(
        self, db_session, vendor, product
    ):
        service = InventoryService(db_session)
        purchase = make_purchase(db_session, vendor)
        service.apply_purchase(purchase, [item(product, 10, "50.00")])

        service.release_purchase(purchase)

        assert product.stock == 0
        assert product.cost_price == Decimal("50.00")
