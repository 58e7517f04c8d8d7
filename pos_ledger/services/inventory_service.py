"""
Inventory service: stock and cost basis side effects of purchases
and purchase returns.

Runs in the same session as the journal posting, so stock never
moves without its matching journal entry.

Costing policy: a product's cost_price is overwritten with the
unit cost of the latest purchase line (last write wins). This is
not a weighted average and not FIFO. Returns never change the
cost basis.
"""

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_ledger.exceptions import NotFoundError
from pos_ledger.models.catalog import Product
from pos_ledger.models.purchase import Purchase, PurchaseItem
from pos_ledger.models.purchase_return import PurchaseReturn, PurchaseReturnItem
from pos_ledger.schemas.purchase import PurchaseItemCreate
from pos_ledger.schemas.purchase_return import PurchaseReturnItemCreate

logger = logging.getLogger(__name__)


class InventoryService:

    def __init__(self, db: Session):
        self.db = db

    def load_products(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """
        Fetch products by id, failing if any is missing.

        Purchase flows call this during validation, before any
        write, so an unknown product never leaves partial state.
        """
        ids = set(product_ids)
        products = self.db.execute(
            select(Product).where(Product.id.in_(ids))
        ).scalars().all()
        by_id = {p.id: p for p in products}

        missing = ids - set(by_id)
        if missing:
            raise NotFoundError(f"Products not found: {sorted(missing)}")
        return by_id

    def apply_purchase(
        self, purchase: Purchase, items: list[PurchaseItemCreate]
    ) -> Decimal:
        """
        Record a purchase's items and bring the stock in.

        For each item:
        - insert a purchase item with line_total = quantity x unit_cost
        - add quantity to the product's stock
        - overwrite the product's cost basis with unit_cost

        Returns the total inventory cost, which the journal
        composer debits to Inventory.
        """
        products = self.load_products(item.product_id for item in items)

        total = Decimal("0")
        for item in items:
            line_total = item.quantity * item.unit_cost
            purchase.items.append(PurchaseItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_cost=item.unit_cost,
                line_total=line_total,
            ))

            product = products[item.product_id]
            product.stock += item.quantity
            product.cost_price = item.unit_cost
            total += line_total

        self.db.flush()
        logger.info(
            "Purchase #%s added %s item(s) to stock, cost %s",
            purchase.invoice_number, len(items), total,
        )
        return total

    def revise_purchase(
        self, purchase: Purchase, items: list[PurchaseItemCreate]
    ) -> Decimal:
        """
        Replace a purchase's items and adjust stock by the difference.

        Quantities are compared per product:
        - changed quantity: stock moves by the difference and the
          cost basis is overwritten with the new unit cost
        - unchanged quantity: stock and cost basis are left alone
        - product dropped from the purchase: its old quantity is
          taken back out of stock

        Returns the new total inventory cost.
        """
        old_quantities: dict[int, int] = defaultdict(int)
        for existing in purchase.items:
            old_quantities[existing.product_id] += existing.quantity

        new_quantities: dict[int, int] = defaultdict(int)
        new_unit_costs: dict[int, Decimal] = {}
        for item in items:
            new_quantities[item.product_id] += item.quantity
            new_unit_costs[item.product_id] = item.unit_cost

        products = self.load_products(set(old_quantities) | set(new_quantities))

        purchase.items.clear()
        self.db.flush()

        total = Decimal("0")
        for item in items:
            line_total = item.quantity * item.unit_cost
            purchase.items.append(PurchaseItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_cost=item.unit_cost,
                line_total=line_total,
            ))
            total += line_total

        for product_id, product in products.items():
            difference = new_quantities.get(product_id, 0) - old_quantities.get(product_id, 0)
            if difference == 0:
                continue
            product.stock += difference
            if product_id in new_unit_costs:
                product.cost_price = new_unit_costs[product_id]

        self.db.flush()
        logger.info(
            "Purchase #%s revised to %s item(s), cost %s",
            purchase.invoice_number, len(items), total,
        )
        return total

    def release_purchase(self, purchase: Purchase) -> None:
        """
        Take a purchase's quantities back out of stock.

        The cost basis is not restored: the previous value is not
        recorded anywhere.
        """
        products = self.load_products(item.product_id for item in purchase.items)
        for item in purchase.items:
            products[item.product_id].stock -= item.quantity
        self.db.flush()
        logger.info("Purchase #%s released from stock", purchase.invoice_number)

    def apply_return(
        self,
        purchase_return: PurchaseReturn,
        purchase: Purchase,
        items: list[PurchaseReturnItemCreate],
    ) -> Decimal:
        """
        Record a return's items and take the goods out of stock.

        Each returned product leaves at the unit cost it was bought
        at on the original purchase. The cost basis is left alone.
        Returns the total returned cost, which the journal composer
        credits to Inventory.
        """
        unit_costs = {item.product_id: item.unit_cost for item in purchase.items}
        products = self.load_products(item.product_id for item in items)

        total = Decimal("0")
        for item in items:
            unit_cost = unit_costs[item.product_id]
            line_total = item.quantity * unit_cost
            purchase_return.items.append(PurchaseReturnItem(
                product_id=item.product_id,
                quantity=item.quantity,
                unit_cost=unit_cost,
                line_total=line_total,
            ))
            products[item.product_id].stock -= item.quantity
            total += line_total

        self.db.flush()
        logger.info(
            "Purchase return #%s took %s item(s) out of stock, cost %s",
            purchase_return.return_number, len(items), total,
        )
        return total

    def restore_return(self, purchase_return: PurchaseReturn) -> None:
        """Put a deleted return's quantities back into stock."""
        products = self.load_products(
            item.product_id for item in purchase_return.items
        )
        for item in purchase_return.items:
            products[item.product_id].stock += item.quantity
        self.db.flush()
        logger.info(
            "Purchase return #%s restored to stock", purchase_return.return_number
        )
