"""
Purchase return service: send goods from an earlier purchase back
to the vendor, together with the journal entry and stock movement.

A return can only take back what the purchase brought in: every
product must be on the original purchase, and the quantity returned
across all of its returns may not exceed the quantity bought.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from pos_ledger.exceptions import ConflictError, NotFoundError, ValidationError
from pos_ledger.models.enums import ReferenceType
from pos_ledger.models.purchase import Purchase
from pos_ledger.models.purchase_return import PurchaseReturn, PurchaseReturnItem
from pos_ledger.schemas.purchase_return import (
    PurchaseReturnCreate,
    PurchaseReturnResponse,
)
from pos_ledger.services.inventory_service import InventoryService
from pos_ledger.services.journal_composer import JournalComposer
from pos_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReturnPosting:
    """Accounting outcome of recording a purchase return."""
    journal_entry_id: int
    total_returned_cost: Decimal


class PurchaseReturnService:

    def __init__(self, db: Session, composer: JournalComposer | None = None):
        self.db = db
        self.ledger_service = LedgerService(db)
        self.inventory_service = InventoryService(db)
        self.composer = composer or JournalComposer()

    def _returned_quantities(self, purchase_id: int) -> dict[int, int]:
        """Quantity already returned per product for a purchase."""
        rows = self.db.execute(
            select(PurchaseReturnItem.product_id, func.sum(PurchaseReturnItem.quantity))
            .join(PurchaseReturn)
            .where(PurchaseReturn.purchase_id == purchase_id)
            .group_by(PurchaseReturnItem.product_id)
        ).all()
        return {product_id: int(quantity) for product_id, quantity in rows}

    def _validate(self, request: PurchaseReturnCreate) -> Purchase:
        """
        Reject a return before any write is attempted.

        Returns the original purchase.
        """
        duplicate = self.db.execute(
            select(PurchaseReturn.id).where(
                PurchaseReturn.return_number == request.return_number
            )
        ).first()
        if duplicate:
            raise ConflictError(
                f"Return number '{request.return_number}' already exists"
            )

        purchase = self.db.get(Purchase, request.purchase_id)
        if not purchase:
            raise NotFoundError(f"Purchase {request.purchase_id} not found")

        bought: dict[int, int] = defaultdict(int)
        unit_costs: dict[int, Decimal] = {}
        for item in purchase.items:
            bought[item.product_id] += item.quantity
            unit_costs[item.product_id] = item.unit_cost

        requested: dict[int, int] = defaultdict(int)
        for item in request.items:
            requested[item.product_id] += item.quantity

        already_returned = self._returned_quantities(purchase.id)
        for product_id, quantity in requested.items():
            if product_id not in bought:
                raise ValidationError(
                    f"Product {product_id} was not in purchase "
                    f"#{purchase.invoice_number}"
                )
            remaining = bought[product_id] - already_returned.get(product_id, 0)
            if quantity > remaining:
                raise ValidationError(
                    f"Return quantity ({quantity}) exceeds remaining "
                    f"quantity ({remaining}) for product {product_id}"
                )

        if request.refund_received > request.total_amount:
            raise ValidationError(
                f"Refund {request.refund_received} exceeds return "
                f"total {request.total_amount}"
            )

        returned_cost = sum(
            (quantity * unit_costs[product_id]
             for product_id, quantity in requested.items()),
            Decimal("0"),
        )
        if returned_cost + request.tax_amount != request.total_amount:
            raise ValidationError(
                f"Return total {request.total_amount} does not match "
                f"returned goods {returned_cost} plus tax {request.tax_amount}"
            )

        return purchase

    def create_purchase_return(
        self, request: PurchaseReturnCreate
    ) -> tuple[PurchaseReturn, ReturnPosting]:
        """
        Record a return, take the goods out of stock and post its
        journal.

        Accounting:
            DEBIT  Cash (refund_received, when > 0)
            DEBIT  Accounts Payable (total_amount - refund_received)
            CREDIT Inventory (returned goods at purchase cost)
            CREDIT Tax Asset (tax_amount, when > 0)
        """
        purchase = self._validate(request)

        purchase_return = PurchaseReturn(
            return_number=request.return_number,
            purchase_id=purchase.id,
            return_date=request.return_date or date.today(),
            tax_amount=request.tax_amount,
            total_amount=request.total_amount,
            refund_received=request.refund_received,
            reason=request.reason,
        )
        self.db.add(purchase_return)
        self.db.flush()

        returned_cost = self.inventory_service.apply_return(
            purchase_return, purchase, request.items
        )
        journal = self.ledger_service.post(
            self.composer.compose_purchase_return(purchase_return, returned_cost)
        )

        logger.info(
            "Created purchase return %s (#%s) against purchase %s with journal %s",
            purchase_return.id, purchase_return.return_number,
            purchase.id, journal.id,
        )
        return purchase_return, ReturnPosting(journal.id, returned_cost)

    def delete_purchase_return(self, return_id: int) -> PurchaseReturnResponse:
        """
        Delete a return, reverse its journal and put the goods
        back into stock.

        Returns a snapshot taken before deletion.
        """
        purchase_return = self.get_purchase_return(return_id)
        snapshot = PurchaseReturnResponse.model_validate(purchase_return)

        self.ledger_service.reverse(
            ReferenceType.PURCHASE_RETURN, purchase_return.id
        )
        self.inventory_service.restore_return(purchase_return)
        self.db.delete(purchase_return)
        self.db.flush()

        logger.info(
            "Deleted purchase return %s (#%s)", snapshot.id, snapshot.return_number
        )
        return snapshot

    def get_purchase_return(self, return_id: int) -> PurchaseReturn:
        purchase_return = self.db.get(PurchaseReturn, return_id)
        if not purchase_return:
            raise NotFoundError(f"Purchase return {return_id} not found")
        return purchase_return

    def list_purchase_returns(self) -> list[PurchaseReturn]:
        returns = self.db.execute(
            select(PurchaseReturn).order_by(PurchaseReturn.id)
        ).scalars().all()
        return list(returns)
