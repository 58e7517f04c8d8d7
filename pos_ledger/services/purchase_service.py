"""
Purchase service: create, update and delete vendor invoices
together with their journal entry and stock movements.

Each operation:
1. Validates (purchase exists, total matches items plus tax,
   invoice number unique, vendor and products exist) before
   anything is written
2. Writes the purchase row
3. Applies the stock side effects
4. Reverses the previous journal (update/delete)
5. Composes and posts the new journal (create/update)

The caller wraps the call in unit_of_work(), so either every
step is committed or none is.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_ledger.config import get_settings
from pos_ledger.exceptions import ConflictError, NotFoundError, ValidationError
from pos_ledger.models.catalog import Vendor
from pos_ledger.models.enums import ReferenceType
from pos_ledger.models.purchase import Purchase
from pos_ledger.models.purchase_return import PurchaseReturn
from pos_ledger.schemas.purchase import (
    PurchaseCreate,
    PurchaseUpdate,
    PurchaseResponse,
)
from pos_ledger.services.inventory_service import InventoryService
from pos_ledger.services.journal_composer import JournalComposer, inventory_cost
from pos_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchasePosting:
    """Accounting outcome of creating or updating a purchase."""
    journal_entry_id: int
    total_inventory_cost: Decimal


class PurchaseService:

    def __init__(self, db: Session, composer: JournalComposer | None = None):
        self.db = db
        self.ledger_service = LedgerService(db)
        self.inventory_service = InventoryService(db)
        self.composer = composer or JournalComposer()

    def _validate(
        self, request: PurchaseCreate, purchase_id: int | None = None
    ) -> None:
        """
        Reject a request before any write is attempted.

        The stated total must equal the items' cost plus tax, since
        the journal debits the former and credits the latter.
        """
        items_cost = inventory_cost(request.items)
        if items_cost + request.tax_amount != request.total_amount:
            raise ValidationError(
                f"Purchase total {request.total_amount} does not match "
                f"items {items_cost} plus tax {request.tax_amount}"
            )

        duplicate = select(Purchase.id).where(
            Purchase.invoice_number == request.invoice_number
        )
        if purchase_id is not None:
            duplicate = duplicate.where(Purchase.id != purchase_id)
        if self.db.execute(duplicate).first():
            raise ConflictError(
                f"Invoice number '{request.invoice_number}' already exists"
            )

        if not self.db.get(Vendor, request.vendor_id):
            raise NotFoundError(f"Vendor {request.vendor_id} not found")

        self.inventory_service.load_products(
            item.product_id for item in request.items
        )

    def _ensure_no_returns(self, purchase: Purchase) -> None:
        """A purchase with returns against it is frozen."""
        has_returns = self.db.execute(
            select(PurchaseReturn.id).where(PurchaseReturn.purchase_id == purchase.id)
        ).first()
        if has_returns:
            raise ConflictError(
                f"Purchase {purchase.id} has returns; delete them first"
            )

    def create_purchase(
        self, request: PurchaseCreate
    ) -> tuple[Purchase, PurchasePosting]:
        """
        Record a vendor invoice, bring its items into stock and
        post its journal.

        Accounting:
            DEBIT  Inventory (items cost)
            DEBIT  Tax Asset (tax_amount, when > 0)
            CREDIT Accounts Payable (total_amount)
        """
        self._validate(request)

        purchase = Purchase(
            invoice_number=request.invoice_number,
            vendor_id=request.vendor_id,
            purchase_date=request.purchase_date or date.today(),
            subtotal=request.subtotal,
            tax_amount=request.tax_amount,
            total_amount=request.total_amount,
        )
        self.db.add(purchase)
        self.db.flush()

        inventory_total = self.inventory_service.apply_purchase(
            purchase, request.items
        )
        journal = self.ledger_service.post(
            self.composer.compose_purchase(purchase, inventory_total)
        )

        logger.info(
            "Created purchase %s (#%s) with journal %s",
            purchase.id, purchase.invoice_number, journal.id,
        )
        return purchase, PurchasePosting(journal.id, inventory_total)

    def update_purchase(
        self, purchase_id: int, request: PurchaseUpdate
    ) -> tuple[Purchase, PurchasePosting]:
        """
        Revise a purchase and replace its journal.

        The old journal is removed and a new one posted, so the
        journal id changes. A purchase without a journal simply
        gets one.
        """
        purchase = self.get_purchase(purchase_id)
        self._ensure_no_returns(purchase)
        self._validate(request, purchase_id=purchase.id)

        purchase.invoice_number = request.invoice_number
        purchase.vendor_id = request.vendor_id
        if request.purchase_date is not None:
            purchase.purchase_date = request.purchase_date
        purchase.subtotal = request.subtotal
        purchase.tax_amount = request.tax_amount
        purchase.total_amount = request.total_amount

        inventory_total = self.inventory_service.revise_purchase(
            purchase, request.items
        )

        previous_id = self.ledger_service.reverse(
            ReferenceType.PURCHASE, purchase.id
        )
        journal = self.ledger_service.post(
            self.composer.compose_purchase(purchase, inventory_total)
        )

        logger.info(
            "Updated purchase %s: journal %s replaced by %s",
            purchase.id, previous_id, journal.id,
        )
        return purchase, PurchasePosting(journal.id, inventory_total)

    def delete_purchase(self, purchase_id: int) -> PurchaseResponse:
        """
        Delete a purchase and its journal.

        Stock is left as it is unless REVERSE_STOCK_ON_PURCHASE_DELETE
        is enabled. Returns a snapshot of the purchase taken before
        deletion so the caller can report what was removed.
        """
        purchase = self.get_purchase(purchase_id)
        self._ensure_no_returns(purchase)
        snapshot = PurchaseResponse.model_validate(purchase)

        self.ledger_service.reverse(ReferenceType.PURCHASE, purchase.id)

        if get_settings().REVERSE_STOCK_ON_PURCHASE_DELETE:
            self.inventory_service.release_purchase(purchase)

        self.db.delete(purchase)
        self.db.flush()

        logger.info("Deleted purchase %s (#%s)", snapshot.id, snapshot.invoice_number)
        return snapshot

    def get_purchase(self, purchase_id: int) -> Purchase:
        """Get a purchase by ID."""
        purchase = self.db.get(Purchase, purchase_id)
        if not purchase:
            raise NotFoundError(f"Purchase {purchase_id} not found")
        return purchase

    def list_purchases(self) -> list[Purchase]:
        purchases = self.db.execute(
            select(Purchase).order_by(Purchase.id)
        ).scalars().all()
        return list(purchases)
