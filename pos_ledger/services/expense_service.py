"""
Expense service: create, update and delete cash expenses
together with their journal entry.

Expenses have no inventory linkage: each one maps to a single
two-line journal (expense account debit, cash credit).
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos_ledger.exceptions import NotFoundError
from pos_ledger.models.enums import ReferenceType
from pos_ledger.models.expense import Expense
from pos_ledger.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from pos_ledger.services.journal_composer import JournalComposer
from pos_ledger.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


class ExpenseService:

    def __init__(self, db: Session, composer: JournalComposer | None = None):
        self.db = db
        self.ledger_service = LedgerService(db)
        self.composer = composer or JournalComposer()

    def create_expense(self, request: ExpenseCreate) -> tuple[Expense, int]:
        """
        Record an expense and post its journal.

        Returns the expense and the new journal entry id.

        Accounting:
            DEBIT  Expense account for the category (amount)
            CREDIT Cash (amount)
        """
        expense = Expense(
            description=request.description,
            amount=request.amount,
            expense_date=request.expense_date or date.today(),
            category=request.category,
            notes=request.notes,
        )
        self.db.add(expense)
        self.db.flush()

        journal = self.ledger_service.post(self.composer.compose_expense(expense))

        logger.info("Created expense %s with journal %s", expense.id, journal.id)
        return expense, journal.id

    def update_expense(
        self, expense_id: int, request: ExpenseUpdate
    ) -> tuple[Expense, int]:
        """
        Revise an expense and replace its journal.

        The old journal's lines and ledger rows are removed before
        the new journal is posted, so the document still has
        exactly two lines afterwards. The journal id changes.
        """
        expense = self.get_expense(expense_id)

        expense.description = request.description
        expense.amount = request.amount
        expense.expense_date = request.expense_date
        expense.category = request.category
        expense.notes = request.notes
        self.db.flush()

        previous_id = self.ledger_service.reverse(
            ReferenceType.EXPENSE, expense.id
        )
        journal = self.ledger_service.post(self.composer.compose_expense(expense))

        logger.info(
            "Updated expense %s: journal %s replaced by %s",
            expense.id, previous_id, journal.id,
        )
        return expense, journal.id

    def delete_expense(self, expense_id: int) -> ExpenseResponse:
        """
        Delete an expense after reversing its journal.

        Returns a snapshot of the expense taken before deletion.
        """
        expense = self.get_expense(expense_id)
        snapshot = ExpenseResponse.model_validate(expense)

        self.ledger_service.reverse(ReferenceType.EXPENSE, expense.id)
        self.db.delete(expense)
        self.db.flush()

        logger.info("Deleted expense %s", snapshot.id)
        return snapshot

    def get_expense(self, expense_id: int) -> Expense:
        """Get an expense by ID."""
        expense = self.db.get(Expense, expense_id)
        if not expense:
            raise NotFoundError(f"Expense {expense_id} not found")
        return expense

    def list_expenses(self) -> list[Expense]:
        """All expenses, most recent first."""
        expenses = self.db.execute(
            select(Expense).order_by(Expense.expense_date.desc(), Expense.id.desc())
        ).scalars().all()
        return list(expenses)
