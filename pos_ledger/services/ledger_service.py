"""
Ledger service: the core of the accounting engine.

This service enforces the fundamental rules:
1. Every journal entry balances (debits = credits)
2. Every line carries exactly one positive side
3. Posted accounts exist and are active
4. A document has at most one journal entry
5. Every journal line has exactly one general ledger mirror row

No other service writes journal or ledger rows. Posting and
reversal run in the caller's session; the caller decides when
to commit or roll back.
"""

import logging
from decimal import Decimal

from sqlalchemy import select, delete, func, case
from sqlalchemy.orm import Session

from pos_ledger.exceptions import ConflictError, NotFoundError, ValidationError
from pos_ledger.models.account import Account
from pos_ledger.models.enums import AccountType, ReferenceType
from pos_ledger.models.general_ledger import GeneralLedgerEntry
from pos_ledger.models.journal_entry import JournalEntry, JournalEntryLine
from pos_ledger.schemas.ledger import JournalPostRequest

logger = logging.getLogger(__name__)


class LedgerService:
    """
    All journal and general ledger writes pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Posting ---

    def post(self, request: JournalPostRequest) -> JournalEntry:
        """
        Persist a journal entry, its lines and their ledger mirror.

        Steps, all inside the caller's transaction:
        1. Insert the header and obtain its id
        2. Insert each journal line
        3. Insert one general ledger row per line

        Every check runs before the first insert. If any step
        fails the exception propagates and the caller rolls back,
        so no partial header/line/ledger state is ever committed.
        """
        self._validate(request)

        journal = self._insert_header(request)
        lines = self._insert_lines(journal, request)
        self._mirror_to_general_ledger(journal, lines)

        logger.info(
            "Posted journal %s for %s %s: %s line(s), %s",
            journal.id,
            request.reference_type.value,
            request.reference_id,
            len(lines),
            request.total_debits,
        )
        return journal

    def _validate(self, request: JournalPostRequest) -> None:
        # --- Shape and balance ---
        if len(request.lines) < 2:
            raise ValidationError(
                f"Journal for {request.reference_type.value} "
                f"{request.reference_id} needs at least two lines, "
                f"got {len(request.lines)}"
            )

        total_debits = request.total_debits
        total_credits = request.total_credits
        if total_debits != total_credits:
            raise ValidationError(
                f"Journal does not balance: "
                f"debits={total_debits}, credits={total_credits}"
            )

        # --- Accounts ---
        account_ids = {line.account_id for line in request.lines}
        accounts = self.db.execute(
            select(Account).where(Account.id.in_(account_ids))
        ).scalars().all()
        accounts_by_id = {a.id: a for a in accounts}

        missing = account_ids - set(accounts_by_id)
        if missing:
            raise NotFoundError(f"Accounts not found: {sorted(missing)}")

        for account in accounts_by_id.values():
            if not account.is_active:
                raise ValidationError(f"Account {account.code} is not active")

        # --- One journal per document ---
        existing = self.get_journal(request.reference_type, request.reference_id)
        if existing:
            raise ConflictError(
                f"{request.reference_type.value} {request.reference_id} "
                f"already has journal entry {existing.id}"
            )

    def _insert_header(self, request: JournalPostRequest) -> JournalEntry:
        journal = JournalEntry(
            entry_date=request.entry_date,
            description=request.description,
            reference_type=request.reference_type,
            reference_id=request.reference_id,
        )
        self.db.add(journal)
        self.db.flush()
        return journal

    def _insert_lines(
        self, journal: JournalEntry, request: JournalPostRequest
    ) -> list[JournalEntryLine]:
        lines = []
        for line_data in request.lines:
            line = JournalEntryLine(
                journal_id=journal.id,
                account_id=line_data.account_id,
                debit_amount=line_data.debit_amount,
                credit_amount=line_data.credit_amount,
                description=line_data.description,
            )
            self.db.add(line)
            lines.append(line)
        self.db.flush()
        return lines

    def _mirror_to_general_ledger(
        self, journal: JournalEntry, lines: list[JournalEntryLine]
    ) -> list[GeneralLedgerEntry]:
        rows = []
        for line in lines:
            row = GeneralLedgerEntry(
                transaction_date=journal.entry_date,
                account_id=line.account_id,
                debit_amount=line.debit_amount,
                credit_amount=line.credit_amount,
                description=line.description,
                reference_type=journal.reference_type,
                reference_id=journal.reference_id,
                journal_entry_id=journal.id,
            )
            self.db.add(row)
            rows.append(row)
        self.db.flush()
        return rows

    # --- Reversal ---

    def reverse(
        self, reference_type: ReferenceType, reference_id: int
    ) -> int | None:
        """
        Remove the journal posted for a document.

        Deletes the lines, then the ledger rows, then the header.
        Returns the removed journal id, or None when the document
        never had a journal (not an error: it may predate the
        ledger). Update flows post a fresh journal afterwards,
        so journal ids are not stable across document edits.
        """
        journal = self.get_journal(reference_type, reference_id)
        if journal is None:
            logger.info(
                "No journal to reverse for %s %s",
                reference_type.value, reference_id,
            )
            return None

        journal_id = journal.id
        self.db.execute(
            delete(JournalEntryLine).where(
                JournalEntryLine.journal_id == journal_id
            )
        )
        self.db.execute(
            delete(GeneralLedgerEntry).where(
                GeneralLedgerEntry.journal_entry_id == journal_id
            )
        )
        self.db.execute(
            delete(JournalEntry).where(JournalEntry.id == journal_id)
        )

        logger.info(
            "Reversed journal %s for %s %s",
            journal_id, reference_type.value, reference_id,
        )
        return journal_id

    # --- Queries ---

    def get_journal(
        self, reference_type: ReferenceType, reference_id: int
    ) -> JournalEntry | None:
        """Return the journal posted for a document, if any."""
        return self.db.execute(
            select(JournalEntry).where(
                JournalEntry.reference_type == reference_type,
                JournalEntry.reference_id == reference_id,
            )
        ).scalar_one_or_none()

    def get_journal_lines(self, journal_id: int) -> list[JournalEntryLine]:
        lines = self.db.execute(
            select(JournalEntryLine)
            .where(JournalEntryLine.journal_id == journal_id)
            .order_by(JournalEntryLine.id)
        ).scalars().all()
        return list(lines)

    def get_ledger_entries(
        self,
        reference_type: ReferenceType | None = None,
        reference_id: int | None = None,
        account_id: int | None = None,
    ) -> list[GeneralLedgerEntry]:
        """
        Return general ledger rows, optionally filtered.

        Purchases sort before sales, then newest first, matching
        how the purchase/sale reports present merged activity.
        """
        query = select(GeneralLedgerEntry)
        if reference_type is not None:
            query = query.where(GeneralLedgerEntry.reference_type == reference_type)
        if reference_id is not None:
            query = query.where(GeneralLedgerEntry.reference_id == reference_id)
        if account_id is not None:
            query = query.where(GeneralLedgerEntry.account_id == account_id)

        purchase_first = case(
            (GeneralLedgerEntry.reference_type == ReferenceType.PURCHASE, 0),
            else_=1,
        )
        query = query.order_by(
            purchase_first,
            GeneralLedgerEntry.transaction_date.desc(),
            GeneralLedgerEntry.id,
        )
        return list(self.db.execute(query).scalars().all())

    def get_account_balance(self, account_id: int) -> Decimal:
        """
        Calculate an account's balance from the general ledger.

        For ASSET and EXPENSE accounts: balance = debits - credits
        For LIABILITY, EQUITY, and REVENUE: balance = credits - debits
        """
        account = self.db.get(Account, account_id)
        if not account:
            raise NotFoundError(f"Account {account_id} not found")

        total_debits, total_credits = self.db.execute(
            select(
                func.coalesce(func.sum(GeneralLedgerEntry.debit_amount), 0),
                func.coalesce(func.sum(GeneralLedgerEntry.credit_amount), 0),
            ).where(GeneralLedgerEntry.account_id == account_id)
        ).one()

        debits = Decimal(str(total_debits))
        credits = Decimal(str(total_credits))
        if account.account_type in (AccountType.ASSET, AccountType.EXPENSE):
            return debits - credits
        return credits - debits

    def check_integrity(self) -> dict:
        """
        Verify the whole ledger.

        Checks that total debits equal total credits in the
        general ledger, lists any journal whose own lines do not
        balance, and compares journal line and ledger row counts
        (they move in lockstep, so they must be equal).
        """
        total_debits, total_credits = self.db.execute(
            select(
                func.coalesce(func.sum(GeneralLedgerEntry.debit_amount), 0),
                func.coalesce(func.sum(GeneralLedgerEntry.credit_amount), 0),
            )
        ).one()
        total_debits = Decimal(str(total_debits))
        total_credits = Decimal(str(total_credits))

        per_journal = self.db.execute(
            select(
                JournalEntryLine.journal_id,
                func.coalesce(func.sum(JournalEntryLine.debit_amount), 0),
                func.coalesce(func.sum(JournalEntryLine.credit_amount), 0),
            ).group_by(JournalEntryLine.journal_id)
        ).all()
        unbalanced = sorted(
            journal_id for journal_id, debits, credits in per_journal
            if Decimal(str(debits)) != Decimal(str(credits))
        )

        line_count = self.db.execute(
            select(func.count()).select_from(JournalEntryLine)
        ).scalar()
        ledger_count = self.db.execute(
            select(func.count()).select_from(GeneralLedgerEntry)
        ).scalar()

        difference = total_debits - total_credits
        return {
            "total_debits": total_debits,
            "total_credits": total_credits,
            "difference": difference,
            "is_balanced": (
                difference == 0 and not unbalanced and line_count == ledger_count
            ),
            "unbalanced_journal_ids": unbalanced,
            "journal_line_count": line_count,
            "ledger_row_count": ledger_count,
        }
