"""
Seed the chart of accounts.

The ledger posts against fixed account ids and never creates
accounts itself, so these rows must exist before the first
document is recorded. Run once per database:

    python -m pos_ledger.seed
"""

import logging

from sqlalchemy.orm import Session

from pos_ledger.models.account import Account
from pos_ledger.models.base import SessionLocal
from pos_ledger.models.enums import AccountRole, AccountType
from pos_ledger.services.chart_of_accounts import (
    ChartOfAccounts,
    get_chart_of_accounts,
)

logger = logging.getLogger(__name__)


# role -> (code, name, type)
ACCOUNT_DEFINITIONS = {
    AccountRole.CASH: ("1000", "Cash", AccountType.ASSET),
    AccountRole.INVENTORY: ("1200", "Inventory", AccountType.ASSET),
    AccountRole.TAX_ASSET: ("1300", "Recoverable Tax", AccountType.ASSET),
    AccountRole.ACCOUNTS_PAYABLE: ("2000", "Accounts Payable", AccountType.LIABILITY),
    AccountRole.OPERATING_EXPENSES: ("6000", "Operating Expenses", AccountType.EXPENSE),
    AccountRole.RENT_EXPENSE: ("6100", "Rent Expense", AccountType.EXPENSE),
    AccountRole.UTILITIES_EXPENSE: ("6200", "Utilities Expense", AccountType.EXPENSE),
    AccountRole.SALARIES_EXPENSE: ("6300", "Salaries Expense", AccountType.EXPENSE),
    AccountRole.MAINTENANCE_EXPENSE: ("6400", "Maintenance Expense", AccountType.EXPENSE),
    AccountRole.MARKETING_EXPENSE: ("6500", "Marketing Expense", AccountType.EXPENSE),
}


def seed_chart_of_accounts(
    db: Session, chart: ChartOfAccounts | None = None
) -> list[Account]:
    """
    Insert any missing fixed accounts. Existing rows are left
    untouched, so running the seed twice is harmless.
    """
    chart = chart or get_chart_of_accounts()
    created = []
    for role, (code, name, account_type) in ACCOUNT_DEFINITIONS.items():
        account_id = chart.account_id(role)
        if db.get(Account, account_id):
            continue
        account = Account(
            id=account_id, code=code, name=name, account_type=account_type,
        )
        db.add(account)
        created.append(account)
    db.flush()
    return created


if __name__ == "__main__":
    from pos_ledger.logging_config import setup_logging

    setup_logging()
    session = SessionLocal()
    try:
        accounts = seed_chart_of_accounts(session)
        session.commit()
        logger.info("Seeded %s account(s)", len(accounts))
    finally:
        session.close()
