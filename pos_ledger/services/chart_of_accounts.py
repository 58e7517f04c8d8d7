"""
Chart-of-accounts resolver.

Maps a document type (and, for expenses, a free-text category)
to the fixed accounts a posting debits and credits. Everything
here is static data and pure lookups: no database access.
"""

from decimal import Decimal
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, NamedTuple

from pos_ledger.config import Settings, get_settings
from pos_ledger.models.enums import AccountRole, ReferenceType


# Expense category (lower-cased) -> expense account role.
# Anything not listed falls back to OPERATING_EXPENSES.
EXPENSE_CATEGORY_ROLES: Mapping[str, AccountRole] = MappingProxyType({
    "rent": AccountRole.RENT_EXPENSE,
    "utilities": AccountRole.UTILITIES_EXPENSE,
    "electricity": AccountRole.UTILITIES_EXPENSE,
    "water": AccountRole.UTILITIES_EXPENSE,
    "internet": AccountRole.UTILITIES_EXPENSE,
    "salaries": AccountRole.SALARIES_EXPENSE,
    "wages": AccountRole.SALARIES_EXPENSE,
    "marketing": AccountRole.MARKETING_EXPENSE,
    "advertising": AccountRole.MARKETING_EXPENSE,
    "maintenance": AccountRole.MAINTENANCE_EXPENSE,
})

DEFAULT_EXPENSE_ROLE = AccountRole.OPERATING_EXPENSES

# Settings attribute holding the id of each role
ROLE_SETTINGS: Mapping[AccountRole, str] = MappingProxyType({
    AccountRole.CASH: "CASH_ACCOUNT_ID",
    AccountRole.INVENTORY: "INVENTORY_ACCOUNT_ID",
    AccountRole.ACCOUNTS_PAYABLE: "ACCOUNTS_PAYABLE_ACCOUNT_ID",
    AccountRole.TAX_ASSET: "TAX_ASSET_ACCOUNT_ID",
    AccountRole.OPERATING_EXPENSES: "OPERATING_EXPENSES_ACCOUNT_ID",
    AccountRole.RENT_EXPENSE: "RENT_EXPENSE_ACCOUNT_ID",
    AccountRole.UTILITIES_EXPENSE: "UTILITIES_EXPENSE_ACCOUNT_ID",
    AccountRole.SALARIES_EXPENSE: "SALARIES_EXPENSE_ACCOUNT_ID",
    AccountRole.MAINTENANCE_EXPENSE: "MAINTENANCE_EXPENSE_ACCOUNT_ID",
    AccountRole.MARKETING_EXPENSE: "MARKETING_EXPENSE_ACCOUNT_ID",
})


class ResolvedAccounts(NamedTuple):
    """Accounts a single document posts to."""
    debit_account_id: int
    credit_account_id: int
    tax_account_id: int | None = None
    refund_account_id: int | None = None


class ChartOfAccounts:
    """
    Role -> account id mapping plus the posting rules per
    document type.

    Built from Settings by default; tests and tools may pass an
    explicit mapping instead.
    """

    def __init__(self, account_ids: Mapping[AccountRole, int]):
        missing = set(AccountRole) - set(account_ids)
        if missing:
            names = sorted(role.value for role in missing)
            raise ValueError(f"No account id configured for: {names}")
        self._account_ids = MappingProxyType(dict(account_ids))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChartOfAccounts":
        return cls({
            role: int(getattr(settings, attr))
            for role, attr in ROLE_SETTINGS.items()
        })

    @property
    def account_ids(self) -> Mapping[AccountRole, int]:
        return self._account_ids

    def account_id(self, role: AccountRole) -> int:
        return self._account_ids[role]

    def expense_role(self, category: str | None) -> AccountRole:
        if not category:
            return DEFAULT_EXPENSE_ROLE
        return EXPENSE_CATEGORY_ROLES.get(
            category.strip().lower(), DEFAULT_EXPENSE_ROLE
        )

    def expense_account(self, category: str | None) -> int:
        """Expense account for a category; unknown or empty -> default."""
        return self.account_id(self.expense_role(category))

    def resolve(
        self,
        reference_type: ReferenceType,
        category: str | None = None,
        tax_amount: Decimal | None = None,
        refund_amount: Decimal | None = None,
    ) -> ResolvedAccounts:
        """
        Pick the accounts a document of this type posts to.

        PURCHASE:        debit Inventory (+ Tax Asset when tax is
                         present), credit Accounts Payable.
        PURCHASE_RETURN: debit Accounts Payable (+ Cash when a refund
                         was received), credit Inventory (+ Tax Asset
                         when tax is present).
        EXPENSE:         debit the category's expense account,
                         credit Cash.

        Raises ValueError for any other type.
        """
        tax_account_id = None
        if tax_amount is not None and tax_amount > 0:
            tax_account_id = self.account_id(AccountRole.TAX_ASSET)

        if reference_type == ReferenceType.PURCHASE:
            return ResolvedAccounts(
                debit_account_id=self.account_id(AccountRole.INVENTORY),
                credit_account_id=self.account_id(AccountRole.ACCOUNTS_PAYABLE),
                tax_account_id=tax_account_id,
            )

        if reference_type == ReferenceType.PURCHASE_RETURN:
            refund_account_id = None
            if refund_amount is not None and refund_amount > 0:
                refund_account_id = self.account_id(AccountRole.CASH)
            return ResolvedAccounts(
                debit_account_id=self.account_id(AccountRole.ACCOUNTS_PAYABLE),
                credit_account_id=self.account_id(AccountRole.INVENTORY),
                tax_account_id=tax_account_id,
                refund_account_id=refund_account_id,
            )

        if reference_type == ReferenceType.EXPENSE:
            return ResolvedAccounts(
                debit_account_id=self.expense_account(category),
                credit_account_id=self.account_id(AccountRole.CASH),
            )

        raise ValueError(f"No posting rule for reference type {reference_type}")


@lru_cache()
def get_chart_of_accounts() -> ChartOfAccounts:
    """The chart of accounts resolved once from application settings."""
    return ChartOfAccounts.from_settings(get_settings())
