"""
Shared enumerations for database models.

Using Python enums mapped to database enums ensures that
only valid values can be stored.
"""

import enum


class AccountType(str, enum.Enum):
    """The five fundamental accounting categories."""
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    EXPENSE = "EXPENSE"


class ReferenceType(str, enum.Enum):
    """The kind of financial document a journal entry is posted for."""
    PURCHASE = "PURCHASE"
    PURCHASE_RETURN = "PURCHASE_RETURN"
    EXPENSE = "EXPENSE"
    SALE = "SALE"


class AccountRole(str, enum.Enum):
    """
    Purpose of each fixed account in the chart of accounts.

    The numeric id behind each role comes from configuration
    (see ChartOfAccounts); code refers to accounts only by role.
    """
    CASH = "CASH"
    INVENTORY = "INVENTORY"
    ACCOUNTS_PAYABLE = "ACCOUNTS_PAYABLE"
    TAX_ASSET = "TAX_ASSET"
    OPERATING_EXPENSES = "OPERATING_EXPENSES"
    RENT_EXPENSE = "RENT_EXPENSE"
    UTILITIES_EXPENSE = "UTILITIES_EXPENSE"
    SALARIES_EXPENSE = "SALARIES_EXPENSE"
    MAINTENANCE_EXPENSE = "MAINTENANCE_EXPENSE"
    MARKETING_EXPENSE = "MARKETING_EXPENSE"
