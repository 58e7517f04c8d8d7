"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "POS Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = _env_flag("DEBUG")

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "postgresql://localhost:5432/pos_ledger"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str | None = os.getenv("LOG_FILE") or None

    # Inventory
    # Deleting a purchase leaves stock untouched unless this is enabled.
    REVERSE_STOCK_ON_PURCHASE_DELETE: bool = _env_flag(
        "REVERSE_STOCK_ON_PURCHASE_DELETE"
    )

    # Chart of accounts. These ids are seeded out-of-band and must
    # match the rows in the accounts table.
    CASH_ACCOUNT_ID: int = int(os.getenv("CASH_ACCOUNT_ID", "1"))
    INVENTORY_ACCOUNT_ID: int = int(os.getenv("INVENTORY_ACCOUNT_ID", "4"))
    ACCOUNTS_PAYABLE_ACCOUNT_ID: int = int(
        os.getenv("ACCOUNTS_PAYABLE_ACCOUNT_ID", "5")
    )
    TAX_ASSET_ACCOUNT_ID: int = int(os.getenv("TAX_ASSET_ACCOUNT_ID", "99"))
    OPERATING_EXPENSES_ACCOUNT_ID: int = int(
        os.getenv("OPERATING_EXPENSES_ACCOUNT_ID", "11")
    )
    RENT_EXPENSE_ACCOUNT_ID: int = int(
        os.getenv("RENT_EXPENSE_ACCOUNT_ID", "12")
    )
    UTILITIES_EXPENSE_ACCOUNT_ID: int = int(
        os.getenv("UTILITIES_EXPENSE_ACCOUNT_ID", "13")
    )
    SALARIES_EXPENSE_ACCOUNT_ID: int = int(
        os.getenv("SALARIES_EXPENSE_ACCOUNT_ID", "14")
    )
    MAINTENANCE_EXPENSE_ACCOUNT_ID: int = int(
        os.getenv("MAINTENANCE_EXPENSE_ACCOUNT_ID", "15")
    )
    MARKETING_EXPENSE_ACCOUNT_ID: int = int(
        os.getenv("MARKETING_EXPENSE_ACCOUNT_ID", "16")
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls, so the account ids are resolved a single
    time at startup.
    """
    return Settings()
