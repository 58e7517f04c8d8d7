"""
POS Ledger FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from pos_ledger.config import get_settings
from pos_ledger.logging_config import setup_logging
from pos_ledger.api.health import router as health_router
from pos_ledger.api.purchases import router as purchases_router
from pos_ledger.api.purchase_returns import router as purchase_returns_router
from pos_ledger.api.expenses import router as expenses_router
from pos_ledger.api.ledger import router as ledger_router

settings = get_settings()

setup_logging()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Point-of-sale back office with a double-entry ledger",
)

# Register routers
app.include_router(health_router)
app.include_router(purchases_router)
app.include_router(purchase_returns_router)
app.include_router(expenses_router)
app.include_router(ledger_router)
