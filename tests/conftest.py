"""
Shared test fixtures.

Sets up an isolated test database so tests never touch
the real database. Every test starts with fresh tables and
the fixed chart of accounts already seeded.
"""

import os

# Point the application engine at SQLite before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from pos_ledger.main import app
from pos_ledger.models.base import Base, get_db
from pos_ledger.models.catalog import Vendor, Product
from pos_ledger.seed import seed_chart_of_accounts


# Use SQLite for tests; no external database needed.
TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)

TestSessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(autouse=True)
def setup_database():
    """
    Create all tables and seed the accounts before each test,
    drop everything after.
    """
    Base.metadata.create_all(bind=engine)
    session = TestSessionLocal()
    try:
        seed_chart_of_accounts(session)
        session.commit()
    finally:
        session.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    """Provide a database session for direct service testing."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session):
    """
    Provide a test client with the test database.

    We override the get_db dependency so the FastAPI app
    uses our test session instead of the real database.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def vendor(db_session):
    vendor = Vendor(name="Acme Wholesale", phone="555-0100")
    db_session.add(vendor)
    db_session.commit()
    return vendor


@pytest.fixture
def product(db_session):
    product = Product(
        sku="SKU-001",
        name="Widget",
        cost_price=Decimal("40.00"),
        sale_price=Decimal("80.00"),
        stock=0,
    )
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture
def second_product(db_session):
    product = Product(
        sku="SKU-002",
        name="Gadget",
        cost_price=Decimal("10.00"),
        sale_price=Decimal("25.00"),
        stock=5,
    )
    db_session.add(product)
    db_session.commit()
    return product
