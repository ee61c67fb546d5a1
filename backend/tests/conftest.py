"""
Pytest fixtures for RestoPOS backend tests.

Provides test database setup (in-memory SQLite), a test client and a few
ready-made rows.
"""

import pytest
from app import create_app
from app.extensions import db
from app.models import Product, ExpenseCategory, Expense, Sale, SaleItem


TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'AUTO_CREATE_SCHEMA': True,
    'SEED_DEMO_DATA': False,
    'STRICT_SALE_TOTALS': False,
}


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app(TEST_CONFIG)

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app, db_session):
    """Create test client (on an empty database)."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    db.session.remove()

    # Clear all data but keep schema
    meta = db.metadata
    for table in reversed(meta.sorted_tables):
        db.session.execute(table.delete())
    db.session.commit()

    yield db.session

    # Cleanup after test
    db.session.rollback()


@pytest.fixture(scope='function')
def burger(db_session):
    """Available product priced 3500."""
    product = Product(name="Burger Classique", price=3500, category="Plats", is_available=True)
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def coke(db_session):
    """Available product priced 500."""
    product = Product(name="Coca Cola", price=500, category="Boissons", is_available=True)
    db_session.add(product)
    db_session.commit()
    return product


@pytest.fixture(scope='function')
def populated_store(db_session, burger, coke):
    """One of every row type, for backup/restore tests."""
    db_session.add(ExpenseCategory(name="Loyer"))
    db_session.add(ExpenseCategory(name="Eau"))
    db_session.add(Expense(description="Loyer octobre", amount=150000, category="Loyer"))

    sale = Sale(id="SALE-100", total_amount=4500, payment_mode="WAVE")
    db_session.add(sale)
    db_session.flush()
    db_session.add(SaleItem(sale_id=sale.id, product_id=burger.id, quantity=1, unit_price=3500))
    db_session.add(SaleItem(sale_id=sale.id, product_id=coke.id, quantity=2, unit_price=500))
    db_session.commit()
    return db_session


@pytest.fixture
def sale_payload():
    """Builder for a POST /api/sales body with a single line."""
    def build(sale_id: str, product_id: int, quantity: int = 1, unit_price: float = 1000,
              payment_mode: str = "CASH", total_amount=None) -> dict:
        if total_amount is None:
            total_amount = quantity * unit_price
        return {
            "id": sale_id,
            "total_amount": total_amount,
            "payment_mode": payment_mode,
            "items": [
                {"product_id": product_id, "quantity": quantity, "unit_price": unit_price},
            ],
        }

    return build
