"""
Pytest fixtures for the stockbook schema tests.

Every test gets its own SQLite database file with the full schema created and
foreign keys enforced, plus a session and a few committed seed rows.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from stockbook.db.database import build_engine, init_db
from stockbook.models import Customer, Product, Role, Sale, User


@pytest.fixture(scope="function")
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'stockbook.sqlite3'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture(scope="function")
def db(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture(scope="function")
def role(db):
    role = Role(role_name="admin", description="Full access")
    db.add(role)
    db.commit()
    return role


@pytest.fixture(scope="function")
def user(db, role):
    user = User(
        full_name="Ada Admin",
        email="ada@example.com",
        password_hash="$2b$12$opaquehashvaluefortests",
        role_id=role.role_id,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def customer(db):
    customer = Customer(full_name="Carl Customer", phone="+1-555-0100")
    db.add(customer)
    db.commit()
    return customer


@pytest.fixture(scope="function")
def product(db):
    product = Product(
        product_code="CUP-001",
        name="Ceramic cup",
        product_type=0,
        status=0,
        purchase_price=Decimal("2.00"),
        sale_price=Decimal("5.00"),
        stock_quantity=10,
    )
    db.add(product)
    db.commit()
    return product


@pytest.fixture(scope="function")
def sale(db, user):
    sale = Sale(created_by=user.user_id, total=Decimal("10.00"), paid_total=Decimal("0.00"), status=0)
    db.add(sale)
    db.commit()
    return sale
