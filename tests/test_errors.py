from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from stockbook.db.database import session_scope
from stockbook.db.errors import (
    CheckViolation,
    ConstraintViolation,
    ForeignKeyViolation,
    NotNullViolation,
    UniqueViolation,
    translate_integrity_error,
)
from stockbook.models import Customer, InventoryMovement, Product, Reference, Sale, SaleItem


def test_committed_unit_of_work_is_visible(session_factory, db, user, product):
    user_id, product_id = user.user_id, product.product_id

    with session_scope(session_factory) as scoped:
        sale = Sale(created_by=user_id, total=Decimal("5.00"), paid_total=Decimal("5.00"), status=0)
        scoped.add(sale)
        scoped.flush()
        scoped.add(
            SaleItem(
                sale_id=sale.sale_id,
                product_id=product_id,
                quantity=1,
                unit_price=Decimal("5.00"),
                unit_cost=Decimal("2.00"),
            )
        )
        scoped.add(
            InventoryMovement(
                product_id=product_id,
                created_by=user_id,
                movement_type=1,
                quantity=1,
                reference=Reference(kind=0, id=sale.sale_id),
            )
        )

    assert db.scalar(select(func.count()).select_from(SaleItem)) == 1
    assert db.scalar(select(func.count()).select_from(InventoryMovement)) == 1


def test_check_failure_is_named_and_nothing_is_persisted(session_factory, db, user, product):
    user_id, product_id = user.user_id, product.product_id

    with pytest.raises(CheckViolation) as excinfo:
        with session_scope(session_factory) as scoped:
            sale = Sale(created_by=user_id, total=Decimal("5.00"), status=0)
            scoped.add(sale)
            scoped.flush()
            scoped.add(
                SaleItem(
                    sale_id=sale.sale_id,
                    product_id=product_id,
                    quantity=0,
                    unit_price=Decimal("5.00"),
                    unit_cost=Decimal("2.00"),
                )
            )

    assert excinfo.value.constraint == "chk_sale_items_quantity_positive"
    assert isinstance(excinfo.value.__cause__, IntegrityError)
    assert db.scalar(select(func.count()).select_from(Sale)) == 0


def test_paid_over_total_is_reported_by_name(session_factory, user):
    with pytest.raises(CheckViolation) as excinfo:
        with session_scope(session_factory) as scoped:
            scoped.add(Sale(created_by=user.user_id, total=Decimal("1.00"), paid_total=Decimal("2.00"), status=0))

    assert excinfo.value.constraint == "chk_sales_paid_not_over_total"
    assert excinfo.value.kind == "check"


def test_duplicate_code_is_a_unique_violation(session_factory, product):
    with pytest.raises(UniqueViolation) as excinfo:
        with session_scope(session_factory) as scoped:
            scoped.add(
                Product(
                    product_code=product.product_code,
                    name="Duplicate",
                    product_type=0,
                    status=0,
                    purchase_price=Decimal("1.00"),
                    sale_price=Decimal("1.00"),
                )
            )

    assert "products.product_code" in excinfo.value.constraint


def test_missing_creator_is_a_foreign_key_violation(session_factory, user):
    with pytest.raises(ForeignKeyViolation):
        with session_scope(session_factory) as scoped:
            scoped.add(Sale(created_by=user.user_id + 100, total=Decimal("1.00"), status=0))


def test_missing_required_column_is_a_not_null_violation(session_factory, db):
    with pytest.raises(NotNullViolation) as excinfo:
        with session_scope(session_factory) as scoped:
            scoped.add(Customer(phone="+1-555-0199"))

    assert excinfo.value.constraint == "customers.full_name"
    assert excinfo.value.kind == "not_null"
    assert db.scalar(select(func.count()).select_from(Customer)) == 0


def test_other_errors_roll_back_and_propagate(session_factory, db, user):
    with pytest.raises(RuntimeError):
        with session_scope(session_factory) as scoped:
            scoped.add(Sale(created_by=user.user_id, total=Decimal("1.00"), status=0))
            scoped.flush()
            raise RuntimeError("till closed")

    assert db.scalar(select(func.count()).select_from(Sale)) == 0


class _Diag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class _PostgresError(Exception):
    def __init__(self, message, sqlstate, constraint_name=None):
        super().__init__(message)
        self.sqlstate = sqlstate
        self.diag = _Diag(constraint_name)


@pytest.mark.parametrize(
    "sqlstate, constraint, expected",
    [
        ("23503", "fk_users_role", ForeignKeyViolation),
        ("23505", "products_product_code_key", UniqueViolation),
        ("23514", "chk_sales_paid_not_over_total", CheckViolation),
        ("23502", None, NotNullViolation),
    ],
)
def test_postgres_errors_are_classified_by_sqlstate(sqlstate, constraint, expected):
    orig = _PostgresError("violates constraint", sqlstate, constraint)
    violation = translate_integrity_error(IntegrityError("INSERT ...", {}, orig))

    assert type(violation) is expected
    assert violation.constraint == constraint


def test_unrecognised_errors_fall_back_to_base_violation():
    violation = translate_integrity_error(IntegrityError("INSERT ...", {}, Exception("something odd")))

    assert type(violation) is ConstraintViolation
    assert violation.constraint is None
    assert "something odd" in str(violation)
