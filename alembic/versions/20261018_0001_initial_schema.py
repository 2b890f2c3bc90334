"""initial inventory and point-of-sale schema

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261018_0001"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

big_pk = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _code_range(column: str, name: str) -> sa.CheckConstraint:
    return sa.CheckConstraint(f"{column} >= 0 AND {column} <= 99", name=name)


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("role_id", big_pk, nullable=False),
        sa.Column("role_name", sa.String(length=50), nullable=False),
        sa.Column("description", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("role_id"),
        sa.UniqueConstraint("role_name"),
    )

    op.create_table(
        "users",
        sa.Column("user_id", big_pk, nullable=False),
        sa.Column("full_name", sa.String(length=150), nullable=False),
        sa.Column("email", sa.String(length=150), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("role_id", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.role_id"], name="fk_users_role"),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_users_role_id"), "users", ["role_id"], unique=False)

    op.create_table(
        "customers",
        sa.Column("customer_id", big_pk, nullable=False),
        sa.Column("full_name", sa.String(length=150), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("customer_id"),
    )

    op.create_table(
        "products",
        sa.Column("product_id", big_pk, nullable=False),
        sa.Column("product_code", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("product_type", sa.Integer(), nullable=False),
        sa.Column("size", sa.String(length=100), nullable=True),
        sa.Column("color", sa.String(length=50), nullable=True),
        sa.Column("brand", sa.String(length=100), nullable=True),
        sa.Column("location", sa.String(length=100), nullable=True),
        sa.Column("width", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("height", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("depth", sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("purchase_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("sale_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("stock_quantity", sa.Integer(), server_default="0", nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        _code_range("product_type", "chk_product_type_range"),
        _code_range("status", "chk_status_range"),
        sa.CheckConstraint(
            "(width IS NULL OR width > 0) AND (height IS NULL OR height > 0) AND (depth IS NULL OR depth > 0)",
            name="chk_dimensions_positive",
        ),
        sa.CheckConstraint("purchase_price >= 0", name="chk_products_purchase_price_nonneg"),
        sa.CheckConstraint("sale_price >= 0", name="chk_products_sale_price_nonneg"),
        sa.CheckConstraint("stock_quantity >= 0", name="chk_products_stock_quantity_nonneg"),
        sa.PrimaryKeyConstraint("product_id"),
        sa.UniqueConstraint("product_code"),
    )

    op.create_table(
        "sales",
        sa.Column("sale_id", big_pk, nullable=False),
        sa.Column("customer_id", sa.BigInteger(), nullable=True),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("total", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("paid_total", sa.Numeric(precision=10, scale=2), server_default="0", nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("total >= 0", name="chk_sales_total_nonneg"),
        sa.CheckConstraint("paid_total >= 0", name="chk_sales_paid_total_nonneg"),
        _code_range("status", "chk_sales_status_range"),
        sa.CheckConstraint("paid_total <= total", name="chk_sales_paid_not_over_total"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.customer_id"], name="fk_sales_customer"),
        sa.ForeignKeyConstraint(["created_by"], ["users.user_id"], name="fk_sales_user"),
        sa.PrimaryKeyConstraint("sale_id"),
    )
    op.create_index(op.f("ix_sales_customer_id"), "sales", ["customer_id"], unique=False)
    op.create_index(op.f("ix_sales_created_by"), "sales", ["created_by"], unique=False)
    op.create_index(op.f("ix_sales_created_at"), "sales", ["created_at"], unique=False)

    op.create_table(
        "sale_items",
        sa.Column("sale_id", sa.BigInteger(), nullable=False),
        sa.Column("product_id", sa.BigInteger(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("unit_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("unit_cost", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.CheckConstraint("quantity > 0", name="chk_sale_items_quantity_positive"),
        sa.CheckConstraint("unit_price >= 0", name="chk_sale_items_unit_price_nonneg"),
        sa.CheckConstraint("unit_cost >= 0", name="chk_sale_items_unit_cost_nonneg"),
        sa.ForeignKeyConstraint(["sale_id"], ["sales.sale_id"], name="fk_sale_items_sale"),
        sa.ForeignKeyConstraint(["product_id"], ["products.product_id"], name="fk_sale_items_product"),
        sa.PrimaryKeyConstraint("sale_id", "product_id"),
    )
    op.create_index(op.f("ix_sale_items_product_id"), "sale_items", ["product_id"], unique=False)

    op.create_table(
        "payments",
        sa.Column("payment_id", big_pk, nullable=False),
        sa.Column("sale_id", sa.BigInteger(), nullable=False),
        sa.Column("customer_id", sa.BigInteger(), nullable=True),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("method", sa.Integer(), nullable=False),
        sa.Column("notes", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("amount > 0", name="chk_payments_amount_positive"),
        _code_range("method", "chk_payments_method_range"),
        sa.ForeignKeyConstraint(["sale_id"], ["sales.sale_id"], name="fk_payments_sale"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.customer_id"], name="fk_payments_customer"),
        sa.ForeignKeyConstraint(["created_by"], ["users.user_id"], name="fk_payments_user"),
        sa.PrimaryKeyConstraint("payment_id"),
    )
    op.create_index(op.f("ix_payments_sale_id"), "payments", ["sale_id"], unique=False)
    op.create_index(op.f("ix_payments_customer_id"), "payments", ["customer_id"], unique=False)
    op.create_index(op.f("ix_payments_created_by"), "payments", ["created_by"], unique=False)
    op.create_index(op.f("ix_payments_created_at"), "payments", ["created_at"], unique=False)

    op.create_table(
        "inventory_movements",
        sa.Column("movement_id", big_pk, nullable=False),
        sa.Column("product_id", sa.BigInteger(), nullable=False),
        sa.Column("created_by", sa.BigInteger(), nullable=False),
        sa.Column("movement_type", sa.Integer(), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("reference_type", sa.Integer(), nullable=False),
        sa.Column("reference_id", sa.BigInteger(), nullable=True),
        sa.Column("notes", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("quantity > 0", name="chk_inventory_quantity_positive"),
        _code_range("movement_type", "chk_inventory_movement_type_range"),
        _code_range("reference_type", "chk_inventory_reference_type_range"),
        sa.ForeignKeyConstraint(["product_id"], ["products.product_id"], name="fk_inventory_product"),
        sa.ForeignKeyConstraint(["created_by"], ["users.user_id"], name="fk_inventory_user"),
        sa.PrimaryKeyConstraint("movement_id"),
    )
    op.create_index(
        op.f("ix_inventory_movements_product_id"),
        "inventory_movements",
        ["product_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_inventory_movements_created_by"),
        "inventory_movements",
        ["created_by"],
        unique=False,
    )
    op.create_index(
        op.f("ix_inventory_movements_created_at"),
        "inventory_movements",
        ["created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_inventory_movements_created_at"), table_name="inventory_movements")
    op.drop_index(op.f("ix_inventory_movements_created_by"), table_name="inventory_movements")
    op.drop_index(op.f("ix_inventory_movements_product_id"), table_name="inventory_movements")
    op.drop_table("inventory_movements")

    op.drop_index(op.f("ix_payments_created_at"), table_name="payments")
    op.drop_index(op.f("ix_payments_created_by"), table_name="payments")
    op.drop_index(op.f("ix_payments_customer_id"), table_name="payments")
    op.drop_index(op.f("ix_payments_sale_id"), table_name="payments")
    op.drop_table("payments")

    op.drop_index(op.f("ix_sale_items_product_id"), table_name="sale_items")
    op.drop_table("sale_items")

    op.drop_index(op.f("ix_sales_created_at"), table_name="sales")
    op.drop_index(op.f("ix_sales_created_by"), table_name="sales")
    op.drop_index(op.f("ix_sales_customer_id"), table_name="sales")
    op.drop_table("sales")

    op.drop_table("products")
    op.drop_table("customers")

    op.drop_index(op.f("ix_users_role_id"), table_name="users")
    op.drop_table("users")

    op.drop_table("roles")
