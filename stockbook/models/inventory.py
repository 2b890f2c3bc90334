from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, CheckConstraint, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, composite, mapped_column

from stockbook.db.database import Base
from stockbook.models.codes import Amount, BigIntPK, Reference, code_range, positive_if_present


class Customer(Base):
    __tablename__ = "customers"

    customer_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False,
    )


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        code_range("product_type", name="chk_product_type_range"),
        code_range("status", name="chk_status_range"),
        positive_if_present("width", "height", "depth", name="chk_dimensions_positive"),
        CheckConstraint("purchase_price >= 0", name="chk_products_purchase_price_nonneg"),
        CheckConstraint("sale_price >= 0", name="chk_products_sale_price_nonneg"),
        CheckConstraint("stock_quantity >= 0", name="chk_products_stock_quantity_nonneg"),
    )

    product_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    product_code: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    product_type: Mapped[int] = mapped_column(Integer, nullable=False)

    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)

    width: Mapped[Decimal | None] = mapped_column(Amount(), nullable=True)
    height: Mapped[Decimal | None] = mapped_column(Amount(), nullable=True)
    depth: Mapped[Decimal | None] = mapped_column(Amount(), nullable=True)

    status: Mapped[int] = mapped_column(Integer, nullable=False)

    purchase_price: Mapped[Decimal] = mapped_column(Amount(), nullable=False)
    sale_price: Mapped[Decimal] = mapped_column(Amount(), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime, onupdate=datetime.utcnow, nullable=True)


class Sale(Base):
    __tablename__ = "sales"
    __table_args__ = (
        CheckConstraint("total >= 0", name="chk_sales_total_nonneg"),
        CheckConstraint("paid_total >= 0", name="chk_sales_paid_total_nonneg"),
        code_range("status", name="chk_sales_status_range"),
        CheckConstraint("paid_total <= total", name="chk_sales_paid_not_over_total"),
    )

    sale_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    # Walk-in sales have no customer.
    customer_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("customers.customer_id", name="fk_sales_customer"),
        index=True,
        nullable=True,
    )
    created_by: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.user_id", name="fk_sales_user"),
        index=True,
        nullable=False,
    )
    total: Mapped[Decimal] = mapped_column(Amount(), nullable=False)
    paid_total: Mapped[Decimal] = mapped_column(
        Amount(),
        default=Decimal("0"),
        server_default="0",
        nullable=False,
    )
    status: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )


class SaleItem(Base):
    __tablename__ = "sale_items"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_sale_items_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="chk_sale_items_unit_price_nonneg"),
        CheckConstraint("unit_cost >= 0", name="chk_sale_items_unit_cost_nonneg"),
    )

    # One line per product per sale.
    sale_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("sales.sale_id", name="fk_sale_items_sale"),
        primary_key=True,
    )
    product_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("products.product_id", name="fk_sale_items_product"),
        primary_key=True,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    # Prices as they were when the sale was made, not the product's current ones.
    unit_price: Mapped[Decimal] = mapped_column(Amount(), nullable=False)
    unit_cost: Mapped[Decimal] = mapped_column(Amount(), nullable=False)


class Payment(Base):
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount > 0", name="chk_payments_amount_positive"),
        code_range("method", name="chk_payments_method_range"),
    )

    payment_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    sale_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("sales.sale_id", name="fk_payments_sale"),
        index=True,
        nullable=False,
    )
    customer_id: Mapped[int | None] = mapped_column(
        BigInteger,
        ForeignKey("customers.customer_id", name="fk_payments_customer"),
        index=True,
        nullable=True,
    )
    created_by: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.user_id", name="fk_payments_user"),
        index=True,
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Amount(), nullable=False)
    method: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )


class InventoryMovement(Base):
    __tablename__ = "inventory_movements"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_inventory_quantity_positive"),
        code_range("movement_type", name="chk_inventory_movement_type_range"),
        code_range("reference_type", name="chk_inventory_reference_type_range"),
    )

    movement_id: Mapped[int] = mapped_column(BigIntPK, primary_key=True)
    product_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("products.product_id", name="fk_inventory_product"),
        index=True,
        nullable=False,
    )
    created_by: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("users.user_id", name="fk_inventory_user"),
        index=True,
        nullable=False,
    )
    movement_type: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    reference_type: Mapped[int] = mapped_column(Integer, nullable=False)
    reference_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    reference: Mapped[Reference] = composite("reference_type", "reference_id")

    notes: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        nullable=False,
        index=True,
    )
