from stockbook.models.codes import CODE_MAX, CODE_MIN, Reference
from stockbook.models.inventory import Customer, InventoryMovement, Payment, Product, Sale, SaleItem
from stockbook.models.user import Role, User

__all__ = [
    "CODE_MAX",
    "CODE_MIN",
    "Customer",
    "InventoryMovement",
    "Payment",
    "Product",
    "Reference",
    "Role",
    "Sale",
    "SaleItem",
    "User",
]
