from .customer import Customer
from .restaurant import Restaurant
from .menu_item import MenuItem
from .order import Order, OrderStatusEnum
from .order_item import OrderItem

__all__ = [
    "Customer",
    "Restaurant",
    "MenuItem",
    "Order",
    "OrderStatusEnum",
    "OrderItem",
]
