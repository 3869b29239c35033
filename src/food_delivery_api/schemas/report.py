from decimal import Decimal

from .base import CamelModel
from .customer import CustomerRead
from .menu_item import MenuItemRead


class TopCustomerRead(CamelModel):
    customer: CustomerRead
    order_count: int


class TopMenuItemRead(CamelModel):
    menu_item: MenuItemRead
    total_quantity: int


class RevenueRead(CamelModel):
    restaurant_id: int
    revenue: Decimal
