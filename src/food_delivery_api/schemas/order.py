from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from food_delivery_api.models.order import OrderStatusEnum

from .base import CamelModel


class OrderItemCreate(CamelModel):
    menu_item_id: int
    quantity: int


class OrderCreate(CamelModel):
    customer_id: int
    restaurant_id: int
    # пустой/отсутствующий список проверяется в crud.order.place_order
    items: Optional[List[OrderItemCreate]] = None


class OrderItemRead(CamelModel):
    id: int
    order_id: int
    menu_item_id: int
    quantity: int
    price: Decimal


class OrderRead(CamelModel):
    id: int
    customer_id: int
    restaurant_id: int
    total_price: Decimal
    status: OrderStatusEnum
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []


class OrderStatusUpdate(CamelModel):
    status: str
