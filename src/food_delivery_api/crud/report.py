from decimal import Decimal
from typing import List

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.models import Customer, MenuItem, Order, OrderItem
from food_delivery_api.schemas.customer import CustomerRead
from food_delivery_api.schemas.menu_item import MenuItemRead
from food_delivery_api.schemas.report import RevenueRead, TopCustomerRead, TopMenuItemRead


async def get_top_customers(db: AsyncSession, limit: int = 5) -> List[TopCustomerRead]:
    """
    Топ клиентов по количеству заказов.
    При равенстве сортировка по id клиента. Без заказов возвращается пустой список.
    """
    counts = (
        select(
            Order.customer_id.label("customer_id"),
            func.count(Order.id).label("order_count"),
        )
        .group_by(Order.customer_id)
        .subquery()
    )
    stmt = (
        select(Customer, counts.c.order_count)
        .join(counts, counts.c.customer_id == Customer.id)
        .order_by(counts.c.order_count.desc(), Customer.id)
        .limit(limit)
    )

    result = await db.execute(stmt)
    return [
        TopCustomerRead(
            customer=CustomerRead.model_validate(customer),
            order_count=int(order_count),
        )
        for customer, order_count in result.all()
    ]


async def get_top_menu_items(db: AsyncSession, limit: int = 1) -> List[TopMenuItemRead]:
    """
    Самые продаваемые позиции меню (по сумме заказанных порций).
    При равенстве сортировка по id позиции. Без заказов возвращается пустой список.
    """
    totals = (
        select(
            OrderItem.menu_item_id.label("menu_item_id"),
            func.sum(OrderItem.quantity).label("total_quantity"),
        )
        .group_by(OrderItem.menu_item_id)
        .subquery()
    )
    stmt = (
        select(MenuItem, totals.c.total_quantity)
        .join(totals, totals.c.menu_item_id == MenuItem.id)
        .order_by(totals.c.total_quantity.desc(), MenuItem.id)
        .limit(limit)
    )

    result = await db.execute(stmt)
    return [
        TopMenuItemRead(
            menu_item=MenuItemRead.model_validate(menu_item),
            total_quantity=int(total_quantity or 0),
        )
        for menu_item, total_quantity in result.all()
    ]


async def get_restaurant_revenue(db: AsyncSession, restaurant_id: int) -> RevenueRead:
    """
    Выручка ресторана: сумма total_price всех его заказов, считается в Python.
    """
    result = await db.execute(select(Order.total_price).where(Order.restaurant_id == restaurant_id))
    revenue = sum((Decimal(price) for price in result.scalars().all()), Decimal("0"))
    return RevenueRead(restaurant_id=restaurant_id, revenue=revenue.quantize(Decimal("0.01")))
