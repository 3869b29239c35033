import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from food_delivery_api.errors import (
    CustomerNotFound,
    DeliveryError,
    InternalError,
    InvalidInput,
    MenuItemNotFound,
    MenuItemUnavailable,
    OrderNotFound,
    RestaurantNotFound,
)
from food_delivery_api.models import Customer, MenuItem, Order, OrderItem, OrderStatusEnum, Restaurant
from food_delivery_api.schemas.order import OrderItemCreate

logger = logging.getLogger(__name__)

VALID_STATUSES = {s.value for s in OrderStatusEnum}


async def get_order_by_id(db: AsyncSession, order_id: int) -> Optional[Order]:
    """
    Возвращает заказ по ID с подгруженными items.
    Предотвращает MissingGreenlet при сериализации.
    """
    stmt = (
        select(Order)
        .where(Order.id == order_id)
        .options(selectinload(Order.items))
        .execution_options(populate_existing=True)
    )
    result = await db.execute(stmt)
    return result.scalars().unique().first()


async def get_orders_by_customer(db: AsyncSession, customer_id: int) -> List[Order]:
    """
    Заказы клиента, новые первыми.
    """
    stmt = (
        select(Order)
        .where(Order.customer_id == customer_id)
        .options(selectinload(Order.items))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    result = await db.execute(stmt)
    return result.scalars().unique().all()


async def _get_menu_item_for_update(db: AsyncSession, menu_item_id: int) -> Optional[MenuItem]:
    # FOR UPDATE держит строку до commit, чтобы доступность не поменялась между проверкой и записью
    stmt = select(MenuItem).where(MenuItem.id == menu_item_id).with_for_update()
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def place_order(
    db: AsyncSession,
    customer_id: int,
    restaurant_id: int,
    items: Optional[Sequence[OrderItemCreate]],
) -> Order:
    """
    Создаёт заказ с позициями.

    Проверки идут по порядку, первая неудачная прерывает создание:
    список позиций, клиент, ресторан, затем каждая позиция по порядку
    (количество больше нуля, позиция существует и доступна). Сумма
    считается по текущим ценам меню, цена фиксируется в OrderItem.
    Чтения и запись идут в одной транзакции.
    """
    if not isinstance(items, (list, tuple)) or not items:
        raise InvalidInput("Invalid or empty order items array")

    try:
        customer = await db.get(Customer, customer_id)
        if not customer:
            raise CustomerNotFound(customer_id)

        restaurant = await db.get(Restaurant, restaurant_id)
        if not restaurant:
            raise RestaurantNotFound(restaurant_id)

        total_price = Decimal("0")
        order_items = []
        for item in items:
            if item.quantity <= 0:
                raise InvalidInput(f"Quantity for menu item with ID {item.menu_item_id} must be positive")

            menu_item = await _get_menu_item_for_update(db, item.menu_item_id)
            if not menu_item:
                raise MenuItemNotFound(item.menu_item_id)
            if not menu_item.is_available:
                raise MenuItemUnavailable(item.menu_item_id)

            total_price += Decimal(menu_item.price) * item.quantity
            order_items.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    quantity=item.quantity,
                    price=menu_item.price,
                )
            )

        order = Order(
            customer_id=customer.id,
            restaurant_id=restaurant.id,
            total_price=total_price,
            status=OrderStatusEnum.pending,
            items=order_items,
        )
        db.add(order)
        await db.commit()
    except DeliveryError as e:
        await db.rollback()
        logger.info("Order rejected: %s", e.message)
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Failed to persist order for customer %s", customer_id)
        raise InternalError("Internal server error", details=str(e)) from e
    except Exception:
        await db.rollback()
        logger.exception("Unexpected error while placing order for customer %s", customer_id)
        raise

    logger.info("Order %s created: %s item(s), total %s", order.id, len(order_items), total_price)

    # загружаем заказ обратно с items
    return await get_order_by_id(db, order.id)


async def update_order_status(db: AsyncSession, order_id: int, status: str) -> Order:
    """
    Меняет статус заказа. Остальные поля заказа не редактируются.
    """
    order = await db.get(Order, order_id)
    if not order:
        raise OrderNotFound(order_id)

    if status not in VALID_STATUSES:
        raise InvalidInput(f"Invalid status: {status}")

    order.status = OrderStatusEnum(status)
    await db.commit()
    logger.info("Order %s status changed to %s", order_id, status)

    return await get_order_by_id(db, order_id)
