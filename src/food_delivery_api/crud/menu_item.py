import logging

from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.errors import MenuItemNotFound, RestaurantNotFound
from food_delivery_api.models import MenuItem, Restaurant
from food_delivery_api.schemas.menu_item import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)


async def create_menu_item(db: AsyncSession, restaurant_id: int, item_in: MenuItemCreate) -> MenuItem:
    restaurant = await db.get(Restaurant, restaurant_id)
    if not restaurant:
        raise RestaurantNotFound(restaurant_id)

    menu_item = MenuItem(restaurant_id=restaurant.id, **item_in.model_dump())
    db.add(menu_item)
    await db.commit()
    await db.refresh(menu_item)
    logger.info("Menu item %s added to restaurant %s", menu_item.id, restaurant_id)
    return menu_item


async def update_menu_item(db: AsyncSession, menu_item_id: int, item_in: MenuItemUpdate) -> MenuItem:
    """
    Частичное обновление позиции меню: price и/или is_available.
    Уже созданные заказы не меняются, цена в них зафиксирована.
    """
    menu_item = await db.get(MenuItem, menu_item_id)
    if not menu_item:
        raise MenuItemNotFound(menu_item_id)

    update_data = item_in.model_dump(exclude_unset=True, exclude_none=True)
    for key, value in update_data.items():
        setattr(menu_item, key, value)

    await db.commit()
    await db.refresh(menu_item)
    return menu_item
