import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.models import MenuItem, Restaurant
from food_delivery_api.schemas.restaurant import RestaurantCreate

logger = logging.getLogger(__name__)


async def create_restaurant(db: AsyncSession, restaurant_in: RestaurantCreate) -> Restaurant:
    restaurant = Restaurant(**restaurant_in.model_dump())
    db.add(restaurant)
    await db.commit()
    await db.refresh(restaurant)
    logger.info("Restaurant %s created", restaurant.id)
    return restaurant


async def get_restaurant_by_id(db: AsyncSession, restaurant_id: int) -> Optional[Restaurant]:
    return await db.get(Restaurant, restaurant_id)


async def get_available_menu(db: AsyncSession, restaurant_id: int) -> List[MenuItem]:
    """
    Меню ресторана: только доступные позиции.
    """
    stmt = (
        select(MenuItem)
        .where(MenuItem.restaurant_id == restaurant_id, MenuItem.is_available.is_(True))
        .order_by(MenuItem.id)
    )
    result = await db.execute(stmt)
    return result.scalars().all()
