from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.crud.menu_item import create_menu_item
from food_delivery_api.crud.report import get_restaurant_revenue
from food_delivery_api.crud.restaurant import create_restaurant, get_available_menu
from food_delivery_api.db.deps import get_async_session
from food_delivery_api.schemas.menu_item import MenuItemCreate, MenuItemRead
from food_delivery_api.schemas.report import RevenueRead
from food_delivery_api.schemas.restaurant import RestaurantCreate, RestaurantRead

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.post("", response_model=RestaurantRead, status_code=201)
async def create_restaurant_endpoint(
    restaurant_in: RestaurantCreate,
    db: AsyncSession = Depends(get_async_session),
):
    return await create_restaurant(db, restaurant_in)


@router.get("/{restaurant_id}/menu", response_model=List[MenuItemRead])
async def get_menu(
    restaurant_id: int = Path(..., description="ID ресторана"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Доступные позиции меню ресторана.
    """
    return await get_available_menu(db, restaurant_id)


@router.post("/{restaurant_id}/menu", response_model=MenuItemRead, status_code=201)
async def add_menu_item(
    item_in: MenuItemCreate,
    restaurant_id: int = Path(..., description="ID ресторана"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Добавляет позицию в меню ресторана.
    """
    return await create_menu_item(db, restaurant_id, item_in)


@router.get("/{restaurant_id}/revenue", response_model=RevenueRead)
async def get_revenue(
    restaurant_id: int = Path(..., description="ID ресторана"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Выручка ресторана по всем заказам. Без заказов выручка 0.
    """
    return await get_restaurant_revenue(db, restaurant_id)
