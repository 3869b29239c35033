from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.crud.menu_item import update_menu_item
from food_delivery_api.crud.report import get_top_menu_items
from food_delivery_api.db.deps import get_async_session
from food_delivery_api.schemas.menu_item import MenuItemRead, MenuItemUpdate
from food_delivery_api.schemas.report import TopMenuItemRead

router = APIRouter(prefix="/menu", tags=["menu"])


@router.get("/top-items", response_model=List[TopMenuItemRead])
async def get_top_items(db: AsyncSession = Depends(get_async_session)):
    """
    Самая популярная позиция меню (по количеству заказанных порций).
    """
    return await get_top_menu_items(db, limit=1)


@router.patch("/{menu_item_id}", response_model=MenuItemRead)
async def patch_menu_item(
    item_in: MenuItemUpdate,
    menu_item_id: int = Path(..., description="ID позиции меню"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Частичное обновление позиции меню.
    Поддерживаемые поля: price, isAvailable.
    """
    return await update_menu_item(db, menu_item_id, item_in)
