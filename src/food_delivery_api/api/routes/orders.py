from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.crud.order import get_order_by_id, place_order, update_order_status
from food_delivery_api.db.deps import get_async_session
from food_delivery_api.errors import OrderNotFound
from food_delivery_api.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderRead, status_code=201)
async def create_order_endpoint(order_in: OrderCreate, db: AsyncSession = Depends(get_async_session)):
    """
    Создаёт заказ и возвращает его вместе с позициями.
    """
    return await place_order(db, order_in.customer_id, order_in.restaurant_id, order_in.items)


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: int = Path(..., description="ID заказа"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Возвращает детализацию заказа по id.
    """
    order = await get_order_by_id(db, order_id)
    if not order:
        raise OrderNotFound(order_id)
    return order


@router.patch("/{order_id}/status", response_model=OrderRead)
async def patch_order_status(
    status_in: OrderStatusUpdate,
    order_id: int = Path(..., description="ID заказа"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Меняет статус заказа.
    """
    return await update_order_status(db, order_id, status_in.status)
