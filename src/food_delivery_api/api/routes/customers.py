from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.crud.customer import create_customer, get_customer_by_id
from food_delivery_api.crud.order import get_orders_by_customer
from food_delivery_api.crud.report import get_top_customers
from food_delivery_api.db.deps import get_async_session
from food_delivery_api.errors import CustomerNotFound
from food_delivery_api.schemas.customer import CustomerCreate, CustomerRead
from food_delivery_api.schemas.order import OrderRead
from food_delivery_api.schemas.report import TopCustomerRead

router = APIRouter(prefix="/customers", tags=["customers"])


@router.post("", response_model=CustomerRead, status_code=201)
async def create_customer_endpoint(
    customer_in: CustomerCreate,
    db: AsyncSession = Depends(get_async_session),
):
    """
    Регистрирует клиента.
    """
    return await create_customer(db, customer_in)


@router.get("/top", response_model=List[TopCustomerRead])
async def get_top_customers_endpoint(db: AsyncSession = Depends(get_async_session)):
    """
    Топ-5 клиентов по количеству заказов.
    """
    return await get_top_customers(db, limit=5)


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(
    customer_id: int = Path(..., description="ID клиента"),
    db: AsyncSession = Depends(get_async_session),
):
    customer = await get_customer_by_id(db, customer_id)
    if not customer:
        raise CustomerNotFound(customer_id)
    return customer


@router.get("/{customer_id}/orders", response_model=List[OrderRead])
async def list_customer_orders(
    customer_id: int = Path(..., description="ID клиента"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Заказы клиента вместе с позициями.
    """
    return await get_orders_by_customer(db, customer_id)
