import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.errors import InvalidInput
from food_delivery_api.models import Customer
from food_delivery_api.schemas.customer import CustomerCreate

logger = logging.getLogger(__name__)


async def create_customer(db: AsyncSession, customer_in: CustomerCreate) -> Customer:
    customer = Customer(**customer_in.model_dump())
    db.add(customer)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise InvalidInput(f"Customer with email {customer_in.email} already exists") from e
    await db.refresh(customer)
    logger.info("Customer %s created", customer.id)
    return customer


async def get_customer_by_id(db: AsyncSession, customer_id: int) -> Optional[Customer]:
    return await db.get(Customer, customer_id)
