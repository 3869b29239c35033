from decimal import Decimal
from typing import Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from food_delivery_api.config import Settings
from food_delivery_api.db.session import Database
from food_delivery_api.main import create_app
from food_delivery_api.models import Customer, MenuItem, Restaurant

IN_MEMORY_URL = "sqlite+aiosqlite://"


@pytest.fixture
def settings() -> Settings:
    return Settings(DATABASE_URL=IN_MEMORY_URL, AUTO_CREATE_TABLES=True, LOG_LEVEL="WARNING")


@pytest.fixture
def client(settings):
    app = create_app(settings)
    # ошибки сервера приходят ответом 500, как у реального клиента
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest_asyncio.fixture
async def database():
    db = Database(IN_MEMORY_URL)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


async def add_customer(session: AsyncSession, name: str, email: str) -> int:
    customer = Customer(name=name, email=email, phone_number="555-0100", address="1 Main St")
    session.add(customer)
    await session.commit()
    return customer.id


async def add_restaurant(session: AsyncSession, name: str = "Pizza Place") -> int:
    restaurant = Restaurant(name=name, location="Downtown")
    session.add(restaurant)
    await session.commit()
    return restaurant.id


async def add_menu_item(
    session: AsyncSession,
    restaurant_id: int,
    name: str,
    price: str,
    is_available: bool = True,
) -> int:
    item = MenuItem(restaurant_id=restaurant_id, name=name, price=Decimal(price), is_available=is_available)
    session.add(item)
    await session.commit()
    return item.id


async def count_rows(session: AsyncSession, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


@pytest_asyncio.fixture
async def seeded(session) -> Dict[str, int]:
    """Клиент, ресторан, две доступные позиции и одна недоступная."""
    customer_id = await add_customer(session, "Alice", "alice@example.com")
    restaurant_id = await add_restaurant(session)
    return {
        "customer": customer_id,
        "restaurant": restaurant_id,
        "pizza": await add_menu_item(session, restaurant_id, "Margherita", "10.00"),
        "soda": await add_menu_item(session, restaurant_id, "Soda", "4.50"),
        "soup": await add_menu_item(session, restaurant_id, "Soup of the day", "7.00", is_available=False),
    }
