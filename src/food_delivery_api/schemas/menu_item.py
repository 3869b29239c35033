from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import ConfigDict

from .base import CamelModel


class MenuItemCreate(CamelModel):
    name: str
    price: Decimal
    is_available: bool = True


class MenuItemUpdate(CamelModel):
    # restaurantId менять нельзя, поэтому extra="forbid"
    price: Optional[Decimal] = None
    is_available: Optional[bool] = None

    model_config = ConfigDict(extra="forbid")


class MenuItemRead(CamelModel):
    id: int
    restaurant_id: int
    name: str
    price: Decimal
    is_available: bool
    created_at: datetime
