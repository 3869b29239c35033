from datetime import datetime

from .base import CamelModel


class RestaurantCreate(CamelModel):
    name: str
    location: str


class RestaurantRead(CamelModel):
    id: int
    name: str
    location: str
    created_at: datetime
