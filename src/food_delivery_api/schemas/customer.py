from datetime import datetime

from .base import CamelModel


class CustomerCreate(CamelModel):
    name: str
    email: str
    phone_number: str
    address: str


class CustomerRead(CamelModel):
    id: int
    name: str
    email: str
    phone_number: str
    address: str
    created_at: datetime
