from typing import Optional


class DeliveryError(Exception):
    """Базовая ошибка приложения; обработчик в main превращает её в {"error": ...}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidInput(DeliveryError):
    status_code = 400


class NotFound(DeliveryError):
    status_code = 404


class CustomerNotFound(NotFound):
    def __init__(self, customer_id: Optional[int] = None):
        super().__init__("Customer not found")
        self.customer_id = customer_id


class RestaurantNotFound(NotFound):
    def __init__(self, restaurant_id: Optional[int] = None):
        super().__init__("Restaurant not found")
        self.restaurant_id = restaurant_id


class MenuItemNotFound(NotFound):
    def __init__(self, menu_item_id: int):
        super().__init__(f"Menu item with ID {menu_item_id} not found")
        self.menu_item_id = menu_item_id


class OrderNotFound(NotFound):
    def __init__(self, order_id: Optional[int] = None):
        super().__init__("Order not found")
        self.order_id = order_id


class Unavailable(DeliveryError):
    status_code = 404


class MenuItemUnavailable(Unavailable):
    def __init__(self, menu_item_id: int):
        super().__init__(f"Menu item with ID {menu_item_id} is unavailable")
        self.menu_item_id = menu_item_id


class InternalError(DeliveryError):
    status_code = 500

    def __init__(self, message: str = "Internal server error", details: Optional[str] = None):
        super().__init__(message)
        self.details = details

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.details is not None:
            body["details"] = self.details
        return body
