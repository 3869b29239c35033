from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def menu(client):
    """C1, R1 и позиция M1 (10.00, доступна) через HTTP."""
    customer = client.post(
        "/customers",
        json={"name": "Alice", "email": "alice@example.com", "phoneNumber": "555-0100", "address": "1 Main St"},
    ).json()
    restaurant = client.post("/restaurants", json={"name": "Pizza Place", "location": "Downtown"}).json()
    item = client.post(
        f"/restaurants/{restaurant['id']}/menu",
        json={"name": "Margherita", "price": "10.00", "isAvailable": True},
    ).json()
    return {"customer": customer["id"], "restaurant": restaurant["id"], "item": item["id"]}


def _place(client, menu, quantity=2, **overrides):
    body = {
        "customerId": menu["customer"],
        "restaurantId": menu["restaurant"],
        "items": [{"menuItemId": menu["item"], "quantity": quantity}],
    }
    body.update(overrides)
    return client.post("/orders", json=body)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestOrdersApi:
    def test_place_order(self, client, menu):
        response = _place(client, menu)

        assert response.status_code == 201
        body = response.json()
        assert Decimal(body["totalPrice"]) == Decimal("20.00")
        assert body["status"] == "pending"
        assert body["customerId"] == menu["customer"]
        assert body["restaurantId"] == menu["restaurant"]
        assert len(body["items"]) == 1
        assert body["items"][0]["menuItemId"] == menu["item"]
        assert body["items"][0]["quantity"] == 2

    def test_unavailable_item(self, client, menu):
        client.patch(f"/menu/{menu['item']}", json={"isAvailable": False})

        response = _place(client, menu)

        assert response.status_code == 404
        assert response.json() == {"error": f"Menu item with ID {menu['item']} is unavailable"}
        assert client.get(f"/customers/{menu['customer']}/orders").json() == []

    def test_empty_items(self, client, menu):
        response = _place(client, menu, items=[])

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid or empty order items array"}

    def test_missing_items(self, client, menu):
        response = client.post("/orders", json={"customerId": menu["customer"], "restaurantId": menu["restaurant"]})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid or empty order items array"

    def test_items_not_a_list(self, client, menu):
        response = _place(client, menu, items="pizza")

        assert response.status_code == 400
        assert "error" in response.json()

    def test_zero_quantity(self, client, menu):
        response = _place(client, menu, quantity=0)

        assert response.status_code == 400
        assert client.get(f"/customers/{menu['customer']}/orders").json() == []

    def test_unknown_customer(self, client, menu):
        response = _place(client, menu, customerId=999)

        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}

    def test_unknown_restaurant(self, client, menu):
        response = _place(client, menu, restaurantId=999)

        assert response.status_code == 404
        assert response.json() == {"error": "Restaurant not found"}

    def test_unknown_restaurant_wins_over_unknown_item(self, client, menu):
        response = _place(client, menu, restaurantId=999, items=[{"menuItemId": 12345, "quantity": 1}])

        assert response.status_code == 404
        assert response.json() == {"error": "Restaurant not found"}

    def test_persistence_failure(self, client, menu, monkeypatch):
        async def failing_commit(self):
            raise OperationalError("INSERT INTO orders", {}, Exception("database is locked"))

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = _place(client, menu)
        monkeypatch.undo()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert "database is locked" in body["details"]
        assert client.get(f"/customers/{menu['customer']}/orders").json() == []

    def test_unexpected_failure(self, client, menu, monkeypatch):
        async def failing_commit(self):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(AsyncSession, "commit", failing_commit)
        response = _place(client, menu)
        monkeypatch.undo()

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "details": "connection reset"}

    def test_get_order_is_repeatable(self, client, menu):
        order_id = _place(client, menu).json()["id"]

        first = client.get(f"/orders/{order_id}")
        second = client.get(f"/orders/{order_id}")

        assert first.status_code == 200
        assert first.json() == second.json()
        assert first.json()["id"] == order_id

    def test_get_unknown_order(self, client):
        response = client.get("/orders/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_update_status(self, client, menu):
        order_id = _place(client, menu).json()["id"]

        response = client.patch(f"/orders/{order_id}/status", json={"status": "out_for_delivery"})

        assert response.status_code == 200
        assert response.json()["status"] == "out_for_delivery"
        assert client.get(f"/orders/{order_id}").json()["status"] == "out_for_delivery"

    def test_update_status_rejects_unknown_value(self, client, menu):
        order_id = _place(client, menu).json()["id"]

        response = client.patch(f"/orders/{order_id}/status", json={"status": "teleported"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status: teleported"}


class TestCustomersApi:
    def test_create_and_get(self, client, menu):
        response = client.get(f"/customers/{menu['customer']}")

        assert response.status_code == 200
        assert response.json()["phoneNumber"] == "555-0100"

    def test_duplicate_email(self, client, menu):
        response = client.post(
            "/customers",
            json={"name": "Alice 2", "email": "alice@example.com", "phoneNumber": "555-0101", "address": "2 Main St"},
        )

        assert response.status_code == 400
        assert "already exists" in response.json()["error"]

    def test_unknown_customer(self, client):
        response = client.get("/customers/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Customer not found"}

    def test_customer_orders(self, client, menu):
        first = _place(client, menu, quantity=1).json()
        second = _place(client, menu, quantity=3).json()

        orders = client.get(f"/customers/{menu['customer']}/orders").json()

        assert [o["id"] for o in orders] == [second["id"], first["id"]]
        assert all(len(o["items"]) == 1 for o in orders)


class TestMenuApi:
    def test_menu_lists_only_available_items(self, client, menu):
        hidden = client.post(
            f"/restaurants/{menu['restaurant']}/menu",
            json={"name": "Soup", "price": "7.00", "isAvailable": False},
        ).json()

        items = client.get(f"/restaurants/{menu['restaurant']}/menu").json()

        assert [i["id"] for i in items] == [menu["item"]]
        assert hidden["id"] not in [i["id"] for i in items]

    def test_add_item_to_unknown_restaurant(self, client):
        response = client.post("/restaurants/999/menu", json={"name": "Ghost", "price": "1.00"})

        assert response.status_code == 404
        assert response.json() == {"error": "Restaurant not found"}

    def test_update_price_keeps_existing_totals(self, client, menu):
        order_id = _place(client, menu).json()["id"]

        response = client.patch(f"/menu/{menu['item']}", json={"price": "12.50"})

        assert response.status_code == 200
        assert Decimal(response.json()["price"]) == Decimal("12.50")
        assert response.json()["isAvailable"] is True
        assert Decimal(client.get(f"/orders/{order_id}").json()["totalPrice"]) == Decimal("20.00")

    def test_restaurant_cannot_be_changed(self, client, menu):
        response = client.patch(f"/menu/{menu['item']}", json={"restaurantId": 2})

        assert response.status_code == 400

    def test_update_unknown_item(self, client):
        response = client.patch("/menu/999", json={"price": "1.00"})

        assert response.status_code == 404


class TestReportsApi:
    def test_empty_reports(self, client, menu):
        assert client.get("/customers/top").json() == []
        assert client.get("/menu/top-items").json() == []

        revenue = client.get(f"/restaurants/{menu['restaurant']}/revenue")
        assert revenue.status_code == 200
        assert revenue.json()["restaurantId"] == menu["restaurant"]
        assert Decimal(revenue.json()["revenue"]) == Decimal("0")

    def test_reports_after_orders(self, client, menu):
        _place(client, menu, quantity=2)
        _place(client, menu, quantity=1)

        top_customers = client.get("/customers/top").json()
        assert len(top_customers) == 1
        assert top_customers[0]["orderCount"] == 2
        assert top_customers[0]["customer"]["id"] == menu["customer"]

        top_items = client.get("/menu/top-items").json()
        assert len(top_items) == 1
        assert top_items[0]["totalQuantity"] == 3
        assert top_items[0]["menuItem"]["id"] == menu["item"]

        revenue = client.get(f"/restaurants/{menu['restaurant']}/revenue").json()
        assert Decimal(revenue["revenue"]) == Decimal("30.00")
