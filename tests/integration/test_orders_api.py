import pytest


@pytest.fixture()
def placed_order(customer, make_product, gateway, checkout):
    customer.post("/api/cart", json={"productId": make_product(price="10.00"), "quantity": 2})
    response = checkout(customer)
    assert response.status_code == 201
    return response.json()["id"]


class TestOrderHistory:
    def test_get_own_order(self, customer, placed_order):
        response = customer.get(f"/api/orders/{placed_order}")
        assert response.status_code == 200
        assert response.json()["status"] == "paid"

    def test_other_customers_order_is_hidden(self, other_customer, placed_order):
        assert other_customer.get(f"/api/orders/{placed_order}").status_code == 404
        assert other_customer.get("/api/orders").json() == []

    def test_unknown_order(self, customer):
        assert customer.get("/api/orders/missing").status_code == 404


class TestOrderStatusAdministration:
    def test_admin_ships_order(self, customer, admin, placed_order):
        response = admin.put(f"/api/admin/orders/{placed_order}/status", json={"status": "shipped"})
        assert response.status_code == 200
        assert response.json()["status"] == "shipped"

        assert customer.get(f"/api/orders/{placed_order}").json()["status"] == "shipped"

    def test_admin_sees_all_orders(self, admin, placed_order):
        assert [o["id"] for o in admin.get("/api/admin/orders").json()] == [placed_order]
        assert admin.get(f"/api/orders/{placed_order}").status_code == 200

    def test_customer_cannot_change_status(self, customer, placed_order):
        response = customer.put(f"/api/admin/orders/{placed_order}/status", json={"status": "shipped"})
        assert response.status_code == 403
        assert customer.get(f"/api/orders/{placed_order}").json()["status"] == "paid"

    def test_anonymous_cannot_change_status(self, client, customer, placed_order):
        response = client.put(f"/api/admin/orders/{placed_order}/status", json={"status": "shipped"})
        assert response.status_code == 401
        assert customer.get(f"/api/orders/{placed_order}").json()["status"] == "paid"

    def test_invalid_transition(self, admin, placed_order):
        admin.put(f"/api/admin/orders/{placed_order}/status", json={"status": "cancelled"})

        response = admin.put(f"/api/admin/orders/{placed_order}/status", json={"status": "shipped"})
        assert response.status_code == 400

    def test_unknown_status(self, admin, placed_order):
        response = admin.put(f"/api/admin/orders/{placed_order}/status", json={"status": "teleported"})
        assert response.status_code == 400

    def test_order_keeps_price_paid(self, customer, admin, placed_order):
        product_id = customer.get(f"/api/orders/{placed_order}").json()["items"][0]["productId"]
        admin.put(f"/api/admin/products/{product_id}", json={"price": "99.00", "name": "Renamed"})

        item = customer.get(f"/api/orders/{placed_order}").json()["items"][0]
        assert item["price"] == "10.00"
        assert item["productName"] == "Widget"
