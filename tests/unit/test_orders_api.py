"""API tests for the customer order endpoints."""
import pytest

from conftest import auth_headers, make_spice_garden


class TestCreateOrder:
    def test_create_delivery_order(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [
                {"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 2},
                {"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 3},
                {"itemId": "garlic-naan", "restaurantId": "spice-garden", "quantity": 1},
            ],
            "mode": "delivery",
            "address": "221B Residency Road",
            "paymentMethod": "Card",
            "latitude": 12.9716,
            "longitude": 77.5946,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["orderId"].startswith("ORD-")
        assert data["userId"] == "customer-1"
        assert data["status"] == "received"
        assert data["paymentMethod"] == "card"
        assert [(i["itemId"], i["quantity"]) for i in data["items"]] == [("paneer-tikka", 5), ("garlic-naan", 1)]
        assert data["subtotal"] == 5 * 220 + 60
        assert data["deliveryFee"] == 20
        assert data["total"] == data["subtotal"] + 20
        assert data["estimatedDeliveryTime"] == "22-37 mins"
        assert data["deliveryLocation"]["coordinates"] == [77.5946, 12.9716]

    def test_create_dinein_order(self, place_order):
        data = place_order(mode="dinein", tableNumber=5, address=None)

        assert data["mode"] == "dinein"
        assert data["tableNumber"] == 5
        assert data["deliveryFee"] == 0
        assert data["total"] == data["subtotal"]

    def test_only_customers_place_orders(self, test_client, owner_headers, order_store):
        response = test_client.post("/orders", headers=owner_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],
            "address": "x",
        })
        assert response.status_code == 403

    def test_requires_token(self, test_client):
        response = test_client.post("/orders", json={"items": []})
        assert response.status_code == 401

    def test_rejects_bad_token(self, test_client):
        response = test_client.get("/orders/my-orders", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_unknown_item_persists_nothing(self, test_client, customer_headers, admin_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [
                {"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1},
                {"itemId": "unicorn-steak", "restaurantId": "spice-garden", "quantity": 1},
            ],
            "address": "x",
        })

        assert response.status_code == 400
        assert "Spice Garden" in response.json()["detail"]
        assert test_client.get("/admin/orders", headers=admin_headers).json() == []

    def test_unknown_restaurant_is_named(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "x", "restaurantId": "ghost-kitchen", "quantity": 1}],
            "address": "x",
        })
        assert response.status_code == 400
        assert "ghost-kitchen" in response.json()["detail"]

    def test_malformed_body_is_a_400(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={"items": "lots", "address": "x"})
        assert response.status_code == 400

    def test_missing_address(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],
            "mode": "delivery",
        })
        assert response.status_code == 400
        assert "address" in response.json()["detail"]

    def test_zero_quantity(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 0}],
            "address": "x",
        })
        assert response.status_code == 400

    def test_oversized_quantity(self, test_client, customer_headers, admin_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": int("9" * 400)}],
            "address": "x",
        })
        assert response.status_code == 400
        assert "invalid quantity" in response.json()["detail"]
        assert test_client.get("/admin/orders", headers=admin_headers).json() == []

    def test_oversized_table_number(self, test_client, customer_headers):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],
            "mode": "dinein",
            "tableNumber": int("9" * 400),
        })
        assert response.status_code == 400
        assert "Table number" in response.json()["detail"]

    def test_nan_latitude(self, test_client, customer_headers):
        # NaN is not valid JSON, so the body is sent as raw text
        body = ('{"items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],'
                ' "address": "x", "latitude": NaN, "longitude": 77.6}')
        response = test_client.post("/orders", content=body,
                                    headers={**customer_headers, "Content-Type": "application/json"})
        assert response.status_code == 400

    @pytest.mark.parametrize("latitude, longitude", [(500, 77.6), (12.9, -181), (-90.5, 0)])
    def test_out_of_range_coordinates(self, test_client, customer_headers, latitude, longitude):
        response = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],
            "address": "x",
            "latitude": latitude,
            "longitude": longitude,
        })
        assert response.status_code == 400


class TestReadOrders:
    def test_my_orders_newest_first(self, test_client, customer_headers, other_customer_headers, place_order):
        first = place_order()
        second = place_order()
        place_order(headers=other_customer_headers)

        response = test_client.get("/orders/my-orders", headers=customer_headers)

        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()] == [second["orderId"], first["orderId"]]

    def test_get_own_order(self, test_client, customer_headers, place_order):
        order = place_order()
        response = test_client.get(f"/orders/{order['orderId']}", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["orderId"] == order["orderId"]

    def test_other_customers_order_is_not_found(self, test_client, other_customer_headers, place_order):
        order = place_order()
        response = test_client.get(f"/orders/{order['orderId']}", headers=other_customer_headers)
        assert response.status_code == 404

    def test_snapshot_survives_menu_change(self, test_client, customer_headers, place_order, restaurant_store):
        order = place_order()

        restaurant = make_spice_garden()
        restaurant.categories[0].items[0].price = 999
        restaurant.categories[0].items[0].name = "Paneer Tikka Deluxe"
        restaurant_store.save(restaurant)

        fetched = test_client.get(f"/orders/{order['orderId']}", headers=customer_headers).json()
        assert fetched["items"][0]["price"] == 220
        assert fetched["items"][0]["itemName"] == "Paneer Tikka"
        assert fetched["subtotal"] == order["subtotal"]

        newer = test_client.post("/orders", headers=customer_headers, json={
            "items": [{"itemId": "paneer-tikka", "restaurantId": "spice-garden", "quantity": 1}],
            "address": "x",
        }).json()
        assert newer["items"][0]["price"] == 999

    def test_order_survives_restaurant_removal(self, test_client, customer_headers, place_order, restaurant_store):
        order = place_order()
        restaurant_store.remove("spice-garden")

        response = test_client.get(f"/orders/{order['orderId']}", headers=customer_headers)
        assert response.status_code == 200


class TestCancelOrder:
    def test_cancel_received_order(self, test_client, customer_headers, place_order):
        order = place_order()

        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=customer_headers,
                                     json={"reason": "ordered twice"})

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert response.json()["cancellationReason"] == "ordered twice"

    def test_cancel_without_body(self, test_client, customer_headers, place_order):
        order = place_order()
        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=customer_headers)
        assert response.status_code == 200

    def test_cancel_delivered_order(self, test_client, customer_headers, owner_headers, place_order):
        order = place_order()
        for status in ("preparing", "delivered"):
            test_client.put(f"/restaurant-owner/orders/{order['orderId']}/status", headers=owner_headers,
                            json={"status": status})

        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=customer_headers)

        assert response.status_code == 400
        check = test_client.get(f"/orders/{order['orderId']}", headers=customer_headers).json()
        assert check["status"] == "delivered"

    def test_cancel_twice(self, test_client, customer_headers, place_order):
        order = place_order()
        test_client.patch(f"/orders/{order['orderId']}/cancel", headers=customer_headers)

        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=customer_headers)

        assert response.status_code == 400
        assert "already cancelled" in response.json()["detail"]

    def test_cannot_cancel_other_customers_order(self, test_client, other_customer_headers, place_order):
        order = place_order()
        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=other_customer_headers)
        assert response.status_code == 404

    def test_admin_cannot_use_customer_cancel(self, test_client, admin_headers, place_order):
        order = place_order()
        response = test_client.patch(f"/orders/{order['orderId']}/cancel", headers=admin_headers)
        assert response.status_code == 403


def test_health_check(test_client):
    response = test_client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_role_defaults_to_customer(test_client, place_order):
    headers = auth_headers("customer-9", None)
    order = place_order(headers=headers)
    assert order["userId"] == "customer-9"
