"""API tests for the delivery quote preview."""
import pytest


def quote(test_client, headers, **overrides):
    body = {"restaurantId": "spice-garden", "userLatitude": 13.0756, "userLongitude": 77.6066}
    body.update(overrides)
    return test_client.post("/location/calculate", json=body, headers=headers)


class TestCalculateDelivery:
    def test_quote_for_located_restaurant(self, test_client, customer_headers):
        response = quote(test_client, customer_headers)

        assert response.status_code == 200
        assert response.json() == {
            "distance": 11.12,
            "deliveryFee": 65,
            "estimatedTime": "71-86 mins",
            "hasLocation": True,
            "restaurantName": "Spice Garden",
            "restaurantAddress": "12 MG Road",
        }

    def test_quote_within_free_radius(self, test_client, customer_headers):
        data = quote(test_client, customer_headers, userLatitude=12.9716, userLongitude=77.5946).json()

        assert data["deliveryFee"] == 20
        assert data["estimatedTime"] == "22-37 mins"

    def test_restaurant_without_location_gets_default(self, test_client, customer_headers):
        data = quote(test_client, customer_headers, restaurantId="dosa-corner").json()

        assert data["hasLocation"] is False
        assert data["distance"] == 0
        assert data["deliveryFee"] == 40
        assert data["estimatedTime"] == "30-40 mins"
        assert data["restaurantName"] == "Dosa Corner"

    def test_matches_order_pricing(self, test_client, customer_headers, place_order):
        preview = quote(test_client, customer_headers).json()
        order = place_order(latitude=13.0756, longitude=77.6066)

        assert order["deliveryFee"] == preview["deliveryFee"]
        assert order["distance"] == preview["distance"]
        assert order["estimatedDeliveryTime"] == preview["estimatedTime"]

    def test_unknown_restaurant(self, test_client, customer_headers):
        response = quote(test_client, customer_headers, restaurantId="ghost-kitchen")
        assert response.status_code == 404
        assert response.json()["detail"] == "Restaurant not found"

    def test_missing_coordinates(self, test_client, customer_headers):
        response = test_client.post("/location/calculate", json={"restaurantId": "spice-garden"},
                                    headers=customer_headers)
        assert response.status_code == 400

    @pytest.mark.parametrize("latitude, longitude", [(91, 77.6), (12.9, 180.5)])
    def test_out_of_range_coordinates(self, test_client, customer_headers, latitude, longitude):
        response = quote(test_client, customer_headers, userLatitude=latitude, userLongitude=longitude)
        assert response.status_code == 400

    def test_requires_token(self, test_client):
        response = test_client.post("/location/calculate", json={
            "restaurantId": "spice-garden", "userLatitude": 13.0, "userLongitude": 77.6,
        })
        assert response.status_code == 401

    def test_any_role_may_preview(self, test_client, owner_headers):
        assert quote(test_client, owner_headers).status_code == 200
