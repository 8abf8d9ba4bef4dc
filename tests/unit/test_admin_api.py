"""API tests for the admin order endpoints."""


class TestAdminOrders:
    def test_lists_every_order(self, test_client, admin_headers, other_customer_headers, place_order):
        first = place_order()
        second = place_order(headers=other_customer_headers)

        response = test_client.get("/admin/orders", headers=admin_headers)

        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()] == [second["orderId"], first["orderId"]]

    def test_non_admins_are_forbidden(self, test_client, customer_headers, owner_headers):
        assert test_client.get("/admin/orders", headers=customer_headers).status_code == 403
        assert test_client.get("/admin/orders", headers=owner_headers).status_code == 403
        assert test_client.delete("/admin/orders", headers=owner_headers).status_code == 403

    def test_set_any_status(self, test_client, admin_headers, place_order):
        order = place_order()

        response = test_client.patch(f"/admin/orders/{order['orderId']}/status", headers=admin_headers,
                                     json={"status": "served"})

        assert response.status_code == 200
        assert response.json()["status"] == "served"

    def test_unknown_order(self, test_client, admin_headers):
        response = test_client.patch("/admin/orders/ORD-0-0/status", headers=admin_headers, json={"status": "served"})
        assert response.status_code == 404

    def test_bulk_delete(self, test_client, admin_headers, customer_headers, place_order):
        place_order()
        place_order()

        response = test_client.delete("/admin/orders", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deletedCount": 2}
        assert test_client.get("/orders/my-orders", headers=customer_headers).json() == []

    def test_stats(self, test_client, admin_headers, customer_headers, place_order):
        cancelled = place_order(paymentMethod="card")
        place_order(paymentMethod="card")
        place_order()
        test_client.patch(f"/orders/{cancelled['orderId']}/cancel", headers=customer_headers)

        data = test_client.get("/admin/stats", headers=admin_headers).json()

        assert data["totalOrders"] == 3
        assert data["totalRevenue"] == 480
        assert data["pendingOrders"] == 2
        assert data["ordersByStatus"]["cancelled"] == 1
