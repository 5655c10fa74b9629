"""API tests for cart checkout, tracking, cancellation and admin status changes."""

from storefront.models import OrderStatus, Product

CHECKOUT = {"customerName": "Somchai", "phone": "0812345678", "address": "99 Sukhumvit Rd, Bangkok"}


def stock_of(db_session, product_id):
    db_session.expire_all()
    return db_session.query(Product).filter(Product.id == product_id).one().stock


class TestCheckoutFlow:
    def test_cart_to_order(self, client, db_session, make_product, customer_headers):
        product = make_product(price=100, stock=5)

        added = client.post("/api/cart", json={"productId": product.id, "quantity": 2})
        assert added.status_code == 200
        assert added.json()["subtotal"] == 200

        response = client.post("/api/orders", json=CHECKOUT, headers=customer_headers(7))

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "PENDING"
        assert body["customerId"] == 7
        assert body["totalAmount"] == 240
        assert body["items"][0]["productId"] == product.id
        assert body["items"][0]["quantity"] == 2
        assert stock_of(db_session, product.id) == 3
        assert client.get("/api/cart").json()["items"] == []

        mine = client.get("/api/customer/orders", headers=customer_headers(7)).json()
        assert mine["total"] == 1
        assert mine["orders"][0]["id"] == body["id"]

    def test_guest_checkout_with_discount(self, client, make_product, make_discount):
        product = make_product(price=300, stock=5)
        make_discount(code="SAVE10", discount_value=10, min_purchase_amount=500)
        client.post("/api/cart", json={"productId": product.id, "quantity": 2})

        response = client.post("/api/orders", json={**CHECKOUT, "discountCode": "save10"})

        assert response.status_code == 201
        body = response.json()
        assert body["customerId"] is None
        assert body["discountCode"] == "SAVE10"
        assert body["discountAmount"] == 60
        assert body["totalAmount"] == 580

    def test_empty_cart(self, client):
        response = client.post("/api/orders", json=CHECKOUT)

        assert response.status_code == 400
        assert response.json()["errorType"] == "ValidationError"

    def test_adding_more_than_stock(self, client, make_product):
        product = make_product(stock=1)

        response = client.post("/api/cart", json={"productId": product.id, "quantity": 2})

        assert response.status_code == 400

    def test_missing_fields(self, client):
        response = client.post("/api/orders", json={"phone": "0812345678"})

        assert response.status_code == 400
        body = response.json()
        assert body["errorType"] == "ValidationError"
        assert body["details"]


class TestTracking:
    def test_track_by_phone(self, client, make_product, make_order):
        order = make_order(items=[(make_product(), 1)], phone="0899999999")

        found = client.post("/api/orders/track", json={"orderId": order.id, "phone": "0899999999"})
        wrong = client.post("/api/orders/track", json={"orderId": order.id, "phone": "0800000000"})

        assert found.status_code == 200
        assert found.json()["id"] == order.id
        assert wrong.status_code == 404

    def test_customer_orders_need_a_token(self, client):
        assert client.get("/api/customer/orders").status_code == 401


class TestCustomerCancel:
    def test_cancel(self, client, db_session, make_product, make_order, customer_headers):
        product = make_product(stock=5)
        order = make_order(items=[(product, 3)], customer_id=7)

        response = client.patch(f"/api/customer/orders/{order.id}/cancel", headers=customer_headers(7))

        assert response.status_code == 200
        assert response.json()["message"]
        assert stock_of(db_session, product.id) == 8

    def test_without_token(self, client, make_product, make_order):
        order = make_order(items=[(make_product(), 1)], customer_id=7)

        response = client.patch(f"/api/customer/orders/{order.id}/cancel")

        assert response.status_code == 401
        assert response.json()["errorType"] == "AuthError"

    def test_someone_elses_order(self, client, make_product, make_order, customer_headers):
        order = make_order(items=[(make_product(), 1)], customer_id=7)

        response = client.patch(f"/api/customer/orders/{order.id}/cancel", headers=customer_headers(8))

        assert response.status_code == 403

    def test_already_confirmed(self, client, db_session, make_product, make_order, customer_headers):
        product = make_product(stock=5)
        order = make_order(items=[(product, 3)], customer_id=7, status=OrderStatus.CONFIRMED)

        response = client.patch(f"/api/customer/orders/{order.id}/cancel", headers=customer_headers(7))

        assert response.status_code == 400
        assert response.json()["errorType"] == "InvalidTransitionError"
        assert stock_of(db_session, product.id) == 5

    def test_missing_order(self, client, customer_headers):
        response = client.patch("/api/customer/orders/4040/cancel", headers=customer_headers(7))

        assert response.status_code == 404


class TestAdminOrders:
    def test_status_update_and_restock(self, client, db_session, admin_headers, make_product, make_order):
        product = make_product(stock=5)
        order = make_order(items=[(product, 3)])

        confirmed = client.patch(
            f"/api/admin/orders/{order.id}", json={"status": "CONFIRMED"}, headers=admin_headers
        )
        cancelled = client.patch(
            f"/api/admin/orders/{order.id}", json={"status": "CANCELLED"}, headers=admin_headers
        )

        assert confirmed.status_code == 200
        assert confirmed.json()["status"] == "CONFIRMED"
        assert cancelled.json()["status"] == "CANCELLED"
        assert stock_of(db_session, product.id) == 8

    def test_invalid_transition(self, client, admin_headers, make_product, make_order):
        order = make_order(items=[(make_product(), 1)])

        response = client.patch(
            f"/api/admin/orders/{order.id}", json={"status": "DELIVERED"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["errorType"] == "InvalidTransitionError"

    def test_unknown_status_value(self, client, admin_headers, make_product, make_order):
        order = make_order(items=[(make_product(), 1)])

        response = client.patch(
            f"/api/admin/orders/{order.id}", json={"status": "LOST"}, headers=admin_headers
        )

        assert response.status_code == 400

    def test_missing_order(self, client, admin_headers):
        response = client.patch("/api/admin/orders/999", json={"status": "CONFIRMED"}, headers=admin_headers)

        assert response.status_code == 404

    def test_requires_admin(self, client, customer_headers):
        response = client.patch("/api/admin/orders/1", json={"status": "CONFIRMED"}, headers=customer_headers())

        assert response.status_code == 401

    def test_list_and_get(self, client, admin_headers, make_product, make_order):
        product = make_product()
        first = make_order(items=[(product, 1)])
        second = make_order(items=[(product, 2)])

        listed = client.get("/api/admin/orders", headers=admin_headers).json()
        single = client.get(f"/api/admin/orders/{first.id}", headers=admin_headers)

        assert listed["total"] == 2
        assert {o["id"] for o in listed["orders"]} == {first.id, second.id}
        assert single.json()["items"][0]["productName"] == product.name
