"""API tests for discount validation and discount administration."""

from datetime import timedelta

from storefront.utils import utcnow


class TestValidateEndpoint:
    def test_below_minimum(self, client, make_discount):
        make_discount(code="SAVE10", discount_value=10, min_purchase_amount=500)

        response = client.post("/api/discounts/validate", json={"code": "SAVE10", "subtotal": 400})

        assert response.status_code == 400
        body = response.json()
        assert body["reason"] == "BelowMinimum"
        assert body["errorType"] == "DiscountRejectedError"
        assert "500" in body["error"]

    def test_accepted(self, client, make_discount):
        make_discount(code="SAVE10", discount_value=10, min_purchase_amount=500, usage_limit=100, used_count=7)

        response = client.post("/api/discounts/validate", json={"code": "save10", "subtotal": 600})

        assert response.status_code == 200
        body = response.json()
        assert body["code"] == "SAVE10"
        assert body["type"] == "PERCENTAGE"
        assert body["discountValue"] == 10
        assert body["minPurchaseAmount"] == 500
        assert "usedCount" not in body
        assert "usageLimit" not in body
        assert "id" not in body

    def test_unknown_code_is_404(self, client):
        response = client.post("/api/discounts/validate", json={"code": "NOPE", "subtotal": 100})

        assert response.status_code == 404
        assert response.json()["reason"] == "NotFound"

    def test_empty_code(self, client):
        response = client.post("/api/discounts/validate", json={"code": "", "subtotal": 100})

        assert response.status_code == 400
        assert response.json()["errorType"] == "ValidationError"

    def test_expired(self, client, make_discount):
        make_discount(end_date=utcnow() - timedelta(days=1))

        response = client.post("/api/discounts/validate", json={"code": "SAVE10", "subtotal": 100})

        assert response.status_code == 400
        assert response.json()["reason"] == "Expired"

    def test_per_customer_limit_uses_phone(self, client, make_discount, make_order):
        make_discount(user_usage_limit=1)
        make_order(phone="0811111111", discount_code="SAVE10")

        blocked = client.post(
            "/api/discounts/validate",
            json={"code": "SAVE10", "subtotal": 100, "phone": "0811111111"},
        )
        other = client.post(
            "/api/discounts/validate",
            json={"code": "SAVE10", "subtotal": 100, "phone": "0822222222"},
        )

        assert blocked.status_code == 400
        assert blocked.json()["reason"] == "PerUserLimitReached"
        assert other.status_code == 200


class TestDiscountAdmin:
    def test_requires_admin_token(self, client, customer_headers):
        assert client.get("/api/admin/discounts").status_code == 401
        assert client.get("/api/admin/discounts", headers=customer_headers()).status_code == 401
        assert client.get(
            "/api/admin/discounts", headers={"Authorization": "Bearer not-a-token"}
        ).status_code == 401

    def test_create_stores_upper_case_code(self, client, admin_headers):
        response = client.post(
            "/api/admin/discounts",
            json={"code": "summer", "type": "FIXED", "discountValue": 50},
            headers=admin_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["code"] == "SUMMER"
        assert body["usedCount"] == 0
        assert body["isActive"] is True

    def test_duplicate_code(self, client, admin_headers, make_discount):
        make_discount(code="SAVE10")

        response = client.post(
            "/api/admin/discounts",
            json={"code": "save10", "discountValue": 5},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["errorType"] == "ConflictError"

    def test_partial_update(self, client, admin_headers, make_discount):
        discount = make_discount(code="SAVE10", min_purchase_amount=500, description="Ten off")

        response = client.patch(
            f"/api/admin/discounts/{discount.id}",
            json={"minPurchaseAmount": None, "isActive": False},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["minPurchaseAmount"] is None
        assert body["isActive"] is False
        assert body["description"] == "Ten off"

    def test_update_rejects_null_value(self, client, admin_headers, make_discount):
        discount = make_discount()

        response = client.patch(
            f"/api/admin/discounts/{discount.id}",
            json={"discountValue": None},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_list_and_delete(self, client, admin_headers, make_discount):
        discount = make_discount()

        listed = client.get("/api/admin/discounts", headers=admin_headers).json()
        assert [d["code"] for d in listed] == ["SAVE10"]

        assert client.delete(f"/api/admin/discounts/{discount.id}", headers=admin_headers).status_code == 200
        assert client.delete(f"/api/admin/discounts/{discount.id}", headers=admin_headers).status_code == 404
