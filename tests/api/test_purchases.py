"""
Tests for purchase API endpoints.

These test the HTTP layer: status codes, response format,
and error mapping. Business logic is tested in
test_purchase_service.py.
"""

from decimal import Decimal


def purchase_payload(vendor, product, invoice="INV-1", quantity=10,
                     unit_cost="50.00", tax_amount="25.00",
                     total_amount="525.00"):
    return {
        "invoice_number": invoice,
        "vendor_id": vendor.id,
        "purchase_date": "2024-03-01",
        "tax_amount": tax_amount,
        "total_amount": total_amount,
        "items": [{
            "product_id": product.id,
            "quantity": quantity,
            "unit_cost": unit_cost,
        }],
    }


class TestCreatePurchase:

    def test_create_returns_201_with_accounting(self, client, vendor, product):
        response = client.post("/purchases", json=purchase_payload(vendor, product))
        assert response.status_code == 201

        data = response.json()
        assert data["purchase"]["invoice_number"] == "INV-1"
        assert len(data["purchase"]["items"]) == 1
        assert Decimal(data["purchase"]["items"][0]["line_total"]) == Decimal("500")
        assert data["accounting"]["journal_entry_id"] is not None
        assert Decimal(data["accounting"]["total_inventory_cost"]) == Decimal("500")

    def test_duplicate_invoice_returns_409(self, client, vendor, product):
        client.post("/purchases", json=purchase_payload(vendor, product))
        response = client.post("/purchases", json=purchase_payload(vendor, product))

        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_unknown_vendor_returns_404(self, client, vendor, product):
        payload = purchase_payload(vendor, product)
        payload["vendor_id"] = 999
        response = client.post("/purchases", json=payload)
        assert response.status_code == 404

    def test_unbalanced_purchase_returns_400(self, client, vendor, product):
        payload = purchase_payload(vendor, product, total_amount="600.00")
        response = client.post("/purchases", json=payload)

        assert response.status_code == 400
        assert "does not match" in response.json()["detail"]
        assert client.get("/purchases").json() == []

    def test_empty_items_returns_422(self, client, vendor, product):
        payload = purchase_payload(vendor, product)
        payload["items"] = []
        response = client.post("/purchases", json=payload)
        assert response.status_code == 422


class TestReadPurchases:

    def test_get_purchase(self, client, vendor, product):
        created = client.post(
            "/purchases", json=purchase_payload(vendor, product)
        ).json()
        purchase_id = created["purchase"]["id"]

        response = client.get(f"/purchases/{purchase_id}")
        assert response.status_code == 200
        assert response.json()["invoice_number"] == "INV-1"

    def test_get_missing_purchase_returns_404(self, client):
        response = client.get("/purchases/99")
        assert response.status_code == 404

    def test_list_purchases(self, client, vendor, product):
        client.post("/purchases", json=purchase_payload(vendor, product, "INV-1"))
        client.post("/purchases", json=purchase_payload(vendor, product, "INV-2"))

        response = client.get("/purchases")
        assert [p["invoice_number"] for p in response.json()] == ["INV-1", "INV-2"]


class TestUpdatePurchase:

    def test_update_returns_new_journal(self, client, vendor, product):
        created = client.post(
            "/purchases", json=purchase_payload(vendor, product)
        ).json()
        purchase_id = created["purchase"]["id"]
        old_journal = created["accounting"]["journal_entry_id"]

        response = client.put(
            f"/purchases/{purchase_id}",
            json=purchase_payload(
                vendor, product, quantity=4, tax_amount="0",
                total_amount="200.00",
            ),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["accounting"]["journal_entry_id"] != old_journal
        assert Decimal(data["accounting"]["total_inventory_cost"]) == Decimal("200")

        journal = client.get(f"/ledger/journals/PURCHASE/{purchase_id}").json()
        assert journal["id"] == data["accounting"]["journal_entry_id"]
        assert len(journal["lines"]) == 2


class TestDeletePurchase:

    def test_delete_returns_snapshot(self, client, vendor, product):
        created = client.post(
            "/purchases", json=purchase_payload(vendor, product)
        ).json()
        purchase_id = created["purchase"]["id"]

        response = client.delete(f"/purchases/{purchase_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Purchase deleted successfully"
        assert data["purchase"]["invoice_number"] == "INV-1"

        assert client.get(f"/purchases/{purchase_id}").status_code == 404
        journal = client.get(f"/ledger/journals/PURCHASE/{purchase_id}")
        assert journal.status_code == 404

    def test_delete_missing_purchase_returns_404(self, client):
        response = client.delete("/purchases/99")
        assert response.status_code == 404
