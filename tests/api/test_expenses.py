"""
Tests for expense API endpoints.
"""

from decimal import Decimal


RENT = {
    "description": "Office rent",
    "amount": "5000.00",
    "expense_date": "2024-03-31",
    "category": "rent",
}


class TestCreateExpense:

    def test_create_returns_201(self, client):
        response = client.post("/expenses", json=RENT)
        assert response.status_code == 201

        data = response.json()
        assert data["expense"]["description"] == "Office rent"
        assert data["expense"]["category"] == "rent"
        assert data["accounting"]["journal_entry_id"] is not None

    def test_non_positive_amount_returns_422(self, client):
        response = client.post("/expenses", json={**RENT, "amount": "0"})
        assert response.status_code == 422

    def test_journal_is_visible_through_ledger(self, client):
        expense = client.post("/expenses", json=RENT).json()["expense"]

        response = client.get(f"/ledger/journals/EXPENSE/{expense['id']}")
        assert response.status_code == 200
        lines = response.json()["lines"]
        assert [line["account_id"] for line in lines] == [12, 1]


class TestUpdateExpense:

    def test_update_reposts_journal(self, client):
        created = client.post("/expenses", json=RENT).json()
        expense_id = created["expense"]["id"]

        response = client.put(
            f"/expenses/{expense_id}", json={**RENT, "amount": "7000.00"}
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["expense"]["amount"]) == Decimal("7000")
        assert (
            data["accounting"]["journal_entry_id"]
            != created["accounting"]["journal_entry_id"]
        )

        entries = client.get(
            "/ledger/entries",
            params={"reference_type": "EXPENSE", "reference_id": expense_id},
        ).json()
        assert len(entries) == 2

    def test_update_requires_date(self, client):
        created = client.post("/expenses", json=RENT).json()
        payload = {k: v for k, v in RENT.items() if k != "expense_date"}

        response = client.put(
            f"/expenses/{created['expense']['id']}", json=payload
        )
        assert response.status_code == 422

    def test_update_missing_expense_returns_404(self, client):
        response = client.put("/expenses/99", json=RENT)
        assert response.status_code == 404


class TestDeleteExpense:

    def test_delete_returns_snapshot(self, client):
        expense_id = client.post("/expenses", json=RENT).json()["expense"]["id"]

        response = client.delete(f"/expenses/{expense_id}")
        assert response.status_code == 200
        assert response.json()["expense"]["id"] == expense_id
        assert client.get(f"/expenses/{expense_id}").status_code == 404

    def test_list_expenses(self, client):
        client.post("/expenses", json=RENT)
        response = client.get("/expenses")
        assert response.status_code == 200
        assert len(response.json()) == 1
