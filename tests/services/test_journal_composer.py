"""
Tests for the JournalComposer.

Documents are plain namespaces here: composition only reads
attributes, it never touches the database.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from pos_ledger.models.enums import ReferenceType
from pos_ledger.services.journal_composer import JournalComposer, inventory_cost


def make_purchase(items, tax_amount="25.00", total_amount="525.00"):
    return SimpleNamespace(
        reference_type=ReferenceType.PURCHASE,
        id=7,
        invoice_number="INV-1",
        purchase_date=date(2024, 3, 1),
        tax_amount=Decimal(tax_amount),
        total_amount=Decimal(total_amount),
        items=[
            SimpleNamespace(quantity=qty, unit_cost=Decimal(cost))
            for qty, cost in items
        ],
    )


def make_return(items, tax_amount="10.00", total_amount="210.00",
                refund_received="100.00"):
    return SimpleNamespace(
        reference_type=ReferenceType.PURCHASE_RETURN,
        id=2,
        return_number="RET-1",
        return_date=date(2024, 3, 5),
        tax_amount=Decimal(tax_amount),
        total_amount=Decimal(total_amount),
        refund_received=Decimal(refund_received),
        items=[
            SimpleNamespace(quantity=qty, unit_cost=Decimal(cost))
            for qty, cost in items
        ],
    )


def make_expense(amount="5000.00", category="rent"):
    return SimpleNamespace(
        reference_type=ReferenceType.EXPENSE,
        id=3,
        description="Office rent",
        amount=Decimal(amount),
        category=category,
        expense_date=date(2024, 3, 31),
    )


def sides(request):
    """(account_id, debit, credit) for each line, in order."""
    return [
        (line.account_id, line.debit_amount, line.credit_amount)
        for line in request.lines
    ]


class TestInventoryCost:

    def test_sums_quantity_times_cost(self):
        purchase = make_purchase([(10, "50.00"), (2, "7.25")])
        assert inventory_cost(purchase.items) == Decimal("514.50")

    def test_no_items_costs_nothing(self):
        assert inventory_cost([]) == Decimal("0")


class TestComposePurchase:

    def test_purchase_with_tax(self):
        request = JournalComposer().compose_purchase(
            make_purchase([(10, "50.00")])
        )

        assert request.reference_type == ReferenceType.PURCHASE
        assert request.reference_id == 7
        assert request.entry_date == date(2024, 3, 1)
        assert sides(request) == [
            (4, Decimal("500.00"), None),
            (99, Decimal("25.00"), None),
            (5, None, Decimal("525.00")),
        ]
        assert request.total_debits == request.total_credits

    def test_line_descriptions_name_the_invoice(self):
        request = JournalComposer().compose_purchase(
            make_purchase([(10, "50.00")])
        )
        descriptions = [line.description for line in request.lines]
        assert descriptions == [
            "Inventory purchase #INV-1",
            "Tax paid on purchase #INV-1",
            "Amount owed to vendor for purchase #INV-1",
        ]

    def test_zero_tax_omits_tax_line(self):
        request = JournalComposer().compose_purchase(
            make_purchase([(10, "50.00")], tax_amount="0", total_amount="500.00")
        )
        assert sides(request) == [
            (4, Decimal("500.00"), None),
            (5, None, Decimal("500.00")),
        ]

    def test_explicit_inventory_total_is_used(self):
        request = JournalComposer().compose_purchase(
            make_purchase([(10, "50.00")]), Decimal("500.00")
        )
        assert request.lines[0].debit_amount == Decimal("500.00")

    def test_divergent_total_is_composed_unbalanced(self):
        """
        The composer does not reconcile items + tax against the
        stated total; purchases are checked for that before composing.
        """
        request = JournalComposer().compose_purchase(
            make_purchase([(10, "50.00")], total_amount="600.00")
        )
        assert request.total_debits == Decimal("525.00")
        assert request.total_credits == Decimal("600.00")

    def test_composing_twice_yields_same_lines(self):
        composer = JournalComposer()
        purchase = make_purchase([(10, "50.00"), (3, "4.00")])

        first = composer.compose(purchase)
        second = composer.compose(purchase)

        assert first == second


class TestComposePurchaseReturn:

    def test_split_refund_and_payable_reduction(self):
        request = JournalComposer().compose_purchase_return(
            make_return([(4, "50.00")])
        )

        assert request.reference_type == ReferenceType.PURCHASE_RETURN
        assert request.reference_id == 2
        assert request.entry_date == date(2024, 3, 5)
        assert request.description == "Purchase Return #RET-1"
        assert sides(request) == [
            (1, Decimal("100.00"), None),
            (5, Decimal("110.00"), None),
            (4, None, Decimal("200.00")),
            (99, None, Decimal("10.00")),
        ]
        assert request.total_debits == request.total_credits

    def test_full_refund_leaves_payable_alone(self):
        request = JournalComposer().compose_purchase_return(
            make_return([(2, "50.00")], tax_amount="0",
                        total_amount="100.00", refund_received="100.00")
        )
        assert sides(request) == [
            (1, Decimal("100.00"), None),
            (4, None, Decimal("100.00")),
        ]

    def test_no_refund_reduces_payable_only(self):
        request = JournalComposer().compose(
            make_return([(2, "50.00")], tax_amount="0",
                        total_amount="100.00", refund_received="0")
        )
        assert sides(request) == [
            (5, Decimal("100.00"), None),
            (4, None, Decimal("100.00")),
        ]

    def test_returned_cost_can_be_passed_in(self):
        request = JournalComposer().compose_purchase_return(
            make_return([], tax_amount="0", total_amount="100.00",
                        refund_received="0"),
            Decimal("100.00"),
        )
        assert request.lines[1].credit_amount == Decimal("100.00")


class TestComposeExpense:

    def test_rent_expense(self):
        request = JournalComposer().compose_expense(make_expense())

        assert request.reference_type == ReferenceType.EXPENSE
        assert request.reference_id == 3
        assert request.entry_date == date(2024, 3, 31)
        assert sides(request) == [
            (12, Decimal("5000.00"), None),
            (1, None, Decimal("5000.00")),
        ]
        assert request.lines[0].description == "Expense: Office rent"
        assert request.lines[1].description == "Cash paid for expense: Office rent"

    def test_uncategorised_expense_goes_to_operating(self):
        request = JournalComposer().compose_expense(make_expense(category=None))
        assert request.lines[0].account_id == 11

    def test_dispatch_rejects_sale(self):
        sale = SimpleNamespace(reference_type=ReferenceType.SALE, id=1)
        with pytest.raises(ValueError, match="No journal rule"):
            JournalComposer().compose(sale)
