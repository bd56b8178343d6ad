"""Mini README: Tests covering the ledger's mutations and derived views.

Structure:
    * add - valid entries append in order, invalid ones leave state untouched.
    * remove - idempotent and never reissues identifiers.
    * query/totals - conjunctive filters, insertion order, aggregate identities.
    * scenario - salary and groceries walk-through end to end.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from fintrack.finance import (
    CategoryCatalogue,
    Ledger,
    Transaction,
    TransactionType,
    ValidationError,
)


def _fixed_clock() -> datetime:
    return datetime(2024, 6, 1, 9, 30, 0)


@pytest.fixture
def ledger() -> Ledger:
    return Ledger(clock=_fixed_clock, timestamp_format="%Y-%m-%d %H:%M:%S")


def test_add_appends_record_with_generated_fields(ledger: Ledger) -> None:
    """A valid add grows the ledger by one and returns the stored record."""

    first = ledger.add("Salary", "50000", "Salary", "income")
    second = ledger.add("  Groceries  ", 20.5, "Groceries", TransactionType.EXPENSE)

    assert len(ledger) == 2
    assert list(ledger.query())[-1] == second
    assert first.transaction_id != second.transaction_id
    assert second.description == "Groceries"
    assert second.amount == Decimal("20.5")
    assert second.recorded_at == "2024-06-01 09:30:00"
    assert first.transaction_type is TransactionType.INCOME


def test_transactions_are_immutable(ledger: Ledger) -> None:
    transaction = ledger.add("Salary", 100, "Salary", "income")

    with pytest.raises(AttributeError):
        transaction.amount = Decimal("1")  # type: ignore[misc]


@pytest.mark.parametrize(
    ("description", "amount", "category", "transaction_type", "field"),
    [
        ("", "10", "Groceries", "expense", "description"),
        ("   ", "10", "Groceries", "expense", "description"),
        ("Lunch", "0", "Groceries", "expense", "amount"),
        ("Lunch", "-5", "Groceries", "expense", "amount"),
        ("Lunch", "ten", "Groceries", "expense", "amount"),
        ("Lunch", "", "Groceries", "expense", "amount"),
        ("Lunch", "NaN", "Groceries", "expense", "amount"),
        ("Lunch", "Infinity", "Groceries", "expense", "amount"),
        ("Lunch", True, "Groceries", "expense", "amount"),
        ("Lunch", "10", "", "expense", "category"),
        ("Lunch", "10", "Groceries", "transfer", "transaction_type"),
        ("Lunch", "10", "Salary", "expense", "category"),
        ("Lunch", "1e1000000", "Groceries", "expense", "amount"),
    ],
)
def test_add_rejects_invalid_input_without_mutation(
    ledger: Ledger, description, amount, category, transaction_type, field
) -> None:
    """Every failed precondition raises ValidationError and changes nothing."""

    ledger.add("Salary", "1000", "Salary", "income")

    with pytest.raises(ValidationError) as excinfo:
        ledger.add(description, amount, category, transaction_type)

    assert excinfo.value.field == field
    assert len(ledger) == 1
    assert ledger.totals().income == Decimal("1000")


def test_validation_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Ledger().add("Lunch", "-1", "Groceries", "expense")


def test_category_check_can_be_disabled() -> None:
    """Without a catalogue any non-empty label is accepted."""

    ledger = Ledger(catalogue=None)
    transaction = ledger.add("Refund", "15", "Anything", "income")
    assert transaction.category == "Anything"


def test_custom_catalogue_controls_accepted_labels() -> None:
    ledger = Ledger(catalogue=CategoryCatalogue(income=("Wages",), expense=("Food",)))

    ledger.add("Pay", "10", "Wages", "income")
    with pytest.raises(ValidationError):
        ledger.add("Pay", "10", "Salary", "income")


def test_remove_is_idempotent_and_keeps_order(ledger: Ledger) -> None:
    """Removing shortens the sequence once and ignores unknown identifiers."""

    first = ledger.add("Salary", "100", "Salary", "income")
    middle = ledger.add("Rent", "40", "Rent", "expense")
    last = ledger.add("Bus", "3", "Transportation", "expense")

    ledger.remove(middle.transaction_id)
    ledger.remove(middle.transaction_id)
    ledger.remove("txn_9999")

    remaining = [transaction.transaction_id for transaction in ledger.query()]
    assert remaining == [first.transaction_id, last.transaction_id]
    assert middle.transaction_id not in ledger


def test_identifiers_are_never_reused(ledger: Ledger) -> None:
    first = ledger.add("Salary", "100", "Salary", "income")
    ledger.remove(first.transaction_id)

    replacement = ledger.add("Salary", "100", "Salary", "income")

    assert replacement.transaction_id != first.transaction_id


def test_seeded_transactions_advance_identifier_counter() -> None:
    seeded = Transaction(
        transaction_id="txn_0007",
        transaction_type=TransactionType.EXPENSE,
        description="Rent",
        category="Rent",
        amount=Decimal("900"),
        recorded_at="2024-05-01 08:00:00",
    )
    ledger = Ledger(transactions=[seeded])

    added = ledger.add("Salary", "100", "Salary", "income")

    assert added.transaction_id == "txn_0008"
    with pytest.raises(ValueError):
        Ledger(transactions=[seeded, seeded])


def _prebuilt(**overrides) -> Transaction:
    fields = {
        "transaction_id": "txn_0001",
        "transaction_type": TransactionType.EXPENSE,
        "description": "Rent",
        "category": "Rent",
        "amount": Decimal("900"),
        "recorded_at": "2024-05-01 08:00:00",
    }
    fields.update(overrides)
    return Transaction(**fields)


@pytest.mark.parametrize(
    ("overrides", "field"),
    [
        ({"amount": Decimal("-5")}, "amount"),
        ({"amount": 0}, "amount"),
        ({"description": "  "}, "description"),
        ({"category": ""}, "category"),
        ({"category": "Salary"}, "category"),
        ({"transaction_type": "transfer"}, "transaction_type"),
    ],
)
def test_seeded_transactions_are_validated(overrides, field) -> None:
    """Pre-built records go through the same checks as ``add``."""

    with pytest.raises(ValidationError) as excinfo:
        Ledger(transactions=[_prebuilt(**overrides)])

    assert excinfo.value.field == field


def test_seeded_transactions_are_normalised() -> None:
    """Float amounts and plain-string types are coerced before storage."""

    ledger = Ledger(
        transactions=[
            _prebuilt(amount=900.0),
            _prebuilt(
                transaction_id="txn_0002",
                transaction_type="Income",
                description=" Salary ",
                category="Salary",
                amount="1500",
            ),
        ]
    )

    rent, salary = ledger.query()
    assert rent.amount == Decimal("900")
    assert salary.transaction_type is TransactionType.INCOME
    assert salary.description == "Salary"
    assert list(ledger.query("income", "all")) == [salary]
    totals = ledger.totals()
    assert (totals.income, totals.expenses, totals.balance) == (1500, 900, 600)


def test_amounts_beyond_decimal_range_are_rejected(ledger: Ledger) -> None:
    """Oversized amounts are refused so totals can always be summed."""

    with pytest.raises(ValidationError) as excinfo:
        ledger.add("Windfall", "1e1000000", "Salary", "income")

    assert excinfo.value.field == "amount"
    ledger.add("Lottery", "1e400000", "Salary", "income")
    ledger.add("Lottery again", "1e400000", "Salary", "income")
    assert ledger.totals().income == Decimal("2e400000")


def test_query_filters_are_conjunctive(ledger: Ledger) -> None:
    salary = ledger.add("Salary", "100", "Salary", "income")
    groceries = ledger.add("Groceries", "20", "Groceries", "expense")
    more_groceries = ledger.add("Market", "5", "Groceries", "expense")
    ledger.add("Bus", "3", "Transportation", "expense")

    assert list(ledger.query("expense", "Groceries")) == [groceries, more_groceries]
    assert list(ledger.query("income", "Groceries")) == []
    assert list(ledger.query("all", "Salary")) == [salary]
    assert list(ledger.query("ALL", "all")) == list(ledger)
    assert list(ledger.query("all", "Unused label")) == []


def test_query_rejects_unknown_type_filter(ledger: Ledger) -> None:
    with pytest.raises(ValueError):
        ledger.query("transfers", "all")


def test_query_view_is_restartable_snapshot(ledger: Ledger) -> None:
    """Views can be iterated repeatedly and do not follow later mutations."""

    ledger.add("Salary", "100", "Salary", "income")
    view = ledger.query()

    assert len(view) == 1
    assert list(view) == list(view)

    ledger.add("Rent", "40", "Rent", "expense")
    assert len(view) == 1
    assert len(ledger.query()) == 2


def test_totals_on_empty_ledger_are_zero() -> None:
    totals = Ledger().totals()

    assert totals.income == 0
    assert totals.expenses == 0
    assert totals.balance == 0


def test_totals_match_filtered_sums(ledger: Ledger) -> None:
    for amount in ("100.10", "200.20", "0.30"):
        ledger.add("Pay", amount, "Salary", "income")
    for amount in ("0.10", "0.20", "55"):
        ledger.add("Food", amount, "Groceries", "expense")

    totals = ledger.totals()

    assert totals.income == Decimal("300.60")
    assert totals.expenses == Decimal("55.30")
    assert totals.balance == totals.income - totals.expenses
    assert ledger.query("income", "all").total() == totals.income
    assert ledger.query("expense", "all").total() == totals.expenses


def test_totals_ignore_query_filters(ledger: Ledger) -> None:
    ledger.add("Salary", "100", "Salary", "income")
    ledger.add("Rent", "40", "Rent", "expense")
    ledger.query("expense", "Rent")

    assert ledger.totals().as_dict() == {
        "income": "100",
        "expenses": "40",
        "balance": "60",
    }


def test_category_breakdown_sums_per_label(ledger: Ledger) -> None:
    ledger.add("Market", "20", "Groceries", "expense")
    ledger.add("Rent", "400", "Rent", "expense")
    ledger.add("Corner shop", "5", "Groceries", "expense")
    ledger.add("Salary", "1000", "Salary", "income")

    breakdown = ledger.category_breakdown("expense")

    assert breakdown == {"Groceries": Decimal("25"), "Rent": Decimal("400")}
    assert list(breakdown) == ["Groceries", "Rent"]


def test_export_snapshot_serialises_records(ledger: Ledger) -> None:
    transaction = ledger.add("Salary", "50000", "Salary", "income")

    snapshot = ledger.export_snapshot()

    assert snapshot["transactions"] == [
        {
            "transaction_id": transaction.transaction_id,
            "transaction_type": "income",
            "description": "Salary",
            "category": "Salary",
            "amount": "50000",
            "recorded_at": "2024-06-01 09:30:00",
        }
    ]
    assert snapshot["totals"]["balance"] == "50000"


def test_salary_and_groceries_scenario(ledger: Ledger) -> None:
    """Walk through recording income, an expense and then removing the income."""

    salary = ledger.add("Salary", 50000, "Salary", "income")
    assert len(ledger) == 1
    totals = ledger.totals()
    assert (totals.income, totals.expenses, totals.balance) == (50000, 0, 50000)

    groceries = ledger.add("Groceries", 2000, "Groceries", "expense")
    totals = ledger.totals()
    assert (totals.income, totals.expenses, totals.balance) == (50000, 2000, 48000)
    assert list(ledger.query("expense", "all")) == [groceries]
    assert list(ledger.query("all", "Salary")) == [salary]

    ledger.remove(salary.transaction_id)
    totals = ledger.totals()
    assert (totals.income, totals.expenses, totals.balance) == (0, 2000, -2000)
    assert len(ledger.query("all", "all")) == 1
