"""Mini README: Data model for ledger entries.

Structure:
    * TransactionType - enum representing income versus expense entries.
    * Transaction - immutable record created by the ledger.
    * Totals - aggregate income, expenses and balance.
    * parse_amount - converts raw form input into a positive ``Decimal``.

Amounts are stored as ``Decimal`` so repeated summation never drifts the way
binary floats do. Timestamps are kept as the already formatted string the
ledger produced at creation time; rendering choices belong to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, getcontext
from enum import Enum
from typing import Dict, Union

from .errors import ValidationError

ZERO = Decimal("0")


class TransactionType(str, Enum):
    """Enumerate the supported transaction kinds."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def from_str(cls, value: Union["TransactionType", str]) -> "TransactionType":
        """Coerce arbitrary casing into a valid transaction type."""

        if isinstance(value, cls):
            return value
        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported transaction type: {value}") from error


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single recorded income or expense event."""

    transaction_id: str
    transaction_type: TransactionType
    description: str
    category: str
    amount: Decimal
    recorded_at: str

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "transaction_type": self.transaction_type.value,
            "description": self.description,
            "category": self.category,
            "amount": str(self.amount),
            "recorded_at": self.recorded_at,
        }


@dataclass(frozen=True, slots=True)
class Totals:
    """Income, expense and balance aggregates over the whole ledger."""

    income: Decimal = ZERO
    expenses: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.income - self.expenses

    def as_dict(self) -> Dict[str, str]:
        return {
            "income": str(self.income),
            "expenses": str(self.expenses),
            "balance": str(self.balance),
        }


def parse_amount(value: object) -> Decimal:
    """Parse a finite, strictly positive amount or raise ``ValidationError``."""

    if isinstance(value, bool) or value is None:
        raise ValidationError("amount", "Amount must be a number.")
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            raise ValidationError("amount", "Amount is required.")
        try:
            amount = Decimal(text)
        except InvalidOperation as error:
            raise ValidationError("amount", f"Amount '{value}' is not a number.") from error
    if not amount.is_finite():
        raise ValidationError("amount", "Amount must be a finite number.")
    if amount <= ZERO:
        raise ValidationError("amount", "Amount must be greater than zero.")
    # Half the exponent range leaves headroom for summing amounts in totals.
    if amount.adjusted() > getcontext().Emax // 2:
        raise ValidationError("amount", "Amount is too large.")
    return amount
