"""Mini README: Category enumerations used to label ledger entries.

Structure:
    * INCOME_CATEGORIES / EXPENSE_CATEGORIES - default label sets.
    * CategoryCatalogue - pairs the two sets and answers membership questions.

Categories are data rather than behaviour. The catalogue only guarantees that
the income and expense sets are disjoint, non-empty and free of the
reserved filter label ``all``, so deployments can swap labels through
configuration without touching the ledger.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, Union

from .models import TransactionType

FILTER_ALL = "all"

INCOME_CATEGORIES: Tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Investments",
    "Business",
    "Gifts",
    "Other Income",
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "Groceries",
    "Rent",
    "Utilities",
    "Transportation",
    "Entertainment",
    "Healthcare",
    "Shopping",
    "Education",
    "Other Expense",
)


def _normalise_labels(labels: Iterable[str], kind: str) -> Tuple[str, ...]:
    """Strip labels, drop duplicates, reject blank or reserved labels and empty sets."""

    cleaned: list = []
    for label in labels:
        text = str(label).strip()
        if not text:
            raise ValueError(f"{kind} categories must not contain blank labels.")
        if text.lower() == FILTER_ALL:
            raise ValueError(f"'{text}' is reserved for the unfiltered view.")
        if text not in cleaned:
            cleaned.append(text)
    if not cleaned:
        raise ValueError(f"At least one {kind} category is required.")
    return tuple(cleaned)


@dataclass(frozen=True)
class CategoryCatalogue:
    """Disjoint income and expense label sets."""

    income: Tuple[str, ...] = INCOME_CATEGORIES
    expense: Tuple[str, ...] = EXPENSE_CATEGORIES

    def __post_init__(self) -> None:
        income = _normalise_labels(self.income, "income")
        expense = _normalise_labels(self.expense, "expense")
        overlap = sorted(set(income) & set(expense))
        if overlap:
            raise ValueError(
                "Income and expense categories must be disjoint; shared: "
                + ", ".join(overlap)
            )
        object.__setattr__(self, "income", income)
        object.__setattr__(self, "expense", expense)

    def categories_for(self, transaction_type: Union[TransactionType, str]) -> Tuple[str, ...]:
        """Return the label set belonging to a transaction type."""

        resolved = TransactionType.from_str(transaction_type)
        if resolved is TransactionType.INCOME:
            return self.income
        return self.expense

    def is_valid(self, transaction_type: Union[TransactionType, str], category: str) -> bool:
        return category in self.categories_for(transaction_type)

    def all_categories(self) -> Tuple[str, ...]:
        """Income labels followed by expense labels, for filter dropdowns."""

        return self.income + self.expense

    def as_dict(self) -> dict:
        return {
            TransactionType.INCOME.value: list(self.income),
            TransactionType.EXPENSE.value: list(self.expense),
        }


DEFAULT_CATALOGUE = CategoryCatalogue()
