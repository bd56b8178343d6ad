"""Mini README: Ledger core for recording income and expenses.

This package holds the in-memory ledger, its data model, the category
enumerations and the single validation error the core raises. Nothing here
performs I/O; the web adapter and any other front-end call into ``Ledger``
and render the records and totals it returns.
"""

from .categories import (
    DEFAULT_CATALOGUE,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    CategoryCatalogue,
)
from .errors import ValidationError
from .ledger import FILTER_ALL, Ledger, TransactionView
from .models import Totals, Transaction, TransactionType, parse_amount

__all__ = [
    "CategoryCatalogue",
    "DEFAULT_CATALOGUE",
    "EXPENSE_CATEGORIES",
    "FILTER_ALL",
    "INCOME_CATEGORIES",
    "Ledger",
    "Totals",
    "Transaction",
    "TransactionType",
    "TransactionView",
    "ValidationError",
    "parse_amount",
]
