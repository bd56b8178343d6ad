"""Mini README: In-memory transaction ledger and its derived views.

Structure:
    * TransactionView - restartable, lazily filtered snapshot returned by queries.
    * Ledger - owns the ordered transactions and exposes add/remove/query/totals.

The ledger is an explicitly owned object: the presentation layer keeps a
handle to one instance for the session and re-queries after every mutation.
Transactions keep their insertion order, identifiers come from a monotonic
counter that never rewinds, and every aggregate is recomputed from the full
record set on request so there is no cached state to drift.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from ..logging_utils import get_logger
from .categories import DEFAULT_CATALOGUE, FILTER_ALL, CategoryCatalogue
from .errors import ValidationError
from .models import ZERO, Totals, Transaction, TransactionType, parse_amount

LOGGER = get_logger(__name__)

DEFAULT_TIMESTAMP_FORMAT = "%x %X"


def _resolve_type_filter(
    filter_type: Union[TransactionType, str, None]
) -> Optional[TransactionType]:
    """Map ``"all"``/``None`` to no filter, otherwise a concrete type."""

    if filter_type is None:
        return None
    if not isinstance(filter_type, TransactionType) and str(filter_type).strip().lower() == FILTER_ALL:
        return None
    return TransactionType.from_str(filter_type)


def _resolve_category_filter(filter_category: Optional[str]) -> Optional[str]:
    if filter_category is None:
        return None
    text = str(filter_category).strip()
    if not text or text.lower() == FILTER_ALL:
        return None
    return text


class TransactionView:
    """Filtered view over a snapshot of the ledger.

    The snapshot is captured when the view is created, so later mutations of
    the ledger are not reflected. Filtering happens lazily on each iteration
    and the view can be iterated any number of times.
    """

    __slots__ = ("_snapshot", "_type", "_category")

    def __init__(
        self,
        snapshot: Tuple[Transaction, ...],
        transaction_type: Optional[TransactionType] = None,
        category: Optional[str] = None,
    ) -> None:
        self._snapshot = snapshot
        self._type = transaction_type
        self._category = category

    def _matches(self, transaction: Transaction) -> bool:
        if self._type is not None and transaction.transaction_type is not self._type:
            return False
        if self._category is not None and transaction.category != self._category:
            return False
        return True

    def __iter__(self) -> Iterator[Transaction]:
        return (transaction for transaction in self._snapshot if self._matches(transaction))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __getitem__(self, index: int) -> Transaction:
        return list(self)[index]

    def __repr__(self) -> str:
        return (
            f"TransactionView(type={self._type.value if self._type else FILTER_ALL!r}, "
            f"category={self._category or FILTER_ALL!r}, matches={len(self)})"
        )

    def total(self) -> Decimal:
        """Sum of the amounts of the matching transactions."""

        return sum((transaction.amount for transaction in self), ZERO)

    def as_list(self) -> List[Dict[str, object]]:
        return [transaction.as_dict() for transaction in self]


class Ledger:
    """Ordered collection of income and expense transactions."""

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        *,
        catalogue: Optional[CategoryCatalogue] = DEFAULT_CATALOGUE,
        clock: Optional[Callable[[], datetime]] = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self._transactions: Dict[str, Transaction] = {}
        self._sequence = 0
        self._catalogue = catalogue
        self._clock = clock or datetime.now
        self._timestamp_format = timestamp_format
        for transaction in transactions or ():
            self._register(transaction)
        LOGGER.debug("Ledger initialised with %s transactions", len(self._transactions))

    @property
    def catalogue(self) -> Optional[CategoryCatalogue]:
        return self._catalogue

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(tuple(self._transactions.values()))

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._transactions

    def _next_id(self) -> str:
        """Generate the next identifier; the counter never rewinds."""

        self._sequence += 1
        return f"txn_{self._sequence:04d}"

    def _register(self, transaction: Transaction) -> None:
        """Store a pre-built transaction after the same checks ``add`` applies.

        Raises:
            ValidationError: when a field breaks a ledger invariant.
            ValueError: when the identifier is already taken.
        """

        if transaction.transaction_id in self._transactions:
            raise ValueError(f"Transaction {transaction.transaction_id} already exists.")
        text, parsed_amount, label, resolved_type = self._validate(
            transaction.description,
            transaction.amount,
            transaction.category,
            transaction.transaction_type,
        )
        transaction = replace(
            transaction,
            transaction_type=resolved_type,
            description=text,
            category=label,
            amount=parsed_amount,
        )
        self._transactions[transaction.transaction_id] = transaction
        try:
            suffix = int(transaction.transaction_id.rsplit("_", 1)[-1])
        except ValueError:
            return
        self._sequence = max(self._sequence, suffix)

    def _validate(
        self,
        description: object,
        amount: object,
        category: object,
        transaction_type: Union[TransactionType, str],
    ) -> Tuple[str, Decimal, str, TransactionType]:
        """Check every precondition of ``add`` without touching state."""

        text = "" if description is None else str(description).strip()
        if not text:
            raise ValidationError("description", "Description is required.")

        parsed_amount = parse_amount(amount)

        try:
            resolved_type = TransactionType.from_str(transaction_type)
        except ValueError as error:
            raise ValidationError("transaction_type", str(error)) from error

        label = "" if category is None else str(category).strip()
        if not label:
            raise ValidationError("category", "Category is required.")
        if self._catalogue is not None and not self._catalogue.is_valid(resolved_type, label):
            raise ValidationError(
                "category",
                f"Category '{label}' is not a valid {resolved_type.value} category.",
            )
        return text, parsed_amount, label, resolved_type

    def add(
        self,
        description: object,
        amount: object,
        category: object,
        transaction_type: Union[TransactionType, str],
    ) -> Transaction:
        """Validate input, append a new transaction and return it.

        Raises:
            ValidationError: when any field fails validation. The ledger is
                left untouched in that case.
        """

        try:
            text, parsed_amount, label, resolved_type = self._validate(
                description, amount, category, transaction_type
            )
        except ValidationError as error:
            LOGGER.warning("Rejected transaction (%s): %s", error.field, error.message)
            raise

        transaction = Transaction(
            transaction_id=self._next_id(),
            transaction_type=resolved_type,
            description=text,
            category=label,
            amount=parsed_amount,
            recorded_at=self._clock().strftime(self._timestamp_format),
        )
        self._transactions[transaction.transaction_id] = transaction
        LOGGER.info(
            "Recorded %s %s (%s, %s)",
            transaction.transaction_type.value,
            transaction.transaction_id,
            transaction.category,
            transaction.amount,
        )
        return transaction

    def remove(self, transaction_id: str) -> None:
        """Remove a transaction if present; unknown identifiers are ignored."""

        removed = self._transactions.pop(transaction_id, None)
        if removed is None:
            LOGGER.debug("Remove ignored for unknown transaction %s", transaction_id)
            return
        LOGGER.info("Removed transaction %s", transaction_id)

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Retrieve a transaction, raising informative errors when missing."""

        if transaction_id not in self._transactions:
            raise KeyError(f"Transaction {transaction_id} not found")
        return self._transactions[transaction_id]

    def query(
        self,
        filter_type: Union[TransactionType, str, None] = FILTER_ALL,
        filter_category: Optional[str] = FILTER_ALL,
    ) -> TransactionView:
        """Return transactions matching both filters in insertion order.

        ``"all"`` disables a filter. Category labels that no transaction uses
        simply produce an empty view.
        """

        resolved_type = _resolve_type_filter(filter_type)
        resolved_category = _resolve_category_filter(filter_category)
        LOGGER.debug("Query type=%s category=%s", filter_type, filter_category)
        return TransactionView(
            tuple(self._transactions.values()), resolved_type, resolved_category
        )

    def totals(self) -> Totals:
        """Recompute income, expense and balance figures from every record."""

        income = ZERO
        expenses = ZERO
        for transaction in self._transactions.values():
            if transaction.transaction_type is TransactionType.INCOME:
                income += transaction.amount
            else:
                expenses += transaction.amount
        return Totals(income=income, expenses=expenses)

    def category_breakdown(
        self, transaction_type: Union[TransactionType, str]
    ) -> Dict[str, Decimal]:
        """Sum amounts per category for one type, in first-seen order."""

        breakdown: Dict[str, Decimal] = {}
        for transaction in self.query(transaction_type, FILTER_ALL):
            breakdown[transaction.category] = (
                breakdown.get(transaction.category, ZERO) + transaction.amount
            )
        return breakdown

    def export_snapshot(self) -> Dict[str, object]:
        """Export transactions and totals for JSON responses."""

        return {
            "transactions": self.query().as_list(),
            "totals": self.totals().as_dict(),
        }
