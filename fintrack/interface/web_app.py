"""Mini README: FastAPI adapter exposing the ledger to a browser front-end.

Structure:
    * create_application - application factory wiring routes to one ledger.
    * seed_demo_transactions - records deterministic sample entries.

The adapter owns a single ``Ledger`` for the lifetime of the application
object and translates its records, totals and validation failures into JSON.
It holds no business rules; every decision is delegated to the ledger.
"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Form, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from ..configuration import FintrackSettings, build_catalogue, get_settings
from ..finance import FILTER_ALL, Ledger, TransactionType, ValidationError
from ..logging_utils import configure_root_logger, get_logger

LOGGER = get_logger(__name__)

DEMO_TRANSACTIONS = (
    ("Monthly salary", "50000", "Salary", TransactionType.INCOME),
    ("Weekly groceries", "2000", "Groceries", TransactionType.EXPENSE),
    ("Electricity bill", "1200", "Utilities", TransactionType.EXPENSE),
)


def seed_demo_transactions(ledger: Ledger) -> None:
    """Populate the ledger with sample entries through the normal add path."""

    for description, amount, category, transaction_type in DEMO_TRANSACTIONS:
        ledger.add(description, amount, category, transaction_type)
    LOGGER.debug("Seeded %s demo transactions", len(DEMO_TRANSACTIONS))


def create_application(
    ledger: Optional[Ledger] = None,
    settings: Optional[FintrackSettings] = None,
) -> FastAPI:
    """Create the FastAPI application bound to a ledger instance."""

    settings = settings or get_settings()
    configure_root_logger(settings.log_level)
    if ledger is None:
        ledger = Ledger(
            catalogue=build_catalogue(settings),
            timestamp_format=settings.timestamp_format,
        )
        if settings.seed_demo_data:
            seed_demo_transactions(ledger)

    app = FastAPI(title="fintrack", version="0.1.0")
    app.state.ledger = ledger

    @app.get("/transactions")
    async def list_transactions(
        transaction_type: str = Query(FILTER_ALL, alias="type"),
        category: str = Query(FILTER_ALL),
    ) -> JSONResponse:
        """Return the filtered transaction list in insertion order."""

        try:
            view = ledger.query(transaction_type, category)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        payload = view.as_list()
        LOGGER.debug("Returning %s transactions", len(payload))
        return JSONResponse({"transactions": payload})

    @app.post("/transactions", status_code=201)
    async def add_transaction(
        description: str = Form(""),
        amount: str = Form(""),
        category: str = Form(""),
        transaction_type: str = Form("", alias="type"),
    ) -> JSONResponse:
        """Record a new transaction from submitted form fields."""

        try:
            transaction = ledger.add(description, amount, category, transaction_type)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=error.as_dict()) from error
        return JSONResponse(transaction.as_dict(), status_code=201)

    @app.delete("/transactions/{transaction_id}", status_code=204)
    async def remove_transaction(transaction_id: str) -> Response:
        """Delete a transaction; unknown identifiers are accepted silently."""

        ledger.remove(transaction_id)
        return Response(status_code=204)

    @app.get("/transactions/{transaction_id}")
    async def get_transaction(transaction_id: str) -> JSONResponse:
        try:
            transaction = ledger.get_transaction(transaction_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse(transaction.as_dict())

    @app.get("/totals")
    async def totals() -> JSONResponse:
        """Return income, expense and balance figures over every entry."""

        return JSONResponse(ledger.totals().as_dict())

    @app.get("/categories")
    async def categories() -> JSONResponse:
        catalogue = ledger.catalogue or build_catalogue(settings)
        return JSONResponse(catalogue.as_dict())

    @app.get("/categories/{transaction_type}/breakdown")
    async def category_breakdown(transaction_type: str) -> JSONResponse:
        """Sum amounts per category for income or expenses."""

        try:
            breakdown = ledger.category_breakdown(transaction_type)
        except ValueError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        return JSONResponse({label: str(amount) for label, amount in breakdown.items()})

    return app
