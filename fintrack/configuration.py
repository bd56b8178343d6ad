"""Mini README: Centralised configuration models and helpers for fintrack.

Structure:
    * FintrackSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.
    * build_catalogue - turns configured category labels into a catalogue.

Usage:
    Import ``get_settings`` to read ``FINTRACK_*`` environment variables (or a
    local ``.env`` file). Category lists are given as JSON arrays, e.g.
    ``FINTRACK_INCOME_CATEGORIES='["Salary", "Bonus"]'``. The configuration is
    cached so validation runs once per process.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings

from .finance.categories import (
    EXPENSE_CATEGORIES,
    FILTER_ALL,
    INCOME_CATEGORIES,
    CategoryCatalogue,
)
from .finance.ledger import DEFAULT_TIMESTAMP_FORMAT


class FintrackSettings(BaseSettings):
    """Runtime configuration for the fintrack service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root log level name, e.g. DEBUG or WARNING.",
    )
    interface_host: str = Field(
        "127.0.0.1",
        description="Network interface for the web adapter to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web adapter exposes.",
        ge=1,
        le=65535,
    )
    timestamp_format: str = Field(
        DEFAULT_TIMESTAMP_FORMAT,
        description="strftime pattern used to stamp new transactions.",
    )
    seed_demo_data: bool = Field(
        False,
        description="Record a handful of sample entries when the app starts.",
    )
    income_categories: List[str] = Field(
        default_factory=lambda: list(INCOME_CATEGORIES),
        description="Labels offered for income entries.",
    )
    expense_categories: List[str] = Field(
        default_factory=lambda: list(EXPENSE_CATEGORIES),
        description="Labels offered for expense entries.",
    )

    class Config:
        env_prefix = "FINTRACK_"
        env_file = ".env"
        case_sensitive = False

    @validator("log_level")
    def _normalise_level(cls, value: str) -> str:
        """Upper-case level names and reject unknown ones."""

        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"Unsupported log level: {value}")
        return level

    @validator("income_categories", "expense_categories")
    def _strip_labels(cls, value: List[str]) -> List[str]:
        """Trim labels, reject blank or reserved ones and require at least one."""

        labels = [label.strip() for label in value]
        if any(not label for label in labels):
            raise ValueError("Category labels must not be blank.")
        if any(label.lower() == FILTER_ALL for label in labels):
            raise ValueError(f"'{FILTER_ALL}' is reserved for the unfiltered view.")
        if not labels:
            raise ValueError("At least one category label is required.")
        return labels


@lru_cache()
def get_settings() -> FintrackSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FintrackSettings()


def build_catalogue(settings: Optional[FintrackSettings] = None) -> CategoryCatalogue:
    """Create the category catalogue described by the settings."""

    settings = settings or get_settings()
    return CategoryCatalogue(
        income=tuple(settings.income_categories),
        expense=tuple(settings.expense_categories),
    )
