"""Mini README: Package initializer for the fintrack personal ledger.

The package is split into the in-memory ledger core (``fintrack.finance``),
runtime configuration, logging helpers and a thin FastAPI adapter under
``fintrack.interface``. Importing the package stays cheap: only the logging
helper is re-exported here so the web stack is loaded on demand.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
