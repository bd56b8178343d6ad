"""Mini README: Interfaces that expose the ledger to users.

Exports the FastAPI application factory used by the browser front-end.
"""

from .web_app import create_application

__all__ = ["create_application"]
