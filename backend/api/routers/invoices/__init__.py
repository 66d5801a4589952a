"""
Invoices router package.

Exports the router for billing endpoints.
"""

from .invoices_router import router

__all__ = ["router"]
