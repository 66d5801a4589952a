"""
Students router package.

Exports the router for roster and attendance endpoints.
"""

from .students_router import router

__all__ = ["router"]
