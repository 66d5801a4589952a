"""Shared router helpers."""

from .error_handling import handle_domain_errors

__all__ = ["handle_domain_errors"]
