"""
Invoice response mapping utilities.

Dependencies: backend.models.invoice
System role: Invoice response transformation
"""

from typing import Any

from backend.models.invoice import GenerateInvoicesResponse, InvoiceResponse


def map_invoice_to_response(invoice_data: dict[str, Any]) -> InvoiceResponse:
    return InvoiceResponse(**invoice_data)


def map_invoices_to_response(invoices_data: list[dict[str, Any]]) -> list[InvoiceResponse]:
    return [map_invoice_to_response(i) for i in invoices_data]


def map_generation_to_response(result: dict[str, Any]) -> GenerateInvoicesResponse:
    """
    Transform a generation result into GenerateInvoicesResponse.

    Args:
        result: {"created": [invoice dicts], "skipped": int}
    """
    return GenerateInvoicesResponse(
        created=map_invoices_to_response(result["created"]),
        skipped=result["skipped"],
    )
