"""
Invoice request validation utilities.

Dependencies: backend.models.invoice
System role: Invoice request validation
"""

from backend.core.exceptions import ValidationError
from backend.models.invoice import UpdateInvoiceRequest


def validate_invoice_update(request: UpdateInvoiceRequest) -> None:
    """
    Reject empty updates and paid status set through a plain edit.

    Payments go through /invoices/{id}/pay so paid_at and the method are recorded.

    Raises:
        ValidationError: If no field was provided or status is "paid"
    """
    if not request.model_fields_set:
        raise ValidationError("At least one field must be provided for update")
    if request.status is not None and request.status.value == "paid":
        raise ValidationError("Use the pay endpoint to register a payment", field="status")
