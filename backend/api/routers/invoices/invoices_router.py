"""
Invoice API endpoints.

Routes:
- GET /invoices - List invoices (optionally for one student)
- POST /invoices - Issue invoice
- GET /invoices/stats - Invoice counts and amounts
- POST /invoices/generate - Issue monthly invoices for active students
- GET /invoices/{id} - Get single invoice
- PUT /invoices/{id} - Update invoice
- DELETE /invoices/{id} - Delete invoice
- POST /invoices/{id}/pay - Register payment
- POST /invoices/{id}/unpay - Remove payment

Dependencies: backend.application.services, backend.models
System role: Billing HTTP API (admin only)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from backend.api.deps import get_invoice_service, require_admin
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import InvoiceService
from backend.models.invoice import (
    CreateInvoiceRequest,
    GenerateInvoicesRequest,
    GenerateInvoicesResponse,
    InvoiceResponse,
    InvoiceStatsResponse,
    MarkInvoicePaidRequest,
    UpdateInvoiceRequest,
)

from .invoice_responses import (
    map_generation_to_response,
    map_invoice_to_response,
    map_invoices_to_response,
)
from .invoice_validators import validate_invoice_update

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[InvoiceResponse])
@handle_domain_errors
async def list_invoices(
    student_id: UUID | None = None,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> list[InvoiceResponse]:
    """
    List invoices, most recent period first.

    Pending invoices past their due date are stored as overdue before listing.
    """
    invoices = await invoice_service.list_invoices(student_id=student_id)
    return map_invoices_to_response(invoices)


@router.post("", response_model=InvoiceResponse, status_code=201)
@handle_domain_errors
async def create_invoice(
    request: CreateInvoiceRequest,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    """
    Issue an invoice.

    Raises:
        HTTPException(400): student_id, amount or due_date missing
    """
    invoice = await invoice_service.add_invoice(request.model_dump())
    return map_invoice_to_response(invoice)


@router.get("/stats", response_model=InvoiceStatsResponse)
@handle_domain_errors
async def invoice_stats(
    student_id: UUID | None = None,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceStatsResponse:
    """Counts and amounts, optionally for one student."""
    stats = await invoice_service.get_stats(student_id=student_id)
    return InvoiceStatsResponse(**stats)


@router.post("/generate", response_model=GenerateInvoicesResponse, status_code=201)
@handle_domain_errors
async def generate_invoices(
    request: GenerateInvoicesRequest,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> GenerateInvoicesResponse:
    """
    Issue the monthly invoice of every active student with a fee.

    Students already billed for the period are skipped.
    """
    logger.info(
        "Generating monthly invoices",
        extra={"period": f"{request.month}/{request.year}", "due_day": request.due_day},
    )

    result = await invoice_service.generate_monthly_invoices(
        month=request.month,
        year=request.year,
        due_day=request.due_day,
        pix_key=request.pix_key,
    )
    return map_generation_to_response(result)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
@handle_domain_errors
async def get_invoice(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    invoice = await invoice_service.get_invoice(invoice_id)
    return map_invoice_to_response(invoice)


@router.put("/{invoice_id}", response_model=InvoiceResponse)
@handle_domain_errors
async def update_invoice(
    invoice_id: UUID,
    request: UpdateInvoiceRequest,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    """
    Update invoice by ID.

    Raises:
        HTTPException(404): Invoice not found
        HTTPException(400): Empty update or invalid values
    """
    validate_invoice_update(request)
    invoice = await invoice_service.update_invoice(invoice_id, request.model_dump(exclude_unset=True))
    return map_invoice_to_response(invoice)


@router.delete("/{invoice_id}", status_code=204)
@handle_domain_errors
async def delete_invoice(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> None:
    await invoice_service.delete_invoice(invoice_id)


@router.post("/{invoice_id}/pay", response_model=InvoiceResponse)
@handle_domain_errors
async def pay_invoice(
    invoice_id: UUID,
    request: MarkInvoicePaidRequest,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    """
    Register payment (paid today with the given method).

    Raises:
        HTTPException(404): Invoice not found
    """
    invoice = await invoice_service.mark_as_paid(invoice_id, request.payment_method)
    return map_invoice_to_response(invoice)


@router.post("/{invoice_id}/unpay", response_model=InvoiceResponse)
@handle_domain_errors
async def unpay_invoice(
    invoice_id: UUID,
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> InvoiceResponse:
    """
    Remove a registered payment; status returns to pending or overdue.

    Raises:
        HTTPException(404): Invoice not found
    """
    invoice = await invoice_service.mark_as_unpaid(invoice_id)
    return map_invoice_to_response(invoice)
