"""
Transaction API endpoints.

Routes:
- GET /transactions - List entries (type, year+month filters)
- POST /transactions - Record entry
- GET /transactions/stats/monthly - Monthly revenue/expenses/profit
- GET /transactions/{id} - Get single entry
- PUT /transactions/{id} - Update entry
- DELETE /transactions/{id} - Delete entry

Dependencies: backend.application.services, backend.models
System role: Cash book HTTP API (admin only)
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backend.api.deps import get_transaction_service, require_admin
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import TransactionService
from backend.core.enums import TransactionType
from backend.models.transaction import (
    CreateTransactionRequest,
    MonthlyStatsResponse,
    TransactionResponse,
    UpdateTransactionRequest,
)

router = APIRouter(prefix="/transactions", tags=["transactions"], dependencies=[Depends(require_admin)])


@router.get("", response_model=list[TransactionResponse])
@handle_domain_errors
async def list_transactions(
    type: TransactionType | None = None,
    year: int | None = None,
    month: int | None = Query(default=None, ge=1, le=12),
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> list[TransactionResponse]:
    """
    List entries newest first.

    Args:
        type: revenue or expense
        year: Calendar year, together with month
        month: Calendar month 1-12, together with year
        transaction_service: Injected TransactionService

    Raises:
        HTTPException(400): Only one of year/month given
    """
    transactions = await transaction_service.list_transactions(type_=type, year=year, month=month)
    return [TransactionResponse(**t) for t in transactions]


@router.post("", response_model=TransactionResponse, status_code=201)
@handle_domain_errors
async def create_transaction(
    request: CreateTransactionRequest,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Record a cash-book entry. Category defaults to the academy default.

    Raises:
        HTTPException(400): Amount not positive or description missing
    """
    transaction = await transaction_service.add_transaction(request.model_dump())
    return TransactionResponse(**transaction)


@router.get("/stats/monthly", response_model=MonthlyStatsResponse)
@handle_domain_errors
async def monthly_stats(
    reference: date | None = None,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> MonthlyStatsResponse:
    """
    Stats of the calendar month containing `reference` (default: today).

    Revenue growth compares against the previous calendar month.
    """
    stats = await transaction_service.get_monthly_stats(reference)
    return MonthlyStatsResponse(**stats)


@router.get("/{transaction_id}", response_model=TransactionResponse)
@handle_domain_errors
async def get_transaction(
    transaction_id: UUID,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    transaction = await transaction_service.get_transaction(transaction_id)
    return TransactionResponse(**transaction)


@router.put("/{transaction_id}", response_model=TransactionResponse)
@handle_domain_errors
async def update_transaction(
    transaction_id: UUID,
    request: UpdateTransactionRequest,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> TransactionResponse:
    """
    Update entry by ID. Blank fields are ignored.

    Raises:
        HTTPException(404): Entry not found
        HTTPException(400): Amount not positive
    """
    transaction = await transaction_service.update_transaction(
        transaction_id,
        request.model_dump(exclude_unset=True),
    )
    return TransactionResponse(**transaction)


@router.delete("/{transaction_id}", status_code=204)
@handle_domain_errors
async def delete_transaction(
    transaction_id: UUID,
    transaction_service: TransactionService = Depends(get_transaction_service),
) -> None:
    await transaction_service.delete_transaction(transaction_id)
