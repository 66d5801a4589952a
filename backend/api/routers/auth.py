"""
Authentication API endpoints.

Routes:
- POST /auth/login - Exchange credentials for a bearer token
- POST /auth/logout - Sign out (stateless; logged)
- POST /auth/register - Create account (admin)
- GET /auth/me - Profile, plus own student record, check-ins and invoices

Dependencies: backend.application.services, backend.models
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from backend.api.deps import (
    get_auth_service,
    get_current_user,
    get_invoice_service,
    require_admin,
)
from backend.api.routers.router_utils import handle_domain_errors
from backend.application.services import AuthService, InvoiceService
from backend.models.auth import (
    LoginRequest,
    MeResponse,
    RegisterUserRequest,
    TokenResponse,
    UserResponse,
)
from backend.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
@handle_domain_errors
async def login(
    request: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Sign in with email and password.

    Raises:
        HTTPException(401): Invalid email or password
    """
    result = await auth_service.sign_in(request.email, request.password)
    return TokenResponse(**result)


@router.post("/logout", response_model=MessageResponse)
@handle_domain_errors
async def logout(
    user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Sign out. Tokens are stateless, so the client discards its token."""
    auth_service.sign_out(user["id"])
    return MessageResponse(message="Signed out")


@router.post("/register", response_model=UserResponse, status_code=201)
@handle_domain_errors
async def register(
    request: RegisterUserRequest,
    admin: dict = Depends(require_admin),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    """
    Create an account (admin only).

    Raises:
        HTTPException(400): Invalid email, short password, student without student_id
        HTTPException(404): student_id not found
        HTTPException(409): Email already registered
    """
    logger.info(
        "Registering account",
        extra={"admin_id": str(admin["id"]), "role": request.role.value},
    )
    user = await auth_service.register(
        email=request.email,
        password=request.password,
        name=request.name,
        role=request.role,
        student_id=request.student_id,
    )
    return UserResponse(**user)


@router.get("/me", response_model=MeResponse)
@handle_domain_errors
async def me(
    user: dict = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
    invoice_service: InvoiceService = Depends(get_invoice_service),
) -> MeResponse:
    """
    Signed-in profile.

    Students also receive their student record, check-ins and invoices.
    """
    profile = await auth_service.get_profile(user["id"])
    if profile["student"] is not None:
        profile["invoices"] = await invoice_service.list_invoices(student_id=profile["student"]["id"])
    return MeResponse(**profile)
