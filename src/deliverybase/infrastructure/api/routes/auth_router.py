"""Authentication API routes.

Registration, email confirmation, login and password reset.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.logging import get_logger
from deliverybase.domain.services import AccountService
from deliverybase.infrastructure.api.dependencies import Notifier
from deliverybase.infrastructure.api.schemas import (
    EmailRequest,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    RegisterRequest,
    TokenRequest,
    UpdatePasswordRequest,
)
from deliverybase.infrastructure.persistence.database import get_db_session

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    notifier: Notifier,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Register a customer account.

    The account must be confirmed with the token sent by email before the
    user can log in.
    """
    service = AccountService(session, notifier=notifier)
    await service.register(
        name=request.name,
        lastname=request.lastname,
        email=request.email,
        password=request.password,
    )
    await session.commit()
    return MessageResponse(message="Account created, check your email to confirm it")


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Wrong password, unconfirmed or inactive"},
        404: {"model": ErrorResponse, "description": "Unknown email"},
    },
)
async def login(
    request: LoginRequest,
    notifier: Notifier,
    session: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    """Authenticate with email and password."""
    service = AccountService(session, notifier=notifier)
    result = await service.login(request.email, request.password)
    await session.commit()

    user = result.user
    return LoginResponse(
        token=result.access_token,
        expires_in=result.expires_in,
        user=LoginUser(
            id=user.id,
            name=user.name,
            lastname=user.lastname,
            email=user.email,
            confirmed=user.confirmed,
            role=user.role_name,
            actions=result.actions,
        ),
    )


@router.post(
    "/confirm",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Token expired"},
        404: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def confirm_account(
    request: TokenRequest,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Confirm an account with the token received by email."""
    await AccountService(session).confirm(request.token)
    await session.commit()
    return MessageResponse(message="Account confirmed")


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse, "description": "Unknown email"}},
)
async def reset_password(
    request: EmailRequest,
    notifier: Notifier,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Send a password reset token by email."""
    await AccountService(session, notifier=notifier).request_password_reset(request.email)
    await session.commit()
    return MessageResponse(message="Check your email for the instructions")


@router.post(
    "/validate-token",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Token expired"},
        404: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def validate_token(
    request: TokenRequest,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Check a password reset token before asking for the new password."""
    await AccountService(session).validate_token(request.token)
    return MessageResponse(message="Valid token")


@router.post(
    "/update-password/{token}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Token expired or invalid password"},
        404: {"model": ErrorResponse, "description": "Invalid token"},
    },
)
async def update_password(
    token: str,
    request: UpdatePasswordRequest,
    session: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Set a new password using a reset token."""
    await AccountService(session).update_password(token, request.password)
    await session.commit()
    return MessageResponse(message="Password updated")
