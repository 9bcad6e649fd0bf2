"""FastAPI dependencies for authentication, authorization and collaborators.

Every protected route declares the action it performs through
``require_action``; the check runs against the current grant table before
the handler is entered.
"""

from dataclasses import dataclass
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.config import get_settings
from deliverybase.core.errors import UnauthenticatedError
from deliverybase.core.logging import get_logger
from deliverybase.domain.services import PermissionDirectory
from deliverybase.infrastructure.auth import InvalidTokenError, TokenExpiredError, jwt_service
from deliverybase.infrastructure.persistence.database import get_db_session
from deliverybase.infrastructure.persistence.repositories import UserRepository
from deliverybase.infrastructure.services import (
    EmailService,
    Geocoder,
    NotificationDispatcher,
    OpenRouteServiceGeocoder,
    OpenRouteServiceRouter,
    Router,
    build_email_provider,
)

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """The authenticated user, extracted from a valid access token."""

    user_id: int
    confirmed: bool


async def get_current_user(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    The token must belong to an existing, active user.

    Raises:
        UnauthenticatedError: If the token is missing, malformed, expired or
            belongs to an unknown or deactivated user.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise UnauthenticatedError("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise UnauthenticatedError("Could not validate credentials")

    try:
        payload = jwt_service.decode_token(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise UnauthenticatedError("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise UnauthenticatedError("Invalid token")

    user = await UserRepository(session).get_by_id(payload["user_id"])
    if user is None or not user.active:
        logger.info("Authentication failed: unknown or inactive user", user_id=payload["user_id"])
        raise UnauthenticatedError("Invalid token")

    return CurrentUser(user_id=user.id, confirmed=user.confirmed)


# Type alias for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]


def require_action(action: str) -> Callable[..., Awaitable[CurrentUser]]:
    """Build a dependency that requires the current user's role to grant ``action``.

    Args:
        action: Action name (see ``deliverybase.domain.entities.Actions``).

    Returns:
        A dependency resolving to the authorized ``CurrentUser``.
    """

    async def dependency(
        current_user: AuthenticatedUser,
        session: Annotated[AsyncSession, Depends(get_db_session)],
    ) -> CurrentUser:
        await PermissionDirectory(session).require(current_user.user_id, action)
        return current_user

    dependency.__name__ = f"require_{action.lower()}"
    return dependency


def get_notification_dispatcher(request: Request) -> NotificationDispatcher:
    """Get the notification dispatcher from app state.

    Created on first use when the lifespan did not create it (tests).
    """
    if not hasattr(request.app.state, "notification_dispatcher"):
        request.app.state.notification_dispatcher = create_notification_dispatcher()
    return request.app.state.notification_dispatcher


def create_notification_dispatcher() -> NotificationDispatcher:
    """Create a dispatcher wired to the configured email provider."""
    settings = get_settings()
    email_service = EmailService(build_email_provider(settings), settings)
    return NotificationDispatcher(email_service, max_queue_size=settings.notification_queue_size)


def get_geocoder() -> Geocoder | None:
    """Get the geocoder, or None when geocoding is disabled."""
    settings = get_settings()
    if not settings.geocoding_enabled:
        return None
    return OpenRouteServiceGeocoder(
        api_key=settings.ors_api_key,
        base_url=settings.ors_base_url,
        timeout=settings.ors_timeout_seconds,
    )


def get_router() -> Router:
    """Get the routing service client."""
    settings = get_settings()
    return OpenRouteServiceRouter(
        api_key=settings.ors_api_key,
        base_url=settings.ors_base_url,
        profile=settings.ors_routing_profile,
        timeout=settings.ors_timeout_seconds,
    )


Notifier = Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)]
GeocoderDep = Annotated[Geocoder | None, Depends(get_geocoder)]
RouterDep = Annotated[Router, Depends(get_router)]
