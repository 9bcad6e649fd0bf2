"""Account lifecycle and user administration.

Covers registration, email confirmation, login, password reset and the
administrative user operations. One-time tokens are rejected once they are
older than ``verification_token_expire_minutes``.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from deliverybase.core.config import Settings, get_settings
from deliverybase.core.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    UnauthenticatedError,
)
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import (
    ROLE_ADMIN,
    ROLE_DELIVERY,
    ROLE_USER,
    Notification,
    NotificationKind,
)
from deliverybase.domain.services.pagination import total_pages
from deliverybase.domain.services.permission_directory import PermissionDirectory
from deliverybase.infrastructure.auth import hash_password, jwt_service, needs_rehash, verify_password
from deliverybase.infrastructure.persistence.models import TokenModel, UserModel
from deliverybase.infrastructure.persistence.repositories import (
    RoleRepository,
    TokenRepository,
    UserRepository,
)
from deliverybase.infrastructure.services.notification_dispatcher import NotificationDispatcher
from deliverybase.infrastructure.services.token_service import token_service

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching stored timestamps."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def validate_password(password: str) -> None:
    """Check a new password against the password policy.

    Raises:
        BadRequestError: If the password is too short.
    """
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadRequestError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )


@dataclass
class LoginResult:
    """Successful login.

    Attributes:
        access_token: Signed JWT.
        expires_in: Token lifetime in seconds.
        user: Authenticated user with the role loaded.
        actions: Names of the actions the user's role grants.
    """

    access_token: str
    expires_in: int
    user: UserModel
    actions: list[str]


class AccountService:
    """Service for account lifecycle and user administration."""

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationDispatcher | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the account service.

        Args:
            session: SQLAlchemy async session.
            notifier: Outbound channel for confirmation and reset emails.
            settings: Application settings. Defaults to the cached settings.
        """
        self.session = session
        self.notifier = notifier
        self.settings = settings or get_settings()
        self.user_repo = UserRepository(session)
        self.role_repo = RoleRepository(session)
        self.token_repo = TokenRepository(session)

    async def _issue_token(self, user: UserModel) -> TokenModel:
        return await self.token_repo.create(
            TokenModel(
                token=token_service.generate_token(),
                user_id=user.id,
                created_at=utcnow(),
            )
        )

    def _notify(self, kind: NotificationKind, user: UserModel, token: TokenModel) -> None:
        if self.notifier is None:
            return
        self.notifier.publish(
            Notification(
                kind=kind,
                to=user.email,
                variables={"name": user.name, "token": token.token},
            )
        )

    async def _get_valid_token(self, value: str) -> TokenModel:
        token = await self.token_repo.get_by_token(value)
        if token is None:
            raise NotFoundError("Invalid token")

        created_at = token.created_at
        if created_at.tzinfo is not None:
            created_at = created_at.astimezone(timezone.utc).replace(tzinfo=None)
        lifetime = timedelta(minutes=self.settings.verification_token_expire_minutes)
        if utcnow() - created_at > lifetime:
            raise BadRequestError("Token has expired")
        return token

    async def register(
        self,
        name: str,
        lastname: str,
        email: str,
        password: str,
    ) -> UserModel:
        """Register a customer account and send its confirmation email.

        Raises:
            ConflictError: If the email is already registered.
            BadRequestError: If the password violates the policy.
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("Email already registered")
        validate_password(password)

        role = await self.role_repo.get_by_name(ROLE_USER)
        if role is None:
            raise NotFoundError(f"Role '{ROLE_USER}' not found")

        user = await self.user_repo.create(
            UserModel(
                name=name,
                lastname=lastname,
                email=email,
                password_hash=hash_password(password),
                confirmed=False,
                role_id=role.id,
                active=True,
            )
        )
        token = await self._issue_token(user)
        self._notify(NotificationKind.CONFIRMATION, user, token)

        logger.info("User registered", user_id=user.id, email=email)
        return user

    async def create_admin(
        self,
        email: str,
        password: str,
        name: str = "Admin",
        lastname: str = "DeliveryBase",
    ) -> UserModel:
        """Create a confirmed administrator.

        Raises:
            ConflictError: If the email is already registered.
            BadRequestError: If the password violates the policy.
        """
        if await self.user_repo.email_exists(email):
            raise ConflictError("Email already registered")
        validate_password(password)

        role = await self.role_repo.get_by_name(ROLE_ADMIN)
        if role is None:
            raise NotFoundError(f"Role '{ROLE_ADMIN}' not found")

        user = await self.user_repo.create(
            UserModel(
                name=name,
                lastname=lastname,
                email=email,
                password_hash=hash_password(password),
                confirmed=True,
                role_id=role.id,
                active=True,
            )
        )
        logger.info("Admin user created", user_id=user.id, email=email)
        return user

    async def confirm(self, token_value: str) -> UserModel:
        """Confirm an account with a one-time token.

        Raises:
            NotFoundError: If the token is unknown.
            BadRequestError: If the token has expired.
        """
        token = await self._get_valid_token(token_value)
        user = token.user
        user.confirmed = True
        await self.token_repo.delete(token)
        await self.user_repo.update(user)

        logger.info("Account confirmed", user_id=user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate a user.

        An unconfirmed user gets a fresh confirmation token and email. The
        token is committed here because the login itself fails.

        Raises:
            NotFoundError: If the email is unknown.
            UnauthenticatedError: If the user is deactivated, unconfirmed, or
                the password is wrong.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        if not user.active:
            logger.info("Login rejected for deactivated user", user_id=user.id)
            raise UnauthenticatedError("Account is deactivated")

        if not user.confirmed:
            token = await self._issue_token(user)
            await self.session.commit()
            self._notify(NotificationKind.CONFIRMATION, user, token)
            logger.info("Login rejected for unconfirmed user", user_id=user.id)
            raise UnauthenticatedError(
                "Account not confirmed, a new confirmation email has been sent"
            )

        if not verify_password(password, user.password_hash):
            logger.info("Login rejected, wrong password", user_id=user.id)
            raise UnauthenticatedError("Incorrect password")

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.user_repo.update(user)

        grants = await PermissionDirectory(self.session).get_grants(user.id)
        logger.info("User logged in", user_id=user.id, role=grants.role_name)
        return LoginResult(
            access_token=jwt_service.create_access_token(user.id, user.confirmed),
            expires_in=jwt_service.get_expires_in(),
            user=user,
            actions=grants.action_names(),
        )

    async def request_password_reset(self, email: str) -> None:
        """Send a password reset token.

        Raises:
            NotFoundError: If the email is unknown.
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")

        token = await self._issue_token(user)
        self._notify(NotificationKind.PASSWORD_RESET, user, token)
        logger.info("Password reset requested", user_id=user.id)

    async def validate_token(self, token_value: str) -> None:
        """Check that a one-time token exists and has not expired.

        Raises:
            NotFoundError: If the token is unknown.
            BadRequestError: If the token has expired.
        """
        await self._get_valid_token(token_value)

    async def update_password(self, token_value: str, password: str) -> UserModel:
        """Set a new password using a one-time token.

        Raises:
            NotFoundError: If the token is unknown.
            BadRequestError: If the token has expired or the password violates
                the policy.
        """
        validate_password(password)
        token = await self._get_valid_token(token_value)
        user = token.user
        user.password_hash = hash_password(password)
        await self.token_repo.delete(token)
        await self.user_repo.update(user)

        logger.info("Password updated", user_id=user.id)
        return user

    async def get_user(self, user_id: int) -> UserModel:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def deactivate_user(self, user_id: int, deactivated_by: int | None = None) -> UserModel:
        """Deactivate a user. Users are never deleted.

        Raises:
            NotFoundError: If the user does not exist.
        """
        user = await self.get_user(user_id)
        user.active = False
        await self.user_repo.update(user)
        logger.info("User deactivated", user_id=user.id, deactivated_by=deactivated_by)
        return user

    async def list_users(
        self,
        page: int = 1,
        limit: int = 10,
        role: str | None = None,
    ) -> tuple[list[UserModel], int, int]:
        """Page through users, optionally filtered by role name.

        Returns:
            Tuple of (users, total count, total pages).
        """
        users, total = await self.user_repo.get_paginated(page, limit, role)
        return users, total, total_pages(total, limit)

    async def list_deliveries(self) -> list[UserModel]:
        """List active users holding ``ROLE_DELIVERY``."""
        return await self.user_repo.list_by_role_name(ROLE_DELIVERY)
