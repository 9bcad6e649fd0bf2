"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field, model_validator

MIN_PASSWORD_LENGTH = 8


class PasswordConfirmation(BaseModel):
    """A new password typed twice."""

    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="New password")
    password_confirm: str = Field(..., description="Repeat of the new password")

    @model_validator(mode="after")
    def passwords_match(self) -> "PasswordConfirmation":
        """Validate that both passwords are equal."""
        if self.password != self.password_confirm:
            raise ValueError("Passwords do not match")
        return self


class RegisterRequest(PasswordConfirmation):
    """Request body for account registration."""

    name: str = Field(..., min_length=1, max_length=100, description="First name")
    lastname: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: EmailStr = Field(..., description="User's email address")


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")


class TokenRequest(BaseModel):
    """Request body carrying a one-time token."""

    token: str = Field(..., min_length=1, description="One-time token")


class EmailRequest(BaseModel):
    """Request body carrying an email address."""

    email: EmailStr = Field(..., description="User's email address")


class UpdatePasswordRequest(PasswordConfirmation):
    """Request body for setting a new password with a reset token."""


class LoginUser(BaseModel):
    """User profile returned on login."""

    id: int
    name: str
    lastname: str
    email: str
    confirmed: bool
    role: str = Field(..., description="Role name")
    actions: list[str] = Field(..., description="Actions granted to the role")


class LoginResponse(BaseModel):
    """Response for successful login."""

    token: str = Field(..., description="JWT access token")
    expires_in: int = Field(..., description="Access token expiration time in seconds")
    user: LoginUser
