"""User API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserResponse(BaseModel):
    """User information."""

    id: int
    name: str
    lastname: str
    email: str
    confirmed: bool
    active: bool
    role: str | None = Field(None, validation_alias="role_name", description="Role name")
    created_at: datetime

    model_config = {"from_attributes": True}


class UserListResponse(BaseModel):
    """A page of users."""

    users: list[UserResponse]
    total: int
    total_pages: int


class DeliveryUserResponse(BaseModel):
    """Delivery user summary."""

    id: int
    name: str
    lastname: str

    model_config = {"from_attributes": True}
