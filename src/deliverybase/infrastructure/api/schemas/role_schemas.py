"""Role API schemas for request/response validation."""

from pydantic import BaseModel, Field, field_validator


class RoleRequest(BaseModel):
    """Request schema for creating or editing a role.

    Attributes:
        name: Stable role name (e.g., 'ROLE_SUPERVISOR').
        name_descriptive: Human-readable label.
        description: Optional description.
        actions: Names of the actions to grant.
    """

    name: str = Field(..., max_length=50)
    name_descriptive: str = Field(..., max_length=100)
    description: str | None = Field(None, max_length=255)
    actions: list[str] = Field(default_factory=list)

    @field_validator("name", "name_descriptive")
    @classmethod
    def not_empty(cls, v: str) -> str:
        """Validate that the field is not blank."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class RoleResponse(BaseModel):
    """Response schema for a role."""

    id: int
    name: str
    name_descriptive: str
    description: str | None = None
    active: bool

    model_config = {"from_attributes": True}


class RoleActionsResponse(BaseModel):
    """A role with the names of its granted actions."""

    role: RoleResponse
    actions: list[str]


class ActionResponse(BaseModel):
    """An entry of the action catalogue."""

    id: int
    name: str
    description: str | None = None
    type: str

    model_config = {"from_attributes": True}


class ActionListResponse(BaseModel):
    """A page of the action catalogue."""

    actions: list[ActionResponse]
    total: int
    total_pages: int
