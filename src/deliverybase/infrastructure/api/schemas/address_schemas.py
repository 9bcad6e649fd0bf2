"""Address API schemas."""

from pydantic import BaseModel, Field


class AddressRequest(BaseModel):
    """Request body for creating or editing an address."""

    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)


class CreateAddressRequest(AddressRequest):
    """Request body for creating an address."""

    delivery: bool = Field(False, description="Whether this is a delivery origin address")
    user_id: int | None = Field(None, gt=0, description="Owner, defaults to the current user")


class AddressResponse(BaseModel):
    """Address projection without coordinates."""

    id: int
    address: str
    city: str
    country: str

    model_config = {"from_attributes": True}


class AddressWithCoordinatesResponse(AddressResponse):
    """Address projection including coordinates."""

    longitude: float | None = None
    latitude: float | None = None
