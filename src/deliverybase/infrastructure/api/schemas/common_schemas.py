"""Shared response schemas."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(..., description="Error kind (e.g., 'not_found', 'conflict')")
    message: str = Field(..., description="Human-readable error message")


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
