"""Core DeliveryBase utilities.

This module exports core utilities for use throughout the application.
"""

from deliverybase.core.config import Settings, get_settings
from deliverybase.core.errors import (
    BadRequestError,
    ConflictError,
    DeliveryBaseError,
    ExternalServiceError,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    UnauthenticatedError,
)
from deliverybase.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    "BadRequestError",
    "ConflictError",
    "DeliveryBaseError",
    "ExternalServiceError",
    "ForbiddenError",
    "InvalidTransitionError",
    "NotFoundError",
    "PermissionDeniedError",
    "Settings",
    "UnauthenticatedError",
    "bind_correlation_id",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_settings",
]
