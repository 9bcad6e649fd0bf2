"""Domain error hierarchy.

Services raise these exceptions; the API layer translates them into HTTP
responses (see ``infrastructure/api/app.py``). Each error carries a
human-readable message that is safe to show to the caller.
"""


class DeliveryBaseError(Exception):
    """Base exception for expected business-rule failures."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DeliveryBaseError):
    """A referenced entity does not exist."""

    kind = "not_found"


class ConflictError(DeliveryBaseError):
    """A business rule was violated (duplicate, limit exceeded, ...)."""

    kind = "conflict"


class PermissionDeniedError(ConflictError):
    """The user's role does not grant the requested action."""

    kind = "permission_denied"

    def __init__(self, action: str, message: str = "User does not have permission") -> None:
        super().__init__(message)
        self.action = action


class InvalidTransitionError(ConflictError):
    """An order cannot move from its current status to the requested one."""

    kind = "invalid_transition"


class BadRequestError(DeliveryBaseError):
    """The input is malformed or refers to an unknown vocabulary entry."""

    kind = "bad_request"


class ForbiddenError(DeliveryBaseError):
    """The operation is never allowed on this entity."""

    kind = "forbidden"


class UnauthenticatedError(DeliveryBaseError):
    """Identity could not be established or credentials are wrong."""

    kind = "unauthenticated"


class ExternalServiceError(DeliveryBaseError):
    """A collaborator over HTTP (geocoding, routing) failed."""

    kind = "external_service"

    def __init__(self, service: str, message: str) -> None:
        super().__init__(message)
        self.service = service
