"""Infrastructure services: email, notifications, geocoding and routing."""

from deliverybase.infrastructure.services.email_service import EmailService, build_email_provider
from deliverybase.infrastructure.services.geocoding_service import (
    Geocoder,
    OpenRouteServiceGeocoder,
)
from deliverybase.infrastructure.services.notification_dispatcher import NotificationDispatcher
from deliverybase.infrastructure.services.routing_service import OpenRouteServiceRouter, Router
from deliverybase.infrastructure.services.token_service import TokenService, token_service

__all__ = [
    "EmailService",
    "Geocoder",
    "NotificationDispatcher",
    "OpenRouteServiceGeocoder",
    "OpenRouteServiceRouter",
    "Router",
    "TokenService",
    "build_email_provider",
    "token_service",
]
