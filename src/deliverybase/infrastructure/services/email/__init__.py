"""Email providers and template rendering."""

from deliverybase.infrastructure.services.email.console_provider import ConsoleProvider
from deliverybase.infrastructure.services.email.email_provider import EmailProvider
from deliverybase.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from deliverybase.infrastructure.services.email.template_renderer import (
    TemplateRenderer,
    get_template_renderer,
)

__all__ = [
    "ConsoleProvider",
    "EmailProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
    "get_template_renderer",
]
