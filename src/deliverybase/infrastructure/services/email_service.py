"""Email service for sending notifications.

Renders a notification through its built-in template and hands the result to
the configured provider. In development the console provider logs emails
instead of delivering them.
"""

from deliverybase.core.config import Settings
from deliverybase.core.logging import get_logger
from deliverybase.domain.entities import Notification
from deliverybase.infrastructure.services.email import (
    ConsoleProvider,
    EmailProvider,
    SMTPProvider,
    SMTPSettings,
    TemplateRenderer,
    get_template_renderer,
)
from deliverybase.infrastructure.services.email.templates import EMAIL_TEMPLATES

logger = get_logger(__name__)


def build_email_provider(settings: Settings) -> EmailProvider:
    """Create the email provider selected by ``email_provider``."""
    if settings.email_provider == "smtp":
        return SMTPProvider(SMTPSettings.from_settings(settings))
    return ConsoleProvider()


class EmailService:
    """Service for rendering and sending notification emails."""

    def __init__(
        self,
        provider: EmailProvider,
        settings: Settings,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        """Initialize the email service.

        Args:
            provider: Provider used to deliver rendered messages.
            settings: Application settings (sender, app URL, token lifetime).
            renderer: Template renderer. Defaults to the global renderer.
        """
        self.provider = provider
        self.settings = settings
        self.renderer = renderer or get_template_renderer()

    def render(self, notification: Notification) -> tuple[str, str, str]:
        """Render a notification into (subject, html_body, text_body)."""
        subject, html_template, text_template = EMAIL_TEMPLATES[notification.kind]
        variables = {
            "app_name": self.settings.app_name,
            "app_url": self.settings.app_url,
            "expire_minutes": self.settings.verification_token_expire_minutes,
            **notification.variables,
        }
        return (
            self.renderer.render(subject, variables),
            self.renderer.render(html_template, variables),
            self.renderer.render(text_template, variables),
        )

    async def send_notification(self, notification: Notification) -> bool:
        """Render and send a notification.

        Args:
            notification: Notification to deliver.

        Returns:
            True if the provider accepted the message.

        Raises:
            Exception: Whatever the provider raises on delivery failure.
        """
        subject, html_body, text_body = self.render(notification)
        sent = await self.provider.send_email(
            to=notification.to,
            subject=subject,
            html_body=html_body,
            text_body=text_body,
            from_email=self.settings.email_from_address,
            from_name=self.settings.email_from_name,
        )
        logger.info(
            "Notification email sent" if sent else "Notification email not accepted",
            kind=notification.kind.value,
            to=notification.to,
        )
        return sent
