"""Console email provider for development.

Writes outgoing messages to the log instead of delivering them.
"""

from deliverybase.core.logging import get_logger
from deliverybase.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)


class ConsoleProvider(EmailProvider):
    """Email provider that logs messages."""

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        logger.info(
            f"[EMAIL] {subject}\n"
            f"From: {from_name} <{from_email}>\n"
            f"To: {to}\n"
            f"Body:\n{text_body}\n"
            f"{'=' * 80}"
        )
        return True

    async def test_connection(self) -> tuple[bool, str | None]:
        return True, None
