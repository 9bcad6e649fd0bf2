"""Unit tests for notification email rendering and sending."""

from unittest.mock import AsyncMock

import pytest
from jinja2 import UndefinedError

from deliverybase.core.config import Settings
from deliverybase.domain.entities import Notification, NotificationKind
from deliverybase.infrastructure.services import EmailService, build_email_provider
from deliverybase.infrastructure.services.email import ConsoleProvider, SMTPProvider


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_name="DeliveryBase Test",
        app_url="https://app.example.com",
        email_from_address="no-reply@example.com",
        email_from_name="DeliveryBase",
    )


def test_confirmation_rendering(settings):
    service = EmailService(ConsoleProvider(), settings)

    subject, html_body, text_body = service.render(
        Notification(
            kind=NotificationKind.CONFIRMATION,
            to="ana@example.com",
            variables={"name": "Ana", "token": "abc123"},
        )
    )

    assert subject == "DeliveryBase Test - Confirm your account"
    assert "abc123" in html_body
    assert "https://app.example.com/confirm-account" in text_body
    assert "10 minutes" in text_body


def test_order_delivered_rendering(settings):
    service = EmailService(ConsoleProvider(), settings)

    _, _, text_body = service.render(
        Notification(
            kind=NotificationKind.ORDER_DELIVERED,
            to="ana@example.com",
            variables={"name": "Ana", "quantity": 3, "address": "Av. Amazonas, Quito"},
        )
    )

    assert "3 units" in text_body
    assert "Av. Amazonas, Quito" in text_body


def test_missing_variable_fails(settings):
    service = EmailService(ConsoleProvider(), settings)

    with pytest.raises(UndefinedError):
        service.render(
            Notification(kind=NotificationKind.PASSWORD_RESET, to="ana@example.com")
        )


@pytest.mark.asyncio
async def test_send_notification_uses_sender(settings):
    provider = AsyncMock()
    provider.send_email.return_value = True
    service = EmailService(provider, settings)

    sent = await service.send_notification(
        Notification(
            kind=NotificationKind.PASSWORD_RESET,
            to="ana@example.com",
            variables={"name": "Ana", "token": "xyz"},
        )
    )

    assert sent is True
    kwargs = provider.send_email.call_args.kwargs
    assert kwargs["to"] == "ana@example.com"
    assert kwargs["from_email"] == "no-reply@example.com"
    assert kwargs["from_name"] == "DeliveryBase"
    assert "xyz" in kwargs["text_body"]


def test_provider_selection(settings):
    assert isinstance(build_email_provider(settings), ConsoleProvider)

    smtp_settings = settings.model_copy(update={"email_provider": "smtp", "smtp_host": "mail"})
    provider = build_email_provider(smtp_settings)

    assert isinstance(provider, SMTPProvider)
    assert provider.settings.host == "mail"
