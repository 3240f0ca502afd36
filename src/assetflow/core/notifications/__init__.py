"""Outbound notifications."""

from assetflow.core.notifications.email import (
    DeliveryResult,
    Mailer,
    Recipient,
    get_mailer,
    send_subscription_email,
    send_ticket_notification,
    send_welcome_email,
)


__all__ = [
    "DeliveryResult",
    "Mailer",
    "Recipient",
    "get_mailer",
    "send_subscription_email",
    "send_ticket_notification",
    "send_welcome_email",
]
