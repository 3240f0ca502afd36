"""Transactional email through the Resend HTTP API.

Every send is best-effort: failures are logged and reported through the
returned ``DeliveryResult``, never raised to the caller.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from html import escape
from typing import Any

import httpx
import structlog

from assetflow.config import settings


logger = structlog.get_logger()


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a single email send."""

    delivered: bool
    skipped: bool = False
    error: str | None = None


@dataclass(frozen=True)
class Recipient:
    email: str
    name: str


class Mailer:
    """Email sender backed by Resend.

    Without an API key every send is skipped and logged as such.

    Attributes:
        api_key: Resend API key, or None to disable delivery
        sender: The From header
        base_url: Resend API base URL
        frontend_url: Base URL for links in message bodies
    """

    def __init__(
        self,
        api_key: str | None,
        sender: str,
        base_url: str = "https://api.resend.com",
        frontend_url: str = "http://localhost:5173",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key
        self.sender = sender
        self.base_url = base_url.rstrip("/")
        self.frontend_url = frontend_url.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(self, to: str, subject: str, html: str) -> DeliveryResult:
        """Send a single email.

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body

        Returns:
            DeliveryResult describing what happened
        """
        if not self.is_configured:
            logger.info("email_skipped", to=to, subject=subject, reason="not_configured")
            return DeliveryResult(delivered=False, skipped=True)

        payload: dict[str, Any] = {
            "from": self.sender,
            "to": [to],
            "subject": subject,
            "html": html,
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.post(
                    "/emails",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("email_failed", to=to, subject=subject, error=str(e))
            return DeliveryResult(delivered=False, error=str(e))
        except Exception as e:
            # Unencodable headers, non-httpx transport errors
            logger.exception("email_failed", to=to, subject=subject, error=str(e))
            return DeliveryResult(delivered=False, error=str(e))

        logger.info("email_sent", to=to, subject=subject)
        return DeliveryResult(delivered=True)


# ============================================================
# Messages
# ============================================================


async def send_welcome_email(
    mailer: Mailer,
    to: str,
    name: str,
    organization_name: str,
) -> DeliveryResult:
    """Greet a newly registered or invited user."""
    html = (
        "<div style=\"font-family: Arial, sans-serif;\">"
        "<h1>Welcome to AssetFlow!</h1>"
        f"<p>Hi {escape(name)},</p>"
        "<p>Your account has been successfully created for "
        f"<strong>{escape(organization_name)}</strong>.</p>"
        f"<p><a href=\"{mailer.frontend_url}/dashboard\">Go to Dashboard</a></p>"
        "</div>"
    )
    return await mailer.send(to, f"Welcome to AssetFlow - {organization_name}", html)


async def send_ticket_notification(
    mailer: Mailer,
    admins: Iterable[Recipient],
    *,
    asset_name: str,
    asset_location: str | None,
    description: str,
    reporter: Recipient,
    created_at: datetime,
) -> list[DeliveryResult]:
    """Notify every admin of an organization about a new ticket."""
    results: list[DeliveryResult] = []
    for admin in admins:
        html = (
            "<div style=\"font-family: Arial, sans-serif;\">"
            "<h2>New Maintenance Ticket</h2>"
            f"<p>Hi {escape(admin.name)},</p>"
            f"<p>A new ticket has been created by <strong>{escape(reporter.name)}</strong>.</p>"
            f"<p><strong>Asset:</strong> {escape(asset_name)}</p>"
            f"<p><strong>Location:</strong> {escape(asset_location or '-')}</p>"
            f"<p><strong>Description:</strong> {escape(description)}</p>"
            f"<p><strong>Reported by:</strong> {escape(reporter.name)} ({escape(reporter.email)})</p>"
            f"<p><strong>Date:</strong> {created_at.isoformat()}</p>"
            f"<p><a href=\"{mailer.frontend_url}/tickets\">View Ticket</a></p>"
            "</div>"
        )
        results.append(
            await mailer.send(admin.email, f"New Ticket Created - {asset_name}", html)
        )

    logger.info("ticket_notification_dispatched", admin_count=len(results))
    return results


async def send_subscription_email(
    mailer: Mailer,
    to: str,
    name: str,
    tier: str,
    status: str,
) -> DeliveryResult:
    """Confirm a subscription change to an organization admin."""
    if status == "active":
        subject = f"Subscription Confirmed - {tier} Plan"
        outcome = "activated"
    else:
        subject = f"Subscription {status} - {tier} Plan"
        outcome = status

    html = (
        "<div style=\"font-family: Arial, sans-serif;\">"
        f"<h1>{escape(subject)}</h1>"
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your subscription to the <strong>{escape(tier)}</strong> plan has been {escape(outcome)}.</p>"
        f"<p><a href=\"{mailer.frontend_url}/billing\">Manage Subscription</a></p>"
        "</div>"
    )
    return await mailer.send(to, subject, html)


@lru_cache
def get_mailer() -> Mailer:
    """Dependency that provides the process-wide mailer."""
    return Mailer(
        api_key=settings.resend_api_key,
        sender=settings.email_from,
        base_url=settings.resend_api_url,
        frontend_url=settings.frontend_url,
    )
