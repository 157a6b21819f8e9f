"""SMTP email notifier.

smtplib is blocking, so each message is sent from a worker thread.
"""

import asyncio
import smtplib
from collections.abc import Sequence
from datetime import UTC, datetime
from email.message import EmailMessage

from reviewmate.config import SMTPConfig
from reviewmate.db.models import Review, User
from reviewmate.logging import get_logger

from .base import BaseNotifier

logger = get_logger(__name__)

SUBJECT_PREFIX = "[ReviewMate]"
SSL_PORT = 465


def status_change_subject(review: Review) -> str:
    return f"{SUBJECT_PREFIX} {review.repository} #{review.pr_number} is {review.status.value}"


def status_change_body(user: User, review: Review) -> str:
    return (
        f"Hi {user.email},\n\n"
        f"The pull request {review.identifier} is now {review.status.value}.\n"
        f"Title: {review.title}\n"
        f"Files changed: {review.files_changed}\n"
        f"Lines changed: {review.lines_changed}\n\n"
        f"View PR: {review.pr_url}\n\n"
        "- ReviewMate"
    )


def digest_body(reviews: Sequence[Review], now: datetime | None = None) -> str:
    """Render the pending-review digest, one entry per review with its age."""
    now = now or datetime.now(UTC)
    entries = []
    for review in reviews:
        opened_at = review.opened_at
        if opened_at.tzinfo is None:
            opened_at = opened_at.replace(tzinfo=UTC)
        age_hours = round((now - opened_at).total_seconds() / 3600)
        entries.append(
            f"* {review.repository} #{review.pr_number} ({review.priority.value}), "
            f"{age_hours}h old\n   {review.pr_url}"
        )
    return (
        "Here are your pending pull requests:\n\n"
        + "\n\n".join(entries)
        + "\n\nKeep the reviews flowing!"
    )


class EmailNotifier(BaseNotifier):
    """Sends notifications over SMTP.

    Port 465 uses implicit TLS; any other port upgrades with STARTTLS.
    """

    def __init__(self, config: SMTPConfig) -> None:
        if not config.is_configured:
            raise ValueError("SMTP configuration is incomplete")
        self._config = config

    async def notify_status_change(self, user: User, review: Review) -> None:
        await self._send(user.email, status_change_subject(review), status_change_body(user, review))
        logger.info(
            "Sent status change email",
            user_id=user.id,
            review=review.identifier,
            status=review.status.value,
        )

    async def send_digest(self, user: User, reviews: Sequence[Review]) -> None:
        subject = f"{SUBJECT_PREFIX} Pending reviews ({len(reviews)})"
        await self._send(user.email, subject, digest_body(reviews))
        logger.info("Sent digest email", user_id=user.id, count=len(reviews))

    async def _send(self, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self._config.from_address
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        await asyncio.to_thread(self._deliver, message)

    def _deliver(self, message: EmailMessage) -> None:
        config = self._config
        assert config.host is not None and config.port is not None
        smtp: smtplib.SMTP
        if config.port == SSL_PORT:
            smtp = smtplib.SMTP_SSL(config.host, config.port, timeout=30)
        else:
            smtp = smtplib.SMTP(config.host, config.port, timeout=30)
        with smtp:
            if config.port != SSL_PORT:
                smtp.starttls()
            smtp.login(config.username or "", config.password or "")
            smtp.send_message(message)
