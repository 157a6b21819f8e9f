"""Out-of-band notifications: status change emails and digests."""

from reviewmate.config import Settings

from .base import BaseNotifier
from .digest import DigestResult, send_pending_digests
from .email_notifier import EmailNotifier
from .noop import NoOpNotifier


def build_notifier(settings: Settings) -> BaseNotifier:
    """Use email when SMTP is fully configured, otherwise discard notifications."""
    if settings.smtp.is_configured:
        return EmailNotifier(settings.smtp)
    return NoOpNotifier()


__all__ = [
    "BaseNotifier",
    "DigestResult",
    "EmailNotifier",
    "NoOpNotifier",
    "build_notifier",
    "send_pending_digests",
]
