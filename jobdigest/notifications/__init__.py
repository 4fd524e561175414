"""Digest email delivery.

This module provides:
- NotificationService: renders and sends the daily digest
- DigestRenderer: Jinja2-based email template rendering
- SMTPClient: SMTP wrapper with TLS/SSL support
- build_digest_context: template context builder
"""

from .models import NotificationError, NotificationTemplateError, SMTPDeliveryError
from .payloads import build_digest_context, build_match_card
from .service import NotificationService
from .smtp_client import SMTPClient, build_sender_address, parse_recipient
from .templates import DigestRenderer

__all__ = [
    # Main service
    "NotificationService",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    # Components
    "DigestRenderer",
    "SMTPClient",
    # Utilities
    "build_digest_context",
    "build_match_card",
    "build_sender_address",
    "parse_recipient",
]
