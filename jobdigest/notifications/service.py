"""Notification service for sending the daily digest email.

The service turns the ranked match list into a rendered email and hands it
to the SMTP client. It never raises: every failure is logged and reported
as ``False``.
"""

import logging
from email.message import EmailMessage
from typing import Optional, Sequence

from jobdigest.config.environment import EnvironmentConfig
from jobdigest.config.models import EmailConfig
from jobdigest.domain.models import MatchResult
from jobdigest.logging import get_logger

from .models import NotificationError
from .payloads import build_digest_context
from .smtp_client import SMTPClient, build_sender_address, parse_recipient
from .templates import DigestRenderer

logger = get_logger(__name__, component="notification")


class NotificationService:
    """Sends the digest of ranked matches to the configured user.

    Flow:
    1. Skip in dry-run mode or when SMTP_HOST is not configured
    2. Validate the recipient address
    3. Render subject, HTML and text bodies
    4. Deliver via SMTP
    """

    def __init__(
        self,
        renderer: Optional[DigestRenderer] = None,
        smtp_client: Optional[SMTPClient] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self.renderer = renderer or DigestRenderer()
        self.smtp_client = smtp_client or SMTPClient()
        self.logger = logger_instance or logger

    def build_message(
        self,
        matches: Sequence[MatchResult],
        recipient: str,
        env_config: EnvironmentConfig,
        email_config: EmailConfig,
    ) -> EmailMessage:
        """Render the digest into a multipart message.

        Raises:
            ValueError: If the recipient address is invalid
            NotificationTemplateError: If rendering fails
        """
        to_address = parse_recipient(recipient)
        rendered = self.renderer.render(build_digest_context(matches))

        message = EmailMessage()
        message["Subject"] = rendered["subject"]
        message["From"] = build_sender_address(env_config, email_config.sender_name)
        message["To"] = to_address
        message.set_content(rendered["text_body"])
        message.add_alternative(rendered["html_body"], subtype="html")
        return message

    def send_digest(
        self,
        matches: Sequence[MatchResult],
        recipient: str,
        env_config: EnvironmentConfig,
        email_config: EmailConfig,
        dry_run: bool = False,
    ) -> bool:
        """Send the digest email.

        Args:
            matches: Ranked matches, possibly empty
            recipient: Address the digest goes to
            env_config: Environment configuration with SMTP settings
            email_config: Email configuration (TLS, sender name)
            dry_run: Log instead of sending

        Returns:
            True if the email was handed to the SMTP server
        """
        if dry_run:
            self.logger.info(
                "Dry-run: skipping email send",
                extra={"event": "notification.skip", "reason": "dry_run"},
            )
            return False

        if not env_config.smtp_configured:
            self.logger.error(
                "SMTP_HOST not set, cannot send email",
                extra={"event": "notification.skip", "reason": "smtp_not_configured"},
            )
            return False

        try:
            message = self.build_message(matches, recipient, env_config, email_config)
        except ValueError as e:
            self.logger.error(
                f"Failed to build email message: {e}",
                extra={"event": "notification.build.failure"},
            )
            return False
        except NotificationError as e:
            self.logger.error(
                f"Failed to render digest: {e}",
                extra={"event": "notification.build.failure"},
                exc_info=True,
            )
            return False

        self.logger.info(
            f'Sending email to {message["To"]}: "{message["Subject"]}"',
            extra={"event": "notification.send.started", "match_count": len(matches)},
        )

        try:
            self.smtp_client.send(message, env_config, email_config.use_tls)
        except NotificationError as e:
            self.logger.error(
                f"Email send failed: {e}",
                extra={"event": "notification.send.failure", "error_type": type(e).__name__},
            )
            return False

        self.logger.info(
            "Email sent successfully",
            extra={"event": "notification.send.success", "match_count": len(matches)},
        )
        return True
