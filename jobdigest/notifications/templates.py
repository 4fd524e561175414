"""Template rendering for the digest email using Jinja2.

Templates live in the ``jobdigest.notifications.email_templates`` package
directory and are rendered with strict undefined checking so a missing
context key fails loudly instead of producing a blank field.
"""

from typing import Any, Dict

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from jobdigest.logging import get_logger

from .models import NotificationTemplateError

logger = get_logger(__name__, component="notification")


class DigestRenderer:
    """Renders the digest subject, HTML body and plain text body."""

    def __init__(
        self,
        template_dir: str = "email_templates",
        subject_template: str = "digest_subject.j2",
        html_template: str = "digest_body.html.j2",
        text_template: str = "digest_body.txt.j2",
    ):
        self.subject_template_name = subject_template
        self.html_template_name = html_template
        self.text_template_name = text_template

        self.env = Environment(
            loader=PackageLoader("jobdigest.notifications", template_dir),
            autoescape=select_autoescape(enabled_extensions=("html.j2",), default=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, context: Dict[str, Any]) -> Dict[str, str]:
        """Render all digest templates with ``context``.

        Returns:
            Dictionary with ``subject`` (single line), ``html_body`` and ``text_body``

        Raises:
            NotificationTemplateError: If a template is missing or fails to render
        """
        try:
            subject = (
                self.env.get_template(self.subject_template_name)
                .render(context)
                .strip()
                .replace("\n", " ")
            )
            html_body = self.env.get_template(self.html_template_name).render(context)
            text_body = self.env.get_template(self.text_template_name).render(context)
        except TemplateError as e:
            raise NotificationTemplateError(f"Template rendering failed: {e}") from e

        logger.debug(
            f"Rendered digest with {context.get('match_count', 0)} matches",
            extra={"event": "notification.rendered"},
        )

        return {
            "subject": subject,
            "html_body": html_body,
            "text_body": text_body,
        }
