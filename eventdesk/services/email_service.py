"""
Email Service

Sends attendee emails (registration confirmations carrying the QR ticket)
over SMTP using aiosmtplib, with Jinja2 templates for the bodies.
"""

import os
import logging
import re
from pathlib import Path
from typing import Optional, Dict, Any, List

import aiosmtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.mime.base import MIMEBase
from email.utils import make_msgid
from email import encoders
from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"


class EmailServiceConfig:
    """Configuration for email service from environment variables."""

    def __init__(self):
        self.smtp_host = os.getenv('SMTP_HOST', 'localhost')
        self.smtp_port = int(os.getenv('SMTP_PORT', '587'))
        self.smtp_username = os.getenv('SMTP_USERNAME', '')
        self.smtp_password = os.getenv('SMTP_PASSWORD', '')
        self.smtp_use_tls = os.getenv('SMTP_USE_TLS', 'true').lower() == 'true'
        self.smtp_use_ssl = os.getenv('SMTP_USE_SSL', 'false').lower() == 'true'
        self.from_email = os.getenv('FROM_EMAIL', 'noreply@eventdesk.local')
        self.from_name = os.getenv('FROM_NAME', 'Event Check-in')
        self.reply_to_email = os.getenv('REPLY_TO_EMAIL', '')
        self.template_dir = os.getenv('EMAIL_TEMPLATE_DIR', str(_DEFAULT_TEMPLATE_DIR))

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.smtp_host:
            errors.append("SMTP_HOST is required")
        if not self.smtp_port or self.smtp_port <= 0:
            errors.append("SMTP_PORT must be a positive integer")
        if not self.from_email:
            errors.append("FROM_EMAIL is required")
        if self.smtp_use_ssl and self.smtp_use_tls:
            errors.append("Cannot use both SSL and TLS simultaneously")

        return errors


class EmailService:
    """Service for sending emails via SMTP."""

    def __init__(self, config: Optional[EmailServiceConfig] = None):
        self.config = config or EmailServiceConfig()
        self.template_env = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup Jinja2 template environment."""
        template_path = Path(self.config.template_dir)
        if not template_path.exists():
            logger.warning("Email template directory not found: %s", template_path)
            return
        self.template_env = Environment(
            loader=FileSystemLoader(str(template_path)),
            autoescape=select_autoescape(["html"]),
        )

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
        reply_to: Optional[str] = None,
        attachments: Optional[List[Dict[str, Any]]] = None
    ) -> Dict[str, Any]:
        """
        Send an email via SMTP.

        Attachments are dicts with ``filename``, ``content`` (bytes) and an
        optional ``mime_type`` (defaults to application/octet-stream).

        Returns:
            Dict with 'success' plus 'message_id' or 'error'. Never raises.
        """
        config_errors = self.config.validate()
        if config_errors:
            return {
                'success': False,
                'error': f"Email service not configured: {'; '.join(config_errors)}"
            }

        try:
            message = self._build_message(to_email, subject, html_content, text_content, reply_to, attachments)
            result = await self._send_via_smtp(message)
            logger.info("Email sent to %s: %s", to_email, subject)
            return result
        except Exception as e:
            error_msg = f"Failed to send email to {to_email}: {str(e)}"
            logger.error(error_msg, exc_info=True)
            return {
                'success': False,
                'error': error_msg
            }

    def _build_message(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str],
        reply_to: Optional[str],
        attachments: Optional[List[Dict[str, Any]]],
    ) -> MIMEMultipart:
        body = MIMEMultipart('alternative')
        if text_content:
            body.attach(MIMEText(text_content, 'plain', 'utf-8'))
        body.attach(MIMEText(html_content, 'html', 'utf-8'))

        if attachments:
            message = MIMEMultipart('mixed')
            message.attach(body)
            for attachment in attachments:
                self._add_attachment(message, attachment)
        else:
            message = body

        message['From'] = f"{self.config.from_name} <{self.config.from_email}>"
        message['To'] = to_email
        message['Subject'] = subject
        message['Message-ID'] = make_msgid(domain=self.config.from_email.split('@')[-1] or None)
        if reply_to or self.config.reply_to_email:
            message['Reply-To'] = reply_to or self.config.reply_to_email
        return message

    async def _send_via_smtp(self, message: MIMEMultipart) -> Dict[str, Any]:
        """Send email via SMTP with proper connection handling."""
        smtp_kwargs = self._smtp_kwargs()
        try:
            async with aiosmtplib.SMTP(**smtp_kwargs) as smtp:
                if self.config.smtp_username and self.config.smtp_password:
                    await smtp.login(self.config.smtp_username, self.config.smtp_password)

                result = await smtp.send_message(message)

                return {
                    'success': True,
                    'message_id': message.get('Message-ID', ''),
                    'smtp_result': result
                }
        except Exception as e:
            raise RuntimeError(f"SMTP sending failed: {str(e)}") from e

    def _smtp_kwargs(self) -> Dict[str, Any]:
        if self.config.smtp_use_ssl:
            return {
                'hostname': self.config.smtp_host,
                'port': self.config.smtp_port or 465,
                'use_tls': True,
            }
        return {
            'hostname': self.config.smtp_host,
            'port': self.config.smtp_port,
            'start_tls': self.config.smtp_use_tls,
        }

    def _add_attachment(self, message: MIMEMultipart, attachment: Dict[str, Any]):
        """Add attachment to email message."""
        try:
            maintype, _, subtype = (attachment.get('mime_type') or 'application/octet-stream').partition('/')
            part = MIMEBase(maintype, subtype or 'octet-stream')
            part.set_payload(attachment['content'])
            encoders.encode_base64(part)
            part.add_header(
                'Content-Disposition',
                'attachment',
                filename=attachment["filename"],
            )
            message.attach(part)
        except (KeyError, TypeError) as e:
            logger.warning("Failed to add attachment %s: %s", attachment.get('filename', 'unknown'), e)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> tuple[str, str]:
        """
        Render email template with context.

        Returns:
            Tuple of (html_content, text_content)
        """
        if not self.template_env:
            raise RuntimeError("Template environment not configured")

        html_content = self.template_env.get_template(f"{template_name}.html").render(**context)
        try:
            text_content = self.template_env.get_template(f"{template_name}.txt").render(**context)
        except TemplateNotFound:
            text_content = self._html_to_text(html_content)
        return html_content, text_content

    def _html_to_text(self, html_content: str) -> str:
        """Convert HTML to basic text content."""
        text = re.sub(r'<[^>]+>', '', html_content)
        text = text.replace('&amp;', '&').replace('&lt;', '<').replace('&gt;', '>')
        text = text.replace('&quot;', '"').replace('&#39;', "'")
        text = re.sub(r'\s+', ' ', text).strip()
        return text


# Global email service instance
_email_service = None


def get_email_service() -> EmailService:
    """Get singleton email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = EmailService()
    return _email_service


def reset_email_service_for_tests() -> None:
    global _email_service
    _email_service = None

