import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string

from taskpilot.constants.messages import EmailMessages

logger = logging.getLogger(__name__)


class EmailService:
    """Outbound mail through Django's configured EMAIL_BACKEND."""

    @classmethod
    def is_enabled(cls) -> bool:
        return settings.EMAIL_SERVICE_ENABLED

    @classmethod
    def _send(cls, recipient: str, subject: str, text: str, template: str, context: dict) -> bool:
        try:
            send_mail(
                subject=subject,
                message=text,
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=[recipient],
                html_message=render_to_string(template, context),
            )
        except (SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' to {recipient}: {str(e)}")
            return False
        logger.info(f"Sent '{subject}' to {recipient}")
        return True

    @classmethod
    def send_password_reset_email(cls, recipient: str, reset_url: str) -> bool:
        lifetime_minutes = settings.PASSWORD_RESET["TOKEN_LIFETIME"] // 60
        return cls._send(
            recipient,
            EmailMessages.PASSWORD_RESET_SUBJECT,
            EmailMessages.PASSWORD_RESET_TEXT.format(reset_url, lifetime_minutes),
            "emails/password_reset.html",
            {"reset_url": reset_url, "lifetime_minutes": lifetime_minutes},
        )

    @classmethod
    def send_password_reset_success_email(cls, recipient: str) -> bool:
        login_url = f"{settings.FRONTEND_URL}/login"
        return cls._send(
            recipient,
            EmailMessages.PASSWORD_RESET_SUCCESS_SUBJECT,
            EmailMessages.PASSWORD_RESET_SUCCESS_TEXT.format(login_url),
            "emails/password_reset_success.html",
            {"login_url": login_url},
        )
