import logging
import secrets
from datetime import datetime, timedelta, timezone

from django.conf import settings
from django.contrib.auth.hashers import make_password

from taskpilot.constants.messages import AppMessages, ValidationErrors
from taskpilot.dto.responses.password_reset_response import ForgotPasswordResponse
from taskpilot.exceptions.validation_exceptions import DomainValidationError, EmailDeliveryError
from taskpilot.models.user import UserModel
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.email_service import EmailService

logger = logging.getLogger(__name__)


class PasswordResetService:
    @classmethod
    def request_reset(cls, email: str) -> ForgotPasswordResponse:
        """
        Issue a one hour reset token for `email`.

        An unknown email gets the same generic answer as a known one. When
        email delivery is disabled the link and token are returned in the
        response instead of being mailed.

        Raises:
            DomainValidationError: If no email is given
            EmailDeliveryError: If the reset email could not be sent; the token is cleared first
        """
        if not email:
            raise DomainValidationError(ValidationErrors.EMAIL_REQUIRED, field="email")

        user = UserRepository.get_by_email(email)
        if not user:
            return ForgotPasswordResponse(message=AppMessages.RESET_EMAIL_SENT)

        token = secrets.token_hex(settings.PASSWORD_RESET["TOKEN_BYTES"])
        expires = datetime.now(timezone.utc) + timedelta(seconds=settings.PASSWORD_RESET["TOKEN_LIFETIME"])
        UserRepository.set_reset_token(user.id, token, expires)
        reset_url = f"{settings.FRONTEND_URL}/reset-password/{token}"

        if not EmailService.is_enabled():
            return ForgotPasswordResponse(
                message=AppMessages.RESET_LINK_GENERATED,
                resetUrl=reset_url,
                note=AppMessages.RESET_LINK_NOTE,
                token=token,
            )

        if not EmailService.send_password_reset_email(user.email, reset_url):
            UserRepository.set_reset_token(user.id, None, None)
            raise EmailDeliveryError(f"Password reset email to user {user.id} failed")

        logger.info(f"Password reset requested for user {user.id}")
        return ForgotPasswordResponse(message=AppMessages.RESET_EMAIL_SENT)

    @classmethod
    def _get_user_by_token(cls, token: str) -> UserModel:
        user = UserRepository.get_by_reset_token(token)
        if not user:
            raise DomainValidationError(ValidationErrors.INVALID_RESET_TOKEN, field="token")
        return user

    @classmethod
    def reset_password(cls, token: str, password: str) -> None:
        min_length = settings.PASSWORD_RESET["MIN_PASSWORD_LENGTH"]
        if not password or len(password) < min_length:
            raise DomainValidationError(ValidationErrors.PASSWORD_TOO_SHORT.format(min_length), field="password")

        user = cls._get_user_by_token(token)
        UserRepository.update(
            user.id,
            {"password": make_password(password), "resetPasswordToken": None, "resetPasswordExpires": None},
        )
        logger.info(f"Password reset completed for user {user.id}")

        if EmailService.is_enabled():
            EmailService.send_password_reset_success_email(user.email)

    @classmethod
    def verify_token(cls, token: str) -> None:
        cls._get_user_by_token(token)
