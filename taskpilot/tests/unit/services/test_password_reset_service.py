from unittest.mock import patch

from django.contrib.auth.hashers import check_password
from django.test import SimpleTestCase, override_settings

from taskpilot.constants.messages import AppMessages
from taskpilot.exceptions.validation_exceptions import DomainValidationError, EmailDeliveryError
from taskpilot.services.password_reset_service import PasswordResetService
from taskpilot.tests.fixtures.user import build_user


@override_settings(FRONTEND_URL="http://localhost:5173")
@patch("taskpilot.services.password_reset_service.UserRepository")
class RequestResetTests(SimpleTestCase):
    def test_missing_email(self, mock_users):
        with self.assertRaises(DomainValidationError) as context:
            PasswordResetService.request_reset("")

        self.assertEqual(context.exception.field, "email")
        mock_users.get_by_email.assert_not_called()

    def test_unknown_email_gets_generic_answer(self, mock_users):
        mock_users.get_by_email.return_value = None

        response = PasswordResetService.request_reset("nobody@example.com")

        self.assertEqual(response.message, AppMessages.RESET_EMAIL_SENT)
        self.assertIsNone(response.token)
        mock_users.set_reset_token.assert_not_called()

    @patch("taskpilot.services.password_reset_service.EmailService.is_enabled", return_value=False)
    def test_link_is_returned_when_email_is_disabled(self, mock_is_enabled, mock_users):
        user = build_user()
        mock_users.get_by_email.return_value = user

        response = PasswordResetService.request_reset(user.email)

        self.assertEqual(response.message, AppMessages.RESET_LINK_GENERATED)
        self.assertEqual(len(response.token), 64)
        self.assertEqual(response.resetUrl, f"http://localhost:5173/reset-password/{response.token}")
        stored_user_id, stored_token, expires = mock_users.set_reset_token.call_args[0]
        self.assertEqual(stored_user_id, user.id)
        self.assertEqual(stored_token, response.token)
        self.assertIsNotNone(expires)

    @patch("taskpilot.services.password_reset_service.EmailService.send_password_reset_email", return_value=True)
    @patch("taskpilot.services.password_reset_service.EmailService.is_enabled", return_value=True)
    def test_email_is_sent_and_token_withheld(self, mock_is_enabled, mock_send, mock_users):
        user = build_user()
        mock_users.get_by_email.return_value = user

        response = PasswordResetService.request_reset(user.email)

        self.assertEqual(response.message, AppMessages.RESET_EMAIL_SENT)
        self.assertIsNone(response.token)
        self.assertEqual(mock_send.call_args[0][0], user.email)

    @patch("taskpilot.services.password_reset_service.EmailService.send_password_reset_email", return_value=False)
    @patch("taskpilot.services.password_reset_service.EmailService.is_enabled", return_value=True)
    def test_send_failure_clears_token(self, mock_is_enabled, mock_send, mock_users):
        user = build_user()
        mock_users.get_by_email.return_value = user

        with self.assertRaises(EmailDeliveryError):
            PasswordResetService.request_reset(user.email)

        mock_users.set_reset_token.assert_called_with(user.id, None, None)


@patch("taskpilot.services.password_reset_service.EmailService.is_enabled", return_value=False)
@patch("taskpilot.services.password_reset_service.UserRepository")
class ResetPasswordTests(SimpleTestCase):
    def test_short_password_is_rejected_before_token_lookup(self, mock_users, mock_is_enabled):
        with self.assertRaises(DomainValidationError) as context:
            PasswordResetService.reset_password("token", "12345")

        self.assertEqual(context.exception.field, "password")
        mock_users.get_by_reset_token.assert_not_called()

    def test_invalid_or_expired_token(self, mock_users, mock_is_enabled):
        mock_users.get_by_reset_token.return_value = None

        with self.assertRaises(DomainValidationError) as context:
            PasswordResetService.reset_password("stale", "123456")

        self.assertEqual(context.exception.field, "token")
        mock_users.update.assert_not_called()

    def test_reset_hashes_password_and_clears_token(self, mock_users, mock_is_enabled):
        user = build_user()
        mock_users.get_by_reset_token.return_value = user

        PasswordResetService.reset_password("good-token", "new-password")

        user_id, update = mock_users.update.call_args[0]
        self.assertEqual(user_id, user.id)
        self.assertTrue(check_password("new-password", update["password"]))
        self.assertIsNone(update["resetPasswordToken"])
        self.assertIsNone(update["resetPasswordExpires"])

    def test_verify_token(self, mock_users, mock_is_enabled):
        mock_users.get_by_reset_token.return_value = build_user()
        PasswordResetService.verify_token("good-token")

        mock_users.get_by_reset_token.return_value = None
        with self.assertRaises(DomainValidationError):
            PasswordResetService.verify_token("bad-token")
