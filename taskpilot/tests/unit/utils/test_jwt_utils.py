from datetime import datetime, timedelta, timezone
from unittest import TestCase

import jwt
from django.conf import settings

from taskpilot.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError
from taskpilot.utils.jwt_utils import extract_bearer_token, generate_access_token, validate_access_token


class JWTUtilsTests(TestCase):
    def _encode(self, payload: dict) -> str:
        return jwt.encode(
            payload, settings.JWT_CONFIG["SECRET_KEY"], algorithm=settings.JWT_CONFIG["ALGORITHM"]
        )

    def test_generated_token_round_trips_claims(self):
        token = generate_access_token("507f1f77bcf86cd799439011", "Team Member")

        payload = validate_access_token(token)

        self.assertEqual(payload["id"], "507f1f77bcf86cd799439011")
        self.assertEqual(payload["role"], "Team Member")
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_CONFIG["ACCESS_TOKEN_LIFETIME"])

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = self._encode({"id": "abc", "role": "Admin", "exp": int(past.timestamp())})

        with self.assertRaises(TokenExpiredError):
            validate_access_token(token)

    def test_token_signed_with_other_key(self):
        token = jwt.encode({"id": "abc", "role": "Admin"}, "another-secret-key-of-sufficient-length!", "HS256")

        with self.assertRaises(TokenInvalidError):
            validate_access_token(token)

    def test_token_without_role_claim(self):
        token = self._encode({"id": "abc"})

        with self.assertRaises(TokenInvalidError):
            validate_access_token(token)

    def test_empty_token(self):
        with self.assertRaises(TokenMissingError):
            validate_access_token("")

    def test_extract_bearer_token(self):
        self.assertEqual(extract_bearer_token("Bearer abc.def"), "abc.def")
        for header in (None, "", "Basic abc", "Bearer ", "Bearer    "):
            with self.assertRaises(TokenMissingError):
                extract_bearer_token(header)
