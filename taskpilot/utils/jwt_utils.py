import jwt
from datetime import datetime, timedelta, timezone
from django.conf import settings

from taskpilot.exceptions.auth_exceptions import TokenExpiredError, TokenInvalidError, TokenMissingError
from taskpilot.constants.messages import AuthErrorMessages

BEARER_PREFIX = "Bearer "


def generate_access_token(user_id: str, role: str) -> str:
    try:
        now = datetime.now(timezone.utc)
        expiry = now + timedelta(seconds=settings.JWT_CONFIG.get("ACCESS_TOKEN_LIFETIME"))

        payload = {
            "id": str(user_id),
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int(expiry.timestamp()),
        }

        return jwt.encode(
            payload=payload,
            key=settings.JWT_CONFIG.get("SECRET_KEY"),
            algorithm=settings.JWT_CONFIG.get("ALGORITHM"),
        )

    except Exception as e:
        raise TokenInvalidError(f"Token generation failed: {str(e)}")


def validate_access_token(token: str) -> dict:
    """Decode a bearer token and return its `{id, role}` claims."""
    if not token:
        raise TokenMissingError()

    try:
        payload = jwt.decode(
            jwt=token,
            key=settings.JWT_CONFIG.get("SECRET_KEY"),
            algorithms=[settings.JWT_CONFIG.get("ALGORITHM")],
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError()
    except jwt.InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {str(e)}")

    if not payload.get("id") or not payload.get("role"):
        raise TokenInvalidError(AuthErrorMessages.TOKEN_INVALID)

    return payload


def extract_bearer_token(authorization_header: str | None) -> str:
    if not authorization_header or not authorization_header.startswith(BEARER_PREFIX):
        raise TokenMissingError()
    token = authorization_header[len(BEARER_PREFIX) :].strip()
    if not token:
        raise TokenMissingError()
    return token
