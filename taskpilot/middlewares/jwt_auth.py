from django.conf import settings
from rest_framework import status
from django.http import JsonResponse
from taskpilot.utils.jwt_utils import validate_access_token, extract_bearer_token
from taskpilot.exceptions.auth_exceptions import (
    TokenExpiredError,
    TokenInvalidError,
    TokenMissingError,
)
from taskpilot.constants.messages import ApiErrors
from taskpilot.dto.responses.error_response import ApiErrorResponse, ApiErrorDetail, ApiErrorSource


class JWTAuthenticationMiddleware:
    """
    Verifies the `Authorization: Bearer` token and attaches the `{id, role}`
    claims to the request as `user_id` / `user_role`. Role checks happen
    later in the views; the user is not looked up here.
    """

    def __init__(self, get_response) -> None:
        self.get_response = get_response

    def __call__(self, request):
        if self._is_public_path(request.method, request.path):
            self._try_optional_authentication(request)
            return self.get_response(request)

        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
            payload = validate_access_token(token)
            self._set_user_data(request, payload)
        except (TokenMissingError, TokenExpiredError, TokenInvalidError) as e:
            return self._handle_auth_error(e)

        return self.get_response(request)

    def _try_optional_authentication(self, request):
        """Public endpoints still see who is calling when a valid token is sent."""
        try:
            token = extract_bearer_token(request.headers.get("Authorization"))
            self._set_user_data(request, validate_access_token(token))
        except (TokenMissingError, TokenExpiredError, TokenInvalidError):
            request.user_id = None
            request.user_role = None

    def _set_user_data(self, request, payload):
        request.user_id = payload["id"]
        request.user_role = payload["role"]

    def _is_public_path(self, method: str, path: str) -> bool:
        if any(path.startswith(public_path) for public_path in settings.PUBLIC_PATHS):
            return True
        return any(
            method == public_method and path.rstrip("/") == public_path
            for public_method, public_path in settings.PUBLIC_METHOD_PATHS
        )

    def _handle_auth_error(self, exception):
        error_response = ApiErrorResponse(
            statusCode=status.HTTP_401_UNAUTHORIZED,
            message=str(exception),
            errors=[
                ApiErrorDetail(
                    source={ApiErrorSource.HEADER: "Authorization"},
                    title=ApiErrors.AUTHENTICATION_FAILED,
                    detail=str(exception),
                )
            ],
        )
        return JsonResponse(
            data=error_response.model_dump(mode="json", exclude_none=True),
            status=status.HTTP_401_UNAUTHORIZED,
        )


def get_current_user_info(request) -> dict | None:
    if not getattr(request, "user_id", None):
        return None

    return {
        "user_id": request.user_id,
        "role": request.user_role,
    }
