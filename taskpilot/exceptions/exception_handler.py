import logging
from typing import List
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework import status
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.utils.serializer_helpers import ReturnDict
from django.conf import settings
from bson.errors import InvalidId as BsonInvalidId
from pydantic import ValidationError as PydanticValidationError

from taskpilot.dto.responses.error_response import ApiErrorDetail, ApiErrorResponse, ApiErrorSource
from taskpilot.constants.messages import ApiErrors, AuthErrorMessages, ValidationErrors
from .auth_exceptions import TokenExpiredError, TokenMissingError, TokenInvalidError, InvalidCredentialsError
from .permission_exceptions import PermissionDeniedError
from .not_found_exceptions import ResourceNotFoundError
from .conflict_exceptions import ConflictError
from .validation_exceptions import DomainValidationError, EmailDeliveryError

logger = logging.getLogger(__name__)


def format_validation_errors(errors) -> List[ApiErrorDetail]:
    formatted_errors = []
    if isinstance(errors, ReturnDict | dict):
        for field, messages in errors.items():
            details = messages if isinstance(messages, list) else [messages]
            for message_detail in details:
                if isinstance(message_detail, dict):
                    nested_errors = format_validation_errors(message_detail)
                    formatted_errors.extend(nested_errors)
                else:
                    formatted_errors.append(
                        ApiErrorDetail(
                            detail=str(message_detail),
                            title=ApiErrors.VALIDATION_ERROR,
                            source={ApiErrorSource.PARAMETER: field},
                        )
                    )
    elif isinstance(errors, list):
        for message_detail in errors:
            formatted_errors.append(ApiErrorDetail(detail=str(message_detail), title=ApiErrors.VALIDATION_ERROR))
    return formatted_errors


def format_pydantic_errors(exc: PydanticValidationError) -> List[ApiErrorDetail]:
    return [
        ApiErrorDetail(
            detail=error["msg"],
            title=ApiErrors.VALIDATION_ERROR,
            source={ApiErrorSource.PARAMETER: ".".join(str(part) for part in error["loc"])} if error["loc"] else None,
        )
        for error in exc.errors()
    ]


def _path_source(exc, context):
    path_param = getattr(exc, "path_param", None)
    if path_param and path_param in context.get("kwargs", {}):
        return {ApiErrorSource.PATH: path_param}
    return None


def handle_exception(exc, context):
    response = drf_exception_handler(exc, context)

    error_list = []
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, TokenExpiredError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Authorization"},
                title=AuthErrorMessages.TOKEN_EXPIRED_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TokenMissingError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Authorization"},
                title=AuthErrorMessages.AUTHENTICATION_REQUIRED,
                detail=str(exc),
            )
        )
    elif isinstance(exc, TokenInvalidError):
        status_code = status.HTTP_401_UNAUTHORIZED
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.HEADER: "Authorization"},
                title=AuthErrorMessages.INVALID_TOKEN_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, InvalidCredentialsError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: "password"},
                title=ApiErrors.AUTHENTICATION_FAILED,
                detail=str(exc),
            )
        )
    elif isinstance(exc, PermissionDeniedError):
        status_code = status.HTTP_403_FORBIDDEN
        error_list.append(ApiErrorDetail(title=ApiErrors.FORBIDDEN_TITLE, detail=str(exc)))
    elif isinstance(exc, ResourceNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
        error_list.append(
            ApiErrorDetail(
                source=_path_source(exc, context),
                title=ApiErrors.RESOURCE_NOT_FOUND_TITLE,
                detail=str(exc),
            )
        )
    elif isinstance(exc, ConflictError):
        status_code = status.HTTP_409_CONFLICT
        error_list.append(ApiErrorDetail(title=ApiErrors.CONFLICT_TITLE, detail=str(exc)))
    elif isinstance(exc, DomainValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                source={ApiErrorSource.PARAMETER: exc.field} if exc.field else None,
                title=ApiErrors.VALIDATION_ERROR,
                detail=str(exc),
            )
        )
    elif isinstance(exc, BsonInvalidId):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list.append(
            ApiErrorDetail(
                title=ApiErrors.VALIDATION_ERROR,
                detail=ValidationErrors.INVALID_OBJECT_ID.format(str(exc).split(" ")[0].strip("'")),
            )
        )
    elif isinstance(exc, PydanticValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list = format_pydantic_errors(exc)
    elif isinstance(exc, DRFValidationError):
        status_code = status.HTTP_400_BAD_REQUEST
        error_list = format_validation_errors(exc.detail)
        if not error_list and exc.detail:
            error_list.append(ApiErrorDetail(detail=str(exc.detail), title=ApiErrors.VALIDATION_ERROR))
    elif isinstance(exc, EmailDeliveryError):
        logger.error(f"Email delivery failed: {exc.message}")
        error_list.append(ApiErrorDetail(title=ApiErrors.SERVER_ERROR, detail=ApiErrors.EMAIL_SEND_FAILED))
    else:
        if response is not None:
            status_code = response.status_code
            if isinstance(response.data, dict) and "detail" in response.data:
                detail_str = str(response.data["detail"])
                error_list.append(ApiErrorDetail(detail=detail_str, title=detail_str))
            else:
                error_list.append(ApiErrorDetail(detail=str(response.data), title=str(exc)))
        else:
            logger.exception(f"Unhandled error in {context.get('view').__class__.__name__}: {exc}")
            error_list.append(
                ApiErrorDetail(
                    detail=str(exc) if settings.DEBUG else ApiErrors.INTERNAL_SERVER_ERROR,
                    title=ApiErrors.UNEXPECTED_ERROR,
                )
            )

    final_response_data = ApiErrorResponse(
        statusCode=status_code,
        message=error_list[0].detail if error_list else ApiErrors.INTERNAL_SERVER_ERROR,
        errors=error_list,
    )
    return Response(data=final_response_data.model_dump(mode="json", exclude_none=True), status=status_code)
