from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.dto.responses.password_reset_response import ForgotPasswordResponse
from taskpilot.serializers.password_reset_serializer import ForgotPasswordSerializer, ResetPasswordSerializer
from taskpilot.services.password_reset_service import PasswordResetService

TOKEN_PARAMETER = OpenApiParameter(
    name="token",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Reset token from the emailed link",
)


class ForgotPasswordView(APIView):
    @extend_schema(
        operation_id="forgot_password",
        summary="Request a password reset link",
        description=(
            "Always answers with the same message whether or not the email is registered. "
            "When email delivery is disabled the link is returned in the response."
        ),
        tags=["password-reset"],
        request=ForgotPasswordSerializer,
        responses={
            200: OpenApiResponse(response=ForgotPasswordResponse, description="Reset requested"),
            400: OpenApiResponse(description="Email missing"),
            500: OpenApiResponse(description="The reset email could not be sent"),
        },
    )
    def post(self, request: Request):
        serializer = ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = PasswordResetService.request_reset(serializer.validated_data["email"])
        return Response(data=response.model_dump(mode="json", exclude_none=True), status=status.HTTP_200_OK)


class ResetPasswordView(APIView):
    @extend_schema(
        operation_id="reset_password",
        summary="Set a new password with a reset token",
        tags=["password-reset"],
        parameters=[TOKEN_PARAMETER],
        request=ResetPasswordSerializer,
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Password reset"),
            400: OpenApiResponse(description="Password too short, or token invalid or expired"),
        },
    )
    def post(self, request: Request, token: str):
        serializer = ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        PasswordResetService.reset_password(token, serializer.validated_data["password"])
        return Response(
            data=MessageResponse(message=AppMessages.PASSWORD_RESET_SUCCESSFUL).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )


class VerifyResetTokenView(APIView):
    @extend_schema(
        operation_id="verify_reset_token",
        summary="Check that a reset token is still valid",
        tags=["password-reset"],
        parameters=[TOKEN_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Token is valid"),
            400: OpenApiResponse(description="Token invalid or expired"),
        },
    )
    def get(self, request: Request, token: str):
        PasswordResetService.verify_token(token)
        return Response(
            data=MessageResponse(message=AppMessages.RESET_TOKEN_VALID).model_dump(mode="json"),
            status=status.HTTP_200_OK,
        )
