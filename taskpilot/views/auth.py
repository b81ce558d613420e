from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.responses.auth_response import LoginResponse, RegisterResponse
from taskpilot.dto.user_dto import RegisterUserDTO, UserDTO, UserSummaryDTO
from taskpilot.serializers.login_serializer import LoginSerializer
from taskpilot.serializers.register_serializer import RegisterSerializer
from taskpilot.services.auth_service import AuthService
from taskpilot.services.user_service import UserService


class RegisterView(APIView):
    @extend_schema(
        operation_id="register",
        summary="Register a new account",
        description=(
            "Self signup. The account always starts as a Team Member; an optional teamId joins an existing team."
        ),
        tags=["auth"],
        request=RegisterSerializer,
        responses={
            201: OpenApiResponse(response=RegisterResponse, description="User registered successfully"),
            400: OpenApiResponse(description="Validation error or unknown team"),
            409: OpenApiResponse(description="Email already registered"),
        },
    )
    def post(self, request: Request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = AuthService.register(RegisterUserDTO(**serializer.validated_data))
        response = RegisterResponse(message=AppMessages.USER_REGISTERED, user=user)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    @extend_schema(
        operation_id="login",
        summary="Log in",
        description="Exchange email and password for a bearer token.",
        tags=["auth"],
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(response=LoginResponse, description="Login successful"),
            400: OpenApiResponse(description="Incorrect password"),
            404: OpenApiResponse(description="User not found"),
        },
    )
    def post(self, request: Request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        response = AuthService.login(serializer.validated_data["email"], serializer.validated_data["password"])
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)


class AuthProfileView(APIView):
    @extend_schema(
        operation_id="get_auth_profile",
        summary="Get the logged in user",
        tags=["auth"],
        responses={200: OpenApiResponse(response=UserDTO, description="Current user")},
    )
    def get(self, request: Request):
        profile = UserService.get_profile(request.user_id)
        return Response(data=profile.model_dump(mode="json"), status=status.HTTP_200_OK)


class AuthTeamMembersView(APIView):
    @extend_schema(
        operation_id="get_auth_team_members",
        summary="List all Team Members",
        tags=["auth"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Every user with the Team Member role")},
    )
    def get(self, request: Request):
        members = UserService.list_by_role(Role.TEAM_MEMBER)
        return Response(data=[member.model_dump(mode="json") for member in members], status=status.HTTP_200_OK)
