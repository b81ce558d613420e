from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.user_dto import UpdateProfileDTO, UserDTO, UserSummaryDTO
from taskpilot.serializers.update_profile_serializer import UpdateProfileSerializer
from taskpilot.serializers.update_role_serializer import UpdateRoleSerializer
from taskpilot.services.attachment_service import AttachmentService
from taskpilot.services.permission_service import role_required
from taskpilot.services.user_service import UserService
from taskpilot.views.attachment_response import UPLOAD_REQUEST_SCHEMA


def _list_response(users) -> Response:
    return Response(data=[user.model_dump(mode="json") for user in users], status=status.HTTP_200_OK)


class UsersView(APIView):
    @extend_schema(
        operation_id="get_users",
        summary="List all users",
        description="Every registered user without password fields. Admins and Managers only.",
        tags=["users"],
        responses={
            200: OpenApiResponse(response=UserDTO, description="Users retrieved successfully"),
            403: OpenApiResponse(description="Caller is not an Admin or Manager"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def get(self, request: Request):
        return _list_response(UserService.list_users())


class TeamMemberUsersView(APIView):
    @extend_schema(
        operation_id="get_team_member_users",
        summary="List every Team Member",
        tags=["users"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Team Members")},
    )
    def get(self, request: Request):
        return _list_response(UserService.list_by_role(Role.TEAM_MEMBER))


class ManagerUsersView(APIView):
    @extend_schema(
        operation_id="get_manager_users",
        summary="List every Manager",
        tags=["users"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Managers")},
    )
    def get(self, request: Request):
        return _list_response(UserService.list_by_role(Role.MANAGER))


class MyTeamMembersView(APIView):
    @extend_schema(
        operation_id="get_my_team_members",
        summary="List the members of the team the caller manages",
        tags=["users"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Members of the caller's team")},
    )
    def get(self, request: Request):
        return _list_response(UserService.get_my_team_members(request.user_id))


class MyTeamManagersView(APIView):
    @extend_schema(
        operation_id="get_my_team_managers",
        summary="List the Managers of the caller's team",
        tags=["users"],
        responses={
            200: OpenApiResponse(response=UserSummaryDTO, description="Managers in the caller's team"),
            403: OpenApiResponse(description="Caller is not a Manager"),
            404: OpenApiResponse(description="Caller is not assigned to a team"),
        },
    )
    @role_required(Role.MANAGER)
    def get(self, request: Request):
        return _list_response(UserService.get_my_team_managers(request.user_id))


class UserRoleView(APIView):
    @extend_schema(
        operation_id="update_user_role",
        summary="Change a user's role",
        description=(
            "Moves a user between Team Member and Manager. Admins may change anyone; Managers only users in "
            "their own team. Protected accounts and the caller's own role cannot be changed."
        ),
        tags=["users"],
        parameters=[
            OpenApiParameter(
                name="user_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="Unique identifier of the user",
            ),
        ],
        request=UpdateRoleSerializer,
        responses={
            200: OpenApiResponse(response=UserDTO, description="Role updated"),
            400: OpenApiResponse(description="Invalid role or transition"),
            403: OpenApiResponse(description="Not allowed to change this user's role"),
            404: OpenApiResponse(description="User not found"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def put(self, request: Request, user_id: str):
        serializer = UpdateRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        previous_role = UserService.get_user(user_id).role
        new_role = serializer.validated_data["newRole"]
        user = UserService.update_role(request.user_id, request.user_role, user_id, new_role)
        return Response(
            data={
                "message": AppMessages.ROLE_UPDATED.format(previous_role, user.role),
                "user": user.model_dump(mode="json"),
            },
            status=status.HTTP_200_OK,
        )


class UserProfileView(APIView):
    @extend_schema(
        operation_id="get_user_profile",
        summary="Get the caller's profile",
        tags=["users"],
        responses={200: OpenApiResponse(response=UserDTO, description="Profile retrieved successfully")},
    )
    def get(self, request: Request):
        profile = UserService.get_profile(request.user_id)
        return Response(data=profile.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_user_profile",
        summary="Update the caller's profile",
        description="Only the fields sent with a non empty value are changed.",
        tags=["users"],
        request=UpdateProfileSerializer,
        responses={
            200: OpenApiResponse(response=UserDTO, description="Profile updated successfully"),
            400: OpenApiResponse(description="Validation error"),
        },
    )
    def put(self, request: Request):
        serializer = UpdateProfileSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        profile = UserService.update_profile(request.user_id, UpdateProfileDTO(**serializer.validated_data))
        return Response(
            data={"message": AppMessages.PROFILE_UPDATED, "user": profile.model_dump(mode="json")},
            status=status.HTTP_200_OK,
        )


class ProfileImageUploadView(APIView):
    @extend_schema(
        operation_id="upload_profile_image",
        summary="Upload a profile image",
        description=(
            "Multipart upload in the `file` field (.jpg, .jpeg or .png). Returns the image URL; "
            "store it with `PUT /api/users/profile` as `profilePicture`."
        ),
        tags=["users"],
        request=UPLOAD_REQUEST_SCHEMA,
        responses={
            201: OpenApiResponse(description="Image stored, body is `{url}`"),
            400: OpenApiResponse(description="Missing file, file too large or not an image"),
        },
    )
    def post(self, request: Request):
        url = AttachmentService.store_profile_image(request.FILES.get("file"), request.user_id)
        return Response(data={"url": request.build_absolute_uri(url)}, status=status.HTTP_201_CREATED)
