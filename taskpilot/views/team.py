from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.responses.team_response import TeamResponse
from taskpilot.dto.team_dto import CreateTeamDTO, SignupTeamDTO, TeamDTO
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.serializers.add_team_member_serializer import AddTeamMemberSerializer
from taskpilot.serializers.create_team_serializer import CreateTeamSerializer
from taskpilot.services.permission_service import role_required
from taskpilot.services.team_service import TeamService

TEAM_ID_PARAMETER = OpenApiParameter(
    name="team_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the team",
)


def _list_response(items) -> Response:
    return Response(data=[item.model_dump(mode="json") for item in items], status=status.HTTP_200_OK)


class TeamListView(APIView):
    @extend_schema(
        operation_id="get_teams",
        summary="List all teams",
        tags=["teams"],
        responses={
            200: OpenApiResponse(response=TeamDTO, description="Teams with admin, manager and members expanded"),
            403: OpenApiResponse(description="Caller is not an Admin"),
        },
    )
    @role_required(Role.ADMIN)
    def get(self, request: Request):
        return _list_response(TeamService.list_teams())

    @extend_schema(
        operation_id="create_team",
        summary="Create a new team",
        description=(
            "Create a team led by an existing Manager who is not yet assigned to a team. "
            "The manager becomes the team's first member."
        ),
        tags=["teams"],
        request=CreateTeamSerializer,
        responses={
            201: OpenApiResponse(response=TeamResponse, description="Team created successfully"),
            400: OpenApiResponse(description="Bad request - validation error"),
            403: OpenApiResponse(description="Caller is not an Admin"),
            404: OpenApiResponse(description="Manager not found"),
            409: OpenApiResponse(description="Team name taken or manager already assigned"),
        },
    )
    @role_required(Role.ADMIN)
    def post(self, request: Request):
        serializer = CreateTeamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.create_team(CreateTeamDTO(**serializer.validated_data), request.user_id)
        response = TeamResponse(message=AppMessages.TEAM_CREATED, team=team)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class TeamAvailableUsersView(APIView):
    @extend_schema(
        operation_id="get_team_available_users",
        summary="Users that can be added to a team",
        description="Managers and Team Members who are not in any team.",
        tags=["teams"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Unassigned users")},
    )
    @role_required(Role.ADMIN)
    def get(self, request: Request):
        return _list_response(TeamService.get_available_users())


class TeamAvailableManagersView(APIView):
    @extend_schema(
        operation_id="get_team_available_managers",
        summary="Managers that can lead a new team",
        tags=["teams"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Managers without a team")},
    )
    @role_required(Role.ADMIN)
    def get(self, request: Request):
        return _list_response(TeamService.get_available_managers())


class SignupTeamsView(APIView):
    @extend_schema(
        operation_id="get_signup_teams",
        summary="Teams offered at signup",
        description="Active teams sorted by name. Public.",
        tags=["teams"],
        responses={200: OpenApiResponse(response=SignupTeamDTO, description="Active teams")},
    )
    def get(self, request: Request):
        return _list_response(TeamService.get_signup_teams())


class TeamDetailView(APIView):
    @extend_schema(
        operation_id="get_team_by_id",
        summary="Get team by ID",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TeamDTO, description="Team retrieved successfully"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def get(self, request: Request, team_id: str):
        team = TeamService.get_team(team_id)
        return Response(data=team.model_dump(mode="json"), status=status.HTTP_200_OK)


class TeamMembersView(APIView):
    @extend_schema(
        operation_id="add_team_member",
        summary="Add a member to a team",
        description="Only an Admin or the team's manager may add members.",
        tags=["teams"],
        parameters=[TEAM_ID_PARAMETER],
        request=AddTeamMemberSerializer,
        responses={
            200: OpenApiResponse(response=TeamResponse, description="Member added"),
            403: OpenApiResponse(description="Caller does not manage this team"),
            404: OpenApiResponse(description="Team or user not found"),
            409: OpenApiResponse(description="User already in the team"),
        },
    )
    def post(self, request: Request, team_id: str):
        serializer = AddTeamMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        team = TeamService.add_member(
            team_id, serializer.validated_data["memberId"], request.user_id, request.user_role
        )
        response = TeamResponse(message=AppMessages.TEAM_MEMBER_ADDED, team=team)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)


class TeamMemberDetailView(APIView):
    @extend_schema(
        operation_id="remove_team_member",
        summary="Remove a member from a team",
        description="The team's manager cannot be removed.",
        tags=["teams"],
        parameters=[
            TEAM_ID_PARAMETER,
            OpenApiParameter(
                name="member_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="User id of the member to remove",
            ),
        ],
        responses={
            200: OpenApiResponse(response=TeamResponse, description="Member removed"),
            400: OpenApiResponse(description="Attempt to remove the team manager"),
            403: OpenApiResponse(description="Caller does not manage this team"),
            404: OpenApiResponse(description="Team not found"),
        },
    )
    def delete(self, request: Request, team_id: str, member_id: str):
        team = TeamService.remove_member(team_id, member_id, request.user_id, request.user_role)
        response = TeamResponse(message=AppMessages.TEAM_MEMBER_REMOVED, team=team)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)
