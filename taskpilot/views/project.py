from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.project_dto import CreateProjectDTO, ProjectDTO, ProjectTeamMemberDTO, UpdateProjectDTO
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.dto.responses.project_response import ProjectResponse
from taskpilot.serializers.comment_serializer import CommentSerializer
from taskpilot.serializers.create_project_serializer import CreateProjectSerializer
from taskpilot.serializers.update_project_serializer import UpdateProjectSerializer
from taskpilot.services.permission_service import role_required
from taskpilot.services.project_service import ProjectService
from taskpilot.views.attachment_response import UPLOAD_REQUEST_SCHEMA, build_attachment_response

PROJECT_ID_PARAMETER = OpenApiParameter(
    name="project_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the project",
)
ATTACHMENT_ID_PARAMETER = OpenApiParameter(
    name="attachment_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the attachment",
)


def _list_response(items) -> Response:
    return Response(data=[item.model_dump(mode="json") for item in items], status=status.HTTP_200_OK)


def _message_response(message: str) -> Response:
    return Response(data=MessageResponse(message=message).model_dump(mode="json"), status=status.HTTP_200_OK)


class ProjectListView(APIView):
    @extend_schema(
        operation_id="get_projects",
        summary="List projects visible to the caller",
        description=(
            "Team Members see projects they belong to. Managers see projects they manage or that include a "
            "member of their team. Admins see every project."
        ),
        tags=["projects"],
        responses={
            200: OpenApiResponse(response=ProjectDTO, description="Projects retrieved successfully"),
            403: OpenApiResponse(description="Manager without a team"),
        },
    )
    def get(self, request: Request):
        return _list_response(ProjectService.get_projects(request.user_id, request.user_role))

    @extend_schema(
        operation_id="create_project",
        summary="Create a project",
        description=(
            "A Manager must belong to a team, may only add members of that team and becomes the project "
            "manager. An Admin may name the project manager."
        ),
        tags=["projects"],
        request=CreateProjectSerializer,
        responses={
            201: OpenApiResponse(response=ProjectResponse, description="Project created successfully"),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Caller may not create projects"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def post(self, request: Request):
        serializer = CreateProjectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.create_project(
            CreateProjectDTO(**serializer.validated_data), request.user_id, request.user_role
        )
        response = ProjectResponse(message=AppMessages.PROJECT_CREATED, project=project)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class MyProjectsView(APIView):
    @extend_schema(
        operation_id="get_my_projects",
        summary="Projects the caller manages or belongs to",
        tags=["projects"],
        responses={200: OpenApiResponse(response=ProjectDTO, description="Projects retrieved successfully")},
    )
    def get(self, request: Request):
        return _list_response(ProjectService.get_my_projects(request.user_id, request.user_role))


class ProjectDetailView(APIView):
    @extend_schema(
        operation_id="get_project_by_id",
        summary="Get project by ID",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=ProjectDTO, description="Project retrieved successfully"),
            403: OpenApiResponse(description="Manager without access to this project"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    def get(self, request: Request, project_id: str):
        project = ProjectService.get_project(project_id, request.user_id, request.user_role)
        return Response(data=project.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_project",
        summary="Update a project",
        description="Only the fields present in the body are changed. Only an Admin may reassign the project manager.",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        request=UpdateProjectSerializer,
        responses={
            200: OpenApiResponse(response=ProjectResponse, description="Project updated successfully"),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Caller may not update this project"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def put(self, request: Request, project_id: str):
        serializer = UpdateProjectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        project = ProjectService.update_project(
            project_id, UpdateProjectDTO(**serializer.validated_data), request.user_id, request.user_role
        )
        response = ProjectResponse(message=AppMessages.PROJECT_UPDATED, project=project)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_project",
        summary="Delete a project and all of its tasks",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Project deleted successfully"),
            403: OpenApiResponse(description="Caller may not delete this project"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def delete(self, request: Request, project_id: str):
        ProjectService.delete_project(project_id, request.user_id, request.user_role)
        return _message_response(AppMessages.PROJECT_DELETED)


class ProjectTeamMembersView(APIView):
    @extend_schema(
        operation_id="get_project_team_members",
        summary="Members of a project",
        description="Each member carries an avatar URL; a generated one when no profile picture is set.",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=ProjectTeamMemberDTO, description="Project members"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    def get(self, request: Request, project_id: str):
        return _list_response(ProjectService.get_team_members(project_id, request.user_id, request.user_role))


class ProjectCommentListView(APIView):
    @extend_schema(
        operation_id="get_project_comments",
        summary="Comments on a project",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=CommentDTO, description="Comments with authors expanded"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    def get(self, request: Request, project_id: str):
        return _list_response(ProjectService.get_comments(project_id))

    @extend_schema(
        operation_id="add_project_comment",
        summary="Comment on a project",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        request=CommentSerializer,
        responses={
            201: OpenApiResponse(response=CommentDTO, description="Comment added"),
            400: OpenApiResponse(description="Empty comment"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    def post(self, request: Request, project_id: str):
        serializer = CommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = ProjectService.add_comment(project_id, serializer.validated_data["text"], request.user_id)
        return Response(data=comment.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class ProjectCommentDetailView(APIView):
    @extend_schema(
        operation_id="delete_project_comment",
        summary="Delete a project comment",
        tags=["projects"],
        parameters=[
            PROJECT_ID_PARAMETER,
            OpenApiParameter(
                name="comment_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="Unique identifier of the comment",
            ),
        ],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Comment deleted"),
            403: OpenApiResponse(description="Caller may not manage this project"),
            404: OpenApiResponse(description="Project or comment not found"),
        },
    )
    @role_required(Role.MANAGER)
    def delete(self, request: Request, project_id: str, comment_id: str):
        ProjectService.delete_comment(project_id, comment_id, request.user_id, request.user_role)
        return _message_response(AppMessages.COMMENT_DELETED)


class ProjectUploadView(APIView):
    @extend_schema(
        operation_id="upload_project_attachment",
        summary="Attach a file to a project",
        description="Multipart upload in the `file` field.",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER],
        request=UPLOAD_REQUEST_SCHEMA,
        responses={
            201: OpenApiResponse(response=AttachmentDTO, description="File uploaded successfully"),
            400: OpenApiResponse(description="Missing file, file too large or type not allowed"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    def post(self, request: Request, project_id: str):
        attachment = ProjectService.upload_attachment(project_id, request.FILES.get("file"), request.user_id)
        return Response(
            data={"message": AppMessages.ATTACHMENT_UPLOADED, "attachment": attachment.model_dump(mode="json")},
            status=status.HTTP_201_CREATED,
        )


class ProjectAttachmentDownloadView(APIView):
    @extend_schema(
        operation_id="download_project_attachment",
        summary="Download a project attachment",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=OpenApiTypes.BINARY, description="File contents"),
            302: OpenApiResponse(description="Redirect to an externally stored file"),
            404: OpenApiResponse(description="Project or attachment not found"),
        },
    )
    def get(self, request: Request, project_id: str, attachment_id: str):
        attachment = ProjectService.get_attachment(project_id, attachment_id)
        return build_attachment_response(attachment, as_attachment=True)


class ProjectAttachmentPreviewView(APIView):
    @extend_schema(
        operation_id="preview_project_attachment",
        summary="Preview a project attachment inline",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=OpenApiTypes.BINARY, description="File contents"),
            302: OpenApiResponse(description="Redirect to an externally stored file"),
            404: OpenApiResponse(description="Project or attachment not found"),
        },
    )
    def get(self, request: Request, project_id: str, attachment_id: str):
        attachment = ProjectService.get_attachment(project_id, attachment_id)
        return build_attachment_response(attachment, as_attachment=False)


class ProjectAttachmentDetailView(APIView):
    @extend_schema(
        operation_id="delete_project_attachment",
        summary="Delete a project attachment",
        tags=["projects"],
        parameters=[PROJECT_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Attachment deleted"),
            403: OpenApiResponse(description="Caller may not manage this project"),
            404: OpenApiResponse(description="Project or attachment not found"),
        },
    )
    @role_required(Role.MANAGER)
    def delete(self, request: Request, project_id: str, attachment_id: str):
        ProjectService.delete_attachment(project_id, attachment_id, request.user_id, request.user_role)
        return _message_response(AppMessages.ATTACHMENT_DELETED)
