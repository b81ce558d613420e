from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.constants.role import Role
from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.dto.responses.task_response import TaskResponse
from taskpilot.dto.task_dto import CreateTaskDTO, TaskDTO
from taskpilot.serializers.comment_serializer import CommentSerializer
from taskpilot.serializers.create_task_serializer import CreateTaskSerializer
from taskpilot.serializers.update_task_serializer import UpdateTaskSerializer
from taskpilot.services.permission_service import role_required
from taskpilot.services.task_service import TaskService
from taskpilot.views.attachment_response import UPLOAD_REQUEST_SCHEMA, build_attachment_response

TASK_ID_PARAMETER = OpenApiParameter(
    name="task_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the task",
)
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


def _list_response(tasks) -> Response:
    return Response(data=[task.model_dump(mode="json") for task in tasks], status=status.HTTP_200_OK)


def _message_response(message: str) -> Response:
    return Response(data=MessageResponse(message=message).model_dump(mode="json"), status=status.HTTP_200_OK)


class TaskListView(APIView):
    @extend_schema(
        operation_id="get_tasks",
        summary="List tasks",
        description="All tasks, or only those of one project when `projectId` is given.",
        tags=["tasks"],
        parameters=[
            OpenApiParameter(
                name="projectId",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                description="Restrict the list to this project",
                required=False,
            ),
        ],
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Tasks retrieved successfully"),
            403: OpenApiResponse(description="Caller is not an Admin or Manager"),
        },
    )
    @role_required(Role.ADMIN, Role.MANAGER)
    def get(self, request: Request):
        return _list_response(TaskService.get_tasks(request.query_params.get("projectId") or None))

    @extend_schema(
        operation_id="create_task",
        summary="Create a task",
        description="The caller must be able to access the task's project. Every assignee is notified.",
        tags=["tasks"],
        request=CreateTaskSerializer,
        responses={
            201: OpenApiResponse(response=TaskResponse, description="Task created successfully"),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Caller may not add tasks to this project"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    @role_required(Role.MANAGER)
    def post(self, request: Request):
        serializer = CreateTaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = TaskService.create_task(CreateTaskDTO(**serializer.validated_data), request.user_id, request.user_role)
        response = TaskResponse(message=AppMessages.TASK_CREATED, task=task)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class MyTasksView(APIView):
    @extend_schema(
        operation_id="get_my_tasks",
        summary="Tasks assigned to the caller",
        tags=["tasks"],
        responses={200: OpenApiResponse(response=TaskDTO, description="Tasks retrieved successfully")},
    )
    def get(self, request: Request):
        return _list_response(TaskService.get_my_tasks(request.user_id))


class TasksByDueDateView(APIView):
    @extend_schema(
        operation_id="get_tasks_by_due_date",
        summary="Tasks ordered by due date",
        description="Team Members get their own tasks; Admins and Managers get every task. Used by the calendar.",
        tags=["tasks"],
        responses={200: OpenApiResponse(response=TaskDTO, description="Tasks sorted by due date")},
    )
    def get(self, request: Request):
        return _list_response(TaskService.get_tasks_by_due_date(request.user_id, request.user_role))


class ManagerTasksView(APIView):
    @extend_schema(
        operation_id="get_manager_tasks",
        summary="Tasks in the projects the caller manages",
        tags=["tasks"],
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Tasks retrieved successfully"),
            403: OpenApiResponse(description="Caller is not a Manager"),
        },
    )
    @role_required(Role.MANAGER)
    def get(self, request: Request):
        return _list_response(TaskService.get_manager_tasks(request.user_id))


class ManagerProjectTasksView(APIView):
    @extend_schema(
        operation_id="get_manager_project_tasks",
        summary="Tasks of one project the caller manages",
        tags=["tasks"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Tasks retrieved successfully"),
            403: OpenApiResponse(description="Caller does not manage this project"),
            404: OpenApiResponse(description="Project not found"),
        },
    )
    @role_required(Role.MANAGER)
    def get(self, request: Request, project_id: str):
        return _list_response(TaskService.get_manager_project_tasks(project_id, request.user_id))


class MyProjectTasksView(APIView):
    @extend_schema(
        operation_id="get_my_project_tasks",
        summary="The caller's tasks in one project",
        tags=["tasks"],
        parameters=[PROJECT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Tasks retrieved successfully"),
            403: OpenApiResponse(description="Caller is not a Team Member"),
        },
    )
    @role_required(Role.TEAM_MEMBER)
    def get(self, request: Request, project_id: str):
        return _list_response(TaskService.get_my_project_tasks(project_id, request.user_id))


class TaskDetailView(APIView):
    @extend_schema(
        operation_id="get_task_by_id",
        summary="Get task by ID",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=TaskDTO, description="Task retrieved successfully"),
            403: OpenApiResponse(description="Caller may not view this task"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    def get(self, request: Request, task_id: str):
        task = TaskService.get_task(task_id, request.user_id, request.user_role)
        return Response(data=task.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="update_task",
        summary="Update a task",
        description=(
            "A Team Member assigned to the task may send exactly `{status}`; any other field is refused. "
            "Managers may change title, description, status, priority, dueDate and assignedTo."
        ),
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER],
        request=UpdateTaskSerializer,
        responses={
            200: OpenApiResponse(response=TaskResponse, description="Task updated successfully"),
            400: OpenApiResponse(description="Validation error"),
            403: OpenApiResponse(description="Caller may not update this task or these fields"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    @role_required(Role.MANAGER, Role.TEAM_MEMBER)
    def put(self, request: Request, task_id: str):
        serializer = UpdateTaskSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        task = TaskService.update_task(
            task_id,
            dict(serializer.validated_data),
            request.user_id,
            request.user_role,
            requested_fields=set(request.data.keys()),
        )
        response = TaskResponse(message=AppMessages.TASK_UPDATED, task=task)
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="delete_task",
        summary="Delete a task",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Task deleted successfully"),
            403: OpenApiResponse(description="Caller may not delete this task"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    @role_required(Role.MANAGER)
    def delete(self, request: Request, task_id: str):
        TaskService.delete_task(task_id, request.user_id, request.user_role)
        return _message_response(AppMessages.TASK_DELETED)


class TaskCommentListView(APIView):
    @extend_schema(
        operation_id="add_task_comment",
        summary="Comment on a task",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER],
        request=CommentSerializer,
        responses={
            201: OpenApiResponse(response=CommentDTO, description="Comment added"),
            400: OpenApiResponse(description="Empty comment"),
            403: OpenApiResponse(description="Admins cannot comment on tasks"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    @role_required(Role.MANAGER, Role.TEAM_MEMBER)
    def post(self, request: Request, task_id: str):
        serializer = CommentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        comment = TaskService.add_comment(task_id, serializer.validated_data["text"], request.user_id)
        return Response(data=comment.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class TaskCommentDetailView(APIView):
    @extend_schema(
        operation_id="delete_task_comment",
        summary="Delete a task comment",
        tags=["tasks"],
        parameters=[
            TASK_ID_PARAMETER,
            OpenApiParameter(
                name="comment_id",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.PATH,
                description="Unique identifier of the comment",
            ),
        ],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Comment deleted"),
            403: OpenApiResponse(description="Caller may not manage this task"),
            404: OpenApiResponse(description="Task or comment not found"),
        },
    )
    @role_required(Role.MANAGER)
    def delete(self, request: Request, task_id: str, comment_id: str):
        TaskService.delete_comment(task_id, comment_id, request.user_id, request.user_role)
        return _message_response(AppMessages.COMMENT_DELETED)


class TaskUploadView(APIView):
    @extend_schema(
        operation_id="upload_task_attachment",
        summary="Attach a file to a task",
        description="Multipart upload in the `file` field.",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER],
        request=UPLOAD_REQUEST_SCHEMA,
        responses={
            201: OpenApiResponse(response=AttachmentDTO, description="File uploaded successfully"),
            400: OpenApiResponse(description="Missing file, file too large or type not allowed"),
            403: OpenApiResponse(description="Admins cannot upload to tasks"),
            404: OpenApiResponse(description="Task not found"),
        },
    )
    @role_required(Role.MANAGER, Role.TEAM_MEMBER)
    def post(self, request: Request, task_id: str):
        attachment = TaskService.upload_attachment(task_id, request.FILES.get("file"), request.user_id)
        return Response(
            data={"message": AppMessages.ATTACHMENT_UPLOADED, "attachment": attachment.model_dump(mode="json")},
            status=status.HTTP_201_CREATED,
        )


class TaskAttachmentDownloadView(APIView):
    @extend_schema(
        operation_id="download_task_attachment",
        summary="Download a task attachment",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=OpenApiTypes.BINARY, description="File contents"),
            302: OpenApiResponse(description="Redirect to an externally stored file"),
            404: OpenApiResponse(description="Task or attachment not found"),
        },
    )
    def get(self, request: Request, task_id: str, attachment_id: str):
        attachment = TaskService.get_attachment(task_id, attachment_id)
        return build_attachment_response(attachment, as_attachment=True)


class TaskAttachmentPreviewView(APIView):
    @extend_schema(
        operation_id="preview_task_attachment",
        summary="Preview a task attachment inline",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=OpenApiTypes.BINARY, description="File contents"),
            302: OpenApiResponse(description="Redirect to an externally stored file"),
            404: OpenApiResponse(description="Task or attachment not found"),
        },
    )
    def get(self, request: Request, task_id: str, attachment_id: str):
        attachment = TaskService.get_attachment(task_id, attachment_id)
        return build_attachment_response(attachment, as_attachment=False)


class TaskAttachmentDetailView(APIView):
    @extend_schema(
        operation_id="delete_task_attachment",
        summary="Delete a task attachment",
        tags=["tasks"],
        parameters=[TASK_ID_PARAMETER, ATTACHMENT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Attachment deleted"),
            403: OpenApiResponse(description="Caller may not manage this task"),
            404: OpenApiResponse(description="Task or attachment not found"),
        },
    )
    @role_required(Role.MANAGER)
    def delete(self, request: Request, task_id: str, attachment_id: str):
        TaskService.delete_attachment(task_id, attachment_id, request.user_id, request.user_role)
        return _message_response(AppMessages.ATTACHMENT_DELETED)
