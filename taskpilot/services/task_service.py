import logging
from typing import Iterable, List, Optional

from taskpilot.constants.messages import PermissionErrors
from taskpilot.constants.role import Role
from taskpilot.constants.task import MANAGER_UPDATABLE_FIELDS, TEAM_MEMBER_UPDATABLE_FIELDS, TaskStatus
from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.project_dto import ProjectReferenceDTO
from taskpilot.dto.task_dto import CreateTaskDTO, TaskDTO
from taskpilot.exceptions.not_found_exceptions import CommentNotFoundError, ProjectNotFoundError, TaskNotFoundError
from taskpilot.exceptions.permission_exceptions import PermissionDeniedError, ProjectAccessDeniedError
from taskpilot.models.common.embedded import CommentModel
from taskpilot.models.project import ProjectModel
from taskpilot.models.task import TaskModel
from taskpilot.repositories.project_repository import ProjectRepository
from taskpilot.repositories.task_repository import TaskRepository
from taskpilot.services.attachment_service import AttachmentService
from taskpilot.services.notification_service import NotificationService
from taskpilot.services.permission_service import PermissionService
from taskpilot.services.user_service import UserService

logger = logging.getLogger(__name__)


class TaskService:
    @classmethod
    def _to_dtos(cls, tasks: List[TaskModel], projects: Optional[Iterable[ProjectModel]] = None) -> List[TaskDTO]:
        if projects is None:
            projects = ProjectRepository.get_by_ids(list({task.project for task in tasks}))
        project_refs = {
            str(project.id): ProjectReferenceDTO(id=str(project.id), name=project.name) for project in projects
        }

        user_ids = []
        for task in tasks:
            user_ids.extend(task.assignedTo)
            user_ids.extend(comment.author for comment in task.comments)
            user_ids.extend(attachment.uploadedBy for attachment in task.attachments)
        users = UserService.get_summaries(user_ids)

        return [
            TaskDTO(
                id=str(task.id),
                title=task.title,
                description=task.description,
                project=project_refs.get(str(task.project)),
                assignedTo=[users[str(assignee)] for assignee in task.assignedTo if str(assignee) in users],
                status=task.status,
                priority=task.priority,
                dueDate=task.dueDate,
                comments=[CommentDTO.from_model(comment, users) for comment in task.comments],
                attachments=[AttachmentDTO.from_model(attachment, users) for attachment in task.attachments],
                createdAt=task.createdAt,
                updatedAt=task.updatedAt,
            )
            for task in tasks
        ]

    @classmethod
    def _to_dto(cls, task: TaskModel, project: Optional[ProjectModel] = None) -> TaskDTO:
        return cls._to_dtos([task], [project] if project else None)[0]

    @classmethod
    def _get_task(cls, task_id: str) -> TaskModel:
        task = TaskRepository.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError()
        return task

    @classmethod
    def create_task(cls, dto: CreateTaskDTO, actor_id: str, actor_role: str) -> TaskDTO:
        project = PermissionService.require_project_access(actor_id, actor_role, dto.project)
        actor = UserService.get_user(actor_id)

        task = TaskRepository.create(TaskModel(**dto.model_dump(exclude_none=True)))
        logger.info(f"Task {task.id} created in project {project.id} by {actor_id}")

        NotificationService.notify_task_created(task, project, actor)
        for assignee_id in task.assignedTo:
            NotificationService.notify_member_added(assignee_id, actor, project, task)

        return cls._to_dto(task, project)

    @classmethod
    def get_tasks(cls, project_id: Optional[str] = None) -> List[TaskDTO]:
        return cls._to_dtos(TaskRepository.list_tasks(project_ids=[project_id] if project_id else None))

    @classmethod
    def get_my_tasks(cls, user_id: str) -> List[TaskDTO]:
        return cls._to_dtos(TaskRepository.list_tasks(assignee_id=user_id))

    @classmethod
    def get_tasks_by_due_date(cls, user_id: str, role: str) -> List[TaskDTO]:
        """Calendar feed: a Team Member sees their own tasks, everyone else sees all tasks."""
        assignee_id = user_id if role == Role.TEAM_MEMBER.value else None
        return cls._to_dtos(TaskRepository.list_tasks(assignee_id=assignee_id, sort_field="dueDate"))

    @classmethod
    def get_manager_tasks(cls, manager_id: str) -> List[TaskDTO]:
        projects = ProjectRepository.list_managed_by(manager_id)
        if not projects:
            return []
        tasks = TaskRepository.list_tasks(project_ids=[project.id for project in projects])
        return cls._to_dtos(tasks, projects)

    @classmethod
    def get_manager_project_tasks(cls, project_id: str, manager_id: str) -> List[TaskDTO]:
        project = ProjectRepository.get_by_id(project_id)
        if not project:
            raise ProjectNotFoundError()
        if not (project.is_managed_by(manager_id) or project.is_member(manager_id)):
            raise ProjectAccessDeniedError(project_id)
        return cls._to_dtos(TaskRepository.list_tasks(project_ids=[project.id]), [project])

    @classmethod
    def get_my_project_tasks(cls, project_id: str, user_id: str) -> List[TaskDTO]:
        return cls._to_dtos(TaskRepository.list_tasks(project_ids=[project_id], assignee_id=user_id))

    @classmethod
    def get_task(cls, task_id: str, user_id: str, role: str) -> TaskDTO:
        task, project = PermissionService.require_task_access(user_id, role, task_id)
        return cls._to_dto(task, project)

    @classmethod
    def update_task(
        cls, task_id: str, update_data: dict, actor_id: str, actor_role: str, requested_fields: Iterable[str] = None
    ) -> TaskDTO:
        """
        Update a task.

        Args:
            task_id: ID of the task to update
            update_data: Validated fields to change
            actor_id: ID of the user performing the update
            actor_role: Role claim of the user performing the update
            requested_fields: Keys of the raw request body; defaults to the keys of `update_data`

        Raises:
            TaskNotFoundError: If the task does not exist
            TaskAccessDeniedError: If a Team Member is not assigned, or a Manager cannot access the project
            PermissionDeniedError: If a Team Member sends anything other than exactly `status`
        """
        task, project = PermissionService.require_task_access(actor_id, actor_role, task_id)
        requested = set(update_data.keys() if requested_fields is None else requested_fields)

        if actor_role == Role.TEAM_MEMBER.value:
            if requested != TEAM_MEMBER_UPDATABLE_FIELDS:
                raise PermissionDeniedError(PermissionErrors.TEAM_MEMBER_STATUS_ONLY)
            allowed_fields = TEAM_MEMBER_UPDATABLE_FIELDS
        else:
            allowed_fields = MANAGER_UPDATABLE_FIELDS

        document = {field: value for field, value in update_data.items() if field in allowed_fields}
        if document.get("assignedTo") is not None:
            document["assignedTo"] = TaskRepository.to_object_ids(document["assignedTo"])
        document = {field: value for field, value in document.items() if value is not None or field == "dueDate"}

        updated_task = TaskRepository.update(task.id, document)
        if updated_task is None:
            raise TaskNotFoundError()
        logger.info(f"Task {task.id} updated by {actor_id}: {sorted(document.keys())}")

        cls._notify_update(task, updated_task, project, UserService.get_user(actor_id))
        return cls._to_dto(updated_task, project)

    @classmethod
    def _notify_update(
        cls, previous: TaskModel, task: TaskModel, project: Optional[ProjectModel], actor
    ) -> None:
        NotificationService.notify_task_updated(task, project, actor)

        completed = TaskStatus.COMPLETED.value
        if task.status == completed and previous.status != completed:
            NotificationService.notify_task_completed(task, project, actor)

        if project is None:
            return
        before = {str(assignee) for assignee in previous.assignedTo}
        after = {str(assignee) for assignee in task.assignedTo}
        for assignee_id in task.assignedTo:
            if str(assignee_id) not in before:
                NotificationService.notify_member_added(assignee_id, actor, project, task)
        for assignee_id in previous.assignedTo:
            if str(assignee_id) not in after:
                NotificationService.notify_member_removed(assignee_id, actor, project, task)

    @classmethod
    def delete_task(cls, task_id: str, actor_id: str, actor_role: str) -> None:
        task, project = PermissionService.require_task_access(actor_id, actor_role, task_id)
        actor = UserService.get_user(actor_id)

        TaskRepository.delete(task.id)
        for attachment in task.attachments:
            AttachmentService.discard(attachment)
        logger.info(f"Task {task.id} deleted by {actor_id}")

        NotificationService.notify_task_deleted(task, project, actor)

    @classmethod
    def add_comment(cls, task_id: str, text: str, actor_id: str) -> CommentDTO:
        task = cls._get_task(task_id)
        actor = UserService.get_user(actor_id)

        comment = CommentModel(text=text, author=actor.id)
        updated_task = TaskRepository.add_comment(task.id, comment)
        if updated_task is None:
            raise TaskNotFoundError()

        project = ProjectRepository.get_by_id(task.project)
        if project:
            NotificationService.notify_comment_added(comment, actor, project, updated_task)
        return CommentDTO.from_model(comment, UserService.get_summaries([actor.id]))

    @classmethod
    def delete_comment(cls, task_id: str, comment_id: str, actor_id: str, actor_role: str) -> None:
        task, project = PermissionService.require_task_access(actor_id, actor_role, task_id)
        comment = next((c for c in task.comments if str(c.id) == str(comment_id)), None)
        if comment is None:
            raise CommentNotFoundError()

        TaskRepository.remove_comment(task.id, comment.id)
        if project:
            NotificationService.notify_comment_deleted(comment, UserService.get_user(actor_id), project, task)

    @classmethod
    def upload_attachment(cls, task_id: str, uploaded_file, actor_id: str) -> AttachmentDTO:
        task = cls._get_task(task_id)
        actor = UserService.get_user(actor_id)

        attachment = AttachmentService.store(uploaded_file, f"tasks/{task.id}", actor.id)
        updated_task = TaskRepository.add_attachment(task.id, attachment)
        if updated_task is None:
            AttachmentService.discard(attachment)
            raise TaskNotFoundError()

        project = ProjectRepository.get_by_id(task.project)
        if project:
            NotificationService.notify_attachment_added(attachment, actor, project, updated_task)
        return AttachmentDTO.from_model(attachment, UserService.get_summaries([actor.id]))

    @classmethod
    def get_attachment(cls, task_id: str, attachment_id: str):
        return AttachmentService.find(cls._get_task(task_id).attachments, attachment_id)

    @classmethod
    def delete_attachment(cls, task_id: str, attachment_id: str, actor_id: str, actor_role: str) -> None:
        task, project = PermissionService.require_task_access(actor_id, actor_role, task_id)
        attachment = AttachmentService.find(task.attachments, attachment_id)

        TaskRepository.remove_attachment(task.id, attachment.id)
        AttachmentService.discard(attachment)
        if project:
            NotificationService.notify_attachment_deleted(attachment, UserService.get_user(actor_id), project, task)
