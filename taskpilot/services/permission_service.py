import logging
from functools import wraps
from typing import Callable, Iterable, Tuple

from taskpilot.constants.role import Role
from taskpilot.exceptions.auth_exceptions import TokenMissingError
from taskpilot.exceptions.not_found_exceptions import ProjectNotFoundError, TaskNotFoundError
from taskpilot.exceptions.permission_exceptions import (
    InsufficientRoleError,
    ProjectAccessDeniedError,
    TaskAccessDeniedError,
)
from taskpilot.models.project import ProjectModel
from taskpilot.models.task import TaskModel
from taskpilot.repositories.project_repository import ProjectRepository
from taskpilot.repositories.task_repository import TaskRepository

logger = logging.getLogger(__name__)


class PermissionService:
    """
    Two independent gates: `require_role` checks the caller's global role,
    `require_project_access` / `require_task_access` check ownership of a
    single resource. Views call the role gate first.
    """

    @classmethod
    def require_role(cls, role: str, allowed_roles: Iterable[str], action: str = "perform this action") -> None:
        allowed = [r.value if isinstance(r, Role) else r for r in allowed_roles]
        if role not in allowed:
            raise InsufficientRoleError(allowed, role, action)

    @classmethod
    def can_access_project(cls, user_id: str, role: str, project: ProjectModel) -> bool:
        # Only Managers are constrained to their own projects.
        if role != Role.MANAGER.value:
            return True
        return project.is_managed_by(user_id) or project.is_member(user_id)

    @classmethod
    def require_project_access(cls, user_id: str, role: str, project_id: str) -> ProjectModel:
        project = ProjectRepository.get_by_id(project_id)
        if not project:
            raise ProjectNotFoundError()

        if not cls.can_access_project(user_id, role, project):
            logger.info(f"User {user_id} denied access to project {project_id}")
            raise ProjectAccessDeniedError(project_id)
        return project

    @classmethod
    def require_task_access(cls, user_id: str, role: str, task_id: str) -> Tuple[TaskModel, ProjectModel | None]:
        """
        Admin: always. Team Member: must be an assignee. Manager: must be the
        parent project's manager or one of its team members.
        """
        task = TaskRepository.get_by_id(task_id)
        if not task:
            raise TaskNotFoundError()

        project = ProjectRepository.get_by_id(task.project)

        if role == Role.ADMIN.value:
            return task, project

        if role == Role.TEAM_MEMBER.value:
            if not task.is_assigned_to(user_id):
                raise TaskAccessDeniedError(task_id)
            return task, project

        if project is None or not cls.can_access_project(user_id, role, project):
            raise TaskAccessDeniedError(task_id)
        return task, project


def role_required(*allowed_roles: Role) -> Callable:
    """
    Decorator for APIView handlers. Rejects callers whose token role is not
    one of `allowed_roles` before the handler runs.
    """

    def decorator(view_method: Callable) -> Callable:
        @wraps(view_method)
        def wrapper(view, request, *args, **kwargs):
            role = getattr(request, "user_role", None)
            if not role:
                raise TokenMissingError()
            action = f"{request.method} {request.path}"
            PermissionService.require_role(role, allowed_roles, action)
            return view_method(view, request, *args, **kwargs)

        return wrapper

    return decorator
