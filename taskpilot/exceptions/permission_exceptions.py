from typing import Iterable

from taskpilot.constants.messages import PermissionErrors


class PermissionDeniedError(Exception):
    """Base permission error"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InsufficientRoleError(PermissionDeniedError):
    """Insufficient role for action"""

    def __init__(self, allowed_roles: Iterable[str], current_role: str, action: str):
        self.allowed_roles = list(allowed_roles)
        self.current_role = current_role
        self.action = action
        message = PermissionErrors.INSUFFICIENT_ROLE.format(action, self.allowed_roles, current_role)
        super().__init__(message)


class ProjectAccessDeniedError(PermissionDeniedError):
    """Project access denied"""

    def __init__(self, project_id: str, message: str = PermissionErrors.PROJECT_ACCESS_DENIED):
        self.project_id = project_id
        super().__init__(message)


class TaskAccessDeniedError(PermissionDeniedError):
    """Task access denied"""

    def __init__(self, task_id: str, message: str = PermissionErrors.TASK_ACCESS_DENIED):
        self.task_id = task_id
        super().__init__(message)


class TeamAccessDeniedError(PermissionDeniedError):
    def __init__(self, team_id: str, message: str = PermissionErrors.TEAM_ACCESS_DENIED):
        self.team_id = team_id
        super().__init__(message)


class ProtectedAccountError(PermissionDeniedError):
    def __init__(self, message: str = PermissionErrors.PROTECTED_ACCOUNT):
        super().__init__(message)
