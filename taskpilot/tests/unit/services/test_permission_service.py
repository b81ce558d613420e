from unittest import TestCase
from unittest.mock import MagicMock, patch

from bson import ObjectId

from taskpilot.constants.role import Role
from taskpilot.exceptions.auth_exceptions import TokenMissingError
from taskpilot.exceptions.not_found_exceptions import ProjectNotFoundError, TaskNotFoundError
from taskpilot.exceptions.permission_exceptions import (
    InsufficientRoleError,
    ProjectAccessDeniedError,
    TaskAccessDeniedError,
)
from taskpilot.services.permission_service import PermissionService, role_required
from taskpilot.tests.fixtures.project import build_project, build_task


class RequireRoleTests(TestCase):
    def test_allowed_role_passes(self):
        PermissionService.require_role("Admin", [Role.ADMIN, Role.MANAGER])

    def test_disallowed_role_raises_with_details(self):
        with self.assertRaises(InsufficientRoleError) as context:
            PermissionService.require_role("Team Member", [Role.ADMIN], "delete a project")

        self.assertEqual(context.exception.allowed_roles, ["Admin"])
        self.assertEqual(context.exception.current_role, "Team Member")
        self.assertIn("delete a project", str(context.exception))


class ProjectAccessTests(TestCase):
    def setUp(self):
        self.manager_id = ObjectId()
        self.member_id = ObjectId()
        self.project = build_project(manager_id=self.manager_id, team_members=[self.member_id])

    def test_admin_and_team_member_are_not_constrained(self):
        outsider = ObjectId()
        self.assertTrue(PermissionService.can_access_project(outsider, "Admin", self.project))
        self.assertTrue(PermissionService.can_access_project(outsider, "Team Member", self.project))

    def test_manager_needs_to_manage_or_belong(self):
        self.assertTrue(PermissionService.can_access_project(str(self.manager_id), "Manager", self.project))
        self.assertFalse(PermissionService.can_access_project(str(ObjectId()), "Manager", self.project))

        self.project.teamMembers.append(self.manager_id)
        self.project.projectManager = ObjectId()
        self.assertTrue(PermissionService.can_access_project(str(self.manager_id), "Manager", self.project))

    @patch("taskpilot.services.permission_service.ProjectRepository.get_by_id")
    def test_require_project_access_missing_project(self, mock_get_by_id):
        mock_get_by_id.return_value = None

        with self.assertRaises(ProjectNotFoundError):
            PermissionService.require_project_access(str(self.manager_id), "Manager", str(ObjectId()))

    @patch("taskpilot.services.permission_service.ProjectRepository.get_by_id")
    def test_require_project_access_denied_for_foreign_manager(self, mock_get_by_id):
        mock_get_by_id.return_value = self.project

        with self.assertRaises(ProjectAccessDeniedError):
            PermissionService.require_project_access(str(ObjectId()), "Manager", str(self.project.id))


@patch("taskpilot.services.permission_service.ProjectRepository.get_by_id")
@patch("taskpilot.services.permission_service.TaskRepository.get_by_id")
class TaskAccessTests(TestCase):
    def setUp(self):
        self.manager_id = ObjectId()
        self.assignee_id = ObjectId()
        self.project = build_project(manager_id=self.manager_id)
        self.task = build_task(self.project.id, assigned_to=[self.assignee_id])

    def test_missing_task(self, mock_get_task, mock_get_project):
        mock_get_task.return_value = None

        with self.assertRaises(TaskNotFoundError):
            PermissionService.require_task_access(str(ObjectId()), "Admin", str(ObjectId()))

    def test_admin_always_allowed(self, mock_get_task, mock_get_project):
        mock_get_task.return_value = self.task
        mock_get_project.return_value = self.project

        task, project = PermissionService.require_task_access(str(ObjectId()), "Admin", str(self.task.id))

        self.assertIs(task, self.task)
        self.assertIs(project, self.project)

    def test_team_member_must_be_assigned(self, mock_get_task, mock_get_project):
        mock_get_task.return_value = self.task
        mock_get_project.return_value = self.project

        PermissionService.require_task_access(str(self.assignee_id), "Team Member", str(self.task.id))
        with self.assertRaises(TaskAccessDeniedError):
            PermissionService.require_task_access(str(ObjectId()), "Team Member", str(self.task.id))

    def test_manager_must_access_parent_project(self, mock_get_task, mock_get_project):
        mock_get_task.return_value = self.task
        mock_get_project.return_value = self.project

        PermissionService.require_task_access(str(self.manager_id), "Manager", str(self.task.id))
        with self.assertRaises(TaskAccessDeniedError):
            PermissionService.require_task_access(str(ObjectId()), "Manager", str(self.task.id))

    def test_manager_denied_when_project_is_gone(self, mock_get_task, mock_get_project):
        mock_get_task.return_value = self.task
        mock_get_project.return_value = None

        with self.assertRaises(TaskAccessDeniedError):
            PermissionService.require_task_access(str(self.manager_id), "Manager", str(self.task.id))


class RoleRequiredDecoratorTests(TestCase):
    def setUp(self):
        self.calls = []

        def handler(view, request, *args, **kwargs):
            self.calls.append((view, request, args, kwargs))
            return "ok"

        self.decorated = role_required(Role.ADMIN, Role.MANAGER)(handler)
        self.request = MagicMock(method="GET", path="/api/users")

    def test_allowed_role_reaches_handler(self):
        self.request.user_role = "Manager"

        result = self.decorated("view", self.request, project_id="123")

        self.assertEqual(result, "ok")
        self.assertEqual(self.calls, [("view", self.request, (), {"project_id": "123"})])

    def test_disallowed_role_never_reaches_handler(self):
        self.request.user_role = "Team Member"

        with self.assertRaises(InsufficientRoleError):
            self.decorated("view", self.request)
        self.assertEqual(self.calls, [])

    def test_missing_role_is_unauthenticated(self):
        self.request.user_role = None

        with self.assertRaises(TokenMissingError):
            self.decorated("view", self.request)
