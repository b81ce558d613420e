from unittest import TestCase
from unittest.mock import patch

from bson import ObjectId

from taskpilot.constants.role import Role
from taskpilot.dto.team_dto import CreateTeamDTO
from taskpilot.exceptions.conflict_exceptions import (
    AlreadyTeamMemberError,
    ManagerAlreadyAssignedError,
    TeamNameTakenError,
)
from taskpilot.exceptions.not_found_exceptions import UserNotFoundError
from taskpilot.exceptions.permission_exceptions import TeamAccessDeniedError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.team import TeamModel
from taskpilot.services.team_service import TeamService
from taskpilot.tests.fixtures.user import build_user


class TeamModelTests(TestCase):
    def test_manager_is_always_a_member(self):
        manager_id = ObjectId()
        team = TeamModel(name="Platform", admin=ObjectId(), manager=manager_id, members=[])

        self.assertEqual(team.members, [manager_id])


@patch("taskpilot.services.team_service.TeamService._to_dto", side_effect=lambda team: team)
@patch("taskpilot.services.team_service.NotificationService")
@patch("taskpilot.services.team_service.UserRepository")
@patch("taskpilot.services.team_service.TeamRepository")
class CreateTeamTests(TestCase):
    def setUp(self):
        self.admin = build_user(Role.ADMIN)
        self.manager = build_user(Role.MANAGER)
        self.dto = CreateTeamDTO(name="Platform", description="Core services", managerId=str(self.manager.id))

    def test_create_team_links_manager_both_ways(self, mock_teams, mock_users, mock_notifications, mock_to_dto):
        mock_teams.get_by_name.return_value = None
        mock_teams.create.side_effect = lambda team: team.model_copy(update={"id": ObjectId()})
        mock_users.get_by_id.side_effect = lambda user_id: {
            str(self.manager.id): self.manager,
            str(self.admin.id): self.admin,
        }.get(str(user_id))

        team = TeamService.create_team(self.dto, str(self.admin.id))

        self.assertEqual(team.manager, self.manager.id)
        self.assertIn(self.manager.id, team.members)
        self.assertEqual(team.admin, self.admin.id)
        mock_users.set_team.assert_called_once_with(self.manager.id, team.id)
        mock_notifications.notify_team_created.assert_called_once_with(team, self.admin)
        mock_notifications.notify_team_member_joined.assert_called_once_with(team, self.manager, self.admin)

    def test_duplicate_name(self, mock_teams, mock_users, mock_notifications, mock_to_dto):
        mock_teams.get_by_name.return_value = TeamModel(name="Platform", admin=ObjectId(), manager=ObjectId())

        with self.assertRaises(TeamNameTakenError):
            TeamService.create_team(self.dto, str(self.admin.id))
        mock_teams.create.assert_not_called()

    def test_unknown_manager(self, mock_teams, mock_users, mock_notifications, mock_to_dto):
        mock_teams.get_by_name.return_value = None
        mock_users.get_by_id.return_value = None

        with self.assertRaises(UserNotFoundError):
            TeamService.create_team(self.dto, str(self.admin.id))

    def test_manager_already_in_a_team(self, mock_teams, mock_users, mock_notifications, mock_to_dto):
        mock_teams.get_by_name.return_value = None
        mock_users.get_by_id.return_value = self.manager.model_copy(update={"teamId": ObjectId()})

        with self.assertRaises(ManagerAlreadyAssignedError):
            TeamService.create_team(self.dto, str(self.admin.id))
        mock_teams.create.assert_not_called()
        mock_users.set_team.assert_not_called()


@patch("taskpilot.services.team_service.TeamService._to_dto", side_effect=lambda team: team)
@patch("taskpilot.services.team_service.UserRepository")
@patch("taskpilot.services.team_service.TeamRepository")
class TeamMembershipTests(TestCase):
    def setUp(self):
        self.manager = build_user(Role.MANAGER)
        self.member = build_user(Role.TEAM_MEMBER)
        self.team = TeamModel(id=ObjectId(), name="Platform", admin=ObjectId(), manager=self.manager.id)

    def test_manager_adds_member(self, mock_teams, mock_users, mock_to_dto):
        mock_teams.get_by_id.return_value = self.team
        mock_users.get_by_id.return_value = self.member
        mock_teams.add_member.return_value = self.team

        TeamService.add_member(str(self.team.id), str(self.member.id), str(self.manager.id), Role.MANAGER.value)

        mock_teams.add_member.assert_called_once_with(self.team.id, self.member.id)
        mock_users.set_team.assert_called_once_with(self.member.id, self.team.id)

    def test_other_manager_cannot_add(self, mock_teams, mock_users, mock_to_dto):
        mock_teams.get_by_id.return_value = self.team

        with self.assertRaises(TeamAccessDeniedError):
            TeamService.add_member(str(self.team.id), str(self.member.id), str(ObjectId()), Role.MANAGER.value)

    def test_existing_member_conflicts(self, mock_teams, mock_users, mock_to_dto):
        mock_teams.get_by_id.return_value = self.team
        mock_users.get_by_id.return_value = self.manager

        with self.assertRaises(AlreadyTeamMemberError):
            TeamService.add_member(str(self.team.id), str(self.manager.id), str(ObjectId()), Role.ADMIN.value)

    def test_manager_cannot_be_removed(self, mock_teams, mock_users, mock_to_dto):
        mock_teams.get_by_id.return_value = self.team

        with self.assertRaises(DomainValidationError):
            TeamService.remove_member(str(self.team.id), str(self.manager.id), str(ObjectId()), Role.ADMIN.value)
        mock_users.clear_team.assert_not_called()

    def test_remove_member_clears_team(self, mock_teams, mock_users, mock_to_dto):
        team = self.team.model_copy(update={"members": [self.manager.id, self.member.id]})
        mock_teams.get_by_id.return_value = team
        mock_teams.remove_member.return_value = self.team

        TeamService.remove_member(str(team.id), str(self.member.id), str(self.manager.id), Role.MANAGER.value)

        mock_users.clear_team.assert_called_once_with(str(self.member.id))

    def test_user_of_another_team_is_left_untouched(self, mock_teams, mock_users, mock_to_dto):
        other_team_member = build_user(Role.TEAM_MEMBER, teamId=ObjectId())
        mock_teams.get_by_id.return_value = self.team

        with self.assertRaises(UserNotFoundError):
            TeamService.remove_member(
                str(self.team.id), str(other_team_member.id), str(self.manager.id), Role.MANAGER.value
            )
        mock_teams.remove_member.assert_not_called()
        mock_users.clear_team.assert_not_called()


class AvailableManagersTests(TestCase):
    @patch("taskpilot.services.team_service.UserRepository.list_without_team")
    @patch("taskpilot.services.team_service.TeamRepository.list_all")
    def test_excludes_managers_recorded_on_a_team(self, mock_list_all, mock_list_without_team):
        free_manager = build_user(Role.MANAGER)
        stale_manager = build_user(Role.MANAGER)
        mock_list_all.return_value = [TeamModel(name="Old", admin=ObjectId(), manager=stale_manager.id)]
        mock_list_without_team.return_value = [free_manager, stale_manager]

        managers = TeamService.get_available_managers()

        self.assertEqual([m.id for m in managers], [str(free_manager.id)])
        mock_list_without_team.assert_called_once_with([Role.MANAGER.value])
