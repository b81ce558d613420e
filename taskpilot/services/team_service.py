import logging
from typing import List

from taskpilot.constants.messages import NotFoundErrors, ValidationErrors
from taskpilot.constants.role import ASSIGNABLE_ROLES, Role
from taskpilot.dto.team_dto import CreateTeamDTO, SignupTeamDTO, TeamDTO
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.exceptions.conflict_exceptions import (
    AlreadyTeamMemberError,
    ManagerAlreadyAssignedError,
    TeamNameTakenError,
)
from taskpilot.exceptions.not_found_exceptions import TeamNotFoundError, UserNotFoundError
from taskpilot.exceptions.permission_exceptions import TeamAccessDeniedError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.team import TeamModel
from taskpilot.repositories.team_repository import TeamRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.notification_service import NotificationService
from taskpilot.services.user_service import UserService

logger = logging.getLogger(__name__)


class TeamService:
    """
    Owns the team membership invariant: a team's manager is always in its
    `members`, and every member's `teamId` points back at the team. The two
    sides live in different collections and are written one after the other.
    """

    @classmethod
    def _to_dto(cls, team: TeamModel) -> TeamDTO:
        users = UserService.get_summaries([team.admin, team.manager, *team.members])
        return TeamDTO(
            id=str(team.id),
            name=team.name,
            description=team.description,
            status=team.status,
            admin=users.get(str(team.admin)),
            manager=users.get(str(team.manager)),
            members=[users[str(member)] for member in team.members if str(member) in users],
            createdAt=team.createdAt,
            updatedAt=team.updatedAt,
        )

    @classmethod
    def create_team(cls, dto: CreateTeamDTO, admin_id: str) -> TeamDTO:
        """
        Create a team and attach its manager.

        Args:
            dto: Team name, description and the manager's user id
            admin_id: ID of the Admin creating the team

        Returns:
            TeamDTO of the created team

        Raises:
            TeamNameTakenError: If a team with the same name exists
            UserNotFoundError: If the manager does not exist
            ManagerAlreadyAssignedError: If the manager already belongs to a team
        """
        if TeamRepository.get_by_name(dto.name):
            raise TeamNameTakenError()

        manager = UserRepository.get_by_id(dto.managerId)
        if not manager:
            raise UserNotFoundError(NotFoundErrors.MANAGER_NOT_FOUND)
        if manager.teamId:
            raise ManagerAlreadyAssignedError()

        team = TeamRepository.create(
            TeamModel(
                name=dto.name,
                description=dto.description,
                admin=admin_id,
                manager=manager.id,
                members=[manager.id],
            )
        )
        # Not atomic with the insert above: a failure here leaves a team whose
        # manager has no teamId.
        UserRepository.set_team(manager.id, team.id)
        logger.info(f"Team {team.id} created by {admin_id} with manager {manager.id}")

        admin = UserRepository.get_by_id(admin_id)
        if admin:
            NotificationService.notify_team_created(team, admin)
            NotificationService.notify_team_member_joined(team, manager, admin)

        return cls._to_dto(team)

    @classmethod
    def _get_managed_team(cls, team_id: str, actor_id: str, actor_role: str) -> TeamModel:
        team = TeamRepository.get_by_id(team_id)
        if not team:
            raise TeamNotFoundError()
        if actor_role != Role.ADMIN.value and str(team.manager) != str(actor_id):
            raise TeamAccessDeniedError(team_id)
        return team

    @classmethod
    def add_member(cls, team_id: str, member_id: str, actor_id: str, actor_role: str) -> TeamDTO:
        team = cls._get_managed_team(team_id, actor_id, actor_role)

        member = UserRepository.get_by_id(member_id)
        if not member:
            raise UserNotFoundError()
        if any(str(existing) == str(member.id) for existing in team.members):
            raise AlreadyTeamMemberError()

        updated_team = TeamRepository.add_member(team.id, member.id)
        UserRepository.set_team(member.id, team.id)
        logger.info(f"User {member.id} added to team {team.id} by {actor_id}")
        return cls._to_dto(updated_team)

    @classmethod
    def remove_member(cls, team_id: str, member_id: str, actor_id: str, actor_role: str) -> TeamDTO:
        team = cls._get_managed_team(team_id, actor_id, actor_role)

        if str(team.manager) == str(member_id):
            raise DomainValidationError(ValidationErrors.CANNOT_REMOVE_TEAM_MANAGER, field="memberId")
        if not any(str(existing) == str(member_id) for existing in team.members):
            raise UserNotFoundError(NotFoundErrors.NOT_TEAM_MEMBER)

        updated_team = TeamRepository.remove_member(team.id, member_id)
        if updated_team is None:
            raise TeamNotFoundError()
        UserRepository.clear_team(member_id)
        logger.info(f"User {member_id} removed from team {team.id} by {actor_id}")
        return cls._to_dto(updated_team)

    @classmethod
    def list_teams(cls) -> List[TeamDTO]:
        return [cls._to_dto(team) for team in TeamRepository.list_all()]

    @classmethod
    def get_team(cls, team_id: str) -> TeamDTO:
        team = TeamRepository.get_by_id(team_id)
        if not team:
            raise TeamNotFoundError()
        return cls._to_dto(team)

    @classmethod
    def get_available_users(cls) -> List[UserSummaryDTO]:
        return [UserSummaryDTO.from_model(user) for user in UserRepository.list_without_team(ASSIGNABLE_ROLES)]

    @classmethod
    def get_available_managers(cls) -> List[UserSummaryDTO]:
        """Managers with no teamId who are also not recorded as any team's manager."""
        assigned_manager_ids = {str(team.manager) for team in TeamRepository.list_all()}
        managers = UserRepository.list_without_team([Role.MANAGER.value])
        return [UserSummaryDTO.from_model(user) for user in managers if str(user.id) not in assigned_manager_ids]

    @classmethod
    def get_signup_teams(cls) -> List[SignupTeamDTO]:
        return [
            SignupTeamDTO(id=str(team.id), name=team.name, description=team.description)
            for team in TeamRepository.list_active()
        ]
