import logging
from typing import Dict, Iterable, List

from taskpilot.constants.messages import PermissionErrors, ValidationErrors
from taskpilot.constants.role import ALLOWED_ROLE_TRANSITIONS, ASSIGNABLE_ROLES, Role
from taskpilot.dto.user_dto import UpdateProfileDTO, UserDTO, UserSummaryDTO
from taskpilot.exceptions.not_found_exceptions import TeamNotFoundError, UserNotFoundError
from taskpilot.exceptions.permission_exceptions import PermissionDeniedError, ProtectedAccountError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.user import UserModel
from taskpilot.repositories.team_repository import TeamRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class UserService:
    @classmethod
    def get_user(cls, user_id: str) -> UserModel:
        user = UserRepository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        return user

    @classmethod
    def get_summaries(cls, user_ids: Iterable) -> Dict[str, UserSummaryDTO]:
        """
        Expand user references in one query. Ids of deleted users are simply
        absent from the result.
        """
        unique_ids = list({str(user_id) for user_id in user_ids if user_id is not None})
        return {str(user.id): UserSummaryDTO.from_model(user) for user in UserRepository.get_by_ids(unique_ids)}

    @classmethod
    def get_profile(cls, user_id: str) -> UserDTO:
        return UserDTO.from_model(cls.get_user(user_id))

    @classmethod
    def update_profile(cls, user_id: str, dto: UpdateProfileDTO) -> UserDTO:
        cls.get_user(user_id)
        # Empty values leave the stored field untouched.
        update_data = {field: value for field, value in dto.model_dump().items() if value not in (None, "")}
        updated_user = UserRepository.update(user_id, update_data) if update_data else cls.get_user(user_id)
        NotificationService.notify_profile_updated(updated_user)
        return UserDTO.from_model(updated_user)

    @classmethod
    def list_users(cls) -> List[UserDTO]:
        return [UserDTO.from_model(user) for user in UserRepository.list_all()]

    @classmethod
    def list_by_role(cls, role: Role) -> List[UserSummaryDTO]:
        return [UserSummaryDTO.from_model(user) for user in UserRepository.list_by_role([role.value])]

    @classmethod
    def get_my_team_members(cls, manager_id: str) -> List[UserSummaryDTO]:
        team = TeamRepository.get_by_manager(manager_id)
        if not team:
            return []
        return [UserSummaryDTO.from_model(user) for user in UserRepository.list_by_team(team.id)]

    @classmethod
    def get_my_team_managers(cls, manager_id: str) -> List[UserSummaryDTO]:
        manager = cls.get_user(manager_id)
        if not manager.teamId:
            raise TeamNotFoundError(PermissionErrors.MANAGER_HAS_NO_TEAM)
        managers = UserRepository.list_by_team(manager.teamId, roles=[Role.MANAGER.value])
        return [UserSummaryDTO.from_model(user) for user in managers]

    @classmethod
    def update_role(cls, actor_id: str, actor_role: str, target_id: str, new_role: str) -> UserDTO:
        """
        Move a user between Team Member and Manager.

        Args:
            actor_id: ID of the Admin or Manager performing the change
            actor_role: Role claim of the actor
            target_id: ID of the user whose role changes
            new_role: Either "Team Member" or "Manager"

        Raises:
            DomainValidationError: Unknown role, self change or disallowed transition
            UserNotFoundError: If the target does not exist
            PermissionDeniedError: Manager acting outside their team, or a protected target
        """
        if new_role not in ASSIGNABLE_ROLES:
            raise DomainValidationError(ValidationErrors.INVALID_ROLE.format(*ASSIGNABLE_ROLES), field="newRole")

        if str(actor_id) == str(target_id):
            raise DomainValidationError(PermissionErrors.OWN_ROLE, field="userId")

        target = cls.get_user(target_id)
        actor = cls.get_user(actor_id)

        if actor_role == Role.MANAGER.value:
            if not actor.teamId:
                raise PermissionDeniedError(PermissionErrors.MANAGER_HAS_NO_TEAM)
            if str(target.teamId) != str(actor.teamId):
                raise PermissionDeniedError(PermissionErrors.ROLE_OUTSIDE_TEAM)

        if target.isProtectedAccount:
            raise ProtectedAccountError()

        if ALLOWED_ROLE_TRANSITIONS.get(target.role) != new_role:
            raise DomainValidationError(
                ValidationErrors.INVALID_ROLE_TRANSITION.format(target.role, new_role), field="newRole"
            )

        updated_user = UserRepository.update(target_id, {"role": new_role})
        logger.info(f"User {actor_id} changed role of {target_id} from {target.role} to {new_role}")

        NotificationService.notify_role_changed(updated_user, actor, new_role)
        return UserDTO.from_model(updated_user)
