import logging

from django.contrib.auth.hashers import check_password, make_password

from taskpilot.constants.messages import ValidationErrors
from taskpilot.constants.role import DEFAULT_ROLE
from taskpilot.dto.responses.auth_response import LoginResponse
from taskpilot.dto.user_dto import RegisterUserDTO, UserDTO, UserSummaryDTO
from taskpilot.exceptions.auth_exceptions import InvalidCredentialsError
from taskpilot.exceptions.conflict_exceptions import UserAlreadyExistsError
from taskpilot.exceptions.not_found_exceptions import UserNotFoundError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.user import UserModel
from taskpilot.repositories.team_repository import TeamRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.notification_service import NotificationService
from taskpilot.utils.jwt_utils import generate_access_token

logger = logging.getLogger(__name__)


class AuthService:
    @classmethod
    def register(cls, dto: RegisterUserDTO) -> UserDTO:
        """
        Self signup. The role is always Team Member regardless of input. When a
        team is chosen the user is added to its members, which is a second,
        separate write.
        """
        if UserRepository.get_by_email(dto.email):
            raise UserAlreadyExistsError()

        team = None
        if dto.teamId:
            team = TeamRepository.get_by_id(dto.teamId)
            if not team:
                raise DomainValidationError(ValidationErrors.INVALID_TEAM, field="teamId")

        user = UserRepository.create(
            UserModel(
                name=dto.name,
                email=dto.email.lower(),
                password=make_password(dto.password),
                role=DEFAULT_ROLE,
                bio=dto.bio,
                position=dto.position,
                gender=dto.gender,
                dateOfBirth=dto.dateOfBirth,
                teamId=team.id if team else None,
            )
        )
        logger.info(f"Registered user {user.id}")

        if team:
            TeamRepository.add_member(team.id, user.id)
            manager = UserRepository.get_by_id(team.manager)
            if manager:
                NotificationService.notify_team_member_joined(team, user, manager)

        admin = UserRepository.get_first_admin()
        if admin:
            NotificationService.notify_new_user_signup(user, admin)

        return UserDTO.from_model(user)

    @classmethod
    def login(cls, email: str, password: str) -> LoginResponse:
        user = UserRepository.get_by_email(email)
        if not user:
            raise UserNotFoundError()

        if not check_password(password, user.password):
            raise InvalidCredentialsError()

        token = generate_access_token(str(user.id), user.role)
        return LoginResponse(token=token, user=UserSummaryDTO.from_model(user))
