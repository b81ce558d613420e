import logging
from typing import List
from urllib.parse import quote

from taskpilot.constants.messages import PermissionErrors
from taskpilot.constants.project import DEFAULT_AVATAR_URL
from taskpilot.constants.role import Role
from taskpilot.dto.comment_dto import AttachmentDTO, CommentDTO
from taskpilot.dto.project_dto import CreateProjectDTO, ProjectDTO, ProjectTeamMemberDTO, UpdateProjectDTO
from taskpilot.exceptions.not_found_exceptions import CommentNotFoundError, ProjectNotFoundError, UserNotFoundError
from taskpilot.exceptions.permission_exceptions import PermissionDeniedError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.common.embedded import CommentModel
from taskpilot.models.project import ProjectModel
from taskpilot.repositories.project_repository import ProjectRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.attachment_service import AttachmentService
from taskpilot.services.notification_service import NotificationService
from taskpilot.services.permission_service import PermissionService
from taskpilot.services.user_service import UserService

logger = logging.getLogger(__name__)


class ProjectService:
    @classmethod
    def _to_dto(cls, project: ProjectModel) -> ProjectDTO:
        return cls._to_dtos([project])[0]

    @classmethod
    def _to_dtos(cls, projects: List[ProjectModel]) -> List[ProjectDTO]:
        user_ids = []
        for project in projects:
            user_ids.extend(project.teamMembers)
            user_ids.append(project.projectManager)
            user_ids.extend(comment.author for comment in project.comments)
            user_ids.extend(attachment.uploadedBy for attachment in project.attachments)
        users = UserService.get_summaries(user_ids)

        return [
            ProjectDTO(
                id=str(project.id),
                name=project.name,
                description=project.description,
                status=project.status,
                deadline=project.deadline,
                teamMembers=[users[str(member)] for member in project.teamMembers if str(member) in users],
                projectManager=users.get(str(project.projectManager)) if project.projectManager else None,
                comments=[CommentDTO.from_model(comment, users) for comment in project.comments],
                attachments=[AttachmentDTO.from_model(attachment, users) for attachment in project.attachments],
                createdAt=project.createdAt,
                updatedAt=project.updatedAt,
            )
            for project in projects
        ]

    @classmethod
    def _get_project(cls, project_id: str) -> ProjectModel:
        project = ProjectRepository.get_by_id(project_id)
        if not project:
            raise ProjectNotFoundError()
        return project

    @classmethod
    def get_projects(cls, user_id: str, role: str) -> List[ProjectDTO]:
        """
        Role scoped listing. Team Members see the projects they are on,
        Managers see the projects they run plus any project staffed from
        their team, Admins see everything.
        """
        if role == Role.TEAM_MEMBER.value:
            return cls._to_dtos(ProjectRepository.list_for_member(user_id))

        if role == Role.MANAGER.value:
            manager = UserService.get_user(user_id)
            if not manager.teamId:
                raise PermissionDeniedError(PermissionErrors.MANAGER_HAS_NO_TEAM)
            team_member_ids = [user.id for user in UserRepository.list_by_team(manager.teamId)]
            return cls._to_dtos(ProjectRepository.list_for_manager(user_id, team_member_ids))

        return cls._to_dtos(ProjectRepository.list_all())

    @classmethod
    def get_my_projects(cls, user_id: str, role: str) -> List[ProjectDTO]:
        if role == Role.MANAGER.value:
            return cls._to_dtos(ProjectRepository.list_for_manager(user_id, [user_id]))
        return cls._to_dtos(ProjectRepository.list_for_member(user_id))

    @classmethod
    def get_project(cls, project_id: str, user_id: str, role: str) -> ProjectDTO:
        return cls._to_dto(PermissionService.require_project_access(user_id, role, project_id))

    @classmethod
    def get_team_members(cls, project_id: str, user_id: str, role: str) -> List[ProjectTeamMemberDTO]:
        project = PermissionService.require_project_access(user_id, role, project_id)
        return [
            ProjectTeamMemberDTO(
                **summary.model_dump(),
                avatar=summary.profilePicture or DEFAULT_AVATAR_URL.format(quote(summary.name)),
            )
            for summary in UserService.get_summaries(project.teamMembers).values()
        ]

    @classmethod
    def get_comments(cls, project_id: str) -> List[CommentDTO]:
        return cls._to_dto(cls._get_project(project_id)).comments

    @classmethod
    def create_project(cls, dto: CreateProjectDTO, actor_id: str, actor_role: str) -> ProjectDTO:
        """
        Create a project.

        A Manager must belong to a team, may only staff the project from that
        team and always becomes its project manager. An Admin may name any
        project manager or none.

        Raises:
            PermissionDeniedError: If a Manager has no team
            DomainValidationError: If a Manager adds members from outside their team
            UserNotFoundError: If an Admin names a project manager who does not exist
        """
        actor = UserService.get_user(actor_id)

        if actor_role == Role.MANAGER.value:
            if not actor.teamId:
                raise PermissionDeniedError(PermissionErrors.MANAGER_HAS_NO_TEAM)
            team_member_ids = {str(user.id) for user in UserRepository.list_by_team(actor.teamId)}
            if any(str(member) not in team_member_ids for member in dto.teamMembers):
                raise DomainValidationError(PermissionErrors.MEMBERS_OUTSIDE_TEAM, field="teamMembers")
            project_manager = actor.id
        else:
            project_manager = dto.projectManager or None
            if project_manager and not UserRepository.get_by_id(project_manager):
                raise UserNotFoundError()

        project_data = dto.model_dump(exclude_none=True, exclude={"projectManager"})
        project = ProjectRepository.create(ProjectModel(**project_data, projectManager=project_manager))
        logger.info(f"Project {project.id} created by {actor_id}")

        NotificationService.notify_project_created(project, actor)
        for member_id in project.teamMembers:
            NotificationService.notify_member_added(member_id, actor, project)

        return cls._to_dto(project)

    @staticmethod
    def _to_update_document(update_data: dict) -> dict:
        # projectManager is the only field that may be cleared.
        document = {key: value for key, value in update_data.items() if value is not None or key == "projectManager"}
        if "teamMembers" in document:
            document["teamMembers"] = ProjectRepository.to_object_ids(document["teamMembers"])
        if "projectManager" in document:
            manager_id = document["projectManager"]
            document["projectManager"] = ProjectRepository.to_object_id(manager_id) if manager_id else None
        return document

    @classmethod
    def update_project(cls, project_id: str, dto: UpdateProjectDTO, actor_id: str, actor_role: str) -> ProjectDTO:
        project = PermissionService.require_project_access(actor_id, actor_role, project_id)
        actor = UserService.get_user(actor_id)

        update_data = dto.model_dump(exclude_unset=True)
        if actor_role != Role.ADMIN.value:
            # Only an Admin reassigns the project manager.
            update_data.pop("projectManager", None)

        updated_project = ProjectRepository.update(project.id, cls._to_update_document(update_data))
        if updated_project is None:
            raise ProjectNotFoundError()
        logger.info(f"Project {project.id} updated by {actor_id}")

        NotificationService.notify_project_updated(updated_project, actor)

        if dto.teamMembers is not None:
            previous = {str(member) for member in project.teamMembers}
            current = {str(member) for member in updated_project.teamMembers}
            for member_id in updated_project.teamMembers:
                if str(member_id) not in previous:
                    NotificationService.notify_member_added(member_id, actor, updated_project)
            for member_id in project.teamMembers:
                if str(member_id) not in current:
                    NotificationService.notify_member_removed(member_id, actor, updated_project)

        return cls._to_dto(updated_project)

    @classmethod
    def delete_project(cls, project_id: str, actor_id: str, actor_role: str) -> None:
        project = PermissionService.require_project_access(actor_id, actor_role, project_id)
        actor = UserService.get_user(actor_id)

        NotificationService.notify_project_deleted(project, actor)
        if actor_role == Role.MANAGER.value:
            admin = UserRepository.get_first_admin()
            if admin:
                NotificationService.notify_project_deleted_by_manager(project, actor, admin)

        ProjectRepository.delete(project.id)
        for attachment in project.attachments:
            AttachmentService.discard(attachment)
        logger.info(f"Project {project.id} and its tasks deleted by {actor_id}")

    @classmethod
    def add_comment(cls, project_id: str, text: str, actor_id: str) -> CommentDTO:
        cls._get_project(project_id)
        actor = UserService.get_user(actor_id)

        comment = CommentModel(text=text, author=actor.id)
        updated_project = ProjectRepository.add_comment(project_id, comment)
        if updated_project is None:
            raise ProjectNotFoundError()

        NotificationService.notify_comment_added(comment, actor, updated_project)
        return CommentDTO.from_model(comment, UserService.get_summaries([actor.id]))

    @classmethod
    def delete_comment(cls, project_id: str, comment_id: str, actor_id: str, actor_role: str) -> None:
        project = PermissionService.require_project_access(actor_id, actor_role, project_id)
        comment = next((c for c in project.comments if str(c.id) == str(comment_id)), None)
        if comment is None:
            raise CommentNotFoundError()

        ProjectRepository.remove_comment(project.id, comment.id)
        NotificationService.notify_comment_deleted(comment, UserService.get_user(actor_id), project)

    @classmethod
    def upload_attachment(cls, project_id: str, uploaded_file, actor_id: str) -> AttachmentDTO:
        project = cls._get_project(project_id)
        actor = UserService.get_user(actor_id)

        attachment = AttachmentService.store(uploaded_file, f"projects/{project.id}", actor.id)
        updated_project = ProjectRepository.add_attachment(project.id, attachment)
        if updated_project is None:
            AttachmentService.discard(attachment)
            raise ProjectNotFoundError()

        NotificationService.notify_attachment_added(attachment, actor, updated_project)
        return AttachmentDTO.from_model(attachment, UserService.get_summaries([actor.id]))

    @classmethod
    def get_attachment(cls, project_id: str, attachment_id: str):
        return AttachmentService.find(cls._get_project(project_id).attachments, attachment_id)

    @classmethod
    def delete_attachment(cls, project_id: str, attachment_id: str, actor_id: str, actor_role: str) -> None:
        project = PermissionService.require_project_access(actor_id, actor_role, project_id)
        attachment = AttachmentService.find(project.attachments, attachment_id)

        ProjectRepository.remove_attachment(project.id, attachment.id)
        AttachmentService.discard(attachment)
        NotificationService.notify_attachment_deleted(attachment, UserService.get_user(actor_id), project)
