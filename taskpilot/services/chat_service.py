import logging
import math
from typing import Dict, List

from taskpilot.constants.chat import ChatType, SocketEvents
from taskpilot.constants.messages import PermissionErrors, ValidationErrors
from taskpilot.constants.role import Role
from taskpilot.dto.chat_dto import ChatDTO, LastMessageDTO, MessageDTO, ReadReceiptDTO, SendMessageDTO
from taskpilot.dto.responses.paginated_messages_response import PaginatedMessagesResponse
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.events.event_bus import ChatEventBus
from taskpilot.exceptions.not_found_exceptions import ChatNotFoundError, MessageNotFoundError, UserNotFoundError
from taskpilot.exceptions.permission_exceptions import PermissionDeniedError, TeamAccessDeniedError
from taskpilot.exceptions.validation_exceptions import DomainValidationError
from taskpilot.models.chat import ChatModel, LastMessageModel
from taskpilot.models.message import MessageModel, ReadReceiptModel
from taskpilot.repositories.chat_repository import ChatRepository
from taskpilot.repositories.message_repository import MessageRepository
from taskpilot.repositories.project_repository import ProjectRepository
from taskpilot.repositories.team_repository import TeamRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.services.notification_service import NotificationService
from taskpilot.services.user_service import UserService
from taskpilot.socket.presence import PresenceDirectory
from taskpilot.utils.chat_id_utils import generate_chat_id

logger = logging.getLogger(__name__)


class ChatService:
    """
    HTTP side of chat. Persistence of messages happens here; the socket
    handlers only relay. New messages are pushed to the chat's room through
    the event bus handed in by the view.
    """

    @classmethod
    def _to_chat_dtos(cls, chats: List[ChatModel]) -> List[ChatDTO]:
        user_ids = []
        for chat in chats:
            user_ids.extend(chat.participants)
        users = UserService.get_summaries(user_ids)

        return [
            ChatDTO(
                id=str(chat.id),
                chatId=chat.chatId,
                participants=[users[str(p)] for p in chat.participants if str(p) in users],
                chatType=chat.chatType,
                teamId=str(chat.teamId) if chat.teamId else None,
                lastMessage=(
                    LastMessageDTO(
                        text=chat.lastMessage.text,
                        sender=str(chat.lastMessage.sender),
                        timestamp=chat.lastMessage.timestamp,
                    )
                    if chat.lastMessage
                    else None
                ),
                isActive=chat.isActive,
                createdAt=chat.createdAt,
                updatedAt=chat.updatedAt,
            )
            for chat in chats
        ]

    @classmethod
    def _to_message_dtos(cls, messages: List[MessageModel]) -> List[MessageDTO]:
        users = UserService.get_summaries(message.sender for message in messages)
        return [
            MessageDTO(
                id=str(message.id),
                chatId=message.chatId,
                sender=users.get(str(message.sender)),
                content=message.content,
                messageType=message.messageType,
                fileUrl=message.fileUrl,
                fileName=message.fileName,
                readBy=[ReadReceiptDTO(user=str(receipt.user), readAt=receipt.readAt) for receipt in message.readBy],
                isDeleted=message.isDeleted,
                createdAt=message.createdAt,
                updatedAt=message.updatedAt,
            )
            for message in messages
        ]

    @classmethod
    def _get_participant_chat(cls, chat_id: str, user_id: str) -> ChatModel:
        chat = ChatRepository.get_by_chat_id(chat_id)
        if not chat:
            raise ChatNotFoundError()
        if not chat.has_participant(user_id):
            raise PermissionDeniedError(PermissionErrors.NOT_CHAT_PARTICIPANT)
        return chat

    @classmethod
    def get_user_chats(cls, user_id: str) -> List[ChatDTO]:
        return cls._to_chat_dtos(ChatRepository.list_for_user(user_id))

    @classmethod
    def create_or_get_chat(cls, user_id: str, participant_id: str, chat_type: str = ChatType.DIRECT.value) -> ChatDTO:
        """
        Return the active direct chat between the two users, creating it when
        none exists. The lookup and the insert are separate operations, so
        concurrent calls for the same pair may create two chats.
        """
        if str(participant_id) == str(user_id):
            raise DomainValidationError(ValidationErrors.SELF_CHAT, field="participantId")
        if not UserRepository.get_by_id(participant_id):
            raise UserNotFoundError()

        chat = ChatRepository.find_direct_chat(user_id, participant_id)
        if chat is None:
            chat = ChatRepository.create(
                ChatModel(chatId=generate_chat_id(), participants=[user_id, participant_id], chatType=chat_type)
            )
            logger.info(f"Chat {chat.chatId} created between {user_id} and {participant_id}")
        return cls._to_chat_dtos([chat])[0]

    @classmethod
    def create_team_chat(cls, user_id: str, team_id: str) -> ChatDTO:
        team = TeamRepository.get_by_id(team_id)
        if not team or str(team.manager) != str(user_id):
            raise TeamAccessDeniedError(team_id, PermissionErrors.TEAM_CHAT_MANAGER_ONLY)

        chat = ChatRepository.find_team_chat(team.id)
        if chat is None:
            chat = ChatRepository.create(
                ChatModel(
                    chatId=generate_chat_id(),
                    participants=team.members,
                    chatType=ChatType.TEAM,
                    teamId=team.id,
                )
            )
            logger.info(f"Team chat {chat.chatId} created for team {team.id}")
        return cls._to_chat_dtos([chat])[0]

    @classmethod
    def get_available_users(cls, user_id: str) -> List[UserSummaryDTO]:
        """
        Who the caller may start a chat with. Admins reach Managers; Managers
        reach Admins and their own team; Team Members reach everyone they share
        a project with, plus their team's manager.
        """
        user = UserService.get_user(user_id)

        if user.role == Role.ADMIN.value:
            candidates = [u for u in UserRepository.list_by_role([Role.MANAGER.value]) if str(u.id) != str(user_id)]
        elif user.role == Role.MANAGER.value:
            candidates = UserRepository.list_by_role([Role.ADMIN.value])
            if user.teamId:
                candidates.extend(u for u in UserRepository.list_by_team(user.teamId) if str(u.id) != str(user_id))
        else:
            teammate_ids = []
            for project in ProjectRepository.list_for_member(user_id):
                teammate_ids.extend(project.teamMembers)
            if user.teamId:
                team = TeamRepository.get_by_id(user.teamId)
                if team:
                    teammate_ids.append(team.manager)
            candidates = UserRepository.get_by_ids(
                list({str(member) for member in teammate_ids if str(member) != str(user_id)})
            )

        seen = set()
        available = []
        for candidate in candidates:
            if str(candidate.id) not in seen:
                seen.add(str(candidate.id))
                available.append(UserSummaryDTO.from_model(candidate))
        return available

    @classmethod
    def get_online_users(cls, presence: PresenceDirectory) -> List[dict]:
        return [entry["user"] for entry in presence.all()]

    @classmethod
    def mark_chat_as_read(cls, chat_id: str, user_id: str) -> int:
        cls._get_participant_chat(chat_id, user_id)
        return MessageRepository.mark_chat_read(chat_id, user_id)

    @classmethod
    def delete_chat(cls, chat_id: str, user_id: str) -> None:
        cls._get_participant_chat(chat_id, user_id)
        ChatRepository.deactivate(chat_id)
        deleted = MessageRepository.delete_by_chat(chat_id)
        logger.info(f"Chat {chat_id} deactivated by {user_id}; {deleted} messages deleted")

    @classmethod
    def send_message(cls, dto: SendMessageDTO, user_id: str, event_bus: ChatEventBus) -> MessageDTO:
        chat = cls._get_participant_chat(dto.chatId, user_id)
        sender = UserService.get_user(user_id)

        # The sender has read their own message.
        message = MessageRepository.create(
            MessageModel(
                **dto.model_dump(exclude_none=True),
                sender=sender.id,
                readBy=[ReadReceiptModel(user=sender.id)],
            )
        )
        ChatRepository.update_last_message(chat.chatId, LastMessageModel(text=dto.content, sender=sender.id))

        NotificationService.notify_new_message(message, sender, chat, chat.participants)

        message_dto = cls._to_message_dtos([message])[0]
        event_bus.emit_to_room(
            SocketEvents.NEW_MESSAGE,
            {"chatId": chat.chatId, "message": message_dto.model_dump(mode="json")},
            room=chat.chatId,
        )
        return message_dto

    @classmethod
    def get_chat_messages(cls, chat_id: str, user_id: str, page: int, limit: int) -> PaginatedMessagesResponse:
        cls._get_participant_chat(chat_id, user_id)
        messages, total = MessageRepository.list_page(chat_id, page, limit)
        return PaginatedMessagesResponse(
            messages=cls._to_message_dtos(messages),
            totalPages=math.ceil(total / limit),
            currentPage=page,
            totalMessages=total,
        )

    @classmethod
    def mark_message_as_read(cls, message_id: str, user_id: str) -> None:
        message = MessageRepository.get_by_id(message_id)
        if not message:
            raise MessageNotFoundError()
        cls._get_participant_chat(message.chatId, user_id)
        # None means the receipt already exists.
        MessageRepository.mark_read(message_id, user_id)

    @classmethod
    def delete_message(cls, message_id: str, user_id: str) -> None:
        message = MessageRepository.get_by_id(message_id)
        if not message:
            raise MessageNotFoundError()
        if str(message.sender) != str(user_id):
            raise PermissionDeniedError(PermissionErrors.NOT_MESSAGE_SENDER)
        MessageRepository.soft_delete(message.id)

    @classmethod
    def get_unread_counts(cls, user_id: str) -> Dict[str, int]:
        chat_ids = ChatRepository.list_chat_ids_for_user(user_id)
        return MessageRepository.unread_counts(chat_ids, user_id)
