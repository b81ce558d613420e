from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from taskpilot.constants.messages import AppMessages
from taskpilot.dto.chat_dto import ChatDTO, MessageDTO, SendMessageDTO
from taskpilot.dto.responses.message_response import MessageResponse
from taskpilot.dto.responses.paginated_messages_response import PaginatedMessagesResponse
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.events.event_bus import ChatEventBus, NullEventBus
from taskpilot.serializers.create_chat_serializer import CreateChatSerializer, CreateTeamChatSerializer
from taskpilot.serializers.get_messages_serializer import GetMessagesQueryParamsSerializer
from taskpilot.serializers.send_message_serializer import SendMessageSerializer
from taskpilot.services.chat_service import ChatService
from taskpilot.socket.presence import InMemoryPresenceDirectory, PresenceDirectory

CHAT_ID_PARAMETER = OpenApiParameter(
    name="chat_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Public chat identifier, e.g. chat_1700000000000_ab12cd34e",
)
MESSAGE_ID_PARAMETER = OpenApiParameter(
    name="message_id",
    type=OpenApiTypes.STR,
    location=OpenApiParameter.PATH,
    description="Unique identifier of the message",
)


def _message_response(message: str) -> Response:
    return Response(data=MessageResponse(message=message).model_dump(mode="json"), status=status.HTTP_200_OK)


class UserChatsView(APIView):
    @extend_schema(
        operation_id="get_user_chats",
        summary="Active chats of the caller",
        description="Most recently active first.",
        tags=["chats"],
        responses={200: OpenApiResponse(response=ChatDTO, description="Chats retrieved successfully")},
    )
    def get(self, request: Request):
        chats = ChatService.get_user_chats(request.user_id)
        return Response(data=[chat.model_dump(mode="json") for chat in chats], status=status.HTTP_200_OK)


class CreateChatView(APIView):
    @extend_schema(
        operation_id="create_chat",
        summary="Open a direct chat",
        description="Returns the existing active direct chat with the participant, or creates one.",
        tags=["chats"],
        request=CreateChatSerializer,
        responses={
            200: OpenApiResponse(response=ChatDTO, description="Chat found or created"),
            400: OpenApiResponse(description="Chat with yourself"),
            404: OpenApiResponse(description="Participant not found"),
        },
    )
    def post(self, request: Request):
        serializer = CreateChatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.create_or_get_chat(
            request.user_id, serializer.validated_data["participantId"], serializer.validated_data["chatType"]
        )
        return Response(data=chat.model_dump(mode="json"), status=status.HTTP_200_OK)


class CreateTeamChatView(APIView):
    @extend_schema(
        operation_id="create_team_chat",
        summary="Open the team chat",
        description="Only the team's manager may open it. Every team member is a participant.",
        tags=["chats"],
        request=CreateTeamChatSerializer,
        responses={
            200: OpenApiResponse(response=ChatDTO, description="Chat found or created"),
            403: OpenApiResponse(description="Caller does not manage this team"),
        },
    )
    def post(self, request: Request):
        serializer = CreateTeamChatSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        chat = ChatService.create_team_chat(request.user_id, serializer.validated_data["teamId"])
        return Response(data=chat.model_dump(mode="json"), status=status.HTTP_200_OK)


class ChatAvailableUsersView(APIView):
    @extend_schema(
        operation_id="get_chat_available_users",
        summary="Users the caller may chat with",
        description=(
            "Admins may reach Managers. Managers may reach Admins and their own team. "
            "Team Members may reach project teammates and their team's manager."
        ),
        tags=["chats"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Reachable users")},
    )
    def get(self, request: Request):
        users = ChatService.get_available_users(request.user_id)
        return Response(data=[user.model_dump(mode="json") for user in users], status=status.HTTP_200_OK)


class OnlineUsersView(APIView):
    presence: PresenceDirectory = InMemoryPresenceDirectory()

    @extend_schema(
        operation_id="get_online_users",
        summary="Users with an open socket connection",
        tags=["chats"],
        responses={200: OpenApiResponse(response=UserSummaryDTO, description="Online users")},
    )
    def get(self, request: Request):
        return Response(data=ChatService.get_online_users(self.presence), status=status.HTTP_200_OK)


class ChatReadView(APIView):
    @extend_schema(
        operation_id="mark_chat_as_read",
        summary="Mark every message in a chat as read",
        description="Idempotent; messages already read by the caller are left untouched.",
        tags=["chats"],
        parameters=[CHAT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Messages marked as read"),
            403: OpenApiResponse(description="Caller is not a participant"),
            404: OpenApiResponse(description="Chat not found"),
        },
    )
    def put(self, request: Request, chat_id: str):
        ChatService.mark_chat_as_read(chat_id, request.user_id)
        return _message_response(AppMessages.CHAT_MARKED_READ)


class ChatDetailView(APIView):
    @extend_schema(
        operation_id="delete_chat",
        summary="Delete a chat",
        description="Deactivates the chat and permanently deletes its messages.",
        tags=["chats"],
        parameters=[CHAT_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Chat deleted"),
            403: OpenApiResponse(description="Caller is not a participant"),
            404: OpenApiResponse(description="Chat not found"),
        },
    )
    def delete(self, request: Request, chat_id: str):
        ChatService.delete_chat(chat_id, request.user_id)
        return _message_response(AppMessages.CHAT_DELETED)


class SendMessageView(APIView):
    event_bus: ChatEventBus = NullEventBus()

    @extend_schema(
        operation_id="send_message",
        summary="Send a chat message",
        description="Persists the message and pushes `new_message` to everyone in the chat room.",
        tags=["chats"],
        request=SendMessageSerializer,
        responses={
            201: OpenApiResponse(response=MessageDTO, description="Message sent"),
            403: OpenApiResponse(description="Caller is not a participant"),
            404: OpenApiResponse(description="Chat not found"),
        },
    )
    def post(self, request: Request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = ChatService.send_message(SendMessageDTO(**serializer.validated_data), request.user_id, self.event_bus)
        return Response(data=message.model_dump(mode="json"), status=status.HTTP_201_CREATED)


class ChatMessagesView(APIView):
    @extend_schema(
        operation_id="get_chat_messages",
        summary="A page of chat history",
        description="Page 1 holds the newest messages; each page is returned oldest first.",
        tags=["chats"],
        parameters=[
            CHAT_ID_PARAMETER,
            OpenApiParameter(
                name="page",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Page number (default: 1)",
            ),
            OpenApiParameter(
                name="limit",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                description="Messages per page (default: 50)",
            ),
        ],
        responses={
            200: OpenApiResponse(response=PaginatedMessagesResponse, description="Messages retrieved successfully"),
            400: OpenApiResponse(description="Invalid page or limit"),
            403: OpenApiResponse(description="Caller is not a participant"),
            404: OpenApiResponse(description="Chat not found"),
        },
    )
    def get(self, request: Request, chat_id: str):
        query = GetMessagesQueryParamsSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        response = ChatService.get_chat_messages(
            chat_id, request.user_id, query.validated_data["page"], query.validated_data["limit"]
        )
        return Response(data=response.model_dump(mode="json"), status=status.HTTP_200_OK)


class MessageReadView(APIView):
    @extend_schema(
        operation_id="mark_message_as_read",
        summary="Mark one message as read",
        tags=["chats"],
        parameters=[MESSAGE_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Message marked as read"),
            404: OpenApiResponse(description="Message not found"),
        },
    )
    def put(self, request: Request, message_id: str):
        ChatService.mark_message_as_read(message_id, request.user_id)
        return _message_response(AppMessages.MESSAGE_MARKED_READ)


class MessageDetailView(APIView):
    @extend_schema(
        operation_id="delete_message",
        summary="Delete one of the caller's messages",
        description="The message is kept with its content replaced.",
        tags=["chats"],
        parameters=[MESSAGE_ID_PARAMETER],
        responses={
            200: OpenApiResponse(response=MessageResponse, description="Message deleted"),
            403: OpenApiResponse(description="Caller did not send this message"),
            404: OpenApiResponse(description="Message not found"),
        },
    )
    def delete(self, request: Request, message_id: str):
        ChatService.delete_message(message_id, request.user_id)
        return _message_response(AppMessages.MESSAGE_DELETED)


class ChatUnreadCountView(APIView):
    @extend_schema(
        operation_id="get_chat_unread_counts",
        summary="Unread messages per chat",
        description="Maps chatId to the number of messages the caller has not read. Chats with none are omitted.",
        tags=["chats"],
        responses={200: OpenApiResponse(description="chatId to unread count")},
    )
    def get(self, request: Request):
        return Response(data=ChatService.get_unread_counts(request.user_id), status=status.HTTP_200_OK)
