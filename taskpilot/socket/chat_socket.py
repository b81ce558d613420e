import logging
from datetime import datetime, timezone

from socketio.exceptions import ConnectionRefusedError

from taskpilot.constants.chat import SocketEvents
from taskpilot.constants.messages import AuthErrorMessages
from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.exceptions.auth_exceptions import BaseAuthException
from taskpilot.repositories.chat_repository import ChatRepository
from taskpilot.repositories.user_repository import UserRepository
from taskpilot.socket.presence import PresenceDirectory
from taskpilot.utils.jwt_utils import validate_access_token

logger = logging.getLogger(__name__)


class ChatSocket:
    """
    Socket.IO handlers for chat presence and relay. Messages sent over the
    socket are relayed only; persistence goes through `POST /api/chats/messages`.
    """

    def __init__(self, server, presence: PresenceDirectory):
        self.server = server
        self.presence = presence

    def register(self) -> None:
        self.server.on("connect", self.on_connect)
        self.server.on("disconnect", self.on_disconnect)
        self.server.on(SocketEvents.JOIN_CHAT, self.on_join_chat)
        self.server.on(SocketEvents.LEAVE_CHAT, self.on_leave_chat)
        self.server.on(SocketEvents.SEND_MESSAGE, self.on_send_message)
        self.server.on(SocketEvents.TYPING_START, self.on_typing_start)
        self.server.on(SocketEvents.TYPING_STOP, self.on_typing_stop)
        self.server.on(SocketEvents.MESSAGE_READ, self.on_message_read)

    def on_connect(self, sid, environ, auth=None):
        token = (auth or {}).get("token")
        try:
            payload = validate_access_token(token)
        except BaseAuthException:
            raise ConnectionRefusedError(AuthErrorMessages.SOCKET_AUTHENTICATION_ERROR)

        user = UserRepository.get_by_id(payload["id"])
        if not user:
            raise ConnectionRefusedError(AuthErrorMessages.USER_NOT_FOUND)

        user_id = str(user.id)
        user_data = UserSummaryDTO.from_model(user).model_dump(mode="json")
        self.server.save_session(sid, {"userId": user_id, "user": user_data})
        self.presence.add(user_id, sid, user_data)
        self.server.enter_room(sid, user_id)
        self.server.emit(SocketEvents.USER_ONLINE, {"userId": user_id, "user": user_data})
        logger.info(f"User {user_id} connected on socket {sid}")

    def on_disconnect(self, sid, *args):
        session = self.server.get_session(sid)
        user_id = session.get("userId")
        if not user_id:
            return
        self.presence.remove(user_id, sid)
        if self.presence.is_online(user_id):
            # A newer socket for the same user is still connected.
            return
        self.server.emit(SocketEvents.USER_OFFLINE, {"userId": user_id})
        logger.info(f"User {user_id} disconnected from socket {sid}")

    def on_join_chat(self, sid, chat_id):
        session = self.server.get_session(sid)
        chat = ChatRepository.get_by_chat_id(chat_id)
        if not chat or not chat.has_participant(session["userId"]):
            logger.warning(f"User {session['userId']} tried to join chat {chat_id} without being a participant")
            return
        self.server.enter_room(sid, chat_id)

    def on_leave_chat(self, sid, chat_id):
        self.server.leave_room(sid, chat_id)

    def _joined_chat(self, sid, session, data):
        """The `chatId` from the payload, or None unless this socket joined that chat room."""
        chat_id = data.get("chatId")
        joined = set(self.server.rooms(sid)) - {sid, session.get("userId")}
        if chat_id not in joined:
            logger.warning(f"User {session.get('userId')} tried to relay into chat {chat_id} without joining it")
            return None
        return chat_id

    def on_send_message(self, sid, data):
        session = self.server.get_session(sid)
        chat_id = self._joined_chat(sid, session, data)
        if chat_id is None:
            return
        self.server.emit(
            SocketEvents.NEW_MESSAGE,
            {"chatId": chat_id, "message": data.get("message"), "sender": session["user"]},
            room=chat_id,
            skip_sid=sid,
        )

    def on_typing_start(self, sid, data):
        session = self.server.get_session(sid)
        chat_id = self._joined_chat(sid, session, data)
        if chat_id is None:
            return
        self.server.emit(
            SocketEvents.USER_TYPING,
            {"chatId": chat_id, "userId": session["userId"], "userName": session["user"]["name"]},
            room=chat_id,
            skip_sid=sid,
        )

    def on_typing_stop(self, sid, data):
        session = self.server.get_session(sid)
        chat_id = self._joined_chat(sid, session, data)
        if chat_id is None:
            return
        self.server.emit(
            SocketEvents.USER_STOP_TYPING,
            {"chatId": chat_id, "userId": session["userId"]},
            room=chat_id,
            skip_sid=sid,
        )

    def on_message_read(self, sid, data):
        session = self.server.get_session(sid)
        chat_id = self._joined_chat(sid, session, data)
        if chat_id is None:
            return
        self.server.emit(
            SocketEvents.MESSAGE_READ_RECEIPT,
            {
                "chatId": chat_id,
                "messageId": data.get("messageId"),
                "readBy": session["userId"],
                "readAt": datetime.now(timezone.utc).isoformat(),
            },
            room=chat_id,
            skip_sid=sid,
        )
