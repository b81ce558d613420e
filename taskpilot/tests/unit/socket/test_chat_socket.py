from unittest import TestCase
from unittest.mock import MagicMock, patch

from bson import ObjectId
from socketio.exceptions import ConnectionRefusedError

from taskpilot.constants.chat import SocketEvents
from taskpilot.constants.role import Role
from taskpilot.models.chat import ChatModel
from taskpilot.socket.chat_socket import ChatSocket
from taskpilot.socket.presence import InMemoryPresenceDirectory
from taskpilot.tests.fixtures.user import build_user
from taskpilot.utils.jwt_utils import generate_access_token


class ChatSocketTestCase(TestCase):
    def setUp(self):
        self.server = MagicMock()
        self.sessions = {}
        self.server.save_session.side_effect = lambda sid, session: self.sessions.__setitem__(sid, session)
        self.server.get_session.side_effect = lambda sid: self.sessions.get(sid, {})
        self.presence = InMemoryPresenceDirectory()
        self.socket = ChatSocket(self.server, self.presence)
        self.user = build_user(Role.TEAM_MEMBER)

    def connect(self, sid: str):
        token = generate_access_token(str(self.user.id), self.user.role)
        with patch("taskpilot.socket.chat_socket.UserRepository.get_by_id", return_value=self.user):
            self.socket.on_connect(sid, {}, {"token": token})


class ConnectTests(ChatSocketTestCase):
    def test_register_binds_every_handler(self):
        self.socket.register()

        events = {call.args[0] for call in self.server.on.call_args_list}
        self.assertEqual(
            events,
            {
                "connect",
                "disconnect",
                SocketEvents.JOIN_CHAT,
                SocketEvents.LEAVE_CHAT,
                SocketEvents.SEND_MESSAGE,
                SocketEvents.TYPING_START,
                SocketEvents.TYPING_STOP,
                SocketEvents.MESSAGE_READ,
            },
        )

    def test_connect_registers_presence_and_broadcasts(self):
        self.connect("sid-1")

        user_id = str(self.user.id)
        self.assertEqual(self.presence.lookup(user_id)["socketId"], "sid-1")
        self.server.enter_room.assert_called_once_with("sid-1", user_id)
        event, payload = self.server.emit.call_args[0]
        self.assertEqual(event, SocketEvents.USER_ONLINE)
        self.assertEqual(payload["userId"], user_id)
        self.assertEqual(payload["user"]["name"], self.user.name)

    def test_connect_without_token_is_refused(self):
        with self.assertRaises(ConnectionRefusedError):
            self.socket.on_connect("sid-1", {}, None)
        self.assertEqual(self.presence.all(), [])

    def test_connect_with_bad_token_is_refused(self):
        with self.assertRaises(ConnectionRefusedError):
            self.socket.on_connect("sid-1", {}, {"token": "garbage"})

    @patch("taskpilot.socket.chat_socket.UserRepository.get_by_id", return_value=None)
    def test_connect_for_deleted_user_is_refused(self, mock_get_by_id):
        token = generate_access_token(str(ObjectId()), "Team Member")

        with self.assertRaises(ConnectionRefusedError):
            self.socket.on_connect("sid-1", {}, {"token": token})


class DisconnectTests(ChatSocketTestCase):
    def test_disconnect_removes_presence_and_broadcasts(self):
        self.connect("sid-1")

        self.socket.on_disconnect("sid-1")

        self.assertFalse(self.presence.is_online(str(self.user.id)))
        self.server.emit.assert_called_with(SocketEvents.USER_OFFLINE, {"userId": str(self.user.id)})

    def test_stale_socket_does_not_evict_newer_connection(self):
        self.connect("sid-1")
        self.connect("sid-2")

        self.socket.on_disconnect("sid-1")

        self.assertEqual(self.presence.lookup(str(self.user.id))["socketId"], "sid-2")
        self.assertNotEqual(self.server.emit.call_args[0][0], SocketEvents.USER_OFFLINE)

    def test_unauthenticated_disconnect_is_ignored(self):
        self.socket.on_disconnect("sid-unknown")

        self.server.emit.assert_not_called()


class RoomTests(ChatSocketTestCase):
    def setUp(self):
        super().setUp()
        self.connect("sid-1")
        self.server.reset_mock()
        self.server.rooms.return_value = ["sid-1", str(self.user.id), "chat_1_abc"]

    @patch("taskpilot.socket.chat_socket.ChatRepository.get_by_chat_id")
    def test_participant_joins_chat_room(self, mock_get_by_chat_id):
        mock_get_by_chat_id.return_value = ChatModel(chatId="chat_1_abc", participants=[self.user.id, ObjectId()])

        self.socket.on_join_chat("sid-1", "chat_1_abc")

        self.server.enter_room.assert_called_once_with("sid-1", "chat_1_abc")

    @patch("taskpilot.socket.chat_socket.ChatRepository.get_by_chat_id")
    def test_non_participant_is_not_joined(self, mock_get_by_chat_id):
        mock_get_by_chat_id.return_value = ChatModel(chatId="chat_1_abc", participants=[ObjectId()])

        self.socket.on_join_chat("sid-1", "chat_1_abc")

        self.server.enter_room.assert_not_called()

    def test_send_message_relays_to_room_except_sender(self):
        self.socket.on_send_message("sid-1", {"chatId": "chat_1_abc", "message": {"content": "hi"}})

        event, payload = self.server.emit.call_args[0]
        self.assertEqual(event, SocketEvents.NEW_MESSAGE)
        self.assertEqual(payload["message"], {"content": "hi"})
        self.assertEqual(payload["sender"]["id"], str(self.user.id))
        self.assertEqual(self.server.emit.call_args[1], {"room": "chat_1_abc", "skip_sid": "sid-1"})

    def test_typing_events(self):
        self.socket.on_typing_start("sid-1", {"chatId": "chat_1_abc"})
        self.assertEqual(self.server.emit.call_args[0][0], SocketEvents.USER_TYPING)
        self.assertEqual(self.server.emit.call_args[0][1]["userName"], self.user.name)

        self.socket.on_typing_stop("sid-1", {"chatId": "chat_1_abc"})
        self.assertEqual(self.server.emit.call_args[0][0], SocketEvents.USER_STOP_TYPING)

    def test_message_read_broadcasts_receipt(self):
        self.socket.on_message_read("sid-1", {"chatId": "chat_1_abc", "messageId": "m1"})

        event, payload = self.server.emit.call_args[0]
        self.assertEqual(event, SocketEvents.MESSAGE_READ_RECEIPT)
        self.assertEqual(payload["readBy"], str(self.user.id))
        self.assertEqual(payload["messageId"], "m1")

    def test_relays_into_unjoined_chat_are_dropped(self):
        payload = {"chatId": "chat_2_other", "message": {"content": "spam"}, "messageId": "m1"}

        self.socket.on_send_message("sid-1", payload)
        self.socket.on_typing_start("sid-1", payload)
        self.socket.on_typing_stop("sid-1", payload)
        self.socket.on_message_read("sid-1", payload)

        self.server.emit.assert_not_called()

    def test_personal_room_is_not_a_chat(self):
        self.socket.on_send_message("sid-1", {"chatId": str(self.user.id), "message": {"content": "x"}})

        self.server.emit.assert_not_called()
