from unittest import TestCase
from unittest.mock import MagicMock

from taskpilot.events.event_bus import NullEventBus, SocketIOEventBus


class SocketIOEventBusTests(TestCase):
    def test_emit_to_room(self):
        server = MagicMock()

        SocketIOEventBus(server).emit_to_room("new_message", {"chatId": "c1"}, room="c1")

        server.emit.assert_called_once_with("new_message", {"chatId": "c1"}, room="c1", skip_sid=None)

    def test_emit_to_user_uses_personal_room(self):
        server = MagicMock()

        SocketIOEventBus(server).emit_to_user("u1", "user_online", {"userId": "u1"})

        server.emit.assert_called_once_with("user_online", {"userId": "u1"}, room="u1", skip_sid=None)

    def test_emit_failure_is_logged_not_raised(self):
        server = MagicMock()
        server.emit.side_effect = RuntimeError("transport closed")

        with self.assertLogs("taskpilot.events.event_bus", level="WARNING"):
            SocketIOEventBus(server).emit_to_room("new_message", {}, room="c1")

    def test_null_bus_drops_events(self):
        NullEventBus().emit_to_room("new_message", {}, room="c1")
