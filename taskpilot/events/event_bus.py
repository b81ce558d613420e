import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

logger = logging.getLogger(__name__)


class ChatEventBus(ABC):
    """
    Outbound real-time channel used by the HTTP layer. Views receive an
    instance through `as_view(event_bus=...)` so they never reach for a
    process global server object.
    """

    @abstractmethod
    def emit_to_room(self, event: str, data: Any, room: str, skip_sid: Optional[str] = None) -> None:
        """Emit `event` to every socket joined to `room`."""
        pass

    def emit_to_user(self, user_id: str, event: str, data: Any) -> None:
        """Every connected socket joins a personal room named by its user id."""
        self.emit_to_room(event, data, room=str(user_id))


class SocketIOEventBus(ChatEventBus):
    def __init__(self, server):
        self.server = server

    def emit_to_room(self, event: str, data: Any, room: str, skip_sid: Optional[str] = None) -> None:
        try:
            self.server.emit(event, data, room=room, skip_sid=skip_sid)
        except Exception as e:
            logger.warning(f"Failed to emit '{event}' to room {room}: {str(e)}")


class NullEventBus(ChatEventBus):
    """Drops every event. Default for views built without a socket server, e.g. in tests."""

    def emit_to_room(self, event: str, data: Any, room: str, skip_sid: Optional[str] = None) -> None:
        logger.debug(f"No socket server attached; dropping '{event}' for room {room}")
