import socketio
from django.conf import settings

from taskpilot.events.event_bus import SocketIOEventBus
from taskpilot.socket.chat_socket import ChatSocket
from taskpilot.socket.presence import InMemoryPresenceDirectory

_server = None
_event_bus = None
_presence = None


def get_socket_server() -> socketio.Server:
    """Build the Socket.IO server and its chat handlers on first use."""
    global _server, _event_bus, _presence
    if _server is None:
        cors_origins = "*" if getattr(settings, "CORS_ALLOW_ALL_ORIGINS", False) else settings.CORS_ALLOWED_ORIGINS
        _server = socketio.Server(async_mode="threading", cors_allowed_origins=cors_origins)
        _presence = InMemoryPresenceDirectory()
        ChatSocket(_server, _presence).register()
        _event_bus = SocketIOEventBus(_server)
    return _server


def get_event_bus() -> SocketIOEventBus:
    get_socket_server()
    return _event_bus


def get_presence_directory() -> InMemoryPresenceDirectory:
    get_socket_server()
    return _presence
