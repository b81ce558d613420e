from enum import Enum


class ChatType(Enum):
    DIRECT = "direct"
    TEAM = "team"
    ADMIN_MANAGER = "admin-manager"


class MessageType(Enum):
    TEXT = "text"
    FILE = "file"
    IMAGE = "image"


CHAT_ID_PREFIX = "chat"
CHAT_ID_RANDOM_LENGTH = 9


class SocketEvents:
    # client -> server
    JOIN_CHAT = "join_chat"
    LEAVE_CHAT = "leave_chat"
    SEND_MESSAGE = "send_message"
    TYPING_START = "typing_start"
    TYPING_STOP = "typing_stop"
    MESSAGE_READ = "message_read"

    # server -> client
    NEW_MESSAGE = "new_message"
    USER_TYPING = "user_typing"
    USER_STOP_TYPING = "user_stop_typing"
    MESSAGE_READ_RECEIPT = "message_read_receipt"
    USER_ONLINE = "user_online"
    USER_OFFLINE = "user_offline"
