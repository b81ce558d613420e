from pydantic import BaseModel, Field
from typing import ClassVar, List
from datetime import datetime

from taskpilot.constants.chat import ChatType
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class LastMessageModel(BaseModel):
    text: str
    sender: PyObjectId
    timestamp: datetime = Field(default_factory=utc_now)


class ChatModel(Document):
    collection_name: ClassVar[str] = "chats"

    chatId: str
    participants: List[PyObjectId]
    chatType: ChatType = ChatType.DIRECT
    teamId: PyObjectId | None = None
    lastMessage: LastMessageModel | None = None
    isActive: bool = True
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)

    def has_participant(self, user_id) -> bool:
        return any(str(participant) == str(user_id) for participant in self.participants)
