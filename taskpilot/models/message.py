from pydantic import BaseModel, Field
from typing import ClassVar, List
from datetime import datetime

from taskpilot.constants.chat import MessageType
from taskpilot.models.common.document import Document, utc_now
from taskpilot.models.common.pyobjectid import PyObjectId


class ReadReceiptModel(BaseModel):
    user: PyObjectId
    readAt: datetime = Field(default_factory=utc_now)


class MessageModel(Document):
    """
    Chat message. `chatId` is the chat's generated string id, not its _id.
    """

    collection_name: ClassVar[str] = "messages"

    chatId: str
    sender: PyObjectId
    content: str
    messageType: MessageType = MessageType.TEXT
    fileUrl: str | None = None
    fileName: str | None = None
    readBy: List[ReadReceiptModel] = []
    isDeleted: bool = False
    createdAt: datetime = Field(default_factory=utc_now)
    updatedAt: datetime = Field(default_factory=utc_now)
