from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from taskpilot.dto.user_dto import UserSummaryDTO


class LastMessageDTO(BaseModel):
    text: str
    sender: Optional[str] = None
    timestamp: datetime


class ChatDTO(BaseModel):
    id: str
    chatId: str
    participants: List[UserSummaryDTO] = []
    chatType: str
    teamId: Optional[str] = None
    lastMessage: Optional[LastMessageDTO] = None
    isActive: bool
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class ReadReceiptDTO(BaseModel):
    user: str
    readAt: datetime


class MessageDTO(BaseModel):
    id: str
    chatId: str
    sender: Optional[UserSummaryDTO] = None
    content: str
    messageType: str
    fileUrl: Optional[str] = None
    fileName: Optional[str] = None
    readBy: List[ReadReceiptDTO] = []
    isDeleted: bool
    createdAt: datetime
    updatedAt: Optional[datetime] = None


class SendMessageDTO(BaseModel):
    chatId: str
    content: str
    messageType: str = "text"
    fileUrl: Optional[str] = None
    fileName: Optional[str] = None
