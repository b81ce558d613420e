from typing import List

from pydantic import BaseModel

from taskpilot.dto.chat_dto import MessageDTO


class PaginatedMessagesResponse(BaseModel):
    """A page of chat history, oldest first within the page."""

    messages: List[MessageDTO]
    totalPages: int
    currentPage: int
    totalMessages: int
