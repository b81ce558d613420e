from pydantic import BaseModel
from datetime import datetime
from typing import Dict, Optional

from taskpilot.dto.user_dto import UserSummaryDTO
from taskpilot.models.common.embedded import AttachmentModel, CommentModel


class CommentDTO(BaseModel):
    id: str
    text: str
    author: Optional[UserSummaryDTO] = None
    createdAt: datetime

    @classmethod
    def from_model(cls, comment: CommentModel, users: Dict[str, UserSummaryDTO]) -> "CommentDTO":
        return cls(
            id=str(comment.id),
            text=comment.text,
            author=users.get(str(comment.author)),
            createdAt=comment.createdAt,
        )


class AttachmentDTO(BaseModel):
    id: str
    filename: str
    path: str
    uploadedAt: datetime
    uploadedBy: Optional[UserSummaryDTO] = None

    @classmethod
    def from_model(cls, attachment: AttachmentModel, users: Dict[str, UserSummaryDTO]) -> "AttachmentDTO":
        return cls(
            id=str(attachment.id),
            filename=attachment.filename,
            path=attachment.path,
            uploadedAt=attachment.uploadedAt,
            uploadedBy=users.get(str(attachment.uploadedBy)) if attachment.uploadedBy else None,
        )
