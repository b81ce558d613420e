from pydantic import BaseModel
from datetime import datetime
from typing import List, Optional

from taskpilot.models.user import UserModel


class UserSummaryDTO(BaseModel):
    """Expanded form of a user reference, as embedded in other resources."""

    id: str
    name: str
    email: str
    role: str
    profilePicture: Optional[str] = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserSummaryDTO":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            profilePicture=user.profilePicture,
        )


class UserDTO(BaseModel):
    id: str
    name: str
    email: str
    role: str
    bio: Optional[str] = None
    dateOfBirth: Optional[datetime] = None
    position: Optional[str] = None
    gender: Optional[str] = None
    profilePicture: Optional[str] = None
    teamId: Optional[str] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: UserModel) -> "UserDTO":
        return cls(
            id=str(user.id),
            name=user.name,
            email=user.email,
            role=user.role,
            bio=user.bio,
            dateOfBirth=user.dateOfBirth,
            position=user.position,
            gender=user.gender,
            profilePicture=user.profilePicture,
            teamId=str(user.teamId) if user.teamId else None,
            createdAt=user.createdAt,
            updatedAt=user.updatedAt,
        )


class UpdateProfileDTO(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    dateOfBirth: Optional[datetime] = None
    position: Optional[str] = None
    gender: Optional[str] = None
    profilePicture: Optional[str] = None


class RegisterUserDTO(BaseModel):
    name: str
    email: str
    password: str
    teamId: Optional[str] = None
    bio: Optional[str] = None
    position: Optional[str] = None
    gender: Optional[str] = None
    dateOfBirth: Optional[datetime] = None


class UsersDTO(BaseModel):
    users: List[UserDTO]
    total: int
