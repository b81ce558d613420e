from pydantic import BaseModel

from taskpilot.dto.user_dto import UserDTO, UserSummaryDTO


class LoginResponse(BaseModel):
    """Response model for the login endpoint.

    Attributes:
        token: Bearer token carrying the user's id and role
        user: Minimal identity of the logged in user
    """

    token: str
    user: UserSummaryDTO


class RegisterResponse(BaseModel):
    message: str
    user: UserDTO
