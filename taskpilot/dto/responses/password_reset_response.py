from typing import Optional

from pydantic import BaseModel


class ForgotPasswordResponse(BaseModel):
    """
    When email delivery is disabled the reset link is handed back directly
    so the flow stays usable in development.
    """

    message: str
    resetUrl: Optional[str] = None
    note: Optional[str] = None
    token: Optional[str] = None
