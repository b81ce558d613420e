from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement for operations that return no resource."""

    message: str
