from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel


class ApiErrorSource(Enum):
    PARAMETER = "parameter"
    PATH = "path"
    HEADER = "header"


class ApiErrorDetail(BaseModel):
    source: Optional[Dict[ApiErrorSource, str]] = None
    title: Optional[str] = None
    detail: Optional[str] = None


class ApiErrorResponse(BaseModel):
    statusCode: int
    message: str
    errors: List[ApiErrorDetail] = []
