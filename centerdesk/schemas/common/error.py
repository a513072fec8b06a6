from typing import Dict, Optional
from pydantic import BaseModel

from .notice import Notice


class ErrorResponse(BaseModel):
    success: bool = False
    error_code: str
    message: str
    status_code: int
    details: Optional[Dict[str, str]] = None
    notice: Notice
