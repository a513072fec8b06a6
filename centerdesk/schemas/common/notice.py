import uuid
from typing import List
from pydantic import BaseModel, Field

from ..enums import NoticeType


class Notice(BaseModel):
    """Transient message shown to the user (toast)"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: NoticeType = NoticeType.INFO
    message: str


class MutationResponse(BaseModel):
    id: str
    notice: Notice
    warnings: List[str] = Field(default_factory=list)
