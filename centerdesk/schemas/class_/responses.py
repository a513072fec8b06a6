from typing import List, Optional
from pydantic import Field

from ..common.base import RecordModel, RecordResponse


class ClassResponse(RecordResponse):
    name: str
    description: Optional[str] = None
    students: List[str] = Field(default_factory=list)
    instructors: List[str] = Field(default_factory=list)


class ReconcileResponse(RecordModel):
    repaired_class_ids: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
