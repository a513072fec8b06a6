from datetime import date as Date
from typing import Dict, List, Optional
from pydantic import Field

from ..common.base import RecordModel
from ..common.notice import Notice
from ..enums import AttendanceStatus
from ..student.responses import StudentResponse
from ..instructor import InstructorResponse


class AttendanceBatchResponse(RecordModel):
    saved: List[str] = Field(default_factory=list)
    failed: Dict[str, str] = Field(default_factory=dict)
    notice: Optional[Notice] = None


class SessionStatusesResponse(RecordModel):
    class_id: str
    date: Date
    statuses: Dict[str, AttendanceStatus] = Field(default_factory=dict)


class ClassRosterResponse(RecordModel):
    class_id: str
    class_name: str
    students: List[StudentResponse] = Field(default_factory=list)
    instructors: List[InstructorResponse] = Field(default_factory=list)
