from typing import Optional

from ..common.base import RecordResponse
from ..enums import StudentType


class StudentResponse(RecordResponse):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    paid: bool = False
    class_id: Optional[str] = None
    student_type: StudentType = StudentType.LOCAL
