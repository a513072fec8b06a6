# centerdesk/schemas/attendance/requests.py
from datetime import date as Date
from pydantic import Field, field_validator
from typing import Dict

from ..common.base import RecordModel
from ..enums import AttendanceStatus
from centerdesk.utils.validators import required_reference, required_value


class AttendanceEntry(RecordModel):
    """One student's status for one session"""
    student_id: str = Field(default=None, validate_default=True)
    class_id: str = Field(default=None, validate_default=True)
    instructor_id: str = Field(default=None, validate_default=True)
    date: Date = Field(default=None, validate_default=True)
    status: AttendanceStatus

    @field_validator("student_id", mode="before")
    @classmethod
    def validate_student(cls, v):
        return required_reference(v, "A student must be selected.")

    @field_validator("class_id", mode="before")
    @classmethod
    def validate_class(cls, v):
        return required_reference(v, "A class must be selected.")

    @field_validator("instructor_id", mode="before")
    @classmethod
    def validate_instructor(cls, v):
        return required_reference(v, "An instructor must be selected.")

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return required_value(v, "Date is required.")


class AttendanceSessionRequest(RecordModel):
    """Statuses for the roster of one class, instructor and day"""
    class_id: str = Field(default=None, validate_default=True)
    instructor_id: str = Field(default=None, validate_default=True)
    date: Date = Field(default=None, validate_default=True)
    statuses: Dict[str, AttendanceStatus] = Field(default_factory=dict, validate_default=True)

    @field_validator("class_id", mode="before")
    @classmethod
    def validate_class(cls, v):
        return required_reference(v, "A class must be selected.")

    @field_validator("instructor_id", mode="before")
    @classmethod
    def validate_instructor(cls, v):
        return required_reference(v, "An instructor must be selected.")

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return required_value(v, "Date is required.")

    @field_validator("statuses", mode="before")
    @classmethod
    def validate_statuses(cls, v):
        if not v:
            raise ValueError("Record attendance for the students before saving.")
        return v
