from pydantic import Field, field_validator
from typing import Optional

from .base import StudentBase
from ..enums import StudentType
from centerdesk.utils.validators import required_reference, optional_text, not_null


class StudentCreate(StudentBase):
    name: str = Field(default=None, validate_default=True)
    phone: str = Field(default=None, validate_default=True)
    email: Optional[str] = None
    paid: bool = False
    class_id: str = Field(default=None, validate_default=True)
    student_type: StudentType = StudentType.LOCAL

    @field_validator("class_id", mode="before")
    @classmethod
    def validate_class(cls, v):
        return required_reference(v, "A class must be selected.")


class StudentUpdate(StudentBase):
    """Partial edit; only the fields sent are validated and written"""
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    paid: Optional[bool] = None
    class_id: Optional[str] = None
    student_type: Optional[StudentType] = None

    @field_validator("class_id", mode="before")
    @classmethod
    def validate_class(cls, v):
        # null unassigns the student
        return optional_text(v)

    @field_validator("paid", "student_type", mode="before")
    @classmethod
    def validate_not_cleared(cls, v):
        return not_null(v)
