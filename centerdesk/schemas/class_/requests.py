from pydantic import Field, field_validator
from typing import List, Optional

from ..common.base import RecordModel
from centerdesk.utils.validators import required_text, optional_text


class ClassBase(RecordModel):

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return required_text(v, "Class name is required.")

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, v):
        return optional_text(v)


class ClassCreate(ClassBase):
    name: str = Field(default=None, validate_default=True)
    description: Optional[str] = None


class ClassUpdate(ClassBase):
    """Membership changes go through the assignment requests"""
    name: Optional[str] = None
    description: Optional[str] = None


class AssignStudentsRequest(RecordModel):
    student_ids: List[str] = Field(default_factory=list)


class AssignInstructorsRequest(RecordModel):
    instructor_ids: List[str] = Field(default_factory=list)
