from pydantic import Field, field_validator
from typing import Dict, Optional

from .common.base import RecordModel, RecordResponse
from centerdesk.utils.validators import (
    required_text,
    optional_text,
    phone_number,
    optional_email,
    non_negative_number
)


class InstructorBase(RecordModel):

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return required_text(v, "Name is required.")

    @field_validator("phone", mode="before", check_fields=False)
    @classmethod
    def validate_phone(cls, v):
        return phone_number(v)

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def validate_email(cls, v):
        return optional_email(v)

    @field_validator("specialty", mode="before", check_fields=False)
    @classmethod
    def validate_specialty(cls, v):
        return optional_text(v)

    @field_validator("course_rates", mode="before", check_fields=False)
    @classmethod
    def validate_course_rates(cls, v):
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("Value cannot be negative.")
        return {str(course_id): non_negative_number(rate) for course_id, rate in v.items()}


class InstructorCreate(InstructorBase):
    name: str = Field(default=None, validate_default=True)
    phone: str = Field(default=None, validate_default=True)
    email: Optional[str] = None
    specialty: Optional[str] = None
    course_rates: Dict[str, float] = Field(default_factory=dict)


class InstructorUpdate(InstructorBase):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    specialty: Optional[str] = None
    course_rates: Optional[Dict[str, float]] = None


class InstructorResponse(RecordResponse):
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    specialty: Optional[str] = None
    course_rates: Dict[str, float] = Field(default_factory=dict)
