from datetime import date as Date
from pydantic import Field, field_validator
from typing import Optional

from .common.base import RecordModel, RecordResponse
from .enums import PaymentStatus
from centerdesk.utils.validators import (
    required_reference,
    optional_text,
    positive_number,
    non_negative_number,
    required_value,
    not_null
)


class PaymentBase(RecordModel):

    @field_validator("student_id", mode="before", check_fields=False)
    @classmethod
    def validate_student(cls, v):
        return required_reference(v, "A student must be selected.")

    @field_validator("course_id", mode="before", check_fields=False)
    @classmethod
    def validate_course(cls, v):
        return optional_text(v)

    @field_validator("amount", mode="before", check_fields=False)
    @classmethod
    def validate_amount(cls, v):
        return positive_number(v)

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def validate_date(cls, v):
        return required_value(v, "Date is required.")

    @field_validator("discount", mode="before", check_fields=False)
    @classmethod
    def validate_discount(cls, v):
        return non_negative_number(v)

    @field_validator("notes", mode="before", check_fields=False)
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v)


class PaymentCreate(PaymentBase):
    student_id: str = Field(default=None, validate_default=True)
    course_id: Optional[str] = None
    amount: float = Field(default=None, validate_default=True)
    date: Date = Field(default=None, validate_default=True)
    discount: float = 0.0
    status: PaymentStatus = PaymentStatus.PAID
    notes: Optional[str] = None


class PaymentUpdate(PaymentBase):
    student_id: Optional[str] = None
    course_id: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[Date] = None
    discount: Optional[float] = None
    status: Optional[PaymentStatus] = None
    notes: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return not_null(v)


class PaymentResponse(RecordResponse):
    student_id: str
    course_id: Optional[str] = None
    amount: float
    date: Date
    discount: float = 0.0
    status: PaymentStatus = PaymentStatus.PAID
    notes: Optional[str] = None
