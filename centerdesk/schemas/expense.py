from datetime import date as Date
from pydantic import Field, field_validator
from typing import Optional

from .common.base import RecordModel, RecordResponse
from centerdesk.core.config import settings
from centerdesk.utils.validators import required_text, optional_text, positive_number, required_value


class ExpenseBase(RecordModel):

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, v):
        return required_text(v, "Description is required.")

    @field_validator("amount", mode="before", check_fields=False)
    @classmethod
    def validate_amount(cls, v):
        return positive_number(v)

    @field_validator("category", mode="before", check_fields=False)
    @classmethod
    def validate_category(cls, v):
        return optional_text(v) or settings.DEFAULT_EXPENSE_CATEGORY

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def validate_date(cls, v):
        return required_value(v, "Date is required.")


class ExpenseCreate(ExpenseBase):
    description: str = Field(default=None, validate_default=True)
    amount: float = Field(default=None, validate_default=True)
    category: str = Field(default=None, validate_default=True)
    date: Date = Field(default=None, validate_default=True)


class ExpenseUpdate(ExpenseBase):
    description: Optional[str] = None
    amount: Optional[float] = None
    category: Optional[str] = None
    date: Optional[Date] = None


class ExpenseResponse(RecordResponse):
    description: str
    amount: float
    category: Optional[str] = None
    date: Date
