from pydantic import Field, field_validator
from typing import Optional

from .common.base import RecordModel, RecordResponse
from centerdesk.utils.validators import required_text, optional_text, positive_number

PRICE_MESSAGE = "Price is required and must be a positive number."


class CourseBase(RecordModel):

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return required_text(v, "Course name is required.")

    @field_validator("price", mode="before", check_fields=False)
    @classmethod
    def validate_price(cls, v):
        return positive_number(v, PRICE_MESSAGE)

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def validate_description(cls, v):
        return optional_text(v)


class CourseCreate(CourseBase):
    name: str = Field(default=None, validate_default=True)
    price: float = Field(default=None, validate_default=True)
    description: Optional[str] = None


class CourseUpdate(CourseBase):
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None


class CourseResponse(RecordResponse):
    name: str
    price: float
    description: Optional[str] = None
