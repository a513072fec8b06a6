from pydantic import field_validator

from ..common.base import RecordModel
from centerdesk.utils.validators import required_text, phone_number, optional_email


class StudentBase(RecordModel):
    """Field rules shared by the add and edit student forms"""

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
