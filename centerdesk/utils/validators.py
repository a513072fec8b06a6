# centerdesk/utils/validators.py
import math
import re
from typing import Any, Dict, Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from centerdesk.core.errors import ValidationError

PHONE_PATTERN = re.compile(r"^\d{10,}$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ModelT = TypeVar("ModelT", bound=BaseModel)


def required_text(value: Any, message: str = "Name is required.") -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None or not str(value).strip():
        return None
    return str(value).strip()


def required_reference(value: Any, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return str(value).strip()


def phone_number(value: Any) -> str:
    value = required_text(value, "Phone number is required.")
    if not PHONE_PATTERN.match(value):
        raise ValueError("Invalid phone number (at least 10 digits).")
    return value


def optional_email(value: Any) -> Optional[str]:
    value = optional_text(value)
    if value is not None and not EMAIL_PATTERN.match(value):
        raise ValueError("Invalid email address.")
    return value


def positive_number(value: Any, message: str = "Amount is required and must be a positive number.") -> float:
    if isinstance(value, bool):
        raise ValueError(message)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(message) from None
    if not math.isfinite(number) or number <= 0:
        raise ValueError(message)
    return number


def non_negative_number(value: Any, default: float = 0.0) -> float:
    """Blank input falls back to the default, like an empty form field"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValueError("Value cannot be negative.")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    if number < 0:
        raise ValueError("Value cannot be negative.")
    return number


def required_value(value: Any, message: str = "Date is required.") -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(message)
    return value


def not_null(value: Any, message: str = "Value cannot be empty.") -> Any:
    """For edit-form fields that may be omitted but never cleared"""
    if value is None:
        raise ValueError(message)
    return value


def field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, str]:
    """Flatten pydantic errors into a field -> message map"""
    fields: Dict[str, str] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "__root__"
        ctx_error = (error.get("ctx") or {}).get("error")
        message = str(ctx_error) if ctx_error is not None else error.get("msg", "Invalid value")
        # First error per field wins, like a form showing one message per input
        fields.setdefault(field, message)
    return fields


def validate_form(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    """Validate a form payload, raising the application ValidationError"""
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(details=field_errors(exc.errors())) from exc
