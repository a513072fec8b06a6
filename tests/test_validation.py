import pytest

from centerdesk.core.errors import ValidationError
from centerdesk.schemas import (
    CourseCreate,
    ExpenseCreate,
    InstructorCreate,
    PaymentCreate,
    PaymentUpdate,
    StudentCreate,
    StudentUpdate
)
from centerdesk.utils.validators import validate_form


def errors_of(model, payload):
    with pytest.raises(ValidationError) as exc_info:
        validate_form(model, payload)
    return exc_info.value.details


def test_student_form_reports_each_field():
    details = errors_of(StudentCreate, {"name": "  ", "phone": "12345", "email": "nope"})
    assert details == {
        "name": "Name is required.",
        "phone": "Invalid phone number (at least 10 digits).",
        "email": "Invalid email address.",
        "classId": "A class must be selected.",
    }


def test_valid_student_form_is_normalized():
    student = validate_form(StudentCreate, {
        "name": " Sara ",
        "phone": "0501234567",
        "email": "",
        "classId": "c1",
    })
    assert student.name == "Sara"
    assert student.email is None
    assert student.to_document()["classId"] == "c1"


def test_partial_edit_only_validates_sent_fields():
    update = validate_form(StudentUpdate, {"paid": True})
    assert update.to_document(exclude_unset=True) == {"paid": True}
    assert errors_of(StudentUpdate, {"phone": "abc"}) == {
        "phone": "Invalid phone number (at least 10 digits)."
    }


def test_partial_edit_cannot_clear_required_fields():
    assert errors_of(StudentUpdate, {"paid": None, "studentType": None}) == {
        "paid": "Value cannot be empty.",
        "studentType": "Value cannot be empty.",
    }
    assert errors_of(PaymentUpdate, {"status": None}) == {"status": "Value cannot be empty."}
    assert validate_form(StudentUpdate, {"classId": None}).to_document(exclude_unset=True) == {"classId": None}


@pytest.mark.parametrize("amount", [None, "", 0, -5, "abc", "inf", 1e999, "nan"])
def test_amount_must_be_positive(amount):
    details = errors_of(PaymentCreate, {"studentId": "s1", "amount": amount, "date": "2024-01-01"})
    assert details == {"amount": "Amount is required and must be a positive number."}


def test_payment_requires_student_and_date():
    details = errors_of(PaymentCreate, {"amount": 10})
    assert details["studentId"] == "A student must be selected."
    assert details["date"] == "Date is required."


def test_discount_cannot_be_negative():
    details = errors_of(PaymentCreate, {"studentId": "s1", "amount": 10, "date": "2024-01-01", "discount": -1})
    assert details == {"discount": "Value cannot be negative."}


def test_blank_expense_category_defaults_to_general():
    expense = validate_form(ExpenseCreate, {"description": "Rent", "amount": 50, "category": " ", "date": "2024-01-01"})
    assert expense.category == "general"


def test_course_price_and_instructor_rates():
    assert errors_of(CourseCreate, {"name": "Arabic", "price": 0}) == {
        "price": "Price is required and must be a positive number."
    }
    instructor = validate_form(InstructorCreate, {
        "name": "Omar",
        "phone": "0551234567",
        "courseRates": {"c1": "", "c2": 15},
    })
    assert instructor.course_rates == {"c1": 0.0, "c2": 15.0}
    assert errors_of(InstructorCreate, {"name": "Omar", "phone": "0551234567", "courseRates": {"c1": -3}}) == {
        "courseRates": "Value cannot be negative."
    }


def test_non_finite_rates_fall_back_to_zero():
    instructor = validate_form(InstructorCreate, {
        "name": "Omar",
        "phone": "0551234567",
        "courseRates": {"c1": "inf", "c2": "nan"},
    })
    assert instructor.course_rates == {"c1": 0.0, "c2": 0.0}
