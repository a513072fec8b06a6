from typing import Callable, Optional
from fastapi import Depends, Header, Request

from centerdesk.core.errors import PermissionDenied
from centerdesk.core.i18n import get_translation, resolve_language
from centerdesk.core.logging import logger
from centerdesk.schemas.enums import Role
from centerdesk.services.record_store import DocumentStore
from centerdesk.services.student_service import StudentService
from centerdesk.services.class_service import ClassService
from centerdesk.services.record_service import (
    CourseService,
    ExpenseService,
    InstructorService,
    PaymentService
)
from centerdesk.services.attendance_service import AttendanceService
from centerdesk.services.report_service import ReportService


def get_store(request: Request) -> DocumentStore:
    """Document store created by the application factory"""
    return request.app.state.store

# Request context
def get_language(accept_language: Optional[str] = Header(default=None)) -> str:
    return resolve_language(accept_language)

def get_translate(language: str = Depends(get_language)) -> Callable[..., str]:
    return get_translation(language)

def get_current_role(x_user_role: Optional[str] = Header(default=None)) -> Role:
    """Acting role, chosen by the client's role switcher. Defaults to admin."""
    if not x_user_role:
        return Role.ADMIN
    try:
        return Role(x_user_role.strip().lower())
    except ValueError:
        logger.warning(f"Rejected unknown role header: {x_user_role}")
        raise PermissionDenied(details={"role": "Permission denied"}) from None

# Service providers
def get_student_service(store: DocumentStore = Depends(get_store)) -> StudentService:
    return StudentService(store)

def get_class_service(store: DocumentStore = Depends(get_store)) -> ClassService:
    return ClassService(store)

def get_course_service(store: DocumentStore = Depends(get_store)) -> CourseService:
    return CourseService(store)

def get_instructor_service(store: DocumentStore = Depends(get_store)) -> InstructorService:
    return InstructorService(store)

def get_payment_service(store: DocumentStore = Depends(get_store)) -> PaymentService:
    return PaymentService(store)

def get_expense_service(store: DocumentStore = Depends(get_store)) -> ExpenseService:
    return ExpenseService(store)

def get_attendance_service(store: DocumentStore = Depends(get_store)) -> AttendanceService:
    return AttendanceService(store)

def get_report_service(store: DocumentStore = Depends(get_store)) -> ReportService:
    return ReportService(store)
