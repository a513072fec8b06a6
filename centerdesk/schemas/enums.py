# centerdesk/schemas/enums.py
from enum import Enum


class Collection(str, Enum):
    STUDENTS = "students"
    CLASSES = "classes"
    COURSES = "courses"
    INSTRUCTORS = "instructors"
    PAYMENTS = "payments"
    EXPENSES = "expenses"
    ATTENDANCE = "attendance"


class StudentType(str, Enum):
    LOCAL = "local"
    INTERNATIONAL = "international"


class PaymentStatus(str, Enum):
    PAID = "paid"
    PENDING = "pending"
    PARTIAL = "partial"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class Role(str, Enum):
    ADMIN = "admin"
    SUPERVISOR = "supervisor"


class Section(str, Enum):
    DASHBOARD = "dashboard"
    STUDENTS = "students"
    CLASSES = "classes"
    COURSES = "courses"
    PAYMENTS = "payments"
    EXPENSES = "expenses"
    REPORTS = "reports"
    INSTRUCTORS = "instructors"
    ATTENDANCE = "attendance"
    CERTIFICATES = "certificates"


class NoticeType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
