from .record_store import DocumentStore, RecordStore, Subscription
from .student_service import StudentService
from .class_service import ClassService
from .record_service import CourseService, ExpenseService, InstructorService, PaymentService
from .attendance_service import AttendanceService, AttendanceKey
from .report_service import ReportService

__all__ = [
    "DocumentStore",
    "RecordStore",
    "Subscription",
    "StudentService",
    "ClassService",
    "CourseService",
    "ExpenseService",
    "InstructorService",
    "PaymentService",
    "AttendanceService",
    "AttendanceKey",
    "ReportService"
]
