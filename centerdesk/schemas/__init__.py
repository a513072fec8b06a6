# centerdesk/schemas/__init__.py

# Import enums
from .enums import (
    Collection,
    StudentType,
    PaymentStatus,
    AttendanceStatus,
    Role,
    Section,
    NoticeType
)

# Import common schemas
from .common import RecordModel, RecordResponse, Notice, MutationResponse, ErrorResponse

# Import entity schemas
from .student import StudentCreate, StudentUpdate, StudentResponse
from .class_ import (
    ClassCreate,
    ClassUpdate,
    ClassResponse,
    AssignStudentsRequest,
    AssignInstructorsRequest,
    ReconcileResponse
)
from .course import CourseCreate, CourseUpdate, CourseResponse
from .instructor import InstructorCreate, InstructorUpdate, InstructorResponse
from .payment import PaymentCreate, PaymentUpdate, PaymentResponse
from .expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse

# Import attendance, report and navigation schemas
from .attendance import (
    AttendanceEntry,
    AttendanceSessionRequest,
    AttendanceBatchResponse,
    SessionStatusesResponse,
    ClassRosterResponse
)
from .report import PaymentStatusSplit, ClassEnrollment, FinancialSummary, ExportRequest
from .navigation import (
    AppStateModel,
    NavItemResponse,
    NavigationResponse,
    SelectSectionRequest,
    SwitchRoleRequest,
    NoticeRequest
)
