from .requests import AttendanceEntry, AttendanceSessionRequest
from .responses import (
    AttendanceBatchResponse,
    SessionStatusesResponse,
    ClassRosterResponse
)
