from datetime import date
from typing import Callable, List
from fastapi import APIRouter, Depends, Response, status

from centerdesk.core.dependencies import get_attendance_service, get_translate
from centerdesk.core.permissions import allow_supervisor
from centerdesk.schemas.attendance import (
    AttendanceSessionRequest,
    AttendanceBatchResponse,
    SessionStatusesResponse,
    ClassRosterResponse
)
from centerdesk.schemas.class_ import ClassResponse
from centerdesk.schemas.common import Notice
from centerdesk.schemas.enums import NoticeType
from centerdesk.services.attendance_service import AttendanceService

router = APIRouter(
    prefix="/api/v1/attendance",
    tags=["attendance"],
    dependencies=[Depends(allow_supervisor())]
)


@router.get("/classes", response_model=List[ClassResponse])
async def list_classes(service: AttendanceService = Depends(get_attendance_service)):
    return await service.list_classes()


@router.get("/classes/{class_id}/roster", response_model=ClassRosterResponse)
async def get_class_roster(
    class_id: str,
    service: AttendanceService = Depends(get_attendance_service)
):
    class_record, students, instructors = await service.class_roster(class_id)
    return ClassRosterResponse(
        class_id=class_record["id"],
        class_name=class_record.get("name") or "",
        students=students,
        instructors=instructors
    )


@router.get("/classes/{class_id}/sessions/{day}", response_model=SessionStatusesResponse)
async def get_session_statuses(
    class_id: str,
    day: date,
    service: AttendanceService = Depends(get_attendance_service)
):
    """Statuses already recorded for the class on the day, keyed by student id"""
    statuses = await service.session_statuses(class_id, day)
    return SessionStatusesResponse(class_id=class_id, date=day, statuses=statuses)


@router.post("/sessions", response_model=AttendanceBatchResponse)
async def record_session(
    request: AttendanceSessionRequest,
    response: Response,
    service: AttendanceService = Depends(get_attendance_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    saved, failed = await service.record_session(request)
    if failed:
        # Saved records stay; report the rest per student
        response.status_code = status.HTTP_207_MULTI_STATUS
        notice = Notice(type=NoticeType.ERROR, message=translate("Some attendance records could not be saved."))
    else:
        notice = Notice(type=NoticeType.SUCCESS, message=translate("Attendance saved successfully!"))

    return AttendanceBatchResponse(
        saved=saved,
        failed={student_id: issue.render(translate) for student_id, issue in failed.items()},
        notice=notice
    )
