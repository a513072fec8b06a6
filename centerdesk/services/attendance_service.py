import asyncio
from datetime import date
from typing import Dict, List, NamedTuple, Tuple
from urllib.parse import quote

from centerdesk.core.errors import BaseAPIError, ValidationError
from centerdesk.core.logging import logger, log_function_call
from centerdesk.services.base_service import BaseService, Issue
from centerdesk.services.record_store import DocumentStore, Record
from centerdesk.services.roster import derive_index
from centerdesk.schemas.enums import Collection
from centerdesk.schemas.attendance import AttendanceEntry, AttendanceSessionRequest


class AttendanceKey(NamedTuple):
    """Identifies one student's attendance at one session"""
    student_id: str
    class_id: str
    instructor_id: str
    day: date

    @property
    def document_id(self) -> str:
        # Components are escaped so a "/" inside an id cannot shift the boundaries
        return "/".join(quote(str(part), safe="") for part in self.parts())

    def parts(self) -> Tuple[str, str, str, str]:
        return (self.student_id, self.class_id, self.instructor_id, self.day.isoformat())

    @classmethod
    def for_entry(cls, entry: AttendanceEntry) -> "AttendanceKey":
        return cls(entry.student_id, entry.class_id, entry.instructor_id, entry.date)


class AttendanceService(BaseService):
    def __init__(self, store: DocumentStore):
        super().__init__(store)
        self.attendance = store.collection(Collection.ATTENDANCE)
        self.classes = store.collection(Collection.CLASSES)
        self.students = store.collection(Collection.STUDENTS)
        self.instructors = store.collection(Collection.INSTRUCTORS)

    async def list_classes(self) -> List[Record]:
        return await self.classes.list()

    async def record(self, entry: AttendanceEntry) -> str:
        """Upsert the status for the entry's key. Returns the record id."""
        key = AttendanceKey.for_entry(entry)
        created = await self.attendance.set(key.document_id, entry.to_document(), merge=True)
        logger.debug(
            f"{'Recorded' if created else 'Overwrote'} attendance of student {entry.student_id} "
            f"in class {entry.class_id} on {entry.date}"
        )
        return key.document_id

    @log_function_call(logger)
    async def record_session(self, request: AttendanceSessionRequest) -> Tuple[List[str], Dict[str, Issue]]:
        """
        Save every status of the session concurrently.

        Returns the ids of the students that were saved and, for the rest, the
        issue that stopped them. Saved records are kept when others fail.
        """
        await self.classes.require(request.class_id)
        if await self.instructors.get(request.instructor_id) is None:
            raise ValidationError(details={"instructorId": "Unknown instructor."})

        student_ids = list(request.statuses)
        entries = [
            AttendanceEntry(
                student_id=student_id,
                class_id=request.class_id,
                instructor_id=request.instructor_id,
                date=request.date,
                status=request.statuses[student_id]
            )
            for student_id in student_ids
        ]
        results = await asyncio.gather(
            *(self.record(entry) for entry in entries),
            return_exceptions=True
        )

        saved: List[str] = []
        failed: Dict[str, Issue] = {}
        for student_id, result in zip(student_ids, results):
            if isinstance(result, BaseAPIError):
                failed[student_id] = Issue(result.message, result.params)
            elif isinstance(result, Exception):
                raise result
            else:
                saved.append(student_id)

        if failed:
            logger.error(
                f"Attendance for class {request.class_id} on {request.date}: "
                f"{len(failed)} of {len(entries)} record(s) failed"
            )
        return saved, failed

    async def session_statuses(self, class_id: str, day: date) -> Dict[str, str]:
        """Existing status per student for a class on a day"""
        await self.classes.require(class_id)
        statuses = {}
        for record in await self.attendance.where("classId", class_id):
            if record.get("date") == day.isoformat():
                statuses[record["studentId"]] = record["status"]
        return statuses

    async def class_roster(self, class_id: str) -> Tuple[Record, List[Record], List[Record]]:
        """The class with its students and assigned instructors"""
        class_record = await self.classes.require(class_id)
        students = await self.students.list()
        members = set(derive_index(students, [class_id]).get(class_id, []))

        instructor_ids = class_record.get("instructors") or []
        instructors = [
            instructor for instructor in await self.instructors.list()
            if instructor["id"] in instructor_ids
        ]
        return (
            class_record,
            [student for student in students if student["id"] in members],
            instructors
        )
