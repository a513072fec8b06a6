# centerdesk/services/student_service.py
from typing import List, Optional

from centerdesk.core.errors import ValidationError
from centerdesk.core.logging import logger
from centerdesk.services.base_service import BaseService, MutationResult, Issue
from centerdesk.services.record_store import DocumentStore, Record
from centerdesk.services.roster import Roster
from centerdesk.schemas.enums import Collection
from centerdesk.schemas.student import StudentCreate, StudentUpdate


class StudentService(BaseService):
    def __init__(self, store: DocumentStore):
        super().__init__(store)
        self.students = store.collection(Collection.STUDENTS)
        self.classes = store.collection(Collection.CLASSES)
        self.roster = Roster(store)

    async def _require_class(self, class_id: str) -> None:
        if await self.classes.get(class_id) is None:
            raise ValidationError(details={"classId": "Unknown class."})

    async def list_students(self, search: Optional[str] = None) -> List[Record]:
        students = await self.students.list()
        if not search or not search.strip():
            return students

        term = search.strip().lower()
        return [
            student for student in students
            if term in (student.get("name") or "").lower()
            or term in (student.get("phone") or "")
            or term in (student.get("email") or "").lower()
        ]

    async def get_student(self, student_id: str) -> Record:
        return await self.students.require(student_id)

    async def add_student(self, data: StudentCreate) -> MutationResult:
        await self._require_class(data.class_id)

        student_id = await self.students.add(data.to_document())
        issues: List[Issue] = []
        await self.roster.move(student_id, None, data.class_id, issues)
        return MutationResult(student_id, issues)

    async def update_student(self, student_id: str, data: StudentUpdate) -> MutationResult:
        current = await self.students.require(student_id)
        changes = data.to_document(exclude_unset=True)
        if changes.get("classId"):
            await self._require_class(changes["classId"])

        await self.students.update(student_id, changes)

        issues: List[Issue] = []
        if "classId" in changes:
            await self.roster.move(student_id, current.get("classId"), changes["classId"], issues)
        return MutationResult(student_id, issues)

    async def delete_student(self, student_id: str) -> MutationResult:
        current = await self.students.require(student_id)
        await self.students.delete(student_id)

        issues: List[Issue] = []
        if current.get("classId"):
            await self.roster.remove(current["classId"], student_id, issues)
        if issues:
            logger.warning(f"Student {student_id} deleted with {len(issues)} roster issue(s)")
        return MutationResult(student_id, issues)
