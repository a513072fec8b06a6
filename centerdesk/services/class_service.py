# centerdesk/services/class_service.py
from typing import List, Tuple

from centerdesk.core.errors import ValidationError
from centerdesk.core.logging import logger, log_function_call
from centerdesk.services.base_service import BaseService, MutationResult, Issue
from centerdesk.services.record_store import DocumentStore, Record
from centerdesk.services.roster import Roster, derive_index, CLASS_WRITE_FAILED
from centerdesk.schemas.enums import Collection
from centerdesk.schemas.class_ import ClassCreate, ClassUpdate

STUDENT_WRITE_FAILED = "Failed to update student {student_id}."


def _unique(ids: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in ids:
        if item and item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


class ClassService(BaseService):
    def __init__(self, store: DocumentStore):
        super().__init__(store)
        self.classes = store.collection(Collection.CLASSES)
        self.students = store.collection(Collection.STUDENTS)
        self.instructors = store.collection(Collection.INSTRUCTORS)
        self.roster = Roster(store)

    async def list_classes(self) -> List[Record]:
        return await self.classes.list()

    async def get_class(self, class_id: str) -> Record:
        return await self.classes.require(class_id)

    async def add_class(self, data: ClassCreate) -> MutationResult:
        document = data.to_document()
        document.update(students=[], instructors=[])
        class_id = await self.classes.add(document)
        return MutationResult(class_id)

    async def update_class(self, class_id: str, data: ClassUpdate) -> MutationResult:
        await self.classes.require(class_id)
        await self.classes.update(class_id, data.to_document(exclude_unset=True))
        return MutationResult(class_id)

    @log_function_call(logger)
    async def delete_class(self, class_id: str) -> MutationResult:
        """Unassign every student of the class, then delete it. Students are kept."""
        await self.classes.require(class_id)

        issues: List[Issue] = []
        for student in await self.students.where("classId", class_id):
            await self._secondary(
                issues,
                lambda student_id=student["id"]: self.students.update(student_id, {"classId": None}),
                STUDENT_WRITE_FAILED,
                student_id=student["id"]
            )

        await self.classes.delete(class_id)
        return MutationResult(class_id, issues)

    @log_function_call(logger)
    async def assign_students(self, class_id: str, student_ids: List[str]) -> MutationResult:
        """
        Replace the class's student list. Each student belongs to at most
        one class, so added students leave their previous class and dropped
        students are unassigned.
        """
        await self.classes.require(class_id)
        student_ids = _unique(student_ids)

        students = {student["id"]: student for student in await self.students.list()}
        unknown = [student_id for student_id in student_ids if student_id not in students]
        if unknown:
            raise ValidationError(details={"studentIds": "Unknown student."})

        await self.classes.update(class_id, {"students": student_ids})

        issues: List[Issue] = []
        selected = set(student_ids)
        for student_id, student in students.items():
            if student.get("classId") == class_id and student_id not in selected:
                await self._secondary(
                    issues,
                    lambda student_id=student_id: self.students.update(student_id, {"classId": None}),
                    STUDENT_WRITE_FAILED,
                    student_id=student_id
                )

        for student_id in student_ids:
            previous_class_id = students[student_id].get("classId")
            if previous_class_id == class_id:
                continue
            moved = await self._secondary(
                issues,
                lambda student_id=student_id: self.students.update(student_id, {"classId": class_id}),
                STUDENT_WRITE_FAILED,
                student_id=student_id
            )
            if moved and previous_class_id:
                await self.roster.remove(previous_class_id, student_id, issues)

        return MutationResult(class_id, issues)

    async def assign_instructors(self, class_id: str, instructor_ids: List[str]) -> MutationResult:
        await self.classes.require(class_id)
        instructor_ids = _unique(instructor_ids)

        known = {instructor["id"] for instructor in await self.instructors.list()}
        if any(instructor_id not in known for instructor_id in instructor_ids):
            raise ValidationError(details={"instructorIds": "Unknown instructor."})

        await self.classes.update(class_id, {"instructors": instructor_ids})
        return MutationResult(class_id)

    @log_function_call(logger)
    async def reconcile_rosters(self) -> Tuple[List[str], List[Issue]]:
        """
        Rebuild every class's student list from the students' classId and
        clear classId values that point at deleted classes.
        """
        classes = await self.classes.list()
        students = await self.students.list()
        class_ids = [class_record["id"] for class_record in classes]
        index = derive_index(students, class_ids)

        issues: List[Issue] = []
        for student in students:
            class_id = student.get("classId")
            if class_id and class_id not in index:
                await self._secondary(
                    issues,
                    lambda student_id=student["id"]: self.students.update(student_id, {"classId": None}),
                    STUDENT_WRITE_FAILED,
                    student_id=student["id"]
                )

        repaired: List[str] = []
        for class_record in classes:
            current = list(class_record.get("students") or [])
            expected = index.get(class_record["id"], [])
            if current == _unique(current) and set(current) == set(expected):
                continue
            # Keep the existing order for members that stay
            members = [student_id for student_id in _unique(current) if student_id in set(expected)]
            members += [student_id for student_id in expected if student_id not in set(members)]
            fixed = await self._secondary(
                issues,
                lambda class_id=class_record["id"], members=members: self.classes.update(class_id, {"students": members}),
                CLASS_WRITE_FAILED,
                class_id=class_record["id"]
            )
            if fixed:
                repaired.append(class_record["id"])

        if repaired:
            logger.info(f"Reconciled rosters of {len(repaired)} class(es)")
        return repaired, issues
