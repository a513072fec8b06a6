# centerdesk/services/record_service.py
from typing import List

from centerdesk.core.errors import ValidationError
from centerdesk.core.logging import logger, log_function_call
from centerdesk.services.base_service import BaseService, MutationResult, Issue
from centerdesk.services.record_store import DocumentStore, Record
from centerdesk.services.roster import CLASS_WRITE_FAILED
from centerdesk.schemas.common.base import RecordModel
from centerdesk.schemas.enums import Collection
from centerdesk.schemas.payment import PaymentCreate, PaymentUpdate
from centerdesk.schemas.instructor import InstructorCreate, InstructorUpdate


class RecordService(BaseService):
    """Plain CRUD for a collection without relationships to maintain"""
    collection: Collection

    def __init__(self, store: DocumentStore):
        super().__init__(store)
        self.records = store.collection(self.collection)

    async def list(self) -> List[Record]:
        return await self.records.list()

    async def get(self, record_id: str) -> Record:
        return await self.records.require(record_id)

    async def add(self, data: RecordModel) -> MutationResult:
        record_id = await self.records.add(data.to_document())
        return MutationResult(record_id)

    async def update(self, record_id: str, data: RecordModel) -> MutationResult:
        await self.records.require(record_id)
        await self.records.update(record_id, data.to_document(exclude_unset=True))
        return MutationResult(record_id)

    async def delete(self, record_id: str) -> MutationResult:
        await self.records.require(record_id)
        await self.records.delete(record_id)
        return MutationResult(record_id)


class CourseService(RecordService):
    collection = Collection.COURSES


class ExpenseService(RecordService):
    collection = Collection.EXPENSES


class PaymentService(RecordService):
    collection = Collection.PAYMENTS

    async def _check_references(self, student_id=None, course_id=None) -> None:
        errors = {}
        if student_id and await self.store.collection(Collection.STUDENTS).get(student_id) is None:
            errors["studentId"] = "Unknown student."
        if course_id and await self.store.collection(Collection.COURSES).get(course_id) is None:
            errors["courseId"] = "Unknown course."
        if errors:
            raise ValidationError(details=errors)

    async def add(self, data: PaymentCreate) -> MutationResult:
        await self._check_references(data.student_id, data.course_id)
        return await super().add(data)

    async def update(self, record_id: str, data: PaymentUpdate) -> MutationResult:
        await self._check_references(data.student_id, data.course_id)
        return await super().update(record_id, data)


class InstructorService(RecordService):
    collection = Collection.INSTRUCTORS

    async def _check_course_rates(self, course_rates) -> None:
        if not course_rates:
            return
        known = {course["id"] for course in await self.store.collection(Collection.COURSES).list()}
        if any(course_id not in known for course_id in course_rates):
            raise ValidationError(details={"courseRates": "Unknown course."})

    async def add(self, data: InstructorCreate) -> MutationResult:
        await self._check_course_rates(data.course_rates)
        return await super().add(data)

    async def update(self, record_id: str, data: InstructorUpdate) -> MutationResult:
        await self._check_course_rates(data.course_rates)
        return await super().update(record_id, data)

    @log_function_call(logger)
    async def delete(self, record_id: str) -> MutationResult:
        """Delete the instructor and drop it from every class it teaches"""
        await self.records.require(record_id)
        await self.records.delete(record_id)

        classes = self.store.collection(Collection.CLASSES)
        issues: List[Issue] = []
        for class_record in await classes.list():
            if record_id not in (class_record.get("instructors") or []):
                continue
            await self._secondary(
                issues,
                lambda class_id=class_record["id"]: classes.array_remove(
                    class_id, "instructors", [record_id], missing_ok=True
                ),
                CLASS_WRITE_FAILED,
                class_id=class_record["id"]
            )
        return MutationResult(record_id, issues)
