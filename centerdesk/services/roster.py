# centerdesk/services/roster.py
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from centerdesk.services.base_service import BaseService, Issue
from centerdesk.services.record_store import DocumentStore, Record
from centerdesk.schemas.enums import Collection

CLASS_WRITE_FAILED = "Failed to update class {class_id}."


class Roster(BaseService):
    """
    Keeps each class's ``students`` list in step with the students'
    ``classId``. The student side is authoritative; the class side is an
    index maintained through :meth:`move` and rebuilt by :func:`derive_index`.
    """

    def __init__(self, store: DocumentStore):
        super().__init__(store)
        self.classes = store.collection(Collection.CLASSES)

    async def append(self, class_id: str, student_id: str, issues: List[Issue]) -> None:
        await self._secondary(
            issues,
            lambda: self.classes.array_union(class_id, "students", [student_id]),
            CLASS_WRITE_FAILED,
            class_id=class_id
        )

    async def remove(self, class_id: str, student_id: str, issues: List[Issue]) -> None:
        await self._secondary(
            issues,
            lambda: self.classes.array_remove(class_id, "students", [student_id], missing_ok=True),
            CLASS_WRITE_FAILED,
            class_id=class_id
        )

    async def move(
        self,
        student_id: str,
        old_class_id: Optional[str],
        new_class_id: Optional[str],
        issues: List[Issue]
    ) -> None:
        if old_class_id == new_class_id:
            return
        if old_class_id:
            await self.remove(old_class_id, student_id, issues)
        if new_class_id:
            await self.append(new_class_id, student_id, issues)


def derive_index(students: Iterable[Record], class_ids: Optional[Iterable[str]] = None) -> Dict[str, List[str]]:
    """class id -> ids of the students whose classId points at it"""
    index: Dict[str, List[str]] = OrderedDict((class_id, []) for class_id in (class_ids or []))
    for student in students:
        class_id = student.get("classId")
        if not class_id:
            continue
        if class_ids is not None and class_id not in index:
            continue
        index.setdefault(class_id, []).append(student["id"])
    return dict(index)
