from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from centerdesk.core.config import settings
from centerdesk.core.errors import ValidationError
from centerdesk.services.base_service import BaseService
from centerdesk.services.record_store import Record
from centerdesk.schemas.enums import Collection
from centerdesk.schemas.report import ClassEnrollment, FinancialSummary, PaymentStatusSplit
from centerdesk.utils.csv_export import rows_to_csv


def _frame(records: Iterable[Record], columns: List[str]) -> pd.DataFrame:
    frame = pd.DataFrame(list(records))
    for column in columns:
        if column not in frame.columns:
            frame[column] = None
    return frame


def _amounts(frame: pd.DataFrame) -> pd.Series:
    return pd.to_numeric(frame["amount"], errors="coerce").fillna(0.0)


def total_revenue(payments: List[Record]) -> float:
    if not payments:
        return 0.0
    return float(_amounts(_frame(payments, ["amount"])).sum())


def total_expenses(expenses: List[Record]) -> float:
    if not expenses:
        return 0.0
    return float(_amounts(_frame(expenses, ["amount"])).sum())


def net_income(payments: List[Record], expenses: List[Record]) -> float:
    return total_revenue(payments) - total_expenses(expenses)


def payment_status_split(students: List[Record]) -> PaymentStatusSplit:
    if not students:
        return PaymentStatusSplit()
    paid = _frame(students, ["paid"])["paid"].fillna(False).astype(bool)
    return PaymentStatusSplit(paid=int(paid.sum()), unpaid=int((~paid).sum()))


def enrollment_by_class(classes: List[Record]) -> List[ClassEnrollment]:
    return [
        ClassEnrollment(
            class_id=class_record["id"],
            name=class_record.get("name") or "",
            students=len(class_record.get("students") or [])
        )
        for class_record in classes
    ]


def expenses_by_category(expenses: List[Record]) -> Dict[str, float]:
    if not expenses:
        return {}
    frame = _frame(expenses, ["amount", "category"])
    frame["amount"] = _amounts(frame)
    category = frame["category"].fillna("").astype(str).str.strip()
    frame["category"] = category.where(category != "", settings.UNCATEGORIZED_LABEL)
    totals = frame.groupby("category", sort=False)["amount"].sum()
    return {str(name): float(amount) for name, amount in totals.items()}


def revenue_by_course(payments: List[Record], courses: List[Record]) -> Dict[str, float]:
    """Payments without a course, or whose course no longer exists, are skipped"""
    if not payments or not courses:
        return {}
    frame = _frame(payments, ["amount", "courseId"])
    frame["amount"] = _amounts(frame)
    names = {course["id"]: course.get("name") or course["id"] for course in courses}
    frame["course"] = frame["courseId"].map(names)
    frame = frame.dropna(subset=["course"])
    if frame.empty:
        return {}
    totals = frame.groupby("course", sort=False)["amount"].sum()
    return {str(name): float(amount) for name, amount in totals.items()}


def financial_summary(
    students: List[Record],
    classes: List[Record],
    courses: List[Record],
    payments: List[Record],
    expenses: List[Record]
) -> FinancialSummary:
    revenue = total_revenue(payments)
    spent = total_expenses(expenses)
    return FinancialSummary(
        total_revenue=revenue,
        total_expenses=spent,
        net_income=revenue - spent,
        payment_status=payment_status_split(students),
        enrollment_by_class=enrollment_by_class(classes),
        expenses_by_category=expenses_by_category(expenses),
        revenue_by_course=revenue_by_course(payments, courses)
    )


def export_students_by_classes(
    class_ids: List[str],
    students: List[Record],
    classes: List[Record],
    translate: Callable[..., str]
) -> List[Dict[str, str]]:
    """
    One row per student of the selected classes. A student listed by more
    than one class appears once, under the first selected class.
    """
    if not class_ids:
        raise ValidationError("Select at least one class to export student data.")

    by_id = {student["id"]: student for student in students}
    by_class = {class_record["id"]: class_record for class_record in classes}

    rows = []
    for class_id in class_ids:
        class_record = by_class.get(class_id)
        if class_record is None:
            continue
        for student_id in class_record.get("students") or []:
            student = by_id.get(student_id)
            if student is None:
                continue
            rows.append({
                "id": student_id,
                translate("Student Name"): student.get("name") or "",
                translate("Phone Number"): student.get("phone") or "",
                translate("Email"): student.get("email") or "",
                translate("Payment Status"): translate("Paid") if student.get("paid") else translate("Unpaid"),
                translate("Class"): class_record.get("name") or ""
            })

    if not rows:
        raise ValidationError("No students in the selected classes to export.")

    frame = pd.DataFrame(rows).drop_duplicates(subset="id", keep="first").drop(columns="id")
    return frame.to_dict(orient="records")


class ReportService(BaseService):
    async def _load(self, collection: Collection) -> List[Record]:
        return await self.store.collection(collection).list()

    async def summary(self) -> FinancialSummary:
        return financial_summary(
            students=await self._load(Collection.STUDENTS),
            classes=await self._load(Collection.CLASSES),
            courses=await self._load(Collection.COURSES),
            payments=await self._load(Collection.PAYMENTS),
            expenses=await self._load(Collection.EXPENSES)
        )

    async def students_by_classes_csv(
        self,
        class_ids: List[str],
        translate: Optional[Callable[..., str]] = None
    ) -> str:
        rows = export_students_by_classes(
            class_ids,
            students=await self._load(Collection.STUDENTS),
            classes=await self._load(Collection.CLASSES),
            translate=translate or (lambda key, **kwargs: key)
        )
        return rows_to_csv(rows)
