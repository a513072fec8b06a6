from typing import Dict, List
from pydantic import Field

from .common.base import RecordModel


class PaymentStatusSplit(RecordModel):
    paid: int = 0
    unpaid: int = 0


class ClassEnrollment(RecordModel):
    class_id: str
    name: str
    students: int = 0


class FinancialSummary(RecordModel):
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_income: float = 0.0
    payment_status: PaymentStatusSplit = Field(default_factory=PaymentStatusSplit)
    enrollment_by_class: List[ClassEnrollment] = Field(default_factory=list)
    expenses_by_category: Dict[str, float] = Field(default_factory=dict)
    revenue_by_course: Dict[str, float] = Field(default_factory=dict)


class ExportRequest(RecordModel):
    class_ids: List[str] = Field(default_factory=list)
