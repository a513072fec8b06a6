import pytest

from centerdesk.core.errors import ValidationError
from centerdesk.core.i18n import get_translation
from centerdesk.services.report_service import (
    ReportService,
    expenses_by_category,
    export_students_by_classes,
    financial_summary,
    net_income,
    payment_status_split,
    revenue_by_course,
    total_expenses,
    total_revenue
)
from centerdesk.utils.csv_export import rows_to_csv

translate = get_translation("en")

PAYMENTS = [
    {"id": "p1", "amount": 250, "courseId": "c-ar"},
    {"id": "p2", "amount": 100, "courseId": "gone"},
]
EXPENSES = [
    {"id": "e1", "amount": 100, "category": "rent"},
    {"id": "e2", "amount": 30, "category": ""},
    {"id": "e3", "amount": 20},
]
COURSES = [{"id": "c-ar", "name": "Arabic"}]


def test_totals():
    assert total_revenue(PAYMENTS) == 350
    assert total_expenses([{"amount": 150}]) == 150
    assert net_income(PAYMENTS, [{"amount": 150}]) == 200


def test_empty_input_is_zero():
    assert total_revenue([]) == 0
    assert total_expenses([]) == 0
    assert net_income([], []) == 0
    assert expenses_by_category([]) == {}
    assert revenue_by_course([], COURSES) == {}


def test_expenses_by_category_buckets_missing_category():
    totals = expenses_by_category(EXPENSES)
    assert totals == {"rent": 100, "uncategorized": 50}
    assert sum(totals.values()) == total_expenses(EXPENSES)


def test_revenue_by_course_skips_unknown_courses():
    totals = revenue_by_course(PAYMENTS, COURSES)
    assert totals == {"Arabic": 250}
    assert sum(totals.values()) <= total_revenue(PAYMENTS)


def test_payment_status_split():
    split = payment_status_split([{"paid": True}, {"paid": False}, {"name": "no flag"}])
    assert (split.paid, split.unpaid) == (1, 2)


def test_financial_summary():
    summary = financial_summary(
        students=[{"id": "s1", "paid": True}],
        classes=[{"id": "k1", "name": "Level 1", "students": ["s1"]}],
        courses=COURSES,
        payments=PAYMENTS,
        expenses=EXPENSES
    )
    assert summary.net_income == summary.total_revenue - summary.total_expenses
    assert summary.enrollment_by_class[0].students == 1
    assert summary.payment_status.paid == 1


def test_export_lists_shared_student_once():
    students = [
        {"id": "s1", "name": "Sara", "phone": "0501234567", "email": "sara@example.com", "paid": True},
        {"id": "s2", "name": "Omar", "phone": "0507654321", "paid": False},
    ]
    classes = [
        {"id": "c1", "name": "Level 1", "students": ["s1"]},
        {"id": "c2", "name": "Level 2", "students": ["s1", "s2"]},
    ]

    rows = export_students_by_classes(["c1", "c2"], students, classes, translate)

    assert [row["Student Name"] for row in rows] == ["Sara", "Omar"]
    assert rows[0]["Class"] == "Level 1"
    assert rows[0]["Payment Status"] == "Paid"
    assert rows[1]["Payment Status"] == "Unpaid"
    assert rows[1]["Email"] == ""


def test_export_headers_are_localized():
    rows = export_students_by_classes(
        ["c1"],
        [{"id": "s1", "name": "Sara", "paid": True}],
        [{"id": "c1", "name": "Level 1", "students": ["s1"]}],
        get_translation("ar")
    )
    assert "Student Name" not in rows[0]
    assert len(rows[0]) == 5


def test_export_requires_classes_and_students():
    with pytest.raises(ValidationError):
        export_students_by_classes([], [], [], translate)
    with pytest.raises(ValidationError):
        export_students_by_classes(["c1"], [], [{"id": "c1", "name": "Empty", "students": []}], translate)


def test_csv_quotes_special_fields():
    content = rows_to_csv([
        {"Name": "Sara, Ali", "Note": 'says "hi"'},
        {"Name": "Omar", "Note": "plain"},
    ])
    assert content.splitlines() == [
        "Name,Note",
        '"Sara, Ali","says ""hi"""',
        "Omar,plain",
    ]


def test_csv_requires_rows():
    with pytest.raises(ValidationError):
        rows_to_csv([])


async def test_report_service_reads_collections(store):
    await store.collection("payments").add({"amount": 250})
    await store.collection("payments").add({"amount": 100})
    await store.collection("expenses").add({"amount": 150, "category": "rent"})

    summary = await ReportService(store).summary()

    assert summary.total_revenue == 350
    assert summary.total_expenses == 150
    assert summary.net_income == 200
