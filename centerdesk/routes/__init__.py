from . import attendance, classes, navigation, records, reports, students

__all__ = [
    "attendance",
    "classes",
    "navigation",
    "records",
    "reports",
    "students"
]
