from dataclasses import dataclass, field, replace
from typing import List, NamedTuple, Tuple

from centerdesk.core.errors import PermissionDenied
from centerdesk.schemas.common.notice import Notice
from centerdesk.schemas.enums import NoticeType, Role, Section


class NavItem(NamedTuple):
    section: Section
    label: str
    icon: str
    roles: Tuple[Role, ...]


_ADMIN = (Role.ADMIN,)
_EVERYONE = (Role.ADMIN, Role.SUPERVISOR)

NAV_ITEMS: Tuple[NavItem, ...] = (
    NavItem(Section.DASHBOARD, "Dashboard", "home", _ADMIN),
    NavItem(Section.STUDENTS, "Students", "users", _ADMIN),
    NavItem(Section.CLASSES, "Classes", "book-open", _ADMIN),
    NavItem(Section.COURSES, "Courses", "library", _ADMIN),
    NavItem(Section.PAYMENTS, "Payments", "credit-card", _ADMIN),
    NavItem(Section.EXPENSES, "Expenses", "receipt", _ADMIN),
    NavItem(Section.REPORTS, "Reports", "bar-chart", _ADMIN),
    NavItem(Section.INSTRUCTORS, "Instructors", "user-check", _ADMIN),
    NavItem(Section.ATTENDANCE, "Attendance", "calendar-check", _EVERYONE),
    NavItem(Section.CERTIFICATES, "Certificates", "award", _ADMIN),
)

LANDING_SECTION = {
    Role.ADMIN: Section.DASHBOARD,
    Role.SUPERVISOR: Section.ATTENDANCE,
}


@dataclass(frozen=True)
class AppState:
    """Selected section, acting role and pending notices. Never mutated in place."""
    section: Section = Section.DASHBOARD
    role: Role = Role.ADMIN
    notices: Tuple[Notice, ...] = field(default_factory=tuple)


def visible_items(role: Role) -> List[NavItem]:
    return [item for item in NAV_ITEMS if role in item.roles]


def can_view(role: Role, section: Section) -> bool:
    return any(item.section == section for item in visible_items(role))


def select_section(state: AppState, section: Section) -> AppState:
    if not can_view(state.role, section):
        raise PermissionDenied(details={"section": "Permission denied"})
    return replace(state, section=section)


def switch_role(state: AppState, role: Role) -> AppState:
    return replace(state, role=role, section=LANDING_SECTION[role])


def push_notice(state: AppState, message: str, kind: NoticeType = NoticeType.INFO) -> AppState:
    return replace(state, notices=state.notices + (Notice(type=kind, message=message),))


def dismiss_notice(state: AppState, notice_id: str) -> AppState:
    return replace(state, notices=tuple(notice for notice in state.notices if notice.id != notice_id))
