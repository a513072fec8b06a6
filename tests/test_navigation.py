import pytest

from centerdesk.core.errors import PermissionDenied
from centerdesk.schemas.enums import NoticeType, Role, Section
from centerdesk.services.navigation import (
    AppState,
    dismiss_notice,
    push_notice,
    select_section,
    switch_role,
    visible_items
)


def test_supervisor_only_sees_attendance():
    assert [item.section for item in visible_items(Role.SUPERVISOR)] == [Section.ATTENDANCE]
    assert len(visible_items(Role.ADMIN)) == len(Section)


def test_switch_role_lands_on_role_section():
    state = switch_role(AppState(), Role.SUPERVISOR)
    assert (state.role, state.section) == (Role.SUPERVISOR, Section.ATTENDANCE)

    state = switch_role(state, Role.ADMIN)
    assert (state.role, state.section) == (Role.ADMIN, Section.DASHBOARD)


def test_select_section_respects_role():
    state = AppState()
    assert select_section(state, Section.REPORTS).section == Section.REPORTS
    assert state.section == Section.DASHBOARD

    supervisor = switch_role(state, Role.SUPERVISOR)
    with pytest.raises(PermissionDenied):
        select_section(supervisor, Section.PAYMENTS)


def test_notices_are_pushed_and_dismissed():
    state = push_notice(AppState(), "Added successfully!", NoticeType.SUCCESS)
    state = push_notice(state, "No data to export.")
    assert [notice.type for notice in state.notices] == [NoticeType.SUCCESS, NoticeType.INFO]

    state = dismiss_notice(state, state.notices[0].id)
    assert [notice.message for notice in state.notices] == ["No data to export."]
