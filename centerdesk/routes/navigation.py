from typing import Callable
from fastapi import APIRouter, Depends

from centerdesk.core.dependencies import get_current_role, get_translate
from centerdesk.schemas.enums import Role
from centerdesk.schemas.navigation import (
    AppStateModel,
    NavigationResponse,
    NavItemResponse,
    NoticeRequest,
    SelectSectionRequest,
    SwitchRoleRequest
)
from centerdesk.services import navigation

router = APIRouter(prefix="/api/v1/navigation", tags=["navigation"])


def _to_state(model: AppStateModel) -> navigation.AppState:
    return navigation.AppState(section=model.section, role=model.role, notices=tuple(model.notices))


def _to_response(state: navigation.AppState, translate: Callable[..., str]) -> NavigationResponse:
    return NavigationResponse(
        state=AppStateModel(section=state.section, role=state.role, notices=list(state.notices)),
        items=[
            NavItemResponse(section=item.section, label=translate(item.label), icon=item.icon)
            for item in navigation.visible_items(state.role)
        ]
    )


@router.get("", response_model=NavigationResponse)
async def get_navigation(
    role: Role = Depends(get_current_role),
    translate: Callable[..., str] = Depends(get_translate)
):
    """Initial shell state and menu for the acting role"""
    state = navigation.switch_role(navigation.AppState(), role)
    return _to_response(state, translate)


@router.post("/section", response_model=NavigationResponse)
async def select_section(
    request: SelectSectionRequest,
    translate: Callable[..., str] = Depends(get_translate)
):
    state = navigation.select_section(_to_state(request.state), request.section)
    return _to_response(state, translate)


@router.post("/role", response_model=NavigationResponse)
async def switch_role(
    request: SwitchRoleRequest,
    translate: Callable[..., str] = Depends(get_translate)
):
    state = navigation.switch_role(_to_state(request.state), request.role)
    return _to_response(state, translate)


@router.post("/notices", response_model=NavigationResponse)
async def update_notices(
    request: NoticeRequest,
    translate: Callable[..., str] = Depends(get_translate)
):
    """Push a notice when a message is given, dismiss one when an id is given"""
    state = _to_state(request.state)
    if request.notice_id:
        state = navigation.dismiss_notice(state, request.notice_id)
    if request.message:
        state = navigation.push_notice(state, translate(request.message), request.type)
    return _to_response(state, translate)
