from typing import List, Optional
from pydantic import BaseModel, Field

from .common.notice import Notice
from .enums import Role, Section, NoticeType


class NavItemResponse(BaseModel):
    section: Section
    label: str
    icon: str


class AppStateModel(BaseModel):
    section: Section = Section.DASHBOARD
    role: Role = Role.ADMIN
    notices: List[Notice] = Field(default_factory=list)


class SelectSectionRequest(BaseModel):
    state: AppStateModel = Field(default_factory=AppStateModel)
    section: Section


class SwitchRoleRequest(BaseModel):
    state: AppStateModel = Field(default_factory=AppStateModel)
    role: Role


class NoticeRequest(BaseModel):
    state: AppStateModel = Field(default_factory=AppStateModel)
    message: Optional[str] = None
    type: NoticeType = NoticeType.INFO
    notice_id: Optional[str] = None


class NavigationResponse(BaseModel):
    state: AppStateModel
    items: List[NavItemResponse] = Field(default_factory=list)
