from typing import Callable, List, Type
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from centerdesk.core.dependencies import (
    get_course_service,
    get_expense_service,
    get_instructor_service,
    get_payment_service,
    get_translate
)
from centerdesk.core.permissions import require_admin
from centerdesk.routes.common import mutation_response
from centerdesk.schemas.common import MutationResponse
from centerdesk.schemas.course import CourseCreate, CourseUpdate, CourseResponse
from centerdesk.schemas.expense import ExpenseCreate, ExpenseUpdate, ExpenseResponse
from centerdesk.schemas.instructor import InstructorCreate, InstructorUpdate, InstructorResponse
from centerdesk.schemas.payment import PaymentCreate, PaymentUpdate, PaymentResponse
from centerdesk.services.record_service import RecordService


def build_record_router(
    name: str,
    get_service: Callable[..., RecordService],
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    response_model: Type[BaseModel]
) -> APIRouter:
    """CRUD routes for a collection served by a RecordService"""
    router = APIRouter(
        prefix=f"/api/v1/{name}",
        tags=[name],
        dependencies=[Depends(require_admin())]
    )

    @router.get("", response_model=List[response_model])
    async def list_records(service: RecordService = Depends(get_service)):
        return await service.list()

    @router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
    async def add_record(
        data: create_model,
        service: RecordService = Depends(get_service),
        translate: Callable[..., str] = Depends(get_translate)
    ):
        result = await service.add(data)
        return mutation_response(result, translate, "Added successfully!")

    @router.get("/{record_id}", response_model=response_model)
    async def get_record(record_id: str, service: RecordService = Depends(get_service)):
        return await service.get(record_id)

    @router.patch("/{record_id}", response_model=MutationResponse)
    async def update_record(
        record_id: str,
        data: update_model,
        service: RecordService = Depends(get_service),
        translate: Callable[..., str] = Depends(get_translate)
    ):
        result = await service.update(record_id, data)
        return mutation_response(result, translate, "Updated successfully!")

    @router.delete("/{record_id}", response_model=MutationResponse)
    async def delete_record(
        record_id: str,
        service: RecordService = Depends(get_service),
        translate: Callable[..., str] = Depends(get_translate)
    ):
        result = await service.delete(record_id)
        return mutation_response(result, translate, "Deleted successfully!")

    return router


courses_router = build_record_router(
    "courses", get_course_service, CourseCreate, CourseUpdate, CourseResponse
)
instructors_router = build_record_router(
    "instructors", get_instructor_service, InstructorCreate, InstructorUpdate, InstructorResponse
)
payments_router = build_record_router(
    "payments", get_payment_service, PaymentCreate, PaymentUpdate, PaymentResponse
)
expenses_router = build_record_router(
    "expenses", get_expense_service, ExpenseCreate, ExpenseUpdate, ExpenseResponse
)
