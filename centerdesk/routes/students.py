from typing import Callable, List, Optional
from fastapi import APIRouter, Depends, Query, status

from centerdesk.core.dependencies import get_student_service, get_translate
from centerdesk.core.permissions import require_admin
from centerdesk.routes.common import mutation_response
from centerdesk.schemas.common import MutationResponse
from centerdesk.schemas.student import StudentCreate, StudentUpdate, StudentResponse
from centerdesk.services.student_service import StudentService

router = APIRouter(
    prefix="/api/v1/students",
    tags=["students"],
    dependencies=[Depends(require_admin())]
)


@router.get("", response_model=List[StudentResponse])
async def list_students(
    search: Optional[str] = Query(default=None, description="Matches name, phone or email"),
    service: StudentService = Depends(get_student_service)
):
    return await service.list_students(search)


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def add_student(
    data: StudentCreate,
    service: StudentService = Depends(get_student_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.add_student(data)
    return mutation_response(result, translate, "Added successfully!")


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: str,
    service: StudentService = Depends(get_student_service)
):
    return await service.get_student(student_id)


@router.patch("/{student_id}", response_model=MutationResponse)
async def update_student(
    student_id: str,
    data: StudentUpdate,
    service: StudentService = Depends(get_student_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    """Partial update; a null classId unassigns the student"""
    result = await service.update_student(student_id, data)
    return mutation_response(result, translate, "Updated successfully!")


@router.delete("/{student_id}", response_model=MutationResponse)
async def delete_student(
    student_id: str,
    service: StudentService = Depends(get_student_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.delete_student(student_id)
    return mutation_response(result, translate, "Deleted successfully!")
