from typing import Callable, List
from fastapi import APIRouter, Depends, status

from centerdesk.core.dependencies import get_class_service, get_translate
from centerdesk.core.permissions import require_admin
from centerdesk.routes.common import mutation_response
from centerdesk.schemas.common import MutationResponse
from centerdesk.schemas.class_ import (
    ClassCreate,
    ClassUpdate,
    ClassResponse,
    AssignStudentsRequest,
    AssignInstructorsRequest,
    ReconcileResponse
)
from centerdesk.services.class_service import ClassService

router = APIRouter(
    prefix="/api/v1/classes",
    tags=["classes"],
    dependencies=[Depends(require_admin())]
)


@router.get("", response_model=List[ClassResponse])
async def list_classes(service: ClassService = Depends(get_class_service)):
    return await service.list_classes()


@router.post("", response_model=MutationResponse, status_code=status.HTTP_201_CREATED)
async def add_class(
    data: ClassCreate,
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.add_class(data)
    return mutation_response(result, translate, "Added successfully!")


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile_rosters(
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    """Rebuild class student lists from the students' class assignment"""
    repaired, issues = await service.reconcile_rosters()
    return ReconcileResponse(
        repaired_class_ids=repaired,
        warnings=[issue.render(translate) for issue in issues]
    )


@router.get("/{class_id}", response_model=ClassResponse)
async def get_class(
    class_id: str,
    service: ClassService = Depends(get_class_service)
):
    return await service.get_class(class_id)


@router.patch("/{class_id}", response_model=MutationResponse)
async def update_class(
    class_id: str,
    data: ClassUpdate,
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.update_class(class_id, data)
    return mutation_response(result, translate, "Updated successfully!")


@router.delete("/{class_id}", response_model=MutationResponse)
async def delete_class(
    class_id: str,
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.delete_class(class_id)
    return mutation_response(result, translate, "Deleted successfully!")


@router.put("/{class_id}/students", response_model=MutationResponse)
async def assign_students(
    class_id: str,
    data: AssignStudentsRequest,
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.assign_students(class_id, data.student_ids)
    return mutation_response(result, translate, "Updated successfully!")


@router.put("/{class_id}/instructors", response_model=MutationResponse)
async def assign_instructors(
    class_id: str,
    data: AssignInstructorsRequest,
    service: ClassService = Depends(get_class_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    result = await service.assign_instructors(class_id, data.instructor_ids)
    return mutation_response(result, translate, "Updated successfully!")
