from typing import Callable
from fastapi import APIRouter, Depends, Response

from centerdesk.core.config import settings
from centerdesk.core.dependencies import get_report_service, get_translate
from centerdesk.core.logging import logger
from centerdesk.core.permissions import require_admin
from centerdesk.schemas.report import ExportRequest, FinancialSummary
from centerdesk.services.report_service import ReportService

router = APIRouter(
    prefix="/api/v1/reports",
    tags=["reports"],
    dependencies=[Depends(require_admin())]
)


@router.get("/summary", response_model=FinancialSummary)
async def get_summary(service: ReportService = Depends(get_report_service)):
    """Revenue, expenses and net income with the dashboard breakdowns"""
    return await service.summary()


@router.post("/students-by-classes.csv")
async def export_students_by_classes(
    request: ExportRequest,
    service: ReportService = Depends(get_report_service),
    translate: Callable[..., str] = Depends(get_translate)
):
    content = await service.students_by_classes_csv(request.class_ids, translate)
    logger.info(f"Exported students of {len(request.class_ids)} class(es)")
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={settings.EXPORT_FILENAME}"
        }
    )
