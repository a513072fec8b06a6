from typing import Callable

from centerdesk.schemas.common import MutationResponse, Notice
from centerdesk.schemas.enums import NoticeType
from centerdesk.services.base_service import MutationResult


def mutation_response(
    result: MutationResult,
    translate: Callable[..., str],
    message: str
) -> MutationResponse:
    """Success notice for a write, downgraded to info when follow-up writes failed"""
    warnings = [issue.render(translate) for issue in result.issues]
    if warnings:
        notice = Notice(type=NoticeType.INFO, message=translate("Saved with warnings."))
    else:
        notice = Notice(type=NoticeType.SUCCESS, message=translate(message))
    return MutationResponse(id=result.id, notice=notice, warnings=warnings)
