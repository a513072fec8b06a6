# centerdesk/services/base_service.py
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List

from centerdesk.core.errors import BaseAPIError
from centerdesk.core.logging import logger
from centerdesk.services.record_store import DocumentStore


@dataclass
class Issue:
    """A follow-up write that failed after the primary change committed"""
    message: str
    params: Dict[str, Any] = field(default_factory=dict)

    def render(self, translate: Callable[..., str]) -> str:
        return translate(self.message, **self.params)


@dataclass
class MutationResult:
    id: str
    issues: List[Issue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues


class BaseService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def _secondary(
        self,
        issues: List[Issue],
        write: Callable[[], Awaitable[Any]],
        message: str,
        **params: Any
    ) -> bool:
        """Run a dependent write; failures are logged and collected, never rolled back"""
        try:
            await write()
            return True
        except BaseAPIError as exc:
            logger.error(
                f"Secondary write failed: {message.format(**params)} ({exc.error_code})",
                exc_info=True
            )
            issues.append(Issue(message, params))
            return False
