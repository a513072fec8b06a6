# centerdesk/core/permissions.py
from typing import List
from fastapi import Depends

from centerdesk.core.dependencies import get_current_role
from centerdesk.core.errors import PermissionDenied
from centerdesk.core.logging import logger
from centerdesk.schemas.enums import Role


class RoleChecker:
    """Role check usable as a FastAPI dependency"""

    def __init__(self, allowed_roles: List[Role]):
        self.allowed_roles = set(allowed_roles)

    async def __call__(self, role: Role = Depends(get_current_role)) -> Role:
        if role not in self.allowed_roles:
            logger.warning(
                f"Permission denied: role {role.value} attempted to access resource "
                f"requiring roles {sorted(r.value for r in self.allowed_roles)}"
            )
            raise PermissionDenied()
        return role

# Factory functions for common role checks
def require_admin():
    return RoleChecker([Role.ADMIN])

def allow_supervisor():
    return RoleChecker([Role.ADMIN, Role.SUPERVISOR])
