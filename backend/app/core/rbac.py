"""Role-Based Access Control (RBAC) utilities.

The intake workflow has two roles. Sales creates job orders, the planner
completes them. The active role is sent by the client in the ``X-User-Role``
header; there are no user accounts.
"""

from enum import Enum
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

ROLE_HEADER = "X-User-Role"


class UserRole(str, Enum):
    """User roles for RBAC."""

    SALES = "sales"
    PLANNER = "planner"


async def get_current_role(request: Request) -> UserRole:
    """Resolve the caller's role from the request header."""
    raw = request.headers.get(ROLE_HEADER, "").strip().lower()
    if not raw:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {ROLE_HEADER} header",
        )

    try:
        return UserRole(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Unknown role: {raw}",
        )


def require_role(role: UserRole):
    """Dependency to require one specific role."""

    async def role_checker(
        current_role: Annotated[UserRole, Depends(get_current_role)]
    ) -> UserRole:
        if current_role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role {role.value}",
            )
        return current_role

    return role_checker


# Common role dependencies
RequireSales = Annotated[UserRole, Depends(require_role(UserRole.SALES))]
RequirePlanner = Annotated[UserRole, Depends(require_role(UserRole.PLANNER))]
CurrentRole = Annotated[UserRole, Depends(get_current_role)]
