"""Shared rate limiter instance for use across route files."""

from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from app.core.config import settings
from app.core.rbac import ROLE_HEADER


def get_role_or_ip(request: Request) -> str:
    """Rate limit per role and client IP so sales and planner do not share a bucket."""
    role = request.headers.get(ROLE_HEADER, "").strip().lower()
    address = get_remote_address(request)
    if role:
        return f"{role}:{address}"
    return address


limiter = Limiter(key_func=get_role_or_ip, enabled=settings.rate_limit_enabled)
