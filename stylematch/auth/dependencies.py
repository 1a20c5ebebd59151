from __future__ import annotations

from typing import Callable

from fastapi import HTTPException, Request

from .users import ROLE_ADMIN


def require_user(request: Request) -> dict:
    """Session account, or 401."""
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_role(role: str) -> Callable[[Request], dict]:
    """Dependency factory: 401 without a session, 403 for any other role."""

    def _dependency(request: Request) -> dict:
        user = require_user(request)
        if user.get("role") != role:
            raise HTTPException(status_code=403, detail=f"{role.capitalize()} access required")
        return user

    return _dependency


require_admin = require_role(ROLE_ADMIN)
