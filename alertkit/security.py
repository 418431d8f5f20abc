"""Actor dependencies for the HTTP layer.

Authentication itself happens upstream (gateway or host application), which
forwards the authenticated user id in ``X-User-Id``. Host applications with their
own auth override :func:`get_current_actor` through ``app.dependency_overrides``.
"""
from __future__ import annotations

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from alertkit.db import get_db
from alertkit.models.user import User
from alertkit.utils.errors import error_response


def get_current_actor(
    db: Session = Depends(get_db),
    x_user_id: int | None = Header(default=None, alias="X-User-Id"),
) -> User | None:
    """Return the acting user, or ``None`` when the request carries none."""

    if x_user_id is None:
        return None
    user = db.get(User, x_user_id)
    if user is None or not user.is_active:
        return None
    return user


def require_actor(actor: User | None = Depends(get_current_actor)) -> User:
    """Like :func:`get_current_actor` but rejects anonymous requests."""

    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_response("NO_ACTOR", "An acting user is required."),
        )
    return actor
