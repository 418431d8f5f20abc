"""Shared path dependencies for owner-scoped endpoints."""
from __future__ import annotations

from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from alertkit.db import get_db
from alertkit.exceptions import UnknownOwnerKindError
from alertkit.owners import OwnerRef, load_owner
from alertkit.utils.errors import not_found


def get_owner(owner_kind: str, owner_id: int, db: Session = Depends(get_db)) -> Any:
    """Load the owner named by the ``/owners/{owner_kind}/{owner_id}`` path."""

    try:
        owner = load_owner(db, OwnerRef(kind=owner_kind, id=owner_id))
    except UnknownOwnerKindError as exc:
        raise not_found("UNKNOWN_OWNER_KIND", f"Unknown owner kind '{owner_kind}'.") from exc
    if owner is None:
        raise not_found("OWNER_NOT_FOUND", "Owner not found.", {"owner_kind": owner_kind, "owner_id": owner_id})
    return owner
