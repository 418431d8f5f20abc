"""Polymorphic owner references.

Alerts and reports point back at their owner through an ``(owner_type, owner_id)``
pair instead of a real foreign key, so one table can serve any number of owning
models. The registry below maps each ``owner_type`` discriminator to the ORM class
it names; it is filled automatically by the capability mixins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from alertkit.exceptions import OwnerKindConflictError, UnknownOwnerKindError, UnsavedOwnerError

logger = logging.getLogger(__name__)

_REGISTRY: dict[str, type] = {}


@dataclass(frozen=True)
class OwnerRef:
    """Tagged reference to an owning entity: kind discriminator plus identifier."""

    kind: str
    id: int

    def __str__(self) -> str:
        return f"{self.kind}:{self.id}"


def owner_kind_of(cls: type) -> str:
    """Return the discriminator stored in ``owner_type`` for ``cls``."""

    return getattr(cls, "__owner_kind__", None) or cls.__name__


def register_owner(cls: type, kind: str | None = None) -> str:
    """Register ``cls`` as an owner kind and return the kind."""

    kind = kind or owner_kind_of(cls)
    existing = _REGISTRY.get(kind)
    if existing is not None and existing is not cls:
        raise OwnerKindConflictError(kind, existing, cls)
    if existing is None:
        _REGISTRY[kind] = cls
        logger.debug("Owner kind registered", extra={"owner_kind": kind, "owner_class": cls.__name__})
    return kind


def unregister_owner(kind: str) -> None:
    """Forget an owner kind. Unknown kinds are ignored."""

    _REGISTRY.pop(kind, None)


def registered_kinds() -> list[str]:
    return sorted(_REGISTRY)


def owner_class(kind: str) -> type:
    """Return the ORM class registered under ``kind``."""

    try:
        return _REGISTRY[kind]
    except KeyError:
        raise UnknownOwnerKindError(kind) from None


def is_registered(cls: type) -> bool:
    return _REGISTRY.get(owner_kind_of(cls)) is cls


def owner_ref(owner: Any) -> OwnerRef:
    """Build an :class:`OwnerRef` for a registered ORM instance.

    ``OwnerRef`` values are validated against the registry and returned as-is.
    """

    if isinstance(owner, OwnerRef):
        owner_class(owner.kind)
        return owner

    cls = type(owner)
    if not is_registered(cls):
        raise UnknownOwnerKindError(owner_kind_of(cls))
    owner_id = getattr(owner, "id", None)
    if owner_id is None:
        raise UnsavedOwnerError(f"{cls.__name__} instance has no id; flush it before attaching alerts or reports")
    return OwnerRef(kind=owner_kind_of(cls), id=owner_id)


def load_owner(db: Session, ref: OwnerRef) -> Any | None:
    """Return the owning instance, or ``None`` when the row no longer exists."""

    return db.get(owner_class(ref.kind), ref.id)


__all__ = [
    "OwnerRef",
    "owner_kind_of",
    "register_owner",
    "unregister_owner",
    "registered_kinds",
    "owner_class",
    "is_registered",
    "owner_ref",
    "load_owner",
]
