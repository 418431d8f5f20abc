"""Actor resolution.

An actor is the user an action is attributed to. Callers pass it explicitly, either
per call or once as the ``current_actor`` of a capability; nothing here reads
ambient authentication state.
"""
from __future__ import annotations

from typing import Union

from alertkit.models.user import User

Actor = Union[User, int]


def actor_id(actor: Actor | None) -> int | None:
    """Return the user id behind ``actor``, or ``None``."""

    if actor is None:
        return None
    if isinstance(actor, User):
        return actor.id
    return int(actor)


def resolve_actor_id(actor: Actor | None, current_actor: Actor | None = None) -> int | None:
    """Explicit actor first, then the caller-supplied current actor."""

    if actor is not None:
        return actor_id(actor)
    return actor_id(current_actor)


__all__ = ["Actor", "actor_id", "resolve_actor_id"]
