"""Exceptions raised by the alert and report capabilities."""


class AlertkitError(Exception):
    """Base class for alertkit errors."""


class UnknownOwnerKindError(AlertkitError, LookupError):
    """Raised when an owner kind or owner class is not registered."""

    def __init__(self, kind: str):
        super().__init__(f"Unknown owner kind: {kind!r}")
        self.kind = kind


class OwnerKindConflictError(AlertkitError, ValueError):
    """Raised when two different classes claim the same owner kind."""

    def __init__(self, kind: str, existing: type, incoming: type):
        super().__init__(
            f"Owner kind {kind!r} is already registered to {existing.__name__}, "
            f"cannot register {incoming.__name__}"
        )
        self.kind = kind


class UnsavedOwnerError(AlertkitError, ValueError):
    """Raised when an owner without a primary key is used as an owner reference."""


__all__ = [
    "AlertkitError",
    "UnknownOwnerKindError",
    "OwnerKindConflictError",
    "UnsavedOwnerError",
]
