"""Utility helpers for standardized error responses."""
from typing import Any

from fastapi import HTTPException, status


def error_response(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a standardized error payload."""

    payload: dict[str, Any] = {"error": {"code": code, "message": message}}
    if details:
        payload["error"]["details"] = details
    return payload


def not_found(code: str, message: str, details: dict[str, Any] | None = None) -> HTTPException:
    """Return a 404 ``HTTPException`` carrying the standard payload."""

    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error_response(code, message, details))


__all__ = ["error_response", "not_found"]
