"""API routers for alertkit."""
from fastapi import APIRouter

from . import alerts, health, reports


def get_api_router() -> APIRouter:
    """Return the root API router."""

    api_router = APIRouter()
    api_router.include_router(health.router)
    api_router.include_router(alerts.router)
    api_router.include_router(reports.router)
    return api_router
