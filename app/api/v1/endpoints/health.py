"""
Health check endpoints.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.core.dependencies import ServiceContainer, get_services

router = APIRouter()


@router.get("/health")
async def health_check(services: ServiceContainer = Depends(get_services)) -> Dict[str, Any]:
    """
    Basic health check endpoint.

    Returns:
        Health status
    """
    settings = services.settings
    return {
        "status": "healthy",
        "service": "deckgen-api",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache_backend": settings.CACHE_BACKEND,
    }
