"""
Health Check Endpoint
"""
from fastapi import APIRouter, Depends
from app.api.dependencies import get_app_manifest
from app.core.config import settings
from app.models.stremio import Manifest

router = APIRouter()


@router.get("/health")
async def health_check(manifest: Manifest = Depends(get_app_manifest)):
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "version": manifest.version,
        "manifest_id": manifest.id,
        "catalog_backend": settings.CATALOG_BACKEND,
    }
