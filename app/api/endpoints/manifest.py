"""
Manifest Endpoint
Returns the Stremio addon manifest
"""
from fastapi import APIRouter, Depends
from app.api.dependencies import get_app_manifest
from app.models.stremio import Manifest

router = APIRouter()


@router.get("/manifest.json")
async def get_manifest(manifest: Manifest = Depends(get_app_manifest)):
    """
    Return addon manifest

    The manifest is built once at startup and never changes.
    """
    return manifest.model_dump(mode="json", exclude_none=True)
