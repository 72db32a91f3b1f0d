"""
Catalog Endpoint
Returns the series last-videos catalog
"""
import logging
from fastapi import APIRouter, Depends, Path
from app.api.dependencies import get_dispatcher
from app.services.dispatcher import ResourceDispatcher

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/catalog/series/last-videos/{segment}")
async def get_series_last_videos(
    segment: str = Path(..., description="Extra segment, e.g. lastVideosIds=tt7772588,kitsu:44081.json"),
    dispatcher: ResourceDispatcher = Depends(get_dispatcher),
):
    """
    Return detailed metas for the requested ids

    Example: /catalog/series/last-videos/lastVideosIds=tt7772588.json
    """
    logger.info(f"Get /catalog/series/last-videos; segment {segment}")
    response = await dispatcher.catalog_last_videos(segment)
    return response.model_dump(mode="json", exclude_none=True)
