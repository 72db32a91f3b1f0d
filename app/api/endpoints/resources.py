"""
Resource Endpoint
Generic /{resource}/{type}/{id} route for streams and catalogs
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Path
from app.api.dependencies import get_dispatcher
from app.models.stremio import ContentType, ResourceKind
from app.services.dispatcher import ResourceDispatcher

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/{resource}/{type}/{id}")
async def get_resource(
    resource: str = Path(..., description="Resource: stream or catalog"),
    type: str = Path(..., description="Content type: movie or series"),
    id: str = Path(..., description="Resource id, e.g. tt1254207.json"),
    dispatcher: ResourceDispatcher = Depends(get_dispatcher),
):
    """
    Return streams, or a catalog envelope, for the given type and id

    Args:
        resource: "stream" or "catalog"
        type: "movie" or "series"
        id: Stremio id with the .json suffix (e.g. "tt13622776:1:5.json")
    """
    try:
        kind = ResourceKind(resource)
    except ValueError:
        raise HTTPException(status_code=404, detail="Resource not found")

    try:
        content_type = ContentType(type)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid content type")

    logger.info(f"{kind.value} {content_type.value} {id}")
    response = await dispatcher.resolve(kind, content_type, id)
    return response.model_dump(mode="json", exclude_none=True)
