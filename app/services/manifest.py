"""
Manifest Store
Builds the addon manifest once and shares it read-only
"""
import logging
from functools import lru_cache
from app.models.stremio import (
    ContentType,
    ExtraProp,
    Manifest,
    ManifestCatalog,
    ResourceKind,
)

logger = logging.getLogger(__name__)

LAST_VIDEOS_CATALOG_ID = "last-videos"
LAST_VIDEOS_EXTRA = "lastVideosIds"


def build_manifest() -> Manifest:
    """
    Build the addon manifest

    Raises:
        pydantic.ValidationError: if the document is inconsistent, e.g. a
            catalog uses a type the manifest does not declare
    """
    return Manifest(
        id="org.stremio.last-videos-addon",
        version="0.1.0",
        name="Last Videos",
        description="Last videos catalog and sample streams for movies and series",
        resources=(ResourceKind.CATALOG, ResourceKind.STREAM),
        types=(ContentType.MOVIE, ContentType.SERIES),
        idPrefixes=("tt", "kitsu"),
        catalogs=(
            ManifestCatalog(
                type=ContentType.MOVIE,
                id="bbbcatalog",
                name="Big Buck Bunny",
            ),
            ManifestCatalog(
                type=ContentType.SERIES,
                id=LAST_VIDEOS_CATALOG_ID,
                name="lastVideos",
                extra=(
                    ExtraProp(
                        name=LAST_VIDEOS_EXTRA,
                        isRequired=True,
                        optionsLimit=100,
                    ),
                ),
            ),
        ),
    )


@lru_cache(maxsize=1)
def get_manifest() -> Manifest:
    """Return the process-wide manifest, building it on first use"""
    manifest = build_manifest()
    logger.info(
        f"Manifest {manifest.id}@{manifest.version} loaded with {len(manifest.catalogs)} catalogs"
    )
    return manifest
