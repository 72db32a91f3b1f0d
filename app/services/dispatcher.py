"""
Resource Dispatcher
Routes catalog and stream requests to resolvers and wraps their results
"""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional, Tuple, TypeVar
from pydantic import BaseModel
from app.core.errors import (
    AddonError,
    DecodeError,
    NoSupportedIds,
    ResolverFailure,
    UnresolvedCapability,
)
from app.models.stremio import (
    ContentType,
    Manifest,
    MetasDetailedResponse,
    ResourceKind,
    StreamsResponse,
)
from app.services.manifest import LAST_VIDEOS_CATALOG_ID, LAST_VIDEOS_EXTRA
from app.services.resolvers import CatalogResolver, StreamResolver, normalize_endpoint_id
from app.utils.extra import apply_extra_prop, decode_extra

logger = logging.getLogger(__name__)

T = TypeVar("T")
Handler = Callable[[ContentType, str], Awaitable[BaseModel]]


class ResourceDispatcher:
    """
    Stateless request router

    Holds the shared manifest and the two resolvers. Every
    (ResourceKind, ContentType) pair maps to a handler, so any request
    ends in a response envelope or an AddonError.
    """

    def __init__(
        self,
        manifest: Manifest,
        catalog_resolver: CatalogResolver,
        stream_resolver: StreamResolver,
        timeout: Optional[float] = None,
    ):
        self.manifest = manifest
        self.catalog_resolver = catalog_resolver
        self.stream_resolver = stream_resolver
        self.timeout = timeout

        self.handlers: Dict[Tuple[ResourceKind, ContentType], Handler] = {
            (ResourceKind.STREAM, ContentType.MOVIE): self._resolve_streams,
            (ResourceKind.STREAM, ContentType.SERIES): self._resolve_streams,
            # only the last-videos catalog has a resolver, see catalog_last_videos
            (ResourceKind.CATALOG, ContentType.MOVIE): self._unresolved_catalog,
            (ResourceKind.CATALOG, ContentType.SERIES): self._unresolved_catalog,
        }

    async def _call_resolver(self, name: str, call: Awaitable[T]) -> T:
        """Await a resolver call under the configured timeout"""
        try:
            return await asyncio.wait_for(call, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise ResolverFailure(f"{name} timed out after {self.timeout}s") from exc
        except AddonError:
            raise
        except Exception as exc:
            raise ResolverFailure(f"{name} failed: {exc}") from exc

    async def catalog_last_videos(self, segment: str) -> MetasDetailedResponse:
        """
        Resolve the series/last-videos catalog

        Args:
            segment: Extra path segment, e.g. "lastVideosIds=tt7772588,kitsu:44081.json"

        Returns:
            Detailed metas for the supported identifiers that the resolver knows

        Raises:
            DecodeError: segment is malformed or lists no identifiers
            NoSupportedIds: no identifier matches the manifest prefixes
            ResolverFailure: the catalog resolver failed or timed out
        """
        requested = decode_extra(segment, LAST_VIDEOS_EXTRA)[LAST_VIDEOS_EXTRA]

        ids = []
        for id in requested:
            if self.manifest.is_id_supported(id):
                ids.append(id)
            else:
                logger.debug(f"Dropping unsupported id: `{id}`")

        if not ids:
            raise NoSupportedIds(f"None of {len(requested)} ids match the addon id prefixes")

        catalog = self.manifest.get_catalog(ContentType.SERIES, LAST_VIDEOS_CATALOG_ID)
        if catalog is None:
            raise UnresolvedCapability(f"Catalog series/{LAST_VIDEOS_CATALOG_ID} is not declared")

        prop = catalog.get_extra(LAST_VIDEOS_EXTRA)
        if prop is not None:
            ids = apply_extra_prop(ids, prop)

        metas = await self._call_resolver("catalog resolver", self.catalog_resolver.resolve(ids))
        logger.info(f"last-videos: {len(metas)} metas for {len(requested)} requested ids")

        return MetasDetailedResponse(metasDetailed=metas)

    async def resolve(
        self,
        kind: ResourceKind,
        content_type: ContentType,
        endpoint_id: str,
    ) -> BaseModel:
        """
        Dispatch a generic `/{resource}/{type}/{id}` request

        Raises:
            UnresolvedCapability: the pair is not declared or has no resolver
            ResolverFailure: the resolver failed or timed out
        """
        if kind not in self.manifest.resources or content_type not in self.manifest.types:
            raise UnresolvedCapability(
                f"{kind.value}/{content_type.value} is not declared in the manifest"
            )

        handler = self.handlers.get((kind, content_type))
        if handler is None:
            raise UnresolvedCapability(f"No handler for {kind.value}/{content_type.value}")

        return await handler(content_type, endpoint_id)

    async def _resolve_streams(self, content_type: ContentType, endpoint_id: str) -> StreamsResponse:
        streams = await self._call_resolver(
            "stream resolver",
            self.stream_resolver.resolve(content_type, endpoint_id),
        )
        return StreamsResponse(streams=streams)

    async def _unresolved_catalog(self, content_type: ContentType, endpoint_id: str) -> BaseModel:
        catalog = self.manifest.get_catalog(content_type, normalize_endpoint_id(endpoint_id))
        if catalog is not None:
            required = [prop.name for prop in catalog.extra if prop.isRequired]
            if required:
                raise DecodeError(
                    f"Catalog {content_type.value}/{catalog.id} requires extra {', '.join(required)}"
                )

        raise UnresolvedCapability(
            f"Catalog {content_type.value}/{endpoint_id} is not implemented"
        )
