"""
Stremio Protocol Models
Pydantic models for Stremio addon protocol
"""
import re
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Dict, List, Optional, Tuple

SEMVER_PATTERN = re.compile(
    r"^\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$"
)
INFO_HASH_PATTERN = re.compile(r"^[0-9a-fA-F]{40}$")


class ResourceKind(str, Enum):
    """Resources served by the addon"""
    CATALOG = "catalog"
    STREAM = "stream"


class ContentType(str, Enum):
    """Content types the addon knows about"""
    MOVIE = "movie"
    SERIES = "series"


class ExtraProp(BaseModel):
    """Extra property a catalog accepts, e.g. lastVideosIds"""
    model_config = ConfigDict(frozen=True)

    name: str
    isRequired: bool = False
    options: Tuple[str, ...] = ()
    optionsLimit: int = Field(1, ge=1)


class ManifestCatalog(BaseModel):
    """Catalog definition in manifest"""
    model_config = ConfigDict(frozen=True)

    type: ContentType
    id: str
    name: Optional[str] = None
    extra: Tuple[ExtraProp, ...] = ()

    def get_extra(self, name: str) -> Optional[ExtraProp]:
        """Return the extra property declared under `name`, if any"""
        for prop in self.extra:
            if prop.name == name:
                return prop
        return None


class Manifest(BaseModel):
    """Stremio addon manifest"""
    model_config = ConfigDict(frozen=True)

    id: str
    version: str
    name: str
    description: Optional[str] = None

    resources: Tuple[ResourceKind, ...]
    types: Tuple[ContentType, ...]
    idPrefixes: Optional[Tuple[str, ...]] = None

    catalogs: Tuple[ManifestCatalog, ...] = ()

    behaviorHints: Dict[str, bool] = Field(default_factory=dict)

    @field_validator("version")
    @classmethod
    def validate_version(cls, value: str) -> str:
        if not SEMVER_PATTERN.match(value):
            raise ValueError(f"version must be a semantic version, got {value!r}")
        return value

    @model_validator(mode="after")
    def validate_catalog_types(self):
        for catalog in self.catalogs:
            if catalog.type not in self.types:
                raise ValueError(
                    f"Catalog {catalog.id!r} uses type {catalog.type.value!r} "
                    f"which is not declared in types"
                )
        return self

    def is_id_supported(self, id: str) -> bool:
        """
        Check whether an identifier is served by this addon

        No idPrefixes means every identifier is accepted.
        """
        if self.idPrefixes is None:
            return True
        return any(id.startswith(prefix) for prefix in self.idPrefixes)

    def get_catalog(self, type: ContentType, id: str) -> Optional[ManifestCatalog]:
        """Look up a declared catalog by type and id"""
        for catalog in self.catalogs:
            if catalog.type == type and catalog.id == id:
                return catalog
        return None


class MetaItem(BaseModel):
    """Detailed meta item, passed through as received from the resolver"""
    model_config = ConfigDict(extra="allow", frozen=True)

    id: str
    type: str
    name: str


class StreamProxyHeaders(BaseModel):
    """Headers the client should send/expect when proxying a stream"""
    model_config = ConfigDict(frozen=True)

    request: Dict[str, str] = Field(default_factory=dict)
    response: Dict[str, str] = Field(default_factory=dict)


class StreamBehaviorHints(BaseModel):
    """Protocol hints attached to a stream"""
    model_config = ConfigDict(frozen=True)

    notWebReady: bool = False
    bingeGroup: Optional[str] = None
    countryWhitelist: Optional[Tuple[str, ...]] = None
    proxyHeaders: Optional[StreamProxyHeaders] = None


class Stream(BaseModel):
    """Playable source: either a direct URL or a torrent"""
    model_config = ConfigDict(frozen=True)

    url: Optional[str] = None
    infoHash: Optional[str] = None
    fileIdx: Optional[int] = Field(None, ge=0)
    announce: Optional[Tuple[str, ...]] = None

    name: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    behaviorHints: StreamBehaviorHints = Field(default_factory=StreamBehaviorHints)

    @model_validator(mode="after")
    def validate_source(self):
        if (self.url is None) == (self.infoHash is None):
            raise ValueError("Stream needs exactly one source: url or infoHash")
        if self.infoHash is not None and not INFO_HASH_PATTERN.match(self.infoHash):
            raise ValueError("infoHash must be 40 hex characters")
        if self.url is not None and (self.fileIdx is not None or self.announce is not None):
            raise ValueError("fileIdx and announce only apply to torrent streams")
        return self


class MetasDetailedResponse(BaseModel):
    """Catalog endpoint response with detailed metas"""
    metasDetailed: List[MetaItem]


class StreamsResponse(BaseModel):
    """Stream endpoint response"""
    streams: List[Stream]
