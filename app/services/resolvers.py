"""
Resource Resolvers
Pluggable catalog and stream lookups, with fixture-backed defaults
"""
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple
from app.models.stremio import ContentType, MetaItem, Stream

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).resolve().parent.parent / "fixtures"
META_FIXTURES = ("for_all_mankind.json", "kimetsu.json")
STREAM_FIXTURES = "streams.json"


class CatalogResolver(ABC):
    """Resolves identifiers to detailed meta items"""

    @abstractmethod
    async def resolve(self, ids: List[str]) -> List[MetaItem]:
        """
        Look up a meta item for each identifier

        Unknown identifiers are left out of the result. Output follows
        input order.
        """

    async def close(self):
        """Release any resources held by the resolver"""


class StreamResolver(ABC):
    """Resolves a (type, id) pair to playable streams"""

    @abstractmethod
    async def resolve(self, content_type: ContentType, endpoint_id: str) -> List[Stream]:
        """Return the streams for the pair, or an empty list if none are known"""

    async def close(self):
        """Release any resources held by the resolver"""


def load_meta_fixtures(
    directory: Path = FIXTURES_DIR,
    names: Iterable[str] = META_FIXTURES,
) -> Dict[str, MetaItem]:
    """Load meta fixtures keyed by meta id"""
    metas = {}
    for name in names:
        with open(directory / name, encoding="utf-8") as fh:
            meta = MetaItem.model_validate(json.load(fh))
        metas[meta.id] = meta
    return metas


def load_stream_fixtures(
    path: Path = FIXTURES_DIR / STREAM_FIXTURES,
) -> Dict[Tuple[ContentType, str], List[Stream]]:
    """Load stream fixtures keyed by (content type, id)"""
    with open(path, encoding="utf-8") as fh:
        entries = json.load(fh)

    streams: Dict[Tuple[ContentType, str], List[Stream]] = {}
    for entry in entries:
        key = (ContentType(entry["type"]), entry["id"])
        streams.setdefault(key, []).append(Stream.model_validate(entry["stream"]))
    return streams


def normalize_endpoint_id(endpoint_id: str) -> str:
    """Strip the `.json` suffix Stremio appends to resource ids"""
    return endpoint_id.removesuffix(".json")


class FixtureCatalogResolver(CatalogResolver):
    """Catalog resolver backed by static meta fixtures"""

    def __init__(self, metas: Optional[Dict[str, MetaItem]] = None):
        self.metas = load_meta_fixtures() if metas is None else metas

    async def resolve(self, ids: List[str]) -> List[MetaItem]:
        seen = set()
        result = []

        for id in ids:
            if id in seen:
                continue
            seen.add(id)

            meta = self.metas.get(id)
            if meta is None:
                logger.warning(f"Unmatched id: `{id}`")
                continue

            logger.info(f"Matched id: {id}")
            result.append(meta)

        return result


class FixtureStreamResolver(StreamResolver):
    """Stream resolver backed by static stream fixtures"""

    def __init__(self, streams: Optional[Dict[Tuple[ContentType, str], List[Stream]]] = None):
        self.streams = load_stream_fixtures() if streams is None else streams

    async def resolve(self, content_type: ContentType, endpoint_id: str) -> List[Stream]:
        key = (content_type, normalize_endpoint_id(endpoint_id))
        streams = self.streams.get(key, [])

        if streams:
            logger.info(f"Found {len(streams)} streams for {content_type.value}/{key[1]}")
        else:
            logger.debug(f"No streams for {content_type.value}/{key[1]}")

        return list(streams)
