"""
Extra Parameter Codec
Parses Stremio extra path segments like `lastVideosIds=tt1,tt2.json`
"""
import logging
from typing import Dict, List
from app.core.errors import EmptyQuery, MalformedSegment
from app.models.stremio import ExtraProp

logger = logging.getLogger(__name__)

ExtraQuery = Dict[str, List[str]]

EXTRA_SUFFIX = ".json"
VALUE_SEPARATOR = ","


def decode_extra(segment: str, key: str) -> ExtraQuery:
    """
    Decode an extra-parameter path segment

    Args:
        segment: Raw path segment, e.g. "lastVideosIds=tt1,tt2.json"
        key: Expected extra property name

    Returns:
        Mapping of `key` to its values in request order, duplicates kept

    Raises:
        MalformedSegment: segment lacks the `key=` prefix or `.json` suffix
        EmptyQuery: no identifiers between prefix and suffix
    """
    prefix = f"{key}="
    if not segment.startswith(prefix):
        raise MalformedSegment(f"Expected segment to start with {prefix!r}")

    body = segment[len(prefix):]
    if not body.endswith(EXTRA_SUFFIX):
        raise MalformedSegment(f"Expected segment to end with {EXTRA_SUFFIX!r}")

    values = body[: -len(EXTRA_SUFFIX)].split(VALUE_SEPARATOR)

    # "".split(",") gives [""]; an empty list never means "everything"
    if not values[0]:
        raise EmptyQuery(f"No values given for {key!r}")

    return {key: values}


def encode_extra(key: str, values: List[str]) -> str:
    """Encode values back into a `key=v1,v2.json` segment"""
    return f"{key}={VALUE_SEPARATOR.join(values)}{EXTRA_SUFFIX}"


def apply_extra_prop(values: List[str], prop: ExtraProp) -> List[str]:
    """
    Restrict values to what the manifest declares for the property

    Args:
        values: Decoded values
        prop: Manifest declaration of the extra property

    Returns:
        Values allowed by `options` (when set), capped at `optionsLimit`
    """
    if prop.options:
        allowed = set(prop.options)
        values = [value for value in values if value in allowed]

    if len(values) <= prop.optionsLimit:
        return values

    logger.warning(
        f"{prop.name}: got {len(values)} values, keeping the first {prop.optionsLimit}"
    )
    return values[: prop.optionsLimit]
