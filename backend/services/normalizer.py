"""Normalize Geocache provider payloads into a stable result shape.

The provider may answer with a single object or with a list of candidates,
and any field may be missing or carry an unexpected type. Everything here
is pure: no I/O, inputs are never mutated.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from domain.models import Canonical, NormalizedResult, Point

_CANONICAL_FIELDS = {
    "country_iso2": "countryIso2",
    "country_name": "countryName",
    "display_name": "displayName",
    "admin1": "admin1",
    "city": "city",
}


def as_mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


def as_string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def as_finite_number(value: Any) -> Optional[float]:
    """Return value if it is a real, finite JSON number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        as_float = float(value)
    except OverflowError:
        # ints beyond float range
        return None
    if not math.isfinite(as_float):
        return None
    return value


def as_bool(value: Any, default: bool = False) -> bool:
    return value if isinstance(value, bool) else default


def extract_point(candidate: Mapping[str, Any]) -> Optional[Point]:
    point = as_mapping(candidate.get("point"))
    if point is None:
        return None
    lat = as_finite_number(point.get("lat"))
    lon = as_finite_number(point.get("lon"))
    if lat is None or lon is None:
        return None
    return Point(lat=lat, lon=lon)


def extract_bbox(candidate: Mapping[str, Any]) -> Optional[tuple]:
    bbox = candidate.get("bbox")
    if not isinstance(bbox, (list, tuple)) or len(bbox) != 4:
        return None
    values = [as_finite_number(v) for v in bbox]
    if any(v is None for v in values):
        return None
    return tuple(values)


def select_candidate(payload: Any) -> Optional[Mapping[str, Any]]:
    """
    Pick the candidate to normalize.

    A single mapping is its own candidate. For a list, the first mapping with
    a valid point wins; otherwise the first mapping at all. Anything else
    yields None.
    """
    if as_mapping(payload) is not None:
        return payload
    if not isinstance(payload, (list, tuple)):
        return None

    fallback: Optional[Mapping[str, Any]] = None
    for item in payload:
        if as_mapping(item) is None:
            continue
        if fallback is None:
            fallback = item
        if extract_point(item) is not None:
            return item
    return fallback


def _raw_input(candidate: Mapping[str, Any], raw_query: str) -> str:
    echoed = candidate.get("input")
    if isinstance(echoed, str):
        return echoed
    echoed_map = as_mapping(echoed)
    if echoed_map is not None:
        return as_string(echoed_map.get("raw"), raw_query)
    return raw_query


def normalize(payload: Any, raw_query: str) -> Optional[NormalizedResult]:
    """Map a raw provider payload to a NormalizedResult, or None if unusable."""
    candidate = select_candidate(payload)
    if candidate is None:
        return None

    canonical_src = as_mapping(candidate.get("canonical")) or {}
    canonical = Canonical(
        **{attr: as_string(canonical_src.get(key)) for attr, key in _CANONICAL_FIELDS.items()}
    )
    confidence = as_finite_number(candidate.get("confidence"))
    flags = as_mapping(candidate.get("flags")) or {}
    cache = as_mapping(candidate.get("cache")) or {}

    return NormalizedResult(
        raw_input=_raw_input(candidate, raw_query),
        normalized_key=as_string(candidate.get("normalizedKey")),
        canonical=canonical,
        granularity=as_string(candidate.get("granularity")),
        confidence=confidence if confidence is not None else 0,
        flags=dict(flags),
        provider=as_string(candidate.get("provider")),
        cache_hit=as_bool(cache.get("hit")),
        point=extract_point(candidate),
        bbox=extract_bbox(candidate),
    )
