"""
Core domain models for the geocache proxy.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from domain.errors import InvalidInput


MAX_QUERY_LENGTH = 512


@dataclass(frozen=True)
class Canonical:
    """Human-readable address components for a location match."""
    country_iso2: str = ""
    country_name: str = ""
    display_name: str = ""
    admin1: str = ""
    city: str = ""


@dataclass(frozen=True)
class Point:
    lat: float
    lon: float


@dataclass(frozen=True)
class NormalizedResult:
    """
    Fixed-shape geocoding result handed to the UI.

    Every field has a default so a sparse provider payload still produces the
    full shape. `bbox` stays None unless the provider supplied exactly four
    finite numbers; the API response then leaves the key out entirely.
    """
    raw_input: str
    normalized_key: str = ""
    canonical: Canonical = field(default_factory=Canonical)
    granularity: str = ""
    confidence: float = 0.0
    flags: Dict[str, Any] = field(default_factory=dict)
    provider: str = ""
    cache_hit: bool = False
    point: Optional[Point] = None
    bbox: Optional[Tuple[float, float, float, float]] = None


def validate_query(query: Any) -> str:
    """Return the trimmed query or raise InvalidInput."""
    if not query or not isinstance(query, str):
        raise InvalidInput("Query parameter is required")
    trimmed = query.strip()
    if not trimmed:
        raise InvalidInput("Query cannot be empty")
    # Counts code points, not UTF-16 units
    if len(trimmed) > MAX_QUERY_LENGTH:
        raise InvalidInput(f"Query exceeds maximum length of {MAX_QUERY_LENGTH} characters")
    return trimmed
