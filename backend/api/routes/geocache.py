"""
Geocache proxy route.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.concurrency import run_in_threadpool

from domain.errors import EmptyResult, GeocacheError, UnexpectedError
from domain.models import NormalizedResult, validate_query
from services.geocache_client import get_default_geocache_client
from services.normalizer import normalize

router = APIRouter()
logger = logging.getLogger(__name__)


class InputResponse(BaseModel):
    raw: str


class CanonicalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    country_iso2: str = Field("", alias="countryIso2")
    country_name: str = Field("", alias="countryName")
    display_name: str = Field("", alias="displayName")
    admin1: str = ""
    city: str = ""


class CacheResponse(BaseModel):
    hit: bool = False


class PointResponse(BaseModel):
    lat: float
    lon: float


class GeocacheResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input: InputResponse
    normalized_key: str = Field("", alias="normalizedKey")
    canonical: CanonicalResponse
    granularity: str = ""
    confidence: float = 0
    flags: Dict[str, Any] = Field(default_factory=dict)
    provider: str = ""
    cache: CacheResponse
    point: Optional[PointResponse] = None
    # Omitted from the payload unless set
    bbox: Optional[List[float]] = None


def result_to_response(result: NormalizedResult) -> GeocacheResult:
    """Convert a domain NormalizedResult to the API response model."""
    canonical = result.canonical
    fields: Dict[str, Any] = dict(
        input=InputResponse(raw=result.raw_input),
        normalized_key=result.normalized_key,
        canonical=CanonicalResponse(
            country_iso2=canonical.country_iso2,
            country_name=canonical.country_name,
            display_name=canonical.display_name,
            admin1=canonical.admin1,
            city=canonical.city,
        ),
        granularity=result.granularity,
        confidence=result.confidence,
        flags=dict(result.flags),
        provider=result.provider,
        cache=CacheResponse(hit=result.cache_hit),
        point=PointResponse(lat=result.point.lat, lon=result.point.lon) if result.point else None,
    )
    if result.bbox is not None:
        fields["bbox"] = list(result.bbox)
    return GeocacheResult(**fields)


def dump_result(result: NormalizedResult) -> Dict[str, Any]:
    """JSON-ready dict with camelCase keys; `bbox` only when present."""
    return result_to_response(result).model_dump(by_alias=True, exclude_unset=True)


def error_response(error: GeocacheError) -> JSONResponse:
    """Render an error as the public `{"error": ...}` contract."""
    return JSONResponse(status_code=error.status_code, content={"error": error.public_message})


def _extract_query(body: Any) -> Any:
    return body.get("query") if isinstance(body, dict) else None


@router.post("", response_model=GeocacheResult, response_model_exclude_unset=True)
async def geocode(request: Request):
    """
    Forward a free-text location query to Geocache and normalize the answer.

    Steps:
    1. Validate and trim the query
    2. Build the upstream client (fails if the API key is unset)
    3. Call upstream off the event loop
    4. Normalize the payload into the fixed result shape
    5. Render the response here so serialization errors keep the error contract
    """
    try:
        body = await request.json()
        query = validate_query(_extract_query(body))

        client = get_default_geocache_client()
        payload = await run_in_threadpool(client.geocode, query)

        result = normalize(payload, query)
        if result is None:
            raise EmptyResult()

        logger.debug("geocache: query_len=%d resolved provider=%s", len(query), result.provider)
        return JSONResponse(content=dump_result(result))
    except GeocacheError as exc:
        return error_response(exc)
    except Exception:
        logger.exception("Geocache API error")
        return error_response(UnexpectedError())
