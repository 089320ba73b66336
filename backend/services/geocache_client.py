"""Thin client for the Geocache forward geocoding API.

Upstream failures are translated into the local error taxonomy here so the
API layer only has to render them. Transport errors from requests propagate
unchanged.
"""

from __future__ import annotations

import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Optional

import requests

from domain.errors import AuthFailure, ConfigurationError, EmptyResult, ProviderError, RateLimited
from settings import GEOCACHE_DEFAULT_URL, Settings

logger = logging.getLogger(__name__)
_session = requests.Session()
# Shared across requests, so never store or replay upstream cookies
_session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))


class GeocacheClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = GEOCACHE_DEFAULT_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ConfigurationError()
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or _session

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self.api_key,
        }

    def geocode(self, text: str) -> Any:
        """POST the query text upstream and return the decoded JSON body."""
        resp = self.session.post(
            self.base_url,
            json={"text": text},
            headers=self.headers,
            timeout=self.timeout,
        )

        if not 200 <= resp.status_code < 300:
            logger.error("Geocache API error response: %s %s", resp.status_code, resp.text)
            if resp.status_code == 401:
                raise AuthFailure()
            if resp.status_code == 429:
                raise RateLimited()
            raise ProviderError(resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            logger.warning("Geocache API returned a non-JSON body: %s", exc)
            raise EmptyResult() from exc


def get_default_geocache_client() -> GeocacheClient:
    """Build a client from the current environment."""
    current = Settings()
    if not current.GEOCACHE_API_KEY:
        logger.error("GEOCACHE_API_KEY is not configured")
        raise ConfigurationError()
    return GeocacheClient(
        api_key=current.GEOCACHE_API_KEY,
        base_url=current.GEOCACHE_API_URL,
        timeout=current.GEOCACHE_TIMEOUT_SECONDS,
    )
