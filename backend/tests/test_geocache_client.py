from unittest.mock import MagicMock, patch

import pytest

from domain.errors import AuthFailure, ConfigurationError, EmptyResult, ProviderError, RateLimited
from services import geocache_client
from services.geocache_client import GeocacheClient, get_default_geocache_client
from settings import GEOCACHE_DEFAULT_URL


def _response(status: int, json_body=None, text: str = ""):
    resp = MagicMock()
    resp.status_code = status
    resp.ok = status < 400
    resp.text = text
    resp.json.return_value = json_body
    return resp


@patch("services.geocache_client._session.post")
def test_geocode_posts_text_with_api_key(mock_post):
    mock_post.return_value = _response(200, {"provider": "x"})

    client = GeocacheClient(api_key="secret")
    data = client.geocode("Berlin")

    assert data == {"provider": "x"}
    args, kwargs = mock_post.call_args
    assert args[0] == GEOCACHE_DEFAULT_URL
    assert kwargs["json"] == {"text": "Berlin"}
    assert kwargs["headers"]["x-api-key"] == "secret"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert kwargs["timeout"] is None


@pytest.mark.parametrize(
    "status, error_cls",
    [(401, AuthFailure), (429, RateLimited)],
)
@patch("services.geocache_client._session.post")
def test_geocode_maps_known_statuses(mock_post, status, error_cls):
    mock_post.return_value = _response(status, text="upstream says no")

    with pytest.raises(error_cls):
        GeocacheClient(api_key="secret").geocode("Berlin")


@patch("services.geocache_client._session.post")
def test_geocode_passes_other_statuses_through(mock_post):
    mock_post.return_value = _response(503, text="maintenance")

    with pytest.raises(ProviderError) as excinfo:
        GeocacheClient(api_key="secret").geocode("Berlin")
    assert excinfo.value.status_code == 503
    assert "maintenance" not in excinfo.value.public_message


@patch("services.geocache_client._session.post")
def test_geocode_non_json_body_is_empty_result(mock_post):
    resp = _response(200)
    resp.json.side_effect = ValueError("Expecting value")
    mock_post.return_value = resp

    with pytest.raises(EmptyResult):
        GeocacheClient(api_key="secret").geocode("Berlin")


def test_client_requires_api_key():
    with pytest.raises(ConfigurationError):
        GeocacheClient(api_key="")


def test_default_client_requires_env_key():
    with pytest.raises(ConfigurationError):
        get_default_geocache_client()


def test_default_client_reads_settings(monkeypatch, api_key):
    monkeypatch.setenv("GEOCACHE_API_URL", "http://localhost:9999/geocode")
    monkeypatch.setenv("GEOCACHE_TIMEOUT_SECONDS", "2.5")

    client = get_default_geocache_client()
    assert client.api_key == api_key
    assert client.base_url == "http://localhost:9999/geocode"
    assert client.timeout == 2.5


@pytest.mark.parametrize("status", [300, 304])
@patch("services.geocache_client._session.post")
def test_geocode_treats_3xx_as_provider_error(mock_post, status):
    mock_post.return_value = _response(status, text="")

    with pytest.raises(ProviderError) as excinfo:
        GeocacheClient(api_key="secret").geocode("Berlin")
    assert excinfo.value.status_code == status


def test_shared_session_accepts_no_cookies():
    policy = geocache_client._session.cookies._policy
    assert policy.allowed_domains() == ()
