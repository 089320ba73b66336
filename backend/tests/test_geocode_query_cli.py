import json
from unittest.mock import MagicMock, patch

from scripts import geocode_query


@patch("services.geocache_client._session.post")
def test_cli_prints_normalized_json(mock_post, api_key, capsys):
    resp = MagicMock(status_code=200, ok=True)
    resp.json.return_value = {"provider": "p", "point": {"lat": 1.5, "lon": 2.5}}
    mock_post.return_value = resp

    code = geocode_query.main(["  Lisbon "])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["input"]["raw"] == "Lisbon"
    assert out["point"] == {"lat": 1.5, "lon": 2.5}
    assert mock_post.call_args.kwargs["json"] == {"text": "Lisbon"}


def test_cli_fails_without_api_key(capsys):
    assert geocode_query.main(["Lisbon"]) == 2
    assert capsys.readouterr().out == ""


@patch("services.geocache_client._session.post")
def test_cli_rejects_blank_query(mock_post, api_key):
    assert geocode_query.main(["   "]) == 2
    mock_post.assert_not_called()
