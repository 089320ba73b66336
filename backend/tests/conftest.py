import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def _isolate_geocache_env(monkeypatch):
    """Keep a developer's local Geocache settings out of the tests."""
    for name in ("GEOCACHE_API_KEY", "GEOCACHE_API_URL", "GEOCACHE_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("GEOCACHE_API_KEY", "test-key")
    return "test-key"
