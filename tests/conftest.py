import sys
from pathlib import Path

import pytest

# Ensure `opportunity_finder` is importable when running pytest from a source checkout.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from opportunity_finder.core import config  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Pin settings so a developer's .env cannot leak into tests."""
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("FINDER_MAX_PAGES", "1")
    monkeypatch.setenv("FINDER_PAGE_TOKEN_DELAY", "0")
    for name in ("FINDER_DEFAULT_RADIUS", "FINDER_DEFAULT_LIMIT", "FINDER_OVERSAMPLE_FACTOR", "FINDER_PORT"):
        monkeypatch.delenv(name, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
