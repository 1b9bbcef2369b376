from opportunity_finder.core import config


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "abc123")
    monkeypatch.setenv("FINDER_PORT", "9100")
    monkeypatch.setenv("FINDER_MAX_PAGES", "3")
    monkeypatch.setenv("FINDER_DEFAULT_RADIUS", "12000")
    monkeypatch.setenv("FINDER_DEFAULT_LIMIT", "50")

    settings = config.get_settings()

    assert settings.google_api_key == "abc123"
    assert settings.port == 9100
    assert settings.defaults.max_pages == 3
    assert settings.defaults.radius == 12000
    assert settings.defaults.limit == 50
    assert settings.defaults.oversample_factor == 3


def test_get_settings_defaults(monkeypatch):
    monkeypatch.delenv("FINDER_MAX_PAGES", raising=False)
    monkeypatch.delenv("FINDER_PAGE_TOKEN_DELAY", raising=False)

    settings = config.get_settings()

    assert settings.defaults.max_pages == 1
    assert settings.defaults.page_token_delay == 2.0
    assert settings.request_timeout == 10.0
    assert settings.defaults == config.SearchDefaults(radius=5000, limit=20, oversample_factor=3)


def test_get_settings_warns_when_key_missing(monkeypatch, caplog):
    monkeypatch.setenv("GOOGLE_API_KEY", "")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GOOGLE_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_api_key == ""


def test_get_settings_clamps_max_pages(monkeypatch, caplog):
    monkeypatch.setenv("FINDER_MAX_PAGES", "10")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.defaults.max_pages == config.MAX_NEARBY_PAGES
    assert "FINDER_MAX_PAGES=10 is out of range" in " ".join(caplog.messages)


def test_get_settings_is_cached():
    assert config.get_settings() is config.get_settings()
