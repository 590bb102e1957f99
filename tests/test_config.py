from app.addressbook.config import load_config, load_settings


def test_defaults(monkeypatch):
    for k in ("ENV", "DATABASE_URL", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(k, raising=False)
    s = load_settings()
    assert s.env == "development"
    assert s.database_url == "sqlite:///customerApplication.db"
    assert s.cors_origins == ("*",)
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "  sqlite:///other.db ")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg["DATABASE_URL"] == "sqlite:///other.db"
    assert cfg["CORS_ORIGINS"] == ["http://a.example", "http://b.example"]
    assert cfg["LOG_LEVEL"] == "DEBUG"


def test_blank_cors_origins_falls_back_to_wildcard(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " , ")
    assert load_settings().cors_origins == ("*",)


def test_port_is_not_read_by_the_app(monkeypatch):
    """PORT belongs to scripts/start.py; a bad value must not break the WSGI app."""
    monkeypatch.setenv("PORT", "not-a-port")
    cfg = load_config()
    assert "PORT" not in cfg
