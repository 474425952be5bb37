"""Settings — environment-derived TLS, CORS and development policy."""

from animeproxy.config import DEFAULT_UPSTREAM_BASE_URL, Settings


def _settings(**kw) -> Settings:
    return Settings(_env_file=None, **kw)


def test_defaults(monkeypatch):
    for var in ("UPSTREAM_BASE_URL", "PORT", "UPSTREAM_TIMEOUT_SECONDS",
                "UPSTREAM_MAX_RETRIES", "UPSTREAM_BASE_DELAY_MS"):
        monkeypatch.delenv(var, raising=False)
    s = _settings()
    assert s.upstream_base_url == DEFAULT_UPSTREAM_BASE_URL
    assert s.port == 5000
    assert s.upstream_timeout_seconds == 20.0
    assert s.upstream_max_retries == 2
    assert s.upstream_base_delay_ms == 1000


def test_unset_environment_reports_development_but_verifies_tls():
    s = _settings()
    assert s.environment is None
    assert s.environment_name == "development"
    assert s.is_development is False
    assert s.verify_tls is True
    assert s.cors_origins == ["*"]


def test_development_disables_tls_verification():
    s = _settings(environment="development")
    assert s.verify_tls is False
    assert s.is_development is True


def test_explicit_tls_override_wins():
    assert _settings(environment="development", upstream_verify_tls=True).verify_tls is True
    assert _settings(environment="production", upstream_verify_tls=False).verify_tls is False


def test_tls_decision_follows_live_changes():
    s = _settings(environment="production")
    assert s.verify_tls is True
    s.environment = "development"
    assert s.verify_tls is False


def test_production_cors_uses_frontend_url():
    s = _settings(environment="production", frontend_url="https://anime.example")
    assert s.cors_origins == ["https://anime.example"]


def test_environment_read_from_node_env(monkeypatch):
    monkeypatch.setenv("NODE_ENV", "Production")
    assert _settings().is_production is True


def test_base_url_trailing_slash_stripped():
    s = _settings(upstream_base_url="https://up.example/api/v2/")
    assert s.upstream_base_url == "https://up.example/api/v2"
