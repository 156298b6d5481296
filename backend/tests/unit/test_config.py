from nutriplan.core.config import Settings, get_settings


def test_defaults_match_pool_configuration(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.database_url == "sqlite:///nutriplan.db"
    assert settings.pool_size == 16
    assert settings.busy_timeout == 30.0
    assert settings.enable_wal is True
    assert settings.enable_foreign_keys is True


def test_database_url_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///from-env.db")
    monkeypatch.setenv("POOL_SIZE", "4")
    settings = get_settings()
    assert settings.database_url == "sqlite:///from-env.db"
    assert settings.pool_size == 4


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
