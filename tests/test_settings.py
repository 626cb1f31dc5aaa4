import os

from todo_store.settings import get_db_path, get_settings


def test_defaults(monkeypatch):
    for name in ("TODO_DATA_DIR", "TODO_DB_MAX_CONNECTIONS", "CORS_ALLOW_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    s = get_settings()
    assert s.data_dir == "./data"
    assert s.db_max_connections == 10
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TODO_DATA_DIR", "/tmp/todos")
    monkeypatch.setenv("TODO_DB_MAX_CONNECTIONS", "0")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    s = get_settings()
    assert s.data_dir == "/tmp/todos"
    assert s.db_max_connections == 1
    assert s.cors_allow_origins == ["http://a.test", "http://b.test"]
    assert s.log_level == "INFO"


def test_bad_pool_size_falls_back(monkeypatch):
    monkeypatch.setenv("TODO_DB_MAX_CONNECTIONS", "lots")
    assert get_settings().db_max_connections == 10


def test_db_path():
    assert get_db_path("/srv/app") == os.path.join("/srv/app", "data.db")
