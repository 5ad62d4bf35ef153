from __future__ import annotations

import logging

import pytest

import bizcrm.core.startup as startup_module


class _Cfg:
    def __init__(self, required: bool, env: str = "development") -> None:
        self.DB_CONNECTIVITY_REQUIRED = required
        self.ENV = env
        self.DEFAULT_TAX_PERCENTAGE = 18

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def test_startup_skips_raise_when_db_optional_and_unreachable(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=False))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: False)

    assert startup_module.validate_startup_config() is False


def test_startup_raises_when_db_required_and_unreachable(monkeypatch):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=True))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: False)

    with pytest.raises(RuntimeError, match="Database connectivity check failed"):
        startup_module.validate_startup_config()


def test_startup_warns_on_sqlite_in_production(monkeypatch, caplog):
    monkeypatch.setattr(startup_module, "get_config", lambda: _Cfg(required=True, env="production"))
    monkeypatch.setattr(startup_module, "verify_database_connection", lambda: True)
    monkeypatch.setattr(startup_module, "get_active_database_url", lambda: "sqlite:///./bizcrm.db")

    with caplog.at_level(logging.WARNING, logger=startup_module.__name__):
        assert startup_module.validate_startup_config() is True
    assert "startup.production.sqlite_detected" in caplog.text


def test_bootstrap_creates_schema_only_when_database_reachable(monkeypatch):
    calls = []
    monkeypatch.setattr(startup_module, "configure_logging", lambda: calls.append("logging"))
    monkeypatch.setattr(startup_module, "validate_startup_config", lambda: False)
    monkeypatch.setattr(startup_module, "init_db", lambda: calls.append("init_db"))

    startup_module.bootstrap()
    assert calls == ["logging"]

    monkeypatch.setattr(startup_module, "validate_startup_config", lambda: True)
    startup_module.bootstrap()
    assert calls == ["logging", "logging", "init_db"]
