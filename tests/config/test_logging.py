"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from preferable.config.logging import SQL_LOGGER, configure_from, configure_logging
from preferable.config.models import LoggingConfig, PreferencesConfig, StoreConfig
from preferable.domain.errors import StoreUnavailableError
from preferable.infrastructure.database import PreferenceDatabase
from preferable.infrastructure.stores import MappingStore
from preferable.services.accessor import PreferenceAccessor
from preferable.services.registry import PreferenceRegistry


class Account:
    pass


def _events(err: str) -> list[dict]:
    return [json.loads(line) for line in err.strip().splitlines()]


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    levels = {name: logging.getLogger(name).level for name in ("preferable", SQL_LOGGER)}
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def json_debug() -> None:
    configure_logging(LoggingConfig(verbose=True, log_json=True))


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(LoggingConfig(verbose=True))
        assert logging.getLogger("preferable").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_defaults_to_warning(self) -> None:
        configure_logging()
        assert logging.getLogger("preferable").level == logging.WARNING

    def test_json_mode_output(
        self, json_debug: None, capfd: pytest.CaptureFixture[str]
    ) -> None:
        structlog.get_logger("preferable.test").warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "preferable.test"
        assert "timestamp" in parsed

    def test_sqlalchemy_quiet_without_echo(
        self, json_debug: None, capfd: pytest.CaptureFixture[str]
    ) -> None:
        logging.getLogger(SQL_LOGGER).info("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        configure_logging(LoggingConfig(verbose=True))
        configure_logging(LoggingConfig(verbose=True, log_json=True))
        assert len(logging.getLogger().handlers) == 1


class TestConfigureFrom:
    def test_logging_section(self) -> None:
        configure_from(LoggingConfig(verbose=True))
        assert logging.getLogger("preferable").level == logging.DEBUG
        assert logging.getLogger(SQL_LOGGER).level == logging.WARNING

    def test_store_echo_shows_sql(self, capfd: pytest.CaptureFixture[str]) -> None:
        config = PreferencesConfig(
            store=StoreConfig(echo=True), logging=LoggingConfig(log_json=True)
        )
        configure_from(config)
        assert logging.getLogger(SQL_LOGGER).level == logging.INFO
        assert logging.getLogger("preferable").level == logging.WARNING

        logging.getLogger(SQL_LOGGER).info("SELECT 1")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "SELECT 1"
        assert parsed["logger"] == SQL_LOGGER


class TestPreferenceFields:
    def test_declaration(self, json_debug: None, capfd: pytest.CaptureFixture[str]) -> None:
        PreferenceRegistry().declare(Account, "color", "string")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Declared preference Account.color (string)"
        assert parsed["logger"] == "preferable.services.registry"
        assert parsed["level"] == "debug"
        assert parsed["host_type"] == "Account"
        assert parsed["preference"] == "color"
        assert parsed["preference_type"] == "string"

    def test_set_and_clear(self, capfd: pytest.CaptureFixture[str]) -> None:
        registry = PreferenceRegistry()
        registry.declare(Account, "color", "string")
        prefs = PreferenceAccessor(Account, MappingStore(), registry)
        configure_logging(LoggingConfig(verbose=True, log_json=True))

        prefs.set("color", "red")
        prefs.clear_all()
        set_event, clear_event = _events(capfd.readouterr().err)
        assert set_event["event"] == "Set preference Account.color"
        assert set_event["preference"] == "color"
        assert clear_event["host_type"] == "Account"
        assert clear_event["count"] == 1

    def test_store_failure_carries_scope(
        self, database: PreferenceDatabase, capfd: pytest.CaptureFixture[str]
    ) -> None:
        store = database.store_for("account:3")
        with database.engine.begin() as conn:
            conn.exec_driver_sql(f"DROP TABLE {database.table.name}")
        configure_logging(LoggingConfig(log_json=True))

        with pytest.raises(StoreUnavailableError):
            store.keys()
        parsed = _events(capfd.readouterr().err)[-1]
        assert parsed["level"] == "warning"
        assert parsed["scope"] == "account:3"
