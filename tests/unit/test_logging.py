"""Unit tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from typing import Iterator

import pytest
import structlog

from tff.utils.errors import ConfigurationError
from tff.utils.logging import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_structlog(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.delenv("APP_ENV", raising=False)
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestConfigureLogging:
    def test_logs_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("DEBUG")
        get_logger("tff.test").debug("api_request", method="GET")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "api_request" in captured.err

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING")
        logger = get_logger("tff.test")
        logger.info("resource_deleted")
        logger.warning("something_odd")

        err = capsys.readouterr().err
        assert "resource_deleted" not in err
        assert "something_odd" in err

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("INFO", json_output=True)
        get_logger("tff.test").info("resource_published", resource_id="e1")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "resource_published"
        assert record["resource_id"] == "e1"
        assert record["level"] == "info"

    def test_production_env_selects_json(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        configure_logging("INFO")
        get_logger("tff.test").info("api_response", status=200)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["status"] == 200

    def test_get_logger_configures_on_first_use(self) -> None:
        structlog.reset_defaults()
        get_logger("tff.test")
        assert structlog.is_configured()

    def test_level_name_is_case_insensitive(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("info")
        get_logger("tff.test").info("resource_deleted")
        assert "resource_deleted" in capsys.readouterr().err

    def test_unknown_level_is_a_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            configure_logging("LOUD")
        assert exc_info.value.source == "LOG_LEVEL"
        assert "'LOUD'" in str(exc_info.value)


class TestTransportLoggers:
    def test_held_at_warning_outside_debug(self) -> None:
        configure_logging("INFO")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_follow_stricter_levels(self) -> None:
        configure_logging("ERROR")
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_debug_shows_requests(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("DEBUG")
        logging.getLogger("httpx").debug("HTTP Request: GET https://example.test")

        assert logging.getLogger("httpx").level == logging.DEBUG
        assert "HTTP Request" in capsys.readouterr().err

    def test_stdlib_records_are_suppressed_at_warning(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging("WARNING")
        logging.getLogger("httpx").info("HTTP Request: GET https://example.test")
        assert capsys.readouterr().err == ""
