"""Tests for the structlog/dictConfig builder."""

from __future__ import annotations

import logging

import structlog

from stationcast.infrastructure.config.schema import AppConfig
from stationcast.infrastructure.logging.setup import (
    _add_record_created_timestamp_utc,
    _drop_color_message,
    build_logging_config,
)


class TestBuildLoggingConfig:
    def test_handlers_rendered_through_structlog(self) -> None:
        cfg = build_logging_config(AppConfig())

        assert cfg["handlers"]["default"]["formatter"] == "structlog"
        assert cfg["handlers"]["access"]["formatter"] == "structlog"
        assert cfg["formatters"]["structlog"]["()"] is structlog.stdlib.ProcessorFormatter

    def test_json_renderer_in_prod(self) -> None:
        cfg = build_logging_config(AppConfig(environment="prod"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.processors.JSONRenderer)

    def test_console_renderer_in_dev(self) -> None:
        cfg = build_logging_config(AppConfig(environment="dev"))
        renderer = cfg["formatters"]["structlog"]["processors"][-1]
        assert isinstance(renderer, structlog.dev.ConsoleRenderer)

    def test_level_applied_to_uvicorn_and_root(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="WARNING"))

        assert cfg["loggers"]["uvicorn"]["level"] == "WARNING"
        assert cfg["loggers"]["uvicorn.access"]["level"] == "WARNING"
        assert cfg["root"]["level"] == "WARNING"

    def test_httpx_stays_quiet_unless_debug(self) -> None:
        info = build_logging_config(AppConfig(log_level="INFO"))
        debug = build_logging_config(AppConfig(log_level="DEBUG"))

        assert info["loggers"]["httpx"]["level"] == "WARNING"
        assert debug["loggers"]["httpx"]["level"] == "DEBUG"

    def test_base_config_not_mutated(self) -> None:
        first = build_logging_config(AppConfig(log_level="ERROR"))
        second = build_logging_config(AppConfig(log_level="INFO"))
        assert first["root"]["level"] == "ERROR"
        assert second["loggers"]["uvicorn"]["level"] == "INFO"


class TestProcessors:
    def test_drop_color_message(self) -> None:
        event = {"event": "x", "color_message": "\x1b[32mx"}
        assert _drop_color_message(None, None, event) == {"event": "x"}

    def test_foreign_record_timestamp(self) -> None:
        record = logging.LogRecord("uvicorn", logging.INFO, __file__, 1, "hi", None, None)
        record.created = 0.0

        event = _add_record_created_timestamp_utc(None, None, {"_record": record})

        assert event["timestamp"] == "1970-01-01T00:00:00Z"

    def test_structlog_events_untouched(self) -> None:
        assert _add_record_created_timestamp_utc(None, None, {"event": "x"}) == {
            "event": "x"
        }
