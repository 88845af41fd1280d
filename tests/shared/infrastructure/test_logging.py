"""Tests for structured logging setup."""

import io
import json
import logging

import structlog

from rebirth.shared.infrastructure.config import Settings
from rebirth.shared.infrastructure.logging import configure_logging, get_logger, log_level, repair_run


def test_log_level_names():
    assert log_level(Settings(_env_file=None, log_level="debug")) == logging.DEBUG
    assert log_level(Settings(_env_file=None, log_level="nonsense")) == logging.WARNING


def test_repair_run_binds_context_only_inside_block():
    with repair_run("prune", "live"):
        bound = structlog.contextvars.get_contextvars()
        assert bound["run_action"] == "prune"
        assert bound["run_workspace"] == "live"

    assert "run_action" not in structlog.contextvars.get_contextvars()


def test_production_renders_json_lines():
    stream = io.StringIO()
    configure_logging(stream=stream, settings=Settings(_env_file=None, app_env="production", log_level="INFO"))
    try:
        with repair_run("restore", "user-admin"):
            get_logger("rebirth.test").info("orphan_restored", identifier="a1")

        event = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert event["event"] == "orphan_restored"
        assert event["identifier"] == "a1"
        assert event["run_workspace"] == "user-admin"
        assert event["level"] == "info"
    finally:
        structlog.reset_defaults()
