"""Tests for converter logging hooks."""

from __future__ import annotations

import logging
import subprocess
import sys
import textwrap

import pytest
import typer

from slatemark import PluginNotFoundError, UnrecognizedNodeTypeError, slate_to_mdast
from slatemark.utils.errors import CLIErrorHandler
from slatemark.utils.logging import LoggerFactory, get_converter_logger

UNKNOWN_BLOCK = {"nodes": [{"kind": "block", "type": "callout"}]}
UNREGISTERED_SHORTCODE = {
    "nodes": [{"kind": "block", "type": "shortcode", "data": {"shortcode": "gist"}}]
}


def _capture(caplog, name):
    """Attach caplog to a slatemark logger; dictConfig replaces root handlers."""
    logger = logging.getLogger(name)
    logger.addHandler(caplog.handler)
    previous = logger.level
    logger.setLevel(logging.DEBUG)
    caplog.handler.setLevel(logging.DEBUG)
    return logger, previous


@pytest.fixture
def converter_records(caplog):
    logger, previous = _capture(caplog, "slatemark.converter")
    yield lambda: [r for r in caplog.records if r.name == "slatemark.converter"]
    logger.removeHandler(caplog.handler)
    logger.setLevel(previous)


@pytest.fixture
def cli_records(caplog):
    logger, previous = _capture(caplog, "slatemark.cli")
    yield lambda: [r for r in caplog.records if r.name == "slatemark.cli"]
    logger.removeHandler(caplog.handler)
    logger.setLevel(previous)


# =============================================================================
# Logger setup
# =============================================================================


def test_component_logger_is_cached() -> None:
    assert LoggerFactory.get_logger("converter") is get_converter_logger()
    assert get_converter_logger().logger_name == "slatemark.converter"


def test_bind_keeps_component_and_adds_context() -> None:
    bound = get_converter_logger().bind(operation="slate_to_mdast")
    assert bound.logger_name == "slatemark.converter"
    assert bound.context == {"component": "converter", "operation": "slate_to_mdast"}
    assert get_converter_logger().context == {"component": "converter"}


def test_lazy_context_skipped_when_level_disabled() -> None:
    LoggerFactory.configure_logging(level="WARNING", format_type="simple")
    calls = []

    def build():
        calls.append(True)
        return {}

    get_converter_logger().debug("not emitted", lazy_context=build)
    assert calls == []


# =============================================================================
# Conversion logging
# =============================================================================


def test_conversion_failure_is_logged_at_debug_and_reraised(converter_records) -> None:
    LoggerFactory.configure_logging(level="DEBUG", format_type="structured")

    with pytest.raises(UnrecognizedNodeTypeError):
        slate_to_mdast(UNKNOWN_BLOCK)

    records = converter_records()
    messages = [r.getMessage() for r in records]
    assert any("Starting operation: slate_to_mdast" in m for m in messages)
    assert any("Operation 'slate_to_mdast' failed" in m for m in messages)
    assert any("CNV001" in m for m in messages)
    assert {r.levelno for r in records} == {logging.DEBUG}


def test_successful_conversion_logs_completion(converter_records) -> None:
    LoggerFactory.configure_logging(level="DEBUG", format_type="json")

    slate_to_mdast({"nodes": []})

    messages = [r.getMessage() for r in converter_records()]
    assert any("completed successfully" in m for m in messages)
    assert any('"node_count": 1' in m for m in messages)


def test_failed_conversion_is_silent_by_default(capsys) -> None:
    with pytest.raises(PluginNotFoundError):
        slate_to_mdast(UNREGISTERED_SHORTCODE)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_failed_conversion_writes_nothing_in_a_fresh_process() -> None:
    script = textwrap.dedent(
        """
        from slatemark import PluginNotFoundError, slate_to_mdast

        document = {
            "nodes": [{"kind": "block", "type": "shortcode", "data": {"shortcode": "gist"}}]
        }
        try:
            slate_to_mdast(document)
        except PluginNotFoundError:
            pass
        else:
            raise SystemExit("conversion should have failed")
        """
    )

    result = subprocess.run(
        [sys.executable, "-c", script], capture_output=True, text=True, check=False
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == ""
    assert result.stderr == ""


# =============================================================================
# CLI reporting
# =============================================================================


def test_cli_handler_logs_failure_at_error(cli_records, capsys) -> None:
    LoggerFactory.configure_logging(level="WARNING", format_type="structured")

    with pytest.raises(typer.Exit):
        CLIErrorHandler().handle_error(PluginNotFoundError("gist"), "convert document")

    (record,) = cli_records()
    assert record.levelno == logging.ERROR
    assert "CLI convert document failed" in record.getMessage()
    assert "CNV004" in record.getMessage()
    assert capsys.readouterr().out == ""
