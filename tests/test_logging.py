"""Tests for session logging."""

from __future__ import annotations

import json

import pytest
import structlog
from structlog.testing import capture_logs

from bedrockbot.logging import SessionLogger, configure_logging, get_logger
from bedrockbot.settings import Settings


def test_packet_and_state_entries_carry_session_context() -> None:
    with capture_logs() as logs:
        session_log = SessionLogger("bot-7")
        session_log.set_context({"username": "Steve"})
        session_log.log_packet("send", "command_request", {"command": "/tpa"})
        session_log.log_state("READY", "COMMAND_DISPATCHED", "dispatching /tpa")

    assert logs[0]["event"] == "packet_out"
    assert logs[0]["packet"] == "command_request"
    assert logs[0]["session_id"] == "bot-7"
    assert logs[0]["username"] == "Steve"
    assert logs[1]["event"] == "state_transition"
    assert (logs[1]["old"], logs[1]["new"]) == ("READY", "COMMAND_DISPATCHED")


def test_uninteresting_inbound_packets_are_skipped() -> None:
    with capture_logs() as logs:
        session_log = SessionLogger("bot-7")
        session_log.log_packet("recv", "move_player", {"x": 1})
        session_log.log_packet("recv", "container_open", {"window_id": 5})

    assert [entry["packet"] for entry in logs] == ["container_open"]
    assert logs[0]["event"] == "packet_in"


def test_flags_disable_output() -> None:
    with capture_logs() as logs:
        session_log = SessionLogger("bot-7", log_packets=False, log_state_changes=False)
        session_log.log_packet("send", "command_request", {"command": "/tpa"})
        session_log.log_state("READY", "ERROR")

    assert logs == []


def test_binary_and_large_values_are_json_safe() -> None:
    with capture_logs() as logs:
        SessionLogger("bot-7").log_packet("send", "inventory_transaction", {"blob": b"\x00\x01", "id": 2**60})

    assert logs[0]["data"] == {"blob": "AAE=", "id": str(2**60)}


def test_clear_context() -> None:
    with capture_logs() as logs:
        session_log = SessionLogger("bot-7")
        session_log.set_context({"username": "Steve"})
        session_log.clear_context()
        session_log.log.info("probe")

    assert "username" not in logs[0]


def test_configure_logging_filters_below_level() -> None:
    try:
        configure_logging(Settings(log_level="ERROR"))
        with capture_logs() as logs:
            log = get_logger("bedrockbot.test")
            log.info("hidden")
            log.error("shown")
    finally:
        structlog.reset_defaults()

    assert [entry["event"] for entry in logs] == ["shown"]


def test_json_output_is_one_object_per_line(capsys: pytest.CaptureFixture[str]) -> None:
    try:
        configure_logging(Settings(log_level="INFO", log_json=True))
        get_logger().info("session_connected", session_id="bot-1", port=19132)
    finally:
        structlog.reset_defaults()

    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["event"] == "session_connected"
    assert entry["level"] == "info"
    assert entry["session_id"] == "bot-1"
    assert entry["port"] == 19132
    assert "timestamp" in entry


def test_unknown_level_falls_back_to_warning() -> None:
    try:
        configure_logging(Settings(log_level="chatty"))
        with capture_logs() as logs:
            log = get_logger()
            log.info("hidden")
            log.warning("shown")
    finally:
        structlog.reset_defaults()

    assert [entry["event"] for entry in logs] == ["shown"]
