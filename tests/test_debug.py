"""
Tests for the debug manager.
"""

import logging

import pytest

from dropfour.debug import DebugManager, DebugLevel


@pytest.fixture
def manager(request, caplog):
    caplog.set_level(logging.DEBUG)
    return DebugManager(name=f"dropfour.tests.{request.node.name}")


class TestDebugManager:
    def test_level_filtering(self, manager, caplog):
        manager.configure(level=DebugLevel.WARNING)
        manager.info("quiet")
        manager.warning("loud")
        assert "quiet" not in caplog.text
        assert "loud" in caplog.text

    def test_component_filtering(self, manager, caplog):
        manager.configure(level=DebugLevel.DEBUG, components=["board"])
        manager.debug("shown", "board")
        manager.debug("hidden", "env")
        assert "[board] shown" in caplog.text
        assert "hidden" not in caplog.text

    def test_trace_prefix(self, manager, caplog):
        manager.configure(level=DebugLevel.TRACE)
        manager.trace("details", "board")
        assert "TRACE: [board] details" in caplog.text

    def test_none_silences_everything(self, manager, caplog):
        manager.configure(level=DebugLevel.NONE)
        manager.error("boom")
        assert "boom" not in caplog.text

    def test_disabled(self, manager, caplog):
        manager.configure(enabled=False)
        manager.error("boom")
        assert "boom" not in caplog.text

    def test_set_from_string(self, manager):
        assert manager.set_from_string("Trace") is True
        assert manager.level == DebugLevel.TRACE
        assert manager.set_from_string("loud") is False
        assert manager.level == DebugLevel.TRACE

    def test_timer(self, manager):
        with manager.timer("block"):
            pass
        manager.start_timer("manual")
        assert manager.end_timer("manual") >= 0
        assert manager.end_timer("never-started") is None

    def test_log_file(self, manager, tmp_path):
        log_file = tmp_path / "debug.log"
        manager.configure(level=DebugLevel.INFO, log_file=str(log_file))
        manager.info("written", "game")
        manager.configure(log_file="")
        manager.info("not written", "game")
        assert log_file.read_text().count("written") == 1
