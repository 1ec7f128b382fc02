"""Tests for structured logging setup."""

import json
import logging

import pytest

from membound import BoundaryEngine, Turn
from membound.config import Config
from membound.logging import (
    ConsoleFormatter,
    JSONFormatter,
    get_debug_log_path,
    rotate_debug_log,
    setup_logging,
    split_decision,
)


def make_record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="membound.context.selector",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def package_logger():
    """The "membound" logger, restored after the test."""
    logger = logging.getLogger("membound")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def read_debug_log() -> list[dict]:
    return [json.loads(line) for line in get_debug_log_path().read_text().splitlines()]


def flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


class TestSplitDecision:
    def test_separates_decision_fields(self):
        decision, rest = split_decision(
            {"strategy": "SUMMARIZE", "excess_ratio": 0.3, "max_context_tokens": 700}
        )
        assert decision == {"strategy": "SUMMARIZE", "excess_ratio": 0.3}
        assert rest == {"max_context_tokens": 700}

    def test_no_decision(self):
        assert split_decision({"n": 1}) == (None, {"n": 1})
        assert split_decision(None) == (None, None)


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(make_record()))
        assert entry["level"] == "INFO"
        assert entry["component"] == "selector"
        assert entry["msg"] == "hello"
        assert "ctx" not in entry
        assert "decision" not in entry

    def test_decision_lifted_out_of_context(self):
        record = make_record(ctx={
            "strategy": "HYBRID",
            "excess_ratio": 0.62,
            "dropped_tokens": 800,
            "max_context_tokens": 4000,
        })
        entry = json.loads(JSONFormatter().format(record))
        assert entry["decision"] == {
            "strategy": "HYBRID",
            "excess_ratio": 0.62,
            "dropped_tokens": 800,
        }
        assert entry["ctx"] == {"max_context_tokens": 4000}


class TestConsoleFormatter:
    def test_plain_output(self):
        line = ConsoleFormatter(use_colors=False).format(make_record("Applied NONE"))
        assert "[INF] selector: Applied NONE" in line
        assert "\033[" not in line

    def test_decision_suffix(self):
        record = make_record(
            "Applied HYBRID",
            ctx={"excess_ratio": 0.62, "dropped_count": 14, "dropped_tokens": 5300},
        )
        line = ConsoleFormatter(use_colors=False).format(record)
        assert line.endswith("Applied HYBRID (ratio=0.62 dropped=14/5300)")


class TestSetupLogging:
    def test_debug_log_path_respects_xdg(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert get_debug_log_path() == tmp_path / "membound" / "logs" / "debug.log"

    def test_rotate(self, tmp_path):
        log_path = tmp_path / "debug.log"
        log_path.write_text("previous run\n")

        rotate_debug_log(log_path)

        assert not log_path.exists()
        assert (tmp_path / "debug.log.1").read_text() == "previous run\n"

    def test_defaults_console_only(self, package_logger):
        setup_logging(Config())

        assert len(package_logger.handlers) == 1
        console = package_logger.handlers[0]
        assert isinstance(console, logging.StreamHandler)
        assert console.level == logging.INFO
        assert package_logger.propagate is False

    def test_yaml_logging_section_sets_handlers(self, tmp_path, monkeypatch, package_logger):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            """
logging:
  level: WARNING
  debug_to_file: true
  use_colors: false
"""
        )

        setup_logging(Config.load(str(config_path)))

        file_handlers = [
            h for h in package_logger.handlers if isinstance(h, logging.FileHandler)
        ]
        consoles = [h for h in package_logger.handlers if h not in file_handlers]
        assert [h.level for h in consoles] == [logging.WARNING]
        assert consoles[0].formatter.use_colors is False
        assert [h.level for h in file_handlers] == [logging.DEBUG]
        assert get_debug_log_path().exists()

    def test_repeated_setup_replaces_handlers(self, package_logger):
        setup_logging(Config())
        setup_logging(Config())
        assert len(package_logger.handlers) == 1

    def test_engine_decision_written_to_debug_log(self, tmp_path, monkeypatch, package_logger):
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        config = Config()
        config.logging.debug_to_file = True
        config.logging.use_colors = False

        engine = BoundaryEngine.from_config(config, configure_logging=True)
        engine.apply_boundaries(
            [Turn(role="user", content="hi", tokens=10)], "starter"
        )
        flush(package_logger)

        entries = read_debug_log()
        assert entries[0]["msg"].startswith("Boundary engine configured with tiers APEX")
        assert entries[0]["ctx"]["drop_threshold"] == 0.2
        decision = entries[-1]["decision"]
        assert decision["strategy"] == "NONE"
        assert decision["selected"] == "NONE"
        assert decision["total_tokens"] == 10
        assert entries[-1]["ctx"] == {"max_context_tokens": 4000}

    def test_from_config_leaves_logging_alone_by_default(self, package_logger):
        before = list(package_logger.handlers)
        BoundaryEngine.from_config(Config())
        assert package_logger.handlers == before
