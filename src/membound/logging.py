"""Logging setup for processes embedding the boundary engine.

The engine only emits records through module loggers. A host process calls
setup_logging(config) once, usually via BoundaryEngine.from_config, to get:
- Console: one line per record, with the boundary decision appended
- Debug file: JSON Lines where each truncation decision is a structured object
"""

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .config import Config

# Keys of the selector's ctx payload that describe the truncation decision
DECISION_FIELDS = (
    "strategy",
    "selected",
    "excess_ratio",
    "turn_count",
    "total_tokens",
    "dropped_count",
    "dropped_tokens",
    "has_summary",
)


def split_decision(ctx: Any) -> tuple[Optional[dict], Optional[dict]]:
    """Split a ctx payload into (decision fields, remaining context)."""
    if not isinstance(ctx, dict):
        return None, ctx
    decision = {k: ctx[k] for k in DECISION_FIELDS if k in ctx}
    rest = {k: v for k, v in ctx.items() if k not in DECISION_FIELDS}
    return decision or None, rest or None


def _component(record: logging.LogRecord) -> str:
    # "membound.context.selector" -> "selector"
    return record.name.rsplit(".", 1)[-1]


class JSONFormatter(logging.Formatter):
    """JSON Lines records with the boundary decision lifted out of ctx.

    {"ts":"2026-02-04T10:15:32.123","level":"INFO","component":"selector",
     "msg":"Applied SUMMARIZE: ...",
     "decision":{"strategy":"SUMMARIZE","excess_ratio":0.3,"dropped_tokens":800},
     "ctx":{"max_context_tokens":700}}
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "component": _component(record),
            "msg": record.getMessage(),
        }

        if hasattr(record, "ctx"):
            decision, rest = split_decision(record.ctx)
            if decision:
                entry["decision"] = decision
            if rest:
                entry["ctx"] = rest

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Short human-readable lines, e.g.

    12:01:09 [INF] selector: Applied HYBRID: ... (ratio=0.62 dropped=14/5300)
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        msg = (
            f"{time_str} [{record.levelname[:3]}] {_component(record)}: "
            f"{record.getMessage()}"
        )

        decision, _ = split_decision(getattr(record, "ctx", None))
        if decision and "excess_ratio" in decision:
            msg += (
                f" (ratio={decision['excess_ratio']} "
                f"dropped={decision.get('dropped_count', 0)}/"
                f"{decision.get('dropped_tokens', 0)})"
            )

        if self.use_colors:
            msg = f"{self.COLORS.get(record.levelname, '')}{msg}{self.RESET}"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


def get_debug_log_path() -> Path:
    """Debug log location under XDG_DATA_HOME."""
    data_home = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
    return Path(data_home) / "membound" / "logs" / "debug.log"


def rotate_debug_log(log_path: Path) -> None:
    """Keep one previous debug log as debug.log.1."""
    if log_path.exists():
        rotated = log_path.with_suffix(".log.1")
        if rotated.exists():
            rotated.unlink()
        log_path.rename(rotated)


def setup_logging(config: "Config") -> None:
    """Install console and optional JSON file handlers from config.logging.

    Only the "membound" logger is configured, so a host's own root logging
    is left alone.
    """
    settings = config.logging
    logger = logging.getLogger("membound")
    logger.setLevel(logging.DEBUG)  # filter at handler level
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(getattr(logging, settings.level.upper()))
    console.setFormatter(ConsoleFormatter(use_colors=settings.use_colors))
    logger.addHandler(console)

    if settings.debug_to_file:
        log_path = get_debug_log_path()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        rotate_debug_log(log_path)

        file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    logger.info(
        f"Boundary engine configured with tiers {', '.join(sorted(config.tiers))}",
        extra={"ctx": {
            "fallback_tier": config.selector.fallback_tier,
            "drop_threshold": config.selector.drop_threshold,
            "summarize_threshold": config.selector.summarize_threshold,
        }},
    )
