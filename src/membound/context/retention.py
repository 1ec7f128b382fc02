"""Retention window filtering by a tier's memory days."""

import time
from datetime import datetime, timedelta
from typing import Optional

from ..tiers import TierConfig
from .turn import Turn


def memory_cutoff(config: TierConfig, now: Optional[float] = None) -> float:
    """Oldest timestamp still inside the tier's retention window."""
    current = datetime.fromtimestamp(time.time() if now is None else now)
    return (current - timedelta(days=config.memory_days)).timestamp()


def is_within_memory_limit(
    turn: Turn, config: TierConfig, now: Optional[float] = None
) -> bool:
    return turn.timestamp >= memory_cutoff(config, now)


def filter_by_memory_days(
    turns: list[Turn], config: TierConfig, now: Optional[float] = None
) -> list[Turn]:
    """Drop turns older than the retention window, keeping order."""
    cutoff = memory_cutoff(config, now)
    return [t for t in turns if t.timestamp >= cutoff]
