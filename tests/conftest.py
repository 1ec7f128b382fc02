"""Pytest configuration and fixtures for membound tests."""

from pathlib import Path
from typing import Callable, Optional

import pytest

from membound.context import Importance, Turn
from membound.tiers import TierConfig


@pytest.fixture
def make_turn() -> Callable[..., Turn]:
    """Factory for turns with explicit tokens and importance.

    Returns:
        Callable building a Turn; content defaults to a numbered message.
    """
    counter = {"n": 0}

    def _make(
        tokens: int = 100,
        importance: Importance = Importance.MEDIUM,
        role: str = "user",
        content: Optional[str] = None,
        **kwargs,
    ) -> Turn:
        counter["n"] += 1
        if content is None:
            content = f"message number {counter['n']}"
        return Turn(
            role=role,
            content=content,
            tokens=tokens,
            importance=importance,
            **kwargs,
        )

    return _make


@pytest.fixture
def make_tier() -> Callable[..., TierConfig]:
    """Factory for tier configs with generous defaults."""

    def _make(
        max_context_tokens: int = 1000,
        max_turns: int = 100,
        summary_threshold: int = 800,
        preserve_last_n_turns: int = 2,
        memory_days: int = 7,
    ) -> TierConfig:
        return TierConfig(
            max_context_tokens=max_context_tokens,
            max_turns=max_turns,
            summary_threshold=summary_threshold,
            preserve_last_n_turns=preserve_last_n_turns,
            memory_days=memory_days,
        )

    return _make


@pytest.fixture
def temp_config(tmp_path: Path) -> Path:
    """Create temporary config file.

    Returns:
        Path to config file.
    """
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
tiers:
  pro:
    max_context_tokens: 40000
  enterprise:
    max_context_tokens: 256000
    max_turns: 400
    summary_threshold: 200000
    preserve_last_n_turns: 40
    memory_days: 365
selector:
  drop_threshold: 0.1
  summarize_threshold: 0.6
  restore_chronological_order: true
logging:
  level: DEBUG
"""
    )
    return config_path
