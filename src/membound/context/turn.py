"""Conversation turn model and truncation results.

Turns arrive ordered oldest to newest. Nothing here mutates a turn after
creation; strategies build new lists and new synthetic turns.
"""

import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

CHARS_PER_TOKEN = 4

ROLES = ("user", "assistant", "system")


class Importance(Enum):
    """Retention priority of a turn. Higher value survives longer."""

    CRITICAL = 5
    HIGH = 4
    MEDIUM = 3
    LOW = 2
    DISPOSABLE = 1

    @property
    def priority(self) -> int:
        return self.value


class Strategy(Enum):
    """Which code path produced a TruncationResult."""

    NONE = "NONE"
    DROP_OLD = "DROP_OLD"
    DROP_LOW_PRIORITY = "DROP_LOW_PRIORITY"
    SUMMARIZE = "SUMMARIZE"
    HYBRID = "HYBRID"


@dataclass(frozen=True)
class TurnMetadata:
    """Structural tags extracted from turn content."""

    has_code: bool = False
    has_numbers: bool = False
    is_question: bool = False
    is_instruction: bool = False


@dataclass(frozen=True)
class Turn:
    """A single conversation turn."""

    role: str  # "user", "assistant" or "system"
    content: str
    timestamp: float = field(default_factory=time.time)
    tokens: int = 0
    importance: Importance = Importance.MEDIUM
    metadata: Optional[TurnMetadata] = None


def estimate_tokens(text: str) -> int:
    """Coarse token estimate (chars / 4, rounded up)."""
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def turn_tokens(turn: Turn) -> int:
    """Token cost used for accounting. Missing, negative or non-finite counts are 0."""
    tokens = turn.tokens
    if not isinstance(tokens, (int, float)) or isinstance(tokens, bool):
        return 0
    if isinstance(tokens, float) and not math.isfinite(tokens):
        return 0
    if tokens < 0:
        return 0
    return int(tokens)


def calculate_total_tokens(turns: Iterable[Turn]) -> int:
    return sum(turn_tokens(t) for t in turns)


@dataclass(frozen=True)
class TruncationResult:
    """Outcome of applying memory boundaries to a conversation."""

    turns: list[Turn]
    summary: Optional[str] = None
    dropped_count: int = 0
    dropped_tokens: int = 0
    strategy: Strategy = Strategy.NONE

    @property
    def total_tokens(self) -> int:
        return calculate_total_tokens(self.turns)

    def to_messages(self) -> list[dict]:
        """Role/content dicts ready for a chat completion request."""
        return [{"role": t.role, "content": t.content} for t in self.turns]

    def to_dict(self) -> dict:
        """Accounting summary for logging and debugging."""
        return {
            "strategy": self.strategy.value,
            "turn_count": len(self.turns),
            "total_tokens": self.total_tokens,
            "dropped_count": self.dropped_count,
            "dropped_tokens": self.dropped_tokens,
            "has_summary": self.summary is not None,
        }
