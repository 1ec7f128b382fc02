"""Conversation-context boundary engine: scoring, summarizing and eviction."""

from .metadata import extract_metadata
from .retention import filter_by_memory_days, is_within_memory_limit
from .scoring import score_importance
from .selector import BoundaryPolicy
from .strategies import drop_by_priority, drop_oldest, hybrid, summarize_old
from .summarizer import generate_summary
from .turn import (
    Importance,
    Strategy,
    TruncationResult,
    Turn,
    TurnMetadata,
    calculate_total_tokens,
    estimate_tokens,
)

__all__ = [
    "BoundaryPolicy",
    "Importance",
    "Strategy",
    "TruncationResult",
    "Turn",
    "TurnMetadata",
    "calculate_total_tokens",
    "drop_by_priority",
    "drop_oldest",
    "estimate_tokens",
    "extract_metadata",
    "filter_by_memory_days",
    "generate_summary",
    "hybrid",
    "is_within_memory_limit",
    "score_importance",
    "summarize_old",
]
