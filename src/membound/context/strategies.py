"""Eviction strategies that bring a conversation back under its token budget.

Each strategy takes the full ordered turn list and a TierConfig and returns
a TruncationResult. The last ``preserve_last_n_turns`` turns always pass
through untouched and stay at the end of the output in original order.
"""

import logging
import time

from ..tiers import TierConfig
from .summarizer import generate_summary
from .turn import (
    Importance,
    Strategy,
    TruncationResult,
    Turn,
    calculate_total_tokens,
    estimate_tokens,
    turn_tokens,
)

logger = logging.getLogger(__name__)

SUMMARY_TEMPLATE = "[Previous conversation summary: {summary}]"
CONTEXT_TEMPLATE = "[Conversation context: {summary}]"

IMPORTANT = (Importance.CRITICAL, Importance.HIGH)


def split_preserved(turns: list[Turn], preserve: int) -> tuple[list[Turn], list[Turn]]:
    """Split into (older turns, preserved tail)."""
    if preserve <= 0:
        return list(turns), []
    return list(turns[:-preserve]), list(turns[-preserve:])


def _summary_turn(summary: str, template: str, importance: Importance) -> Turn:
    return Turn(
        role="system",
        content=template.format(summary=summary),
        timestamp=time.time(),
        tokens=estimate_tokens(summary),
        importance=importance,
    )


def drop_by_priority(
    turns: list[Turn],
    config: TierConfig,
    restore_chronological_order: bool = False,
) -> TruncationResult:
    """Drop the lowest-importance older turns until the budget fits.

    Survivors come back in descending priority order followed by the
    preserved tail. With ``restore_chronological_order`` the survivors keep
    their original relative order instead.
    """
    candidates, preserved = split_preserved(turns, config.preserve_last_n_turns)

    # sorted() is stable, so equal priorities keep chronological order
    ranked = sorted(enumerate(candidates), key=lambda item: -item[1].importance.priority)
    current_tokens = calculate_total_tokens(candidates) + calculate_total_tokens(preserved)
    dropped_count = 0
    dropped_tokens = 0

    while current_tokens > config.max_context_tokens and ranked:
        _, dropped = ranked.pop()
        tokens = turn_tokens(dropped)
        current_tokens -= tokens
        dropped_count += 1
        dropped_tokens += tokens

    if restore_chronological_order:
        ranked.sort(key=lambda item: item[0])

    survivors = [turn for _, turn in ranked]
    logger.debug(
        f"Dropped {dropped_count} turns ({dropped_tokens} tokens), "
        f"{len(survivors)} candidates survive, {len(preserved)} preserved"
    )

    return TruncationResult(
        turns=survivors + preserved,
        summary=None,
        dropped_count=dropped_count,
        dropped_tokens=dropped_tokens,
        strategy=Strategy.DROP_LOW_PRIORITY,
    )


def drop_oldest(turns: list[Turn], config: TierConfig) -> TruncationResult:
    """Drop the oldest non-preserved turns until both ceilings hold."""
    candidates, preserved = split_preserved(turns, config.preserve_last_n_turns)

    current_tokens = calculate_total_tokens(candidates) + calculate_total_tokens(preserved)
    start = 0
    dropped_tokens = 0

    while start < len(candidates) and (
        current_tokens > config.max_context_tokens
        or len(candidates) - start + len(preserved) > config.max_turns
    ):
        tokens = turn_tokens(candidates[start])
        current_tokens -= tokens
        dropped_tokens += tokens
        start += 1

    logger.debug(f"Dropped {start} oldest turns ({dropped_tokens} tokens)")

    return TruncationResult(
        turns=candidates[start:] + preserved,
        summary=None,
        dropped_count=start,
        dropped_tokens=dropped_tokens,
        strategy=Strategy.DROP_OLD,
    )


def summarize_old(turns: list[Turn], config: TierConfig) -> TruncationResult:
    """Collapse every older turn into one synthetic summary turn.

    Does not re-check the budget afterwards.
    """
    to_summarize, preserved = split_preserved(turns, config.preserve_last_n_turns)

    summary = generate_summary(to_summarize)
    summary_turn = _summary_turn(summary, SUMMARY_TEMPLATE, Importance.HIGH)

    logger.debug(
        f"Summarized {len(to_summarize)} turns into {summary_turn.tokens} tokens"
    )

    return TruncationResult(
        turns=[summary_turn] + preserved,
        summary=summary,
        dropped_count=len(to_summarize),
        dropped_tokens=calculate_total_tokens(to_summarize),
        strategy=Strategy.SUMMARIZE,
    )


def hybrid(
    turns: list[Turn],
    config: TierConfig,
    restore_chronological_order: bool = False,
) -> TruncationResult:
    """Keep important older turns, summarize the rest, drop more if needed.

    When the assembled result is still over budget the outcome of
    drop_by_priority on it is returned as is, tagged DROP_LOW_PRIORITY.
    """
    old, preserved = split_preserved(turns, config.preserve_last_n_turns)

    important_old = [t for t in old if t.importance in IMPORTANT]
    to_summarize = [t for t in old if t.importance not in IMPORTANT]

    summary = generate_summary(to_summarize)
    summary_turn = _summary_turn(summary, CONTEXT_TEMPLATE, Importance.MEDIUM)

    result = [summary_turn] + important_old + preserved

    if calculate_total_tokens(result) > config.max_context_tokens:
        logger.debug("Hybrid result still over budget, falling back to priority drop")
        return drop_by_priority(
            result, config, restore_chronological_order=restore_chronological_order
        )

    logger.debug(
        f"Hybrid kept {len(important_old)} important turns, "
        f"summarized {len(to_summarize)}"
    )

    return TruncationResult(
        turns=result,
        summary=summary,
        dropped_count=len(to_summarize),
        dropped_tokens=calculate_total_tokens(to_summarize),
        strategy=Strategy.HYBRID,
    )
