"""Boundary policy: decides whether and how to truncate a conversation."""

import logging
from typing import Optional

from ..config import SelectorConfig
from ..tiers import TierConfig
from .strategies import drop_by_priority, drop_oldest, hybrid, summarize_old
from .turn import Strategy, TruncationResult, Turn, calculate_total_tokens

logger = logging.getLogger(__name__)


class BoundaryPolicy:
    """Picks an eviction strategy from how far over budget a conversation is.

    excess ratio < drop_threshold            -> drop by priority
    drop_threshold <= ratio < summarize      -> summarize old turns
    ratio >= summarize_threshold             -> hybrid

    Holds only immutable settings, so one instance can serve any number of
    concurrent callers.
    """

    def __init__(self, config: Optional[SelectorConfig] = None) -> None:
        self._config = config or SelectorConfig()

    @property
    def config(self) -> SelectorConfig:
        return self._config

    @staticmethod
    def excess_ratio(total_tokens: int, max_context_tokens: int) -> float:
        """Fraction of the current tokens that are over budget (never negative)."""
        if total_tokens <= 0:
            return 0.0
        excess = max(total_tokens - max_context_tokens, 0)
        return excess / total_tokens

    def choose(self, turns: list[Turn], tier: TierConfig) -> Strategy:
        """Strategy that select_and_apply would dispatch to."""
        total_tokens = calculate_total_tokens(turns)
        if total_tokens <= tier.max_context_tokens and len(turns) <= tier.max_turns:
            return Strategy.NONE

        if self._config.trim_turn_overflow and total_tokens <= tier.max_context_tokens:
            return Strategy.DROP_OLD

        ratio = self.excess_ratio(total_tokens, tier.max_context_tokens)
        if ratio < self._config.drop_threshold:
            return Strategy.DROP_LOW_PRIORITY
        if ratio < self._config.summarize_threshold:
            return Strategy.SUMMARIZE
        return Strategy.HYBRID

    def select_and_apply(self, turns: list[Turn], tier: TierConfig) -> TruncationResult:
        """Apply the tier's boundaries to an ordered turn list.

        Args:
            turns: Conversation turns, oldest first. Not modified.
            tier: Limits to enforce.

        Returns:
            TruncationResult whose strategy records the path taken.
        """
        turns = list(turns)
        strategy = self.choose(turns, tier)
        chronological = self._config.restore_chronological_order

        if strategy is Strategy.NONE:
            return TruncationResult(turns=turns, strategy=Strategy.NONE)
        elif strategy is Strategy.DROP_OLD:
            result = drop_oldest(turns, tier)
        elif strategy is Strategy.DROP_LOW_PRIORITY:
            result = drop_by_priority(
                turns, tier, restore_chronological_order=chronological
            )
        elif strategy is Strategy.SUMMARIZE:
            result = summarize_old(turns, tier)
        else:
            result = hybrid(turns, tier, restore_chronological_order=chronological)

        total_tokens = calculate_total_tokens(turns)
        logger.info(
            f"Applied {result.strategy.value}: {len(turns)} turns / {total_tokens} tokens "
            f"-> {len(result.turns)} turns / {result.total_tokens} tokens",
            extra={"ctx": {
                "selected": strategy.value,
                "excess_ratio": round(
                    self.excess_ratio(total_tokens, tier.max_context_tokens), 4
                ),
                "max_context_tokens": tier.max_context_tokens,
                **result.to_dict(),
            }},
        )
        return result
