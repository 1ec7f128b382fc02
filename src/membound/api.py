"""Library surface consumed by the chat orchestration layer."""

import logging
from dataclasses import replace
from typing import Optional

from .config import Config
from .context.metadata import extract_metadata as _extract_metadata
from .context.retention import filter_by_memory_days as _filter_by_memory_days
from .context.scoring import score_importance as _score_importance
from .context.selector import BoundaryPolicy
from .context.turn import (
    ROLES,
    Importance,
    TruncationResult,
    Turn,
    TurnMetadata,
    estimate_tokens,
)
from .logging import setup_logging
from .tiers import TierConfig, TierRegistry

logger = logging.getLogger(__name__)


class BoundaryEngine:
    """Tier registry plus boundary policy.

    Stateless across calls; safe to share between threads.
    """

    def __init__(
        self,
        registry: Optional[TierRegistry] = None,
        policy: Optional[BoundaryPolicy] = None,
    ) -> None:
        self._registry = registry or TierRegistry()
        self._policy = policy or BoundaryPolicy()

    @classmethod
    def from_config(
        cls, config: Config, configure_logging: bool = False
    ) -> "BoundaryEngine":
        """Build an engine from loaded configuration.

        With ``configure_logging`` the host process also gets the console and
        debug-file handlers described by ``config.logging``.
        """
        if configure_logging:
            setup_logging(config)
        return cls(
            registry=config.build_registry(),
            policy=BoundaryPolicy(config.selector),
        )

    @property
    def registry(self) -> TierRegistry:
        return self._registry

    @property
    def policy(self) -> BoundaryPolicy:
        return self._policy

    def get_config(self, tier: Optional[str]) -> TierConfig:
        return self._registry.get(tier)

    def apply_boundaries(self, turns: list[Turn], tier: Optional[str]) -> TruncationResult:
        """Fit a conversation into the named tier's context budget."""
        return self._policy.select_and_apply(turns, self.get_config(tier))

    def filter_by_memory_days(
        self, turns: list[Turn], tier: Optional[str], now: Optional[float] = None
    ) -> list[Turn]:
        return _filter_by_memory_days(turns, self.get_config(tier), now=now)

    def prepare(
        self, turns: list[Turn], tier: Optional[str], now: Optional[float] = None
    ) -> TruncationResult:
        """Retention filter followed by boundary application."""
        config = self.get_config(tier)
        retained = _filter_by_memory_days(turns, config, now=now)
        if len(retained) < len(turns):
            logger.debug(
                f"Retention window dropped {len(turns) - len(retained)} turns "
                f"older than {config.memory_days} days"
            )
        return self._policy.select_and_apply(retained, config)


_default_engine = BoundaryEngine()


def get_config(tier: Optional[str]) -> TierConfig:
    return _default_engine.get_config(tier)


def apply_boundaries(turns: list[Turn], tier: Optional[str]) -> TruncationResult:
    return _default_engine.apply_boundaries(turns, tier)


def filter_by_memory_days(
    turns: list[Turn], tier: Optional[str], now: Optional[float] = None
) -> list[Turn]:
    return _default_engine.filter_by_memory_days(turns, tier, now=now)


def score_importance(turn: Turn) -> Importance:
    return _score_importance(turn)


def extract_metadata(content: str) -> TurnMetadata:
    return _extract_metadata(content)


def prepare_turn(
    role: str,
    content: str,
    tokens: Optional[int] = None,
    timestamp: Optional[float] = None,
) -> Turn:
    """Build a fully tagged and scored turn at ingestion time.

    Args:
        role: "user", "assistant" or "system".
        content: Message text.
        tokens: Known token cost, estimated from content when omitted.
        timestamp: Creation time, defaults to now.

    Raises:
        ValueError: If role is not recognised.
    """
    if role not in ROLES:
        raise ValueError(f"Invalid role: {role}")

    turn = Turn(
        role=role,
        content=content,
        tokens=estimate_tokens(content) if tokens is None else tokens,
        metadata=_extract_metadata(content),
    )
    if timestamp is not None:
        turn = replace(turn, timestamp=timestamp)
    return replace(turn, importance=_score_importance(turn))


__all__ = [
    "BoundaryEngine",
    "apply_boundaries",
    "extract_metadata",
    "filter_by_memory_days",
    "get_config",
    "prepare_turn",
    "score_importance",
]
