"""Subscription tier limits for conversation memory."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TierConfig:
    """Context limits for one subscription tier."""

    max_context_tokens: int
    max_turns: int
    summary_threshold: int  # informational, selection uses the excess ratio
    preserve_last_n_turns: int  # most recent turns always kept raw
    memory_days: int


DEFAULT_TIERS: Mapping[str, TierConfig] = MappingProxyType({
    "STARTER": TierConfig(
        max_context_tokens=4000,
        max_turns=10,
        summary_threshold=3000,
        preserve_last_n_turns=4,
        memory_days=1,
    ),
    "PLUS": TierConfig(
        max_context_tokens=16000,
        max_turns=30,
        summary_threshold=12000,
        preserve_last_n_turns=8,
        memory_days=3,
    ),
    "PRO": TierConfig(
        max_context_tokens=32000,
        max_turns=50,
        summary_threshold=24000,
        preserve_last_n_turns=12,
        memory_days=7,
    ),
    "APEX": TierConfig(
        max_context_tokens=64000,
        max_turns=100,
        summary_threshold=48000,
        preserve_last_n_turns=20,
        memory_days=30,
    ),
    "SOVEREIGN": TierConfig(
        max_context_tokens=128000,
        max_turns=200,
        summary_threshold=100000,
        preserve_last_n_turns=30,
        memory_days=90,
    ),
})

FALLBACK_TIER = "STARTER"


class TierRegistry:
    """Read-only lookup from tier name to TierConfig.

    Names are matched case-insensitively. Unknown names resolve to the
    fallback tier instead of failing.
    """

    def __init__(
        self,
        tiers: Optional[Mapping[str, TierConfig]] = None,
        fallback: str = FALLBACK_TIER,
    ) -> None:
        source = DEFAULT_TIERS if tiers is None else tiers
        normalized = {name.upper(): cfg for name, cfg in source.items()}
        fallback = fallback.upper()
        if fallback not in normalized:
            raise ValueError(f"Fallback tier {fallback!r} is not defined")
        self._tiers: Mapping[str, TierConfig] = MappingProxyType(normalized)
        self._fallback = fallback

    @property
    def names(self) -> list[str]:
        return list(self._tiers)

    def get(self, tier: Optional[str]) -> TierConfig:
        """Resolve a tier name, falling back to the most conservative tier."""
        key = (tier or "").strip().upper()
        config = self._tiers.get(key)
        if config is None:
            logger.debug(f"Unknown tier {tier!r}, using {self._fallback}")
            return self._tiers[self._fallback]
        return config

    def __contains__(self, tier: object) -> bool:
        return isinstance(tier, str) and tier.strip().upper() in self._tiers
