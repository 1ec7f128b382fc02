"""membound - conversation memory boundaries for tiered chat context."""

from .api import (
    BoundaryEngine,
    apply_boundaries,
    extract_metadata,
    filter_by_memory_days,
    get_config,
    prepare_turn,
    score_importance,
)
from .config import Config, SelectorConfig
from .context import Importance, Strategy, TruncationResult, Turn, TurnMetadata
from .logging import setup_logging
from .tiers import TierConfig, TierRegistry

__version__ = "0.1.0"

__all__ = [
    "BoundaryEngine",
    "Config",
    "Importance",
    "SelectorConfig",
    "Strategy",
    "TierConfig",
    "TierRegistry",
    "TruncationResult",
    "Turn",
    "TurnMetadata",
    "apply_boundaries",
    "extract_metadata",
    "filter_by_memory_days",
    "get_config",
    "prepare_turn",
    "score_importance",
    "setup_logging",
]
