"""Configuration loading and validation for membound."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Optional
import os

import yaml

from .tiers import DEFAULT_TIERS, FALLBACK_TIER, TierConfig, TierRegistry


@dataclass(frozen=True)
class SelectorConfig:
    """Boundary policy selection configuration. Shared read-only by policies."""

    # excess ratio below this drops by priority
    drop_threshold: float = 0.2
    # excess ratio below this summarizes, at or above runs hybrid
    summarize_threshold: float = 0.5
    # re-sort drop-by-priority survivors chronologically
    restore_chronological_order: bool = False
    # pure turn-count overflows drop the oldest turns instead
    trim_turn_overflow: bool = False
    fallback_tier: str = FALLBACK_TIER

    def __post_init__(self) -> None:
        if not 0.0 <= self.drop_threshold < self.summarize_threshold <= 1.0:
            raise ValueError(
                "Selector thresholds must satisfy 0 <= drop_threshold < "
                f"summarize_threshold <= 1 (got {self.drop_threshold}, "
                f"{self.summarize_threshold})"
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    debug_to_file: bool = False  # JSON debug logs under ~/.local/share/membound/logs/
    use_colors: bool = True  # ANSI colors in console output


@dataclass
class Config:
    """Main configuration container."""

    tiers: dict[str, TierConfig] = field(default_factory=lambda: dict(DEFAULT_TIERS))
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration from file.

        Args:
            path: Optional path to config file. If not provided, searches
                  XDG config locations.

        Returns:
            Loaded configuration with defaults for missing values.
        """
        config_path: Optional[Path] = None

        if path:
            config_path = Path(path)
        else:
            xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
            user_config = Path(xdg_config) / "membound" / "config.yaml"

            if user_config.exists():
                config_path = user_config
            else:
                system_config = Path("/etc/membound/config.yaml")
                if system_config.exists():
                    config_path = system_config

        if config_path and config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
            return cls._from_dict(data)

        return cls()

    def build_registry(self) -> TierRegistry:
        """Registry over the configured tiers and fallback."""
        return TierRegistry(self.tiers, fallback=self.selector.fallback_tier)

    @staticmethod
    def _parse_tiers(data: dict) -> dict[str, TierConfig]:
        """Merge tier overrides over the built-in table.

        Known tiers accept partial overrides, new tiers need every field.
        """
        tiers = dict(DEFAULT_TIERS)
        for name, values in data.items():
            key = str(name).upper()
            values = values or {}
            if key in tiers:
                tiers[key] = replace(tiers[key], **values)
            else:
                tiers[key] = TierConfig(**values)
        return tiers

    @classmethod
    def _from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        return cls(
            tiers=cls._parse_tiers(data.get("tiers") or {}),
            selector=SelectorConfig(**(data.get("selector") or {})),
            logging=LoggingConfig(**(data.get("logging") or {})),
        )
