"""Configuration for Rank Forecast.

This module provides the ladder table (rank names, baseline ratings and tier
multipliers) and the engine tuning knobs, both loadable from YAML so the
ladder can be revised without touching the engine code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .exceptions import ConfigError

DEFAULT_RANKS: list[str] = [
    "BRONZE_1", "BRONZE_2", "BRONZE_3", "BRONZE_4",
    "SILVER_1", "SILVER_2", "SILVER_3", "SILVER_4",
    "GOLD_1", "GOLD_2", "GOLD_3", "GOLD_4",
    "PLATINUM_1", "PLATINUM_2", "PLATINUM_3", "PLATINUM_4",
    "DIAMOND_1", "DIAMOND_2", "DIAMOND_3",
    "EMERALD_1",
    "NIGHTMARE_1",
]

DEFAULT_BASELINES: list[float] = [
    0, 500, 900, 1100,
    1400, 1480, 1550, 1620,
    1700, 1800, 1880, 1960,
    2020, 2070, 2100, 2150,
    2170, 2230, 2300,
    2370,
    2500,
]

DEFAULT_TIER_MULTIPLIERS: dict[str, float] = {
    "BRONZE": 1.0,
    "SILVER": 0.95,
    "GOLD": 0.90,
    "PLATINUM": 0.85,
    "DIAMOND": 0.80,
    "EMERALD": 0.75,
    "NIGHTMARE": 0.70,
}


def split_rank_name(name: str) -> tuple[str, str]:
    """Split ``TIER_DIVISION`` on its last underscore.

    Raises:
        ValueError: If the name has no underscore or an empty part.
    """
    tier, sep, division = name.rpartition("_")
    if not sep or not tier or not division:
        raise ValueError(f"Rank name '{name}' does not follow the TIER_DIVISION convention")
    return tier, division


class LadderConfig(BaseModel):
    """The published rank ladder.

    Attributes:
        ranks: Rank names in ascending order.
        baselines: Baseline rating per rank, parallel to ``ranks``.
        tier_multipliers: RP scaling per tier prefix.
    """

    ranks: list[str] = Field(default_factory=lambda: list(DEFAULT_RANKS))
    baselines: list[float] = Field(default_factory=lambda: list(DEFAULT_BASELINES))
    tier_multipliers: dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_TIER_MULTIPLIERS)
    )

    @field_validator("ranks")
    @classmethod
    def validate_ranks(cls, v: list[str]) -> list[str]:
        """Rank names must be unique and follow TIER_DIVISION."""
        if not v:
            raise ValueError("Ladder must contain at least one rank")
        if len(set(v)) != len(v):
            raise ValueError("Rank names must be unique")
        for name in v:
            split_rank_name(name)
        return v

    @field_validator("baselines")
    @classmethod
    def validate_baselines(cls, v: list[float]) -> list[float]:
        """Baselines must never decrease up the ladder."""
        for lower, higher in zip(v, v[1:]):
            if higher < lower:
                raise ValueError(f"Baselines must be non-decreasing ({lower} > {higher})")
        return v

    @model_validator(mode="after")
    def validate_tables(self) -> LadderConfig:
        """Check the parallel tables line up."""
        if len(self.ranks) != len(self.baselines):
            raise ValueError(
                f"Ladder has {len(self.ranks)} ranks but {len(self.baselines)} baselines"
            )
        missing = sorted(
            {split_rank_name(name)[0] for name in self.ranks} - set(self.tier_multipliers)
        )
        if missing:
            raise ValueError(f"Missing tier multipliers for: {', '.join(missing)}")
        return self

    @classmethod
    def default(cls) -> LadderConfig:
        """The 21-division ladder."""
        return cls()


class EngineConfig(BaseModel):
    """Tuning knobs for the rating engine.

    Attributes:
        k_factor: K-factor for expected-score maths.
        history_window: Most recent matches the estimator replays.
        max_games: Upper bound on games per simulation run.
        shield_max_uses: Shield uses before demotion proceeds normally.
        symmetry_tolerance: RP difference tolerated by the symmetry check.
        default_spread: Starting spread when a simulation is not given one.
        default_volatility: Starting volatility when not given one.
        batch_workers: Threads used for Monte-Carlo batches.
    """

    k_factor: int = Field(default=32, ge=1, le=100)
    history_window: int = Field(default=10, ge=1, le=50)
    max_games: int = Field(default=10000, ge=1, le=100000)
    shield_max_uses: int = Field(default=3, ge=0, le=10)
    symmetry_tolerance: int = Field(default=5, ge=0)
    default_spread: float = Field(default=1.8, gt=0.0)
    default_volatility: float = Field(default=0.06, gt=0.0)
    batch_workers: int = Field(default=4, ge=1, le=64)


class ForecastConfig(BaseModel):
    """Full configuration, typically loaded from YAML.

    Attributes:
        engine: Engine settings.
        ladder: Ladder table.
    """

    engine: EngineConfig = Field(default_factory=EngineConfig)
    ladder: LadderConfig = Field(default_factory=LadderConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ForecastConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            ForecastConfig instance.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            ConfigError: If the document is not a mapping.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data: Any = yaml.safe_load(f)

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"expected a mapping, got {type(data).__name__}", field=str(path))

        for section in ("engine", "ladder"):
            if section in data and not isinstance(data[section], dict):
                raise ConfigError("expected a mapping", field=section)

        return cls(**data)
