"""Core data models for Rank Forecast.

This module defines the value types passed between the engine components:
- MatchRecord: One observed match from the history collaborator
- RatingState / RatingEstimate: Hidden-rating inference output
- ShieldStatus / SymmetryCheck: Diagnostics surfaced next to the estimate
- SimulationParams / SimulationGameRecord / SimulationSummary: Forecast runs
- BatchSummary: Aggregate over many independent forecast runs

All models are frozen; the engine never mutates its inputs or outputs.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .utils import clamp


class Outcome(str, Enum):
    """Result of a single match."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"

    @property
    def score(self) -> float:
        """Actual score used by the expected-score formula."""
        if self is Outcome.WIN:
            return 1.0
        if self is Outcome.LOSS:
            return 0.0
        return 0.5


class Confidence(str, Enum):
    """Qualitative confidence in a rating estimate."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_score(cls, score: float) -> Confidence:
        """Convert a 0-100 confidence score to a label."""
        if score >= 75:
            return cls.HIGH
        elif score >= 50:
            return cls.MEDIUM
        else:
            return cls.LOW


class RankAlignment(str, Enum):
    """Whether the hidden rating sits above or below the visible rank."""

    UNDERRANKED = "underranked"
    ALIGNED = "aligned"
    OVERRANKED = "overranked"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Rank(_Frozen):
    """A named division on the ladder, e.g. ``SILVER_2``.

    Attributes:
        name: Unique rank name in ``TIER_DIVISION`` form.
        division_index: 0-based position on the ladder.
        tier: Tier prefix, e.g. ``SILVER``.
    """

    name: str
    division_index: int = Field(ge=0)
    tier: str

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. ``Silver 2``."""
        tier, _, division = self.name.rpartition("_")
        return f"{tier.title()} {division}"


class MatchRecord(_Frozen):
    """One observed match.

    Attributes:
        outcome: Win, loss or draw.
        rp_change: RP shown after the match (0 for a shielded loss).
        shielded: The demotion shield absorbed the RP loss. The hidden
            rating still dropped.
    """

    outcome: Outcome
    rp_change: int
    shielded: bool = False

    SHIELDED_LOSS_RP: ClassVar[int] = -12

    @property
    def effective_rp_change(self) -> int:
        """RP change with shielded losses replaced by a typical loss."""
        return self.SHIELDED_LOSS_RP if self.shielded else self.rp_change


class RatingState(_Frozen):
    """Glicko-style hidden rating with its uncertainty scalars."""

    rating: float
    spread: float
    volatility: float


class RatingEstimate(_Frozen):
    """Output of the rating estimator.

    Attributes:
        state: Reported rating state (rating rounded to an integer, spread to
            2 places, volatility to 3 places).
        confidence: Low / Medium / High label.
        confidence_score: Score behind the label, 0-100.
        matches_used: Number of history entries replayed.
        expected_rating: Interpolated baseline for the visible rank and RP.
        rating_gap: ``state.rating - expected_rating``.
        alignment: Underranked / aligned / overranked.
        projected_rp_gain: RP the next average win should award.
    """

    state: RatingState
    confidence: Confidence
    confidence_score: int
    matches_used: int
    expected_rating: float
    rating_gap: float
    alignment: RankAlignment
    projected_rp_gain: int


class ShieldStatus(_Frozen):
    """Demotion shield state at the rank floor."""

    active: bool
    games_used: int
    warning: bool
    max_uses: int = 3

    @computed_field
    @property
    def games_remaining(self) -> int:
        return max(0, self.max_uses - self.games_used)


class SymmetryCheck(_Frozen):
    """Consistency between observed win and loss RP averages.

    Attributes:
        avg_win_rp: Observed average RP for a win.
        avg_loss_rp: Observed average RP for a loss.
        predicted_loss_from_win: Loss RP implied by the win average, or
            None when the win average carries no usable signal.
        predicted_win_from_loss: Win RP implied by the loss average, or None.
        warnings: Human-readable caveats; empty when consistent.
    """

    avg_win_rp: int
    avg_loss_rp: int
    predicted_loss_from_win: int | None = None
    predicted_win_from_loss: int | None = None
    warnings: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def is_symmetric(self) -> bool:
        return not self.warnings


class SimulationParams(_Frozen):
    """Inputs for a progression forecast.

    Attributes:
        games_to_simulate: Number of games to play out.
        expected_win_rate: Win probability as a percentage (0-100).
        avg_rp_per_win: Observed average RP gained per win (positive).
        avg_rp_per_loss: Observed average RP change per loss (negative).
        starting_rp: RP within the starting rank; clamped to 0-99.
        starting_rank: Rank name, e.g. ``SILVER_2``.
        starting_rating: Hidden rating to start from.
        starting_spread: Initial spread.
        starting_volatility: Initial volatility.
        k_factor: K-factor of the RP system the forecast assumes. Carried
            with the inputs for callers; the per-game RP deltas come from
            the calibrated averages, not from this value.
    """

    games_to_simulate: int
    expected_win_rate: float = Field(ge=0.0, le=100.0)
    avg_rp_per_win: int = Field(default=15, gt=0)
    avg_rp_per_loss: int = Field(default=-12, lt=0)
    starting_rp: int = 0
    starting_rank: str
    starting_rating: float
    starting_spread: float = Field(default=1.8, gt=0.0)
    starting_volatility: float = Field(default=0.06, gt=0.0)
    k_factor: int = Field(default=32, ge=1, le=100)

    @field_validator("starting_rp")
    @classmethod
    def clamp_starting_rp(cls, v: int) -> int:
        """RP outside the display range is clamped, not rejected."""
        return int(clamp(v, 0, 99))


class SimulationGameRecord(_Frozen):
    """One simulated game."""

    game_index: int
    outcome: Outcome
    rp_before: int
    rp_after: int
    rank_after: str
    rating_after: float
    rp_delta: int
    promoted: bool = False
    demoted: bool = False
    skill_gap: float


class SimulationSummary(_Frozen):
    """Result of a single progression forecast."""

    starting_rp: int
    starting_rank: str
    starting_rating: float
    final_rp: int
    final_rank: str
    final_rating: float
    final_spread: float
    final_volatility: float
    promotion_count: int = 0
    demotion_count: int = 0
    wins: int = 0
    losses: int = 0
    trace: list[SimulationGameRecord] = Field(default_factory=list)

    @computed_field
    @property
    def games_played(self) -> int:
        return len(self.trace)

    @computed_field
    @property
    def net_rating_change(self) -> float:
        return self.final_rating - self.starting_rating


class BatchSummary(_Frozen):
    """Aggregate over many independent forecast runs.

    Attributes:
        runs: Number of runs aggregated.
        games_per_run: Games simulated in each run.
        mean_final_rating: Average final rating.
        mean_final_rp: Average final RP.
        promotion_probability: Share of runs ending above the start division.
        demotion_probability: Share of runs ending below the start division.
        final_rank_distribution: Rank name to share of runs ending there.
        rating_percentiles: p10 / p50 / p90 of final ratings.
    """

    runs: int
    games_per_run: int
    mean_final_rating: float
    mean_final_rp: float
    promotion_probability: float
    demotion_probability: float
    final_rank_distribution: dict[str, float] = Field(default_factory=dict)
    rating_percentiles: dict[str, float] = Field(default_factory=dict)


class PlayerReport(_Frozen):
    """Rating estimate and shield status computed from the same inputs."""

    rank: str
    rp: int
    estimate: RatingEstimate
    shield: ShieldStatus
