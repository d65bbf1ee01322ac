"""Main RankEngine class for Rank Forecast.

This module provides the primary entry point. RankEngine wires the ladder,
estimator, predictor, shield tracker and simulators together from a single
configuration so callers never assemble components by hand.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from pathlib import Path

from .config import EngineConfig, ForecastConfig, LadderConfig
from .ladder import RankLadder
from .models import (
    BatchSummary,
    MatchRecord,
    Outcome,
    PlayerReport,
    RatingEstimate,
    ShieldStatus,
    SimulationParams,
    SimulationSummary,
    SymmetryCheck,
)
from .rating import RatingEstimator, RPChangePredictor, ShieldStatusTracker
from .simulator import MonteCarloSimulator, ProgressionSimulator

logger = logging.getLogger(__name__)


class RankEngine:
    """Main entry point for Rank Forecast.

    Example:
        ```python
        from rank_forecast import RankEngine, MatchRecord, Outcome

        engine = RankEngine()
        report = engine.analyze(
            "SILVER_2",
            45,
            [MatchRecord(outcome=Outcome.WIN, rp_change=18)],
        )
        print(report.estimate.state.rating, report.shield.active)

        summary = engine.simulate(
            games_to_simulate=30,
            expected_win_rate=55,
            starting_rank="SILVER_2",
            starting_rp=45,
            starting_rating=report.estimate.state.rating,
            seed=42,
        )
        print(summary.final_rank)
        ```
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        ladder: LadderConfig | RankLadder | None = None,
    ):
        """Initialize the engine.

        Args:
            config: Engine settings. Uses defaults if not provided.
            ladder: Ladder table or a ready RankLadder. Uses the standard
                21-division ladder if not provided.
        """
        self.config = config or EngineConfig()
        if isinstance(ladder, RankLadder):
            self.ladder = ladder
        else:
            self.ladder = RankLadder(ladder)

        self.predictor = RPChangePredictor(self.ladder)
        self.estimator = RatingEstimator(self.ladder, history_window=self.config.history_window)
        self.shield = ShieldStatusTracker(max_uses=self.config.shield_max_uses)
        self.simulator = ProgressionSimulator(
            self.ladder,
            self.predictor,
            max_games=self.config.max_games,
        )
        self.batch = MonteCarloSimulator(self.simulator, max_workers=self.config.batch_workers)

    @classmethod
    def from_config(cls, path: str | Path) -> RankEngine:
        """Create an engine from a YAML configuration file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            RankEngine configured from the file.
        """
        forecast_config = ForecastConfig.from_yaml(path)
        return cls(config=forecast_config.engine, ladder=forecast_config.ladder)

    # Rating inference

    def estimate_rating(
        self,
        rank_name: str,
        rp: int,
        matches: Sequence[MatchRecord] = (),
        is_new_season: bool = False,
        previous_season_rating: float | None = None,
    ) -> RatingEstimate:
        """Estimate hidden rating from visible rank, RP and recent matches."""
        return self.estimator.estimate(
            rank_name,
            rp,
            matches,
            is_new_season=is_new_season,
            previous_season_rating=previous_season_rating,
        )

    def shield_status(
        self,
        current_rp: int,
        matches: Sequence[MatchRecord] = (),
        shield_games_used: int | None = None,
    ) -> ShieldStatus:
        """Demotion shield status for the current position."""
        return self.shield.status(current_rp, matches, shield_games_used)

    def analyze(
        self,
        rank_name: str,
        rp: int,
        matches: Sequence[MatchRecord] = (),
        is_new_season: bool = False,
        previous_season_rating: float | None = None,
        shield_games_used: int | None = None,
    ) -> PlayerReport:
        """Rating estimate and shield status from one set of inputs.

        The shield status is reported next to the estimate; it does not
        feed into it.
        """
        estimate = self.estimate_rating(
            rank_name,
            rp,
            matches,
            is_new_season=is_new_season,
            previous_season_rating=previous_season_rating,
        )
        shield = self.shield_status(rp, matches, shield_games_used)
        return PlayerReport(rank=rank_name, rp=rp, estimate=estimate, shield=shield)

    # RP prediction

    def expected_rp_change(self, rating: float, outcome: Outcome, rank_name: str | None = None) -> int:
        """Expected RP for an average match, tier-scaled when a rank is given."""
        expected = self.predictor.expected_rp_change(rating, outcome)
        if rank_name is None:
            return expected
        return self.predictor.apply_tier_scaling(expected, rank_name)

    def infer_opponent(
        self,
        player_rating: float,
        observed_rp_delta: int,
        outcome: Outcome | float,
    ) -> int | None:
        """Opponent rating implied by one observed RP change, or None."""
        return self.predictor.infer_opponent(
            player_rating, observed_rp_delta, outcome, self.config.k_factor
        )

    def predict_counter_delta(
        self,
        known_rp_delta: int,
        known_outcome: Outcome | float,
        player_rating: float,
    ) -> int | None:
        """RP the opposite outcome would have paid, or None."""
        return self.predictor.predict_counter_delta(
            known_rp_delta, known_outcome, player_rating, self.config.k_factor
        )

    def validate_symmetry(
        self,
        avg_win_rp: int,
        avg_loss_rp: int,
        player_rating: float,
    ) -> SymmetryCheck:
        """Check observed win and loss averages against each other."""
        check = self.predictor.validate_symmetry(
            avg_win_rp,
            avg_loss_rp,
            player_rating,
            k_factor=self.config.k_factor,
            tolerance=self.config.symmetry_tolerance,
        )
        for warning in check.warnings:
            logger.warning(warning)
        return check

    # Forecasting

    def _params(self, **kwargs) -> SimulationParams:
        kwargs.setdefault("starting_spread", self.config.default_spread)
        kwargs.setdefault("starting_volatility", self.config.default_volatility)
        return SimulationParams(**kwargs)

    def simulate(
        self,
        rng: random.Random | None = None,
        seed: int | None = None,
        **params,
    ) -> SimulationSummary:
        """Run one progression forecast.

        Args:
            rng: Random source; takes precedence over ``seed``.
            seed: Seed for a fresh random source.
            **params: SimulationParams fields (``games_to_simulate``,
                ``expected_win_rate``, ``starting_rank``, ...).

        Returns:
            SimulationSummary with the full trace.
        """
        return self.simulator.run(self._params(**params), rng=rng, seed=seed)

    def simulate_batch(
        self,
        runs: int,
        seed: int | None = None,
        **params,
    ) -> BatchSummary:
        """Run ``runs`` independent forecasts and aggregate them."""
        return self.batch.run(self._params(**params), runs, seed=seed)
