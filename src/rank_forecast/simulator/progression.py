"""Game-by-game rank progression forecast.

Each simulated game draws an outcome from the injected random source,
prices it in RP from the current rating, skill gap and tier, applies at
most one promotion or demotion, and nudges the rating. Every game depends
on the previous game's state, so a single run is strictly sequential.

The demotion shield is not applied here: a simulated loss at 0 RP always
demotes (or holds at the bottom rank).
"""

from __future__ import annotations

import logging
import random
from typing import NamedTuple

from ..exceptions import InvalidInputError
from ..ladder import RankLadder
from ..models import Outcome, SimulationGameRecord, SimulationParams, SimulationSummary
from ..rating.predictor import RPChangePredictor
from ..utils import round_half_up

logger = logging.getLogger(__name__)


class BoundaryResult(NamedTuple):
    division: int
    rp: int
    promoted: bool
    demoted: bool


class ProgressionSimulator:
    """Forecasts RP, rank and rating over a run of games.

    Example:
        ```python
        simulator = ProgressionSimulator()
        params = SimulationParams(
            games_to_simulate=20,
            expected_win_rate=55,
            starting_rank="SILVER_2",
            starting_rp=45,
            starting_rating=1480,
        )
        summary = simulator.run(params, seed=7)
        print(summary.final_rank, summary.final_rp)
        ```
    """

    RATING_CHANGE = {Outcome.WIN: 15, Outcome.LOSS: -10}
    MIN_SPREAD = 0.8
    MIN_VOLATILITY = 0.04
    SPREAD_DECAY = 0.03

    def __init__(
        self,
        ladder: RankLadder | None = None,
        predictor: RPChangePredictor | None = None,
        max_games: int = 10000,
    ):
        """Initialize the simulator.

        Args:
            ladder: Rank ladder (defaults to the standard table).
            predictor: RP predictor; built on ``ladder`` if not given.
            max_games: Largest accepted ``games_to_simulate``.
        """
        self.ladder = ladder or RankLadder()
        self.predictor = predictor or RPChangePredictor(self.ladder)
        self.max_games = max_games

    def apply_boundary(self, division: int, rp: int, rp_delta: int) -> BoundaryResult:
        """Apply an RP change with at most one division step.

        Crossing 100 promotes and carries the excess over; dropping below 0
        demotes and carries the deficit down. The division holds at either
        end of the ladder, and RP is clamped to 0-99.
        """
        new_rp = rp + rp_delta
        promoted = demoted = False

        if new_rp >= RankLadder.RP_PER_DIVISION:
            if division < self.ladder.max_division:
                division += 1
                new_rp -= RankLadder.RP_PER_DIVISION
                promoted = True
        elif new_rp < 0:
            if division > 0:
                division -= 1
                new_rp += RankLadder.RP_PER_DIVISION
                demoted = True

        new_rp = max(0, min(99, new_rp))
        return BoundaryResult(division, new_rp, promoted, demoted)

    def rp_delta(
        self,
        rating: float,
        outcome: Outcome,
        rank_name: str,
        skill_gap: float,
        avg_rp_per_win: int = 15,
        avg_rp_per_loss: int = -12,
    ) -> int:
        """RP change for one simulated game.

        The expected change at ``rating`` is calibrated to the player's
        observed averages, damped or amplified by the skill gap, rounded,
        then scaled by tier.
        """
        base = RPChangePredictor.expected_rp_change(rating, outcome)
        if outcome is Outcome.WIN:
            calibration = avg_rp_per_win / RPChangePredictor.BASE_CHANGE[Outcome.WIN]
            factor = max(0.7, 1 - skill_gap / 400)
        else:
            calibration = avg_rp_per_loss / RPChangePredictor.BASE_CHANGE[Outcome.LOSS]
            factor = min(1.3, 1 + skill_gap / 500)
        scaled = round_half_up(base * calibration * factor)
        return self.predictor.apply_tier_scaling(scaled, rank_name)

    @staticmethod
    def post_transition_delta(rp_delta: int, skill_gap: float, promoted: bool) -> int:
        """Reported RP change for a game that changed rank."""
        if promoted:
            return round_half_up(rp_delta * max(0.7, 1 - skill_gap / 300))
        return round_half_up(rp_delta * min(1.3, 1 + abs(skill_gap) / 400))

    def run(
        self,
        params: SimulationParams,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> SimulationSummary:
        """Simulate ``params.games_to_simulate`` games.

        Args:
            params: Starting position and assumptions.
            rng: Random source; takes precedence over ``seed``.
            seed: Seed for a fresh ``random.Random`` when ``rng`` is omitted.

        Returns:
            SimulationSummary with the full trace.

        Raises:
            InvalidInputError: If the game count is negative or above
                ``max_games``.
            UnknownRankError: If the starting rank is not on the ladder.
        """
        if params.games_to_simulate < 0:
            raise InvalidInputError("must not be negative", field="games_to_simulate")
        if params.games_to_simulate > self.max_games:
            raise InvalidInputError(
                f"{params.games_to_simulate} exceeds the limit of {self.max_games}",
                field="games_to_simulate",
            )

        rng = rng or random.Random(seed)
        win_probability = params.expected_win_rate / 100

        division = self.ladder.division_of(params.starting_rank)
        rp = params.starting_rp
        rating = params.starting_rating
        spread = params.starting_spread
        volatility = params.starting_volatility

        trace: list[SimulationGameRecord] = []
        promotions = demotions = wins = 0

        for game_index in range(1, params.games_to_simulate + 1):
            outcome = Outcome.WIN if rng.random() < win_probability else Outcome.LOSS
            rank_name = self.ladder.rank_at(division)
            skill_gap = rating - self.ladder.baseline_of(division)

            delta = self.rp_delta(
                rating,
                outcome,
                rank_name,
                skill_gap,
                params.avg_rp_per_win,
                params.avg_rp_per_loss,
            )
            boundary = self.apply_boundary(division, rp, delta)
            if boundary.promoted or boundary.demoted:
                delta = self.post_transition_delta(delta, skill_gap, boundary.promoted)

            change = self.RATING_CHANGE[outcome] * max(0.5, spread / 2.0)
            rating = round_half_up(rating + change)
            spread = max(self.MIN_SPREAD, spread - self.SPREAD_DECAY)
            volatility = max(self.MIN_VOLATILITY, volatility + abs(change) * 0.001)

            trace.append(
                SimulationGameRecord(
                    game_index=game_index,
                    outcome=outcome,
                    rp_before=rp,
                    rp_after=boundary.rp,
                    rank_after=self.ladder.rank_at(boundary.division),
                    rating_after=rating,
                    rp_delta=delta,
                    promoted=boundary.promoted,
                    demoted=boundary.demoted,
                    skill_gap=skill_gap,
                )
            )

            division, rp = boundary.division, boundary.rp
            promotions += boundary.promoted
            demotions += boundary.demoted
            wins += outcome is Outcome.WIN

        summary = SimulationSummary(
            starting_rp=params.starting_rp,
            starting_rank=params.starting_rank,
            starting_rating=params.starting_rating,
            final_rp=rp,
            final_rank=self.ladder.rank_at(division),
            final_rating=rating,
            final_spread=spread,
            final_volatility=volatility,
            promotion_count=promotions,
            demotion_count=demotions,
            wins=wins,
            losses=len(trace) - wins,
            trace=trace,
        )
        logger.debug(
            f"Simulated {len(trace)} games from {params.starting_rank} {params.starting_rp}RP: "
            f"ended {summary.final_rank} {summary.final_rp}RP, "
            f"+{promotions}/-{demotions} divisions"
        )
        return summary
