"""Hidden rating inference from visible rank, RP and recent matches.

The estimator starts from the ladder baseline for the player's visible
position and replays recent matches through a Glicko-inspired update,
tightening spread as observations agree with expectation and widening it
when they surprise.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..ladder import RankLadder
from ..models import (
    Confidence,
    MatchRecord,
    Outcome,
    RankAlignment,
    RatingEstimate,
    RatingState,
)
from ..utils import clamp, round_half_up, round_to
from .predictor import RPChangePredictor

logger = logging.getLogger(__name__)


class RatingEstimator:
    """Estimates hidden rating plus a confidence label.

    Example:
        ```python
        estimator = RatingEstimator()
        estimate = estimator.estimate(
            "SILVER_2",
            45,
            [MatchRecord(outcome=Outcome.WIN, rp_change=18)],
        )
        print(estimate.state.rating, estimate.confidence.value)
        ```
    """

    SURPRISE_SCALE = 20
    MIN_SPREAD = 0.8
    MIN_VOLATILITY = 0.04
    ALIGNMENT_THRESHOLD = 50

    def __init__(
        self,
        ladder: RankLadder | None = None,
        history_window: int = 10,
    ):
        """Initialize the estimator.

        Args:
            ladder: Rank ladder (defaults to the standard table).
            history_window: Most recent matches to replay.
        """
        self.ladder = ladder or RankLadder()
        self.history_window = history_window

    def window(self, matches: Sequence[MatchRecord]) -> list[MatchRecord]:
        """Most recent matches, still newest first."""
        return list(matches[: self.history_window])

    def infer_state(
        self,
        rank_name: str,
        rp: int,
        matches: Sequence[MatchRecord],
        is_new_season: bool = False,
        previous_season_rating: float | None = None,
    ) -> RatingState:
        """Full-precision rating state after replaying the history.

        Args:
            rank_name: Visible rank, e.g. ``SILVER_2``.
            rp: RP within that rank.
            matches: Match history, most recent first.
            is_new_season: Ranks were just reset.
            previous_season_rating: Last season's rating, if known.

        Returns:
            Unrounded RatingState.

        Raises:
            UnknownRankError: If the rank is not on the ladder.
        """
        division = self.ladder.division_of(rank_name)
        rating = self.ladder.interpolated_baseline(division, rp)
        spread = 2.5 if is_new_season else 1.8
        volatility = 0.06 if previous_season_rating is not None else 0.08

        if is_new_season and previous_season_rating is not None:
            rating = (previous_season_rating + rating) / 2
            spread = 2.2

        for match in reversed(self.window(matches)):
            effective = match.effective_rp_change
            expected = RPChangePredictor.expected_rp_change(rating, match.outcome)
            surprise = abs(effective - expected) / self.SURPRISE_SCALE

            if match.outcome is Outcome.WIN:
                rating += max(5, match.rp_change * 0.8)
            elif match.outcome is Outcome.LOSS:
                rating += min(-5, effective * 0.8)
            else:
                rating += match.rp_change * 0.5

            spread = max(self.MIN_SPREAD, spread - 0.05 + surprise * 0.1)
            volatility = max(self.MIN_VOLATILITY, volatility + surprise * 0.005)

        return RatingState(rating=rating, spread=spread, volatility=volatility)

    @staticmethod
    def confidence(
        matches: Sequence[MatchRecord],
        is_new_season: bool = False,
    ) -> tuple[Confidence, int]:
        """Score how much to trust an estimate built from ``matches``.

        Points come from sample size, RP consistency, season freshness and
        win-rate sanity, minus a flat penalty for the missing season-wide
        match count.

        Returns:
            Tuple of (label, score clamped to 0-100).
        """
        count = len(matches)
        score = 0

        if count >= 8:
            score += 40
        elif count >= 5:
            score += 30
        elif count >= 3:
            score += 20
        else:
            score += 10

        if count > 0:
            magnitudes = [abs(m.effective_rp_change) for m in matches]
            mean = sum(magnitudes) / count
            variance = sum((x - mean) ** 2 for x in magnitudes) / count
            if variance < 25:
                score += 30
            elif variance < 50:
                score += 20
            else:
                score += 10

        score += 10 if is_new_season else 15

        if count >= 5:
            win_rate = sum(1 for m in matches if m.outcome is Outcome.WIN) / count
            if 0.4 <= win_rate <= 0.7:
                score += 15
            elif 0.3 <= win_rate <= 0.8:
                score += 10
            else:
                score += 5

        score -= 10

        if any(m.shielded for m in matches):
            score += 5

        score = int(clamp(score, 0, 100))
        return Confidence.from_score(score), score

    @classmethod
    def alignment(cls, rating_gap: float) -> RankAlignment:
        if rating_gap > cls.ALIGNMENT_THRESHOLD:
            return RankAlignment.UNDERRANKED
        if rating_gap < -cls.ALIGNMENT_THRESHOLD:
            return RankAlignment.OVERRANKED
        return RankAlignment.ALIGNED

    @staticmethod
    def projected_rp_gain(rating_gap: float) -> int:
        """RP the next average win should award given the rating gap."""
        base_gain = 15
        if rating_gap > 100:
            return round_half_up(base_gain * 1.3)
        if rating_gap > 50:
            return round_half_up(base_gain * 1.15)
        if rating_gap < -100:
            return round_half_up(base_gain * 0.7)
        if rating_gap < -50:
            return round_half_up(base_gain * 0.85)
        return base_gain

    def estimate(
        self,
        rank_name: str,
        rp: int,
        matches: Sequence[MatchRecord] = (),
        is_new_season: bool = False,
        previous_season_rating: float | None = None,
    ) -> RatingEstimate:
        """Estimate hidden rating with confidence and rank alignment.

        Args:
            rank_name: Visible rank, e.g. ``SILVER_2``.
            rp: RP within that rank (clamped to 0-99 for interpolation).
            matches: Match history, most recent first.
            is_new_season: Ranks were just reset.
            previous_season_rating: Last season's rating, if known.

        Returns:
            RatingEstimate with the reported (rounded) state.

        Raises:
            UnknownRankError: If the rank is not on the ladder.
        """
        window = self.window(matches)
        state = self.infer_state(
            rank_name,
            rp,
            window,
            is_new_season=is_new_season,
            previous_season_rating=previous_season_rating,
        )
        reported = RatingState(
            rating=round_half_up(state.rating),
            spread=round_to(state.spread, 2),
            volatility=round_to(state.volatility, 3),
        )

        label, score = self.confidence(window, is_new_season)
        expected_rating = self.ladder.interpolated_baseline(self.ladder.division_of(rank_name), rp)
        gap = reported.rating - expected_rating

        logger.debug(
            f"Estimated {rank_name} {rp}RP over {len(window)} matches: "
            f"rating={reported.rating} spread={reported.spread} confidence={label.value}"
        )

        return RatingEstimate(
            state=reported,
            confidence=label,
            confidence_score=score,
            matches_used=len(window),
            expected_rating=expected_rating,
            rating_gap=gap,
            alignment=self.alignment(gap),
            projected_rp_gain=self.projected_rp_gain(gap),
        )
