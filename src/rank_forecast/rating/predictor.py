"""RP change prediction and inversion.

This module maps a hidden rating to the RP an average match should award,
and runs the ELO expected-score relationship backwards: one observed RP
change implies an opponent rating, which in turn implies what the opposite
outcome would have paid.
"""

from __future__ import annotations

import logging
import math

from ..exceptions import InvalidInputError
from ..ladder import RankLadder
from ..models import Outcome, SymmetryCheck
from ..utils import clamp, round_half_up

logger = logging.getLogger(__name__)


def _score_of(outcome: Outcome | float) -> float:
    if isinstance(outcome, Outcome):
        return outcome.score
    return float(outcome)


class RPChangePredictor:
    """Expected RP changes and opponent inference.

    The formula helpers are static, like an ELO calculator; tier scaling
    needs a ladder and lives on the instance.

    Example:
        ```python
        RPChangePredictor.expected_rp_change(1480, Outcome.WIN)   # 18

        # A +16 win implies an evenly matched opponent...
        RPChangePredictor.infer_opponent(1500, 16, Outcome.WIN)   # 1500
        # ...so the loss would have cost 16.
        RPChangePredictor.predict_counter_delta(16, Outcome.WIN, 1500)  # -16
        ```
    """

    DEFAULT_K = 32
    REFERENCE_RATING = 1800
    BASE_CHANGE = {Outcome.WIN: 15, Outcome.LOSS: -12, Outcome.DRAW: 2}
    MIN_DIFFICULTY = 0.5
    MAX_DIFFICULTY = 2.0

    def __init__(self, ladder: RankLadder | None = None):
        self.ladder = ladder or RankLadder()

    @classmethod
    def difficulty_multiplier(cls, rating: float) -> float:
        """Scale factor that shrinks RP swings as rating rises.

        A rating of 0 gets the maximum multiplier; negative ratings fall to
        the minimum.
        """
        if rating == 0:
            return cls.MAX_DIFFICULTY
        return clamp(cls.REFERENCE_RATING / rating, cls.MIN_DIFFICULTY, cls.MAX_DIFFICULTY)

    @classmethod
    def expected_rp_change(cls, rating: float, outcome: Outcome) -> int:
        """RP an average match of this outcome should produce at ``rating``.

        Args:
            rating: Hidden rating.
            outcome: Match outcome.

        Returns:
            Base change (15 / -12 / 2) times the difficulty multiplier,
            rounded.
        """
        return round_half_up(cls.BASE_CHANGE[outcome] * cls.difficulty_multiplier(rating))

    def tier_multiplier(self, rank_name: str) -> float:
        return self.ladder.tier_multiplier(rank_name)

    def apply_tier_scaling(self, rp_change: float, rank_name: str) -> int:
        """Scale an RP change by the rank's tier difficulty, rounded.

        Raises:
            UnknownRankError: If the rank is not on the ladder.
        """
        return round_half_up(rp_change * self.tier_multiplier(rank_name))

    @staticmethod
    def expected_score(player_rating: float, opponent_rating: float) -> float:
        """Probability that the player beats the opponent."""
        return 1 / (1 + 10 ** ((opponent_rating - player_rating) / 400))

    @staticmethod
    def infer_opponent(
        player_rating: float,
        observed_rp_delta: float,
        outcome: Outcome | float,
        k_factor: int = DEFAULT_K,
    ) -> int | None:
        """Opponent rating implied by one observed RP change.

        Inverts ``delta = k * (outcome - E)`` for E, then E for the rating
        difference.

        Args:
            player_rating: The player's hidden rating.
            observed_rp_delta: RP change seen after the match.
            outcome: Outcome or its score (1 win, 0 loss).
            k_factor: K-factor the RP system uses.

        Returns:
            Rounded opponent rating, or None if the implied expected score
            falls outside (0, 1).

        Raises:
            InvalidInputError: If ``k_factor`` is not positive.
        """
        if k_factor <= 0:
            raise InvalidInputError("must be positive", field="k_factor")
        expected = _score_of(outcome) - observed_rp_delta / k_factor
        if expected <= 0 or expected >= 1:
            return None
        odds = 1 / expected - 1
        return round_half_up(player_rating + 400 * math.log10(odds))

    @classmethod
    def predict_counter_delta(
        cls,
        known_rp_delta: float,
        known_outcome: Outcome | float,
        player_rating: float,
        k_factor: int = DEFAULT_K,
    ) -> int | None:
        """RP the opposite outcome would have paid against the same opponent.

        Args:
            known_rp_delta: Observed RP change.
            known_outcome: Observed outcome (win or loss).
            player_rating: The player's hidden rating.
            k_factor: K-factor the RP system uses.

        Returns:
            Predicted RP change for the opposite outcome, or None when the
            opponent cannot be inferred.

        Raises:
            InvalidInputError: If the known outcome is a draw or
                ``k_factor`` is not positive.
        """
        score = _score_of(known_outcome)
        if score not in (0.0, 1.0):
            raise InvalidInputError("counter prediction needs a win or a loss", field="known_outcome")

        opponent = cls.infer_opponent(player_rating, known_rp_delta, score, k_factor)
        if opponent is None:
            return None
        expected = cls.expected_score(player_rating, opponent)
        return round_half_up(((1.0 - score) - expected) * k_factor)

    @classmethod
    def validate_symmetry(
        cls,
        avg_win_rp: int,
        avg_loss_rp: int,
        player_rating: float,
        k_factor: int = DEFAULT_K,
        tolerance: int = 5,
    ) -> SymmetryCheck:
        """Cross-check observed win and loss averages against each other.

        Each average predicts the other via ``predict_counter_delta``. A gap
        beyond ``tolerance`` is reported as a warning, never raised.
        """
        loss_from_win = cls.predict_counter_delta(avg_win_rp, Outcome.WIN, player_rating, k_factor)
        win_from_loss = cls.predict_counter_delta(avg_loss_rp, Outcome.LOSS, player_rating, k_factor)

        warnings: list[str] = []
        if loss_from_win is not None and abs(loss_from_win - avg_loss_rp) > tolerance:
            warnings.append(
                f"Wins of {avg_win_rp:+d} RP imply losses of {loss_from_win:+d} RP, "
                f"but losses average {avg_loss_rp:+d} RP"
            )
        if win_from_loss is not None and abs(win_from_loss - avg_win_rp) > tolerance:
            warnings.append(
                f"Losses of {avg_loss_rp:+d} RP imply wins of {win_from_loss:+d} RP, "
                f"but wins average {avg_win_rp:+d} RP"
            )

        for warning in warnings:
            logger.debug(f"Symmetry mismatch: {warning}")

        return SymmetryCheck(
            avg_win_rp=avg_win_rp,
            avg_loss_rp=avg_loss_rp,
            predicted_loss_from_win=loss_from_win,
            predicted_win_from_loss=win_from_loss,
            warnings=warnings,
        )
