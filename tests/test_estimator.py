"""Tests for hidden rating estimation."""

import pytest

from rank_forecast import (
    Confidence,
    MatchRecord,
    Outcome,
    RankAlignment,
    RatingEstimator,
    UnknownRankError,
)


def win(rp: int) -> MatchRecord:
    return MatchRecord(outcome=Outcome.WIN, rp_change=rp)


def loss(rp: int, shielded: bool = False) -> MatchRecord:
    return MatchRecord(outcome=Outcome.LOSS, rp_change=rp, shielded=shielded)


SAMPLE_HISTORY = [
    win(18),
    win(15),
    loss(-12),
    win(22),
    loss(-8),
    MatchRecord(outcome=Outcome.DRAW, rp_change=3),
    win(16),
    loss(0, shielded=True),
    win(19),
    win(21),
]


class TestEstimate:
    """Tests for RatingEstimator.estimate."""

    def test_empty_history_uses_baseline(self) -> None:
        """No matches still yields a valid estimate."""
        estimate = RatingEstimator().estimate("SILVER_2", 45)
        assert estimate.state.rating == 1512
        assert estimate.state.spread == 1.8
        assert estimate.state.volatility == 0.08
        assert estimate.matches_used == 0
        assert estimate.confidence is Confidence.LOW
        assert estimate.expected_rating == pytest.approx(1511.5)
        assert estimate.alignment is RankAlignment.ALIGNED
        assert estimate.projected_rp_gain == 15

    def test_new_season_with_previous_rating(self) -> None:
        """Last season's rating is averaged in and spread is widened."""
        estimate = RatingEstimator().estimate(
            "SILVER_2", 45, is_new_season=True, previous_season_rating=1700
        )
        assert estimate.state.rating == 1606
        assert estimate.state.spread == 2.2
        assert estimate.state.volatility == 0.06

    def test_new_season_without_previous_rating(self) -> None:
        estimate = RatingEstimator().estimate("SILVER_2", 45, is_new_season=True)
        assert estimate.state.spread == 2.5
        assert estimate.state.volatility == 0.08

    def test_single_expected_win(self) -> None:
        """An unsurprising win tightens spread and leaves volatility alone."""
        estimate = RatingEstimator().estimate("SILVER_2", 45, [win(18)])
        assert estimate.state.rating == 1526
        assert estimate.state.spread == 1.75
        assert estimate.state.volatility == 0.08

    def test_small_win_still_counts(self) -> None:
        """Wins are worth at least 5 rating points."""
        estimator = RatingEstimator()
        base = estimator.infer_state("GOLD_1", 0, []).rating
        after = estimator.infer_state("GOLD_1", 0, [win(2)]).rating
        assert after - base == pytest.approx(5)

    def test_shielded_loss_still_costs_rating(self) -> None:
        """A shielded loss is treated as a -12 RP loss."""
        estimator = RatingEstimator()
        base = estimator.infer_state("GOLD_1", 0, []).rating
        after = estimator.infer_state("GOLD_1", 0, [loss(0, shielded=True)]).rating
        assert after - base == pytest.approx(-9.6)

    def test_draw(self) -> None:
        estimator = RatingEstimator()
        base = estimator.infer_state("GOLD_1", 0, []).rating
        draw = MatchRecord(outcome=Outcome.DRAW, rp_change=4)
        assert estimator.infer_state("GOLD_1", 0, [draw]).rating - base == pytest.approx(2)

    def test_history_window(self) -> None:
        """Only the most recent matches are replayed."""
        estimator = RatingEstimator(history_window=3)
        estimate = estimator.estimate("GOLD_1", 0, [win(15)] * 8)
        assert estimate.matches_used == 3

    def test_window_keeps_most_recent(self) -> None:
        """History is newest first; the window keeps the front."""
        estimator = RatingEstimator(history_window=1)
        estimate = estimator.estimate("SILVER_2", 45, [win(20), loss(-12)])
        assert estimate.state.rating == 1528

    def test_spread_floor(self) -> None:
        estimate = RatingEstimator(history_window=50).estimate("GOLD_1", 0, [win(15)] * 40)
        assert estimate.state.spread == 0.8

    def test_unknown_rank(self) -> None:
        with pytest.raises(UnknownRankError):
            RatingEstimator().estimate("COPPER_1", 10)

    def test_inputs_not_mutated(self) -> None:
        history = list(SAMPLE_HISTORY)
        RatingEstimator().estimate("SILVER_2", 45, history)
        assert history == SAMPLE_HISTORY

    def test_deterministic(self) -> None:
        estimator = RatingEstimator()
        first = estimator.estimate("SILVER_2", 45, SAMPLE_HISTORY)
        second = estimator.estimate("SILVER_2", 45, SAMPLE_HISTORY)
        assert first == second


class TestMonotonicity:
    """Adding wins never lowers the rating; adding losses never raises it."""

    def test_all_wins_non_decreasing(self) -> None:
        estimator = RatingEstimator()
        results = [win(rp) for rp in (12, 3, 25, 15, 9, 18, 30, 6, 14, 20)]
        ratings = [
            estimator.estimate("GOLD_2", 30, results[:n]).state.rating
            for n in range(len(results) + 1)
        ]
        assert ratings == sorted(ratings)

    def test_all_losses_non_increasing(self) -> None:
        estimator = RatingEstimator()
        results = [loss(rp) for rp in (-12, -3, -25, 0, -9, -18, -30, -6, -14, -20)]
        ratings = [
            estimator.estimate("GOLD_2", 30, results[:n]).state.rating
            for n in range(len(results) + 1)
        ]
        assert ratings == sorted(ratings, reverse=True)


class TestConfidence:
    """Tests for the confidence score."""

    def test_sample_history(self) -> None:
        """Ten varied matches with a shield use score High."""
        label, score = RatingEstimator.confidence(SAMPLE_HISTORY)
        assert score == 85
        assert label is Confidence.HIGH

    def test_small_consistent_sample(self) -> None:
        label, score = RatingEstimator.confidence([win(15)] * 3)
        assert score == 55
        assert label is Confidence.MEDIUM

    def test_new_season_no_matches(self) -> None:
        label, score = RatingEstimator.confidence([], is_new_season=True)
        assert score == 10
        assert label is Confidence.LOW

    def test_lopsided_win_rate(self) -> None:
        """An all-win record scores the lowest win-rate band."""
        label, score = RatingEstimator.confidence([win(15)] * 5)
        assert score == 30 + 30 + 15 + 5 - 10


class TestAlignment:
    """Tests for rank alignment and projected gains."""

    def test_alignment_bands(self) -> None:
        assert RatingEstimator.alignment(51) is RankAlignment.UNDERRANKED
        assert RatingEstimator.alignment(50) is RankAlignment.ALIGNED
        assert RatingEstimator.alignment(-51) is RankAlignment.OVERRANKED

    def test_projected_rp_gain(self) -> None:
        assert RatingEstimator.projected_rp_gain(150) == 20
        assert RatingEstimator.projected_rp_gain(75) == 17
        assert RatingEstimator.projected_rp_gain(0) == 15
        assert RatingEstimator.projected_rp_gain(-75) == 13
        assert RatingEstimator.projected_rp_gain(-150) == 11

    def test_underranked_after_win_streak(self) -> None:
        estimate = RatingEstimator().estimate("GOLD_1", 0, [win(25)] * 6)
        assert estimate.alignment is RankAlignment.UNDERRANKED
        assert estimate.rating_gap > 50
