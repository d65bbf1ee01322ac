"""Tests for the rank ladder."""

import pytest

from rank_forecast import LadderConfig, RankLadder, UnknownRankError


class TestLookups:
    """Tests for name and division lookups."""

    def test_division_of(self) -> None:
        """Known ranks map to their ladder position."""
        ladder = RankLadder()
        assert ladder.division_of("BRONZE_1") == 0
        assert ladder.division_of("SILVER_2") == 5
        assert ladder.division_of("NIGHTMARE_1") == 20

    def test_unknown_rank(self) -> None:
        """Unknown names raise with the valid names attached."""
        ladder = RankLadder()
        with pytest.raises(UnknownRankError) as exc_info:
            ladder.division_of("SILVER_9")
        assert exc_info.value.rank_name == "SILVER_9"
        assert "SILVER_2" in exc_info.value.known

    def test_rank_at_clamps(self) -> None:
        """Positions outside the table clamp to the ends."""
        ladder = RankLadder()
        assert ladder.rank_at(5) == "SILVER_2"
        assert ladder.rank_at(-1) == "BRONZE_1"
        assert ladder.rank_at(99) == "NIGHTMARE_1"

    def test_baseline_of_clamps(self) -> None:
        """Baselines clamp to the first and last entries."""
        ladder = RankLadder()
        assert ladder.baseline_of(5) == 1480
        assert ladder.baseline_of(-3) == 0
        assert ladder.baseline_of(50) == 2500

    def test_contains_and_len(self) -> None:
        ladder = RankLadder()
        assert len(ladder) == 21
        assert "GOLD_4" in ladder
        assert "GOLD_5" not in ladder


class TestInterpolation:
    """Tests for interpolated baselines."""

    def test_midway(self) -> None:
        """RP moves the baseline toward the next division."""
        ladder = RankLadder()
        assert ladder.interpolated_baseline(5, 45) == pytest.approx(1511.5)
        assert ladder.interpolated_baseline(5, 0) == 1480

    def test_rp_fraction_clamped(self) -> None:
        """Progress is clamped to [0, 1]."""
        ladder = RankLadder()
        assert ladder.interpolated_baseline(5, 150) == 1550
        assert ladder.interpolated_baseline(5, -10) == 1480

    def test_top_rank_does_not_extrapolate(self) -> None:
        """The top rank returns its own baseline."""
        ladder = RankLadder()
        assert ladder.interpolated_baseline(20, 50) == 2500


class TestTiers:
    """Tests for tier extraction."""

    def test_tier_of(self) -> None:
        ladder = RankLadder()
        assert ladder.tier_of("PLATINUM_3") == "PLATINUM"
        assert ladder.tier_multiplier("PLATINUM_3") == 0.85

    def test_tier_splits_on_last_underscore(self) -> None:
        """Tier names may themselves contain underscores."""
        config = LadderConfig(
            ranks=["DEEP_BLUE_1", "DEEP_BLUE_2"],
            baselines=[1000, 1100],
            tier_multipliers={"DEEP_BLUE": 0.9},
        )
        ladder = RankLadder(config)
        assert ladder.tier_of("DEEP_BLUE_2") == "DEEP_BLUE"
        assert ladder.tier_multiplier("DEEP_BLUE_1") == 0.9

    def test_rank_value(self) -> None:
        rank = RankLadder().rank("GOLD_3")
        assert rank.division_index == 10
        assert rank.tier == "GOLD"
        assert rank.display_name == "Gold 3"


class TestTotalRP:
    """Tests for cumulative RP conversion."""

    def test_rank_from_total_rp(self) -> None:
        ladder = RankLadder()
        rank, rp = ladder.rank_from_total_rp(545)
        assert rank.name == "SILVER_2"
        assert rp == 45

    def test_negative_total(self) -> None:
        rank, rp = RankLadder().rank_from_total_rp(-10)
        assert rank.name == "BRONZE_1"
        assert rp == 0

    def test_special_tiers(self) -> None:
        """Emerald and Nightmare each span a single division."""
        ladder = RankLadder()
        assert ladder.rank_from_total_rp(1950)[0].name == "EMERALD_1"
        rank, rp = ladder.rank_from_total_rp(2350)
        assert rank.name == "NIGHTMARE_1"
        assert rp == 99

    def test_total_rp_inverse(self) -> None:
        ladder = RankLadder()
        assert ladder.total_rp(5, 45) == 545
        assert ladder.rank_from_total_rp(ladder.total_rp(12, 7))[0].name == "PLATINUM_1"
