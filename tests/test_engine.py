"""Tests for the RankEngine entry point."""

import logging
import random

import pytest

from rank_forecast import (
    EngineConfig,
    LadderConfig,
    MatchRecord,
    Outcome,
    PlayerReport,
    RankEngine,
    RankForecastError,
    RankLadder,
    UnknownRankError,
)

SHIELDED = MatchRecord(outcome=Outcome.LOSS, rp_change=0, shielded=True)


class TestRankEngine:
    """Tests for RankEngine wiring."""

    def test_defaults(self) -> None:
        engine = RankEngine()
        assert engine.config.k_factor == 32
        assert len(engine.ladder) == 21
        assert engine.simulator.max_games == 10000

    def test_accepts_ladder_instance(self) -> None:
        ladder = RankLadder()
        assert RankEngine(ladder=ladder).ladder is ladder

    def test_custom_ladder(self) -> None:
        ladder = LadderConfig(
            ranks=["IRON_1", "IRON_2"],
            baselines=[1000, 1200],
            tier_multipliers={"IRON": 1.0},
        )
        engine = RankEngine(ladder=ladder)
        estimate = engine.estimate_rating("IRON_1", 50)
        assert estimate.state.rating == 1100
        with pytest.raises(UnknownRankError):
            engine.estimate_rating("SILVER_2", 50)

    def test_analyze(self) -> None:
        report = RankEngine().analyze("SILVER_2", 0, [SHIELDED])
        assert isinstance(report, PlayerReport)
        assert report.shield.active is True
        assert report.shield.games_used == 1
        assert report.estimate.matches_used == 1

    def test_shield_uses_configured_cap(self) -> None:
        engine = RankEngine(EngineConfig(shield_max_uses=5))
        assert engine.shield_status(0, shield_games_used=4).games_used == 4

    def test_expected_rp_change(self) -> None:
        engine = RankEngine()
        assert engine.expected_rp_change(1480, Outcome.WIN) == 18
        assert engine.expected_rp_change(1480, Outcome.WIN, "SILVER_2") == 17

    def test_counter_prediction_uses_k_factor(self) -> None:
        engine = RankEngine(EngineConfig(k_factor=16))
        assert engine.infer_opponent(1500, 8, Outcome.WIN) == 1500
        assert engine.predict_counter_delta(8, Outcome.WIN, 1500) == -8
        assert engine.predict_counter_delta(16, Outcome.WIN, 1500) is None

    def test_symmetry_warnings_logged(self, caplog) -> None:
        engine = RankEngine()
        with caplog.at_level(logging.WARNING, logger="rank_forecast.engine"):
            check = engine.validate_symmetry(20, -4, 1500)
        assert len(check.warnings) == 2
        assert any("imply losses" in record.message for record in caplog.records)

    def test_simulate(self) -> None:
        engine = RankEngine()
        summary = engine.simulate(
            games_to_simulate=10,
            expected_win_rate=50,
            starting_rank="SILVER_2",
            starting_rp=45,
            starting_rating=1480,
            seed=3,
        )
        assert len(summary.trace) == 10
        again = engine.simulate(
            rng=random.Random(3),
            games_to_simulate=10,
            expected_win_rate=50,
            starting_rank="SILVER_2",
            starting_rp=45,
            starting_rating=1480,
        )
        assert summary == again

    def test_simulate_uses_config_defaults(self) -> None:
        engine = RankEngine(EngineConfig(default_spread=3.0))
        summary = engine.simulate(
            games_to_simulate=1,
            expected_win_rate=100,
            starting_rank="SILVER_2",
            starting_rating=1480,
            seed=0,
        )
        # 15 * max(0.5, 3.0 / 2) = 22.5 -> 1502.5 -> 1503
        assert summary.final_rating == 1503

    def test_negative_game_count(self) -> None:
        """Bad game counts surface as the package's own error type."""
        with pytest.raises(RankForecastError):
            RankEngine().simulate(
                games_to_simulate=-1,
                expected_win_rate=50,
                starting_rank="SILVER_2",
                starting_rating=1480,
            )

    def test_simulate_batch(self) -> None:
        batch = RankEngine().simulate_batch(
            runs=5,
            seed=1,
            games_to_simulate=10,
            expected_win_rate=50,
            starting_rank="GOLD_1",
            starting_rating=1700,
        )
        assert batch.runs == 5
        assert batch.games_per_run == 10

    def test_from_config(self, tmp_path) -> None:
        path = tmp_path / "engine.yaml"
        path.write_text("engine:\n  k_factor: 16\n  max_games: 50\n")
        engine = RankEngine.from_config(path)
        assert engine.config.k_factor == 16
        assert engine.simulator.max_games == 50
