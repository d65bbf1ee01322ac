"""Tests for Rank Forecast exceptions."""

from rank_forecast import ConfigError, InvalidInputError, RankForecastError, UnknownRankError


class TestRankForecastError:
    def test_is_exception(self) -> None:
        error = RankForecastError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_hierarchy(self) -> None:
        for error in (UnknownRankError("X_1"), InvalidInputError("bad"), ConfigError("bad")):
            assert isinstance(error, RankForecastError)


class TestUnknownRankError:
    def test_message(self) -> None:
        error = UnknownRankError("GOLD_9", ["GOLD_1", "GOLD_2"])
        assert "GOLD_9" in str(error)
        assert "GOLD_1, GOLD_2" in str(error)
        assert error.known == ["GOLD_1", "GOLD_2"]

    def test_without_known(self) -> None:
        error = UnknownRankError("GOLD_9")
        assert "Valid ranks" not in str(error)
        assert error.known == []


class TestInvalidInputError:
    def test_basic_message(self) -> None:
        assert str(InvalidInputError("too large")) == "too large"

    def test_with_field(self) -> None:
        error = InvalidInputError("too large", field="games_to_simulate")
        assert "games_to_simulate" in str(error)
        assert error.field == "games_to_simulate"


class TestConfigError:
    def test_with_field(self) -> None:
        error = ConfigError("expected a mapping", field="ladder")
        assert "Configuration error in 'ladder'" in str(error)
        assert error.field == "ladder"
