"""Rank Forecast - Hidden rating inference and rank progression forecasting.

Estimate a player's hidden rating from visible rank, RP and recent matches,
predict RP swings, track the demotion shield, and simulate future games.

Example:
    ```python
    from rank_forecast import RankEngine, MatchRecord, Outcome

    engine = RankEngine()
    estimate = engine.estimate_rating(
        "SILVER_2", 45, [MatchRecord(outcome=Outcome.WIN, rp_change=18)]
    )
    summary = engine.simulate(
        games_to_simulate=20,
        expected_win_rate=50,
        starting_rank="SILVER_2",
        starting_rp=45,
        starting_rating=estimate.state.rating,
        seed=1,
    )
    print(summary.final_rank)
    ```
"""

from .config import EngineConfig, ForecastConfig, LadderConfig
from .engine import RankEngine
from .exceptions import (
    ConfigError,
    InvalidInputError,
    RankForecastError,
    UnknownRankError,
)
from .ladder import RankLadder
from .rating import RatingEstimator, RPChangePredictor, ShieldStatusTracker
from .reporter import TextReporter, print_results
from .simulator import BoundaryResult, MonteCarloSimulator, ProgressionSimulator
from .models import (
    BatchSummary,
    Confidence,
    MatchRecord,
    Outcome,
    PlayerReport,
    Rank,
    RankAlignment,
    RatingEstimate,
    RatingState,
    ShieldStatus,
    SimulationGameRecord,
    SimulationParams,
    SimulationSummary,
    SymmetryCheck,
)

__version__ = "0.1.0"

__all__ = [
    # Main entry point
    "RankEngine",
    # Configuration
    "EngineConfig",
    "ForecastConfig",
    "LadderConfig",
    # Components
    "RankLadder",
    "RatingEstimator",
    "RPChangePredictor",
    "ShieldStatusTracker",
    "ProgressionSimulator",
    "MonteCarloSimulator",
    "BoundaryResult",
    # Models
    "Outcome",
    "Confidence",
    "RankAlignment",
    "Rank",
    "MatchRecord",
    "RatingState",
    "RatingEstimate",
    "ShieldStatus",
    "SymmetryCheck",
    "PlayerReport",
    "SimulationParams",
    "SimulationGameRecord",
    "SimulationSummary",
    "BatchSummary",
    # Reporter
    "TextReporter",
    "print_results",
    # Exceptions
    "RankForecastError",
    "UnknownRankError",
    "InvalidInputError",
    "ConfigError",
]
