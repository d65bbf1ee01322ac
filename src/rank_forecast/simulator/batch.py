"""Monte-Carlo batches of independent progression forecasts.

Runs share nothing but their inputs, so they fan out over a thread pool.
Run ``i`` draws from its own ``random.Random(seed + i)`` stream, which
keeps a seeded batch reproducible regardless of scheduling.
"""

from __future__ import annotations

import logging
import random
import statistics
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

from ..exceptions import InvalidInputError
from ..models import BatchSummary, SimulationParams, SimulationSummary
from .progression import ProgressionSimulator

logger = logging.getLogger(__name__)


def _deciles(ratings: list[float]) -> dict[str, float]:
    """p10, p50 and p90 with linear interpolation between sorted values."""
    if len(ratings) == 1:
        return {"p10": ratings[0], "p50": ratings[0], "p90": ratings[0]}
    cuts = statistics.quantiles(ratings, n=10, method="inclusive")
    return {"p10": cuts[0], "p50": cuts[4], "p90": cuts[8]}


class MonteCarloSimulator:
    """Aggregates many seeded ProgressionSimulator runs.

    Example:
        ```python
        batch = MonteCarloSimulator().run(params, runs=500, seed=1)
        print(f"Promotion chance: {batch.promotion_probability:.0%}")
        ```
    """

    MAX_RUNS = 10000

    def __init__(
        self,
        simulator: ProgressionSimulator | None = None,
        max_workers: int = 4,
    ):
        self.simulator = simulator or ProgressionSimulator()
        self.max_workers = max_workers

    def run_all(
        self,
        params: SimulationParams,
        runs: int,
        seed: int | None = None,
    ) -> list[SimulationSummary]:
        """Run ``runs`` independent forecasts, in run order.

        Raises:
            InvalidInputError: If ``runs`` is outside 1..MAX_RUNS.
        """
        if runs < 1 or runs > self.MAX_RUNS:
            raise InvalidInputError(f"must be between 1 and {self.MAX_RUNS}", field="runs")

        if seed is None:
            rngs = [random.Random() for _ in range(runs)]
        else:
            rngs = [random.Random(seed + i) for i in range(runs)]

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(lambda rng: self.simulator.run(params, rng=rng), rngs))

    def run(
        self,
        params: SimulationParams,
        runs: int,
        seed: int | None = None,
    ) -> BatchSummary:
        """Run a batch and summarise where the runs ended up.

        Args:
            params: Shared starting position and assumptions.
            runs: Number of independent runs.
            seed: Base seed; run ``i`` uses ``seed + i``.

        Returns:
            BatchSummary.
        """
        summaries = self.run_all(params, runs, seed)
        start_division = self.simulator.ladder.division_of(params.starting_rank)

        final_divisions = [self.simulator.ladder.division_of(s.final_rank) for s in summaries]
        ratings = sorted(s.final_rating for s in summaries)
        rank_counts = Counter(s.final_rank for s in summaries)

        batch = BatchSummary(
            runs=runs,
            games_per_run=params.games_to_simulate,
            mean_final_rating=sum(ratings) / runs,
            mean_final_rp=sum(s.final_rp for s in summaries) / runs,
            promotion_probability=sum(1 for d in final_divisions if d > start_division) / runs,
            demotion_probability=sum(1 for d in final_divisions if d < start_division) / runs,
            final_rank_distribution={
                name: rank_counts[name] / runs
                for name in self.simulator.ladder.names
                if name in rank_counts
            },
            rating_percentiles=_deciles(ratings),
        )
        logger.debug(
            f"Batch of {runs} runs: promotion={batch.promotion_probability:.2f} "
            f"demotion={batch.demotion_probability:.2f}"
        )
        return batch
