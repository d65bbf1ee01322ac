"""Static rank ladder.

The ladder is an ordered table of ``TIER_DIVISION`` names with a baseline
rating per division. Every lookup clamps at the table ends; nothing
extrapolates past the top or bottom rank.
"""

from __future__ import annotations

from ..config import LadderConfig, split_rank_name
from ..exceptions import UnknownRankError
from ..models import Rank
from ..utils import clamp


class RankLadder:
    """Read-only view over a LadderConfig.

    Example:
        ```python
        ladder = RankLadder()
        ladder.division_of("SILVER_2")               # 5
        ladder.baseline_of(5)                        # 1480
        ladder.interpolated_baseline(5, 50)          # 1515.0
        ladder.rank_at(99)                           # "NIGHTMARE_1"
        ```
    """

    RP_PER_DIVISION = 100

    def __init__(self, config: LadderConfig | None = None):
        self.config = config or LadderConfig.default()
        self._names: list[str] = list(self.config.ranks)
        self._baselines: list[float] = list(self.config.baselines)
        self._index: dict[str, int] = {name: i for i, name in enumerate(self._names)}

    @property
    def names(self) -> list[str]:
        return list(self._names)

    @property
    def max_division(self) -> int:
        return len(self._names) - 1

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, rank_name: object) -> bool:
        return rank_name in self._index

    def clamp_division(self, division_index: int) -> int:
        return int(clamp(division_index, 0, self.max_division))

    def division_of(self, rank_name: str) -> int:
        """Ladder position of a rank name.

        Raises:
            UnknownRankError: If the name is not on the ladder.
        """
        try:
            return self._index[rank_name]
        except KeyError:
            raise UnknownRankError(rank_name, self._names) from None

    def rank_at(self, division_index: int) -> str:
        """Rank name at a position, clamped to the table ends."""
        return self._names[self.clamp_division(division_index)]

    def baseline_of(self, division_index: int) -> float:
        """Baseline rating at a position, clamped to the table ends."""
        return self._baselines[self.clamp_division(division_index)]

    def interpolated_baseline(self, division_index: int, rp: float) -> float:
        """Baseline rating for a division plus partial progress toward the next.

        Args:
            division_index: Current division.
            rp: RP within the division; ``rp / 100`` is clamped to [0, 1].

        Returns:
            Linear interpolation between this division's baseline and the
            next one's, or this division's baseline at the top rank.
        """
        current = self.baseline_of(division_index)
        if division_index + 1 > self.max_division:
            return current
        following = self.baseline_of(division_index + 1)
        progress = clamp(rp / self.RP_PER_DIVISION, 0.0, 1.0)
        return current + (following - current) * progress

    def tier_of(self, rank_name: str) -> str:
        """Tier prefix of a rank name (``SILVER_2`` -> ``SILVER``)."""
        if rank_name not in self._index:
            raise UnknownRankError(rank_name, self._names)
        return split_rank_name(rank_name)[0]

    def tier_multiplier(self, rank_name: str) -> float:
        """RP scaling factor for a rank's tier."""
        return self.config.tier_multipliers[self.tier_of(rank_name)]

    def rank(self, rank_name: str) -> Rank:
        """Full Rank value for a name."""
        return Rank(
            name=rank_name,
            division_index=self.division_of(rank_name),
            tier=self.tier_of(rank_name),
        )

    def rank_from_total_rp(self, total_rp: int) -> tuple[Rank, int]:
        """Convert cumulative RP into a rank and the RP shown within it.

        Each division spans 100 RP. Negative totals count as 0 and the top
        rank absorbs everything above it, showing at most 99 RP.
        """
        total_rp = max(0, total_rp)
        division = self.clamp_division(total_rp // self.RP_PER_DIVISION)
        rp = min(99, total_rp - division * self.RP_PER_DIVISION)
        return self.rank(self.rank_at(division)), rp

    def total_rp(self, division_index: int, rp: int) -> int:
        """Cumulative RP for a division and the RP within it."""
        return self.clamp_division(division_index) * self.RP_PER_DIVISION + int(clamp(rp, 0, 99))
