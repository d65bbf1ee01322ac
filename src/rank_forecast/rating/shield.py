"""Demotion shield status.

At 0 RP a loss may be absorbed by the shield instead of demoting. The
tracker only reports how much of the shield has been spent; enforcing the
use cap is the caller's job.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models import MatchRecord, Outcome, ShieldStatus
from ..utils import clamp

logger = logging.getLogger(__name__)


class ShieldStatusTracker:
    """Derives shield status from current RP and match history."""

    WARNING_THRESHOLD = 2

    def __init__(self, max_uses: int = 3):
        self.max_uses = max_uses

    @staticmethod
    def shielded_loss_count(matches: Sequence[MatchRecord]) -> int:
        """Losses that cost no RP, either flagged shielded or showing 0."""
        return sum(
            1
            for m in matches
            if m.outcome is Outcome.LOSS and (m.rp_change == 0 or m.shielded)
        )

    def status(
        self,
        current_rp: int,
        matches: Sequence[MatchRecord] = (),
        shield_games_used: int | None = None,
    ) -> ShieldStatus:
        """Shield status for the player's current position.

        Args:
            current_rp: RP within the current rank.
            matches: Match history, most recent first.
            shield_games_used: Caller-supplied count that overrides the
                history-derived one; clamped to ``[0, max_uses]``.

        Returns:
            ShieldStatus.
        """
        if shield_games_used is None:
            games_used = self.shielded_loss_count(matches)
        else:
            games_used = int(clamp(shield_games_used, 0, self.max_uses))
            if games_used != shield_games_used:
                logger.warning(
                    f"Shield games used {shield_games_used} clamped to {games_used}"
                )

        return ShieldStatus(
            active=current_rp == 0 and games_used > 0,
            games_used=games_used,
            warning=games_used >= self.WARNING_THRESHOLD,
            max_uses=self.max_uses,
        )
