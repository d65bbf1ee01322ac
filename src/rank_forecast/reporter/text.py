"""Text reporter for Rank Forecast results.

Provides human-readable formatting for rating estimates, shield status,
symmetry checks and simulation results.
"""

from __future__ import annotations

from ..models import (
    BatchSummary,
    PlayerReport,
    RankAlignment,
    RatingEstimate,
    ShieldStatus,
    SimulationSummary,
    SymmetryCheck,
)


def _display(rank_name: str) -> str:
    tier, _, division = rank_name.rpartition("_")
    return f"{tier.title()} {division}"


class TextReporter:
    """Formats results as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_simulation(summary, show_trace=True))
        ```
    """

    BAR_WIDTH = 30

    @staticmethod
    def _bar(fraction: float, width: int = 30) -> str:
        """Render a simple bar chart segment."""
        filled = round(max(0.0, min(1.0, fraction)) * width)
        return "█" * filled + "░" * (width - filled)

    def format_estimate(self, estimate: RatingEstimate) -> str:
        """Format a RatingEstimate as text."""
        state = estimate.state
        lines = [
            "Rating Estimate",
            f"{'=' * 50}",
            f"Rating:     {state.rating:.0f}  (expected {estimate.expected_rating:.0f})",
            f"Spread:     {state.spread:.2f}",
            f"Volatility: {state.volatility:.3f}",
            f"Confidence: {self._bar(estimate.confidence_score / 100)} "
            f"{estimate.confidence_score}% ({estimate.confidence.value})",
            f"Matches:    {estimate.matches_used}",
            f"Next win:   ~{estimate.projected_rp_gain} RP",
        ]

        if estimate.alignment is not RankAlignment.ALIGNED:
            direction = "above" if estimate.alignment is RankAlignment.UNDERRANKED else "below"
            lines.append("")
            lines.append(
                f"{estimate.alignment.value.title()}: rating is "
                f"{abs(estimate.rating_gap):.0f} points {direction} expected"
            )

        return "\n".join(lines)

    def format_shield(self, shield: ShieldStatus) -> str:
        """Format a ShieldStatus as a single line."""
        if not shield.active:
            return f"Demotion shield inactive ({shield.games_used}/{shield.max_uses} used)"
        label = "CRITICAL" if shield.warning else "Active"
        line = f"Demotion shield {label}: {shield.games_used}/{shield.max_uses} shield games used"
        if shield.warning:
            line += " - demotion imminent!"
        return line

    def format_symmetry(self, check: SymmetryCheck) -> str:
        """Format a SymmetryCheck as text."""

        def fmt(value: int | None) -> str:
            return "n/a" if value is None else f"{value:+d}"

        lines = [
            f"Observed:  win {check.avg_win_rp:+d}  loss {check.avg_loss_rp:+d}",
            f"Predicted: win {fmt(check.predicted_win_from_loss)}  "
            f"loss {fmt(check.predicted_loss_from_win)}",
        ]
        for warning in check.warnings:
            lines.append(f"  ! {warning}")
        return "\n".join(lines)

    def format_report(self, report: PlayerReport) -> str:
        """Format a PlayerReport as text."""
        return "\n".join(
            [
                f"{_display(report.rank)} - {report.rp} RP",
                "",
                self.format_estimate(report.estimate),
                "",
                self.format_shield(report.shield),
            ]
        )

    def format_simulation(self, summary: SimulationSummary, show_trace: bool = False) -> str:
        """Format a SimulationSummary as text.

        Args:
            summary: The simulation result to format.
            show_trace: Include one line per simulated game.
        """
        lines = [
            "Progression Forecast",
            f"{'=' * 50}",
            f"Games:    {summary.games_played}  ({summary.wins}W/{summary.losses}L)",
            f"Start:    {_display(summary.starting_rank)} {summary.starting_rp} RP"
            f"  rating {summary.starting_rating:.0f}",
            f"Finish:   {_display(summary.final_rank)} {summary.final_rp} RP"
            f"  rating {summary.final_rating:.0f}",
            f"Changes:  +{summary.promotion_count} promotions, -{summary.demotion_count} demotions",
        ]

        if show_trace and summary.trace:
            lines.append("")
            lines.append(f"  {'#':<5} {'Result':<7} {'RP':>5} {'RP after':>9} {'Rank':<14} {'Rating':>7}")
            lines.append(f"  {'-' * 52}")
            for game in summary.trace:
                marker = " ^" if game.promoted else (" v" if game.demoted else "")
                lines.append(
                    f"  {game.game_index:<5} {game.outcome.value:<7} {game.rp_delta:>+5d} "
                    f"{game.rp_after:>9} {_display(game.rank_after):<14} "
                    f"{game.rating_after:>7.0f}{marker}"
                )

        return "\n".join(lines)

    def format_batch(self, batch: BatchSummary) -> str:
        """Format a BatchSummary as text."""
        lines = [
            "Monte-Carlo Forecast",
            f"{'=' * 50}",
            f"Runs: {batch.runs} x {batch.games_per_run} games",
            f"Promotion: {self._bar(batch.promotion_probability)} {batch.promotion_probability:.0%}",
            f"Demotion:  {self._bar(batch.demotion_probability)} {batch.demotion_probability:.0%}",
            f"Mean final rating: {batch.mean_final_rating:.0f}",
        ]
        if batch.rating_percentiles:
            lines.append(
                "Rating p10/p50/p90: "
                + " / ".join(f"{batch.rating_percentiles[k]:.0f}" for k in ("p10", "p50", "p90"))
            )
        if batch.final_rank_distribution:
            lines.append("")
            lines.append("Final ranks:")
            for name, share in batch.final_rank_distribution.items():
                lines.append(f"  {_display(name):<14} {self._bar(share, 20)} {share:.0%}")
        return "\n".join(lines)


def print_results(
    result: RatingEstimate | ShieldStatus | SymmetryCheck | PlayerReport | SimulationSummary | BatchSummary,
) -> None:
    """Convenience function to print formatted results.

    Automatically detects the result type and prints the appropriate format.
    """
    reporter = TextReporter()

    if isinstance(result, RatingEstimate):
        print(reporter.format_estimate(result))
    elif isinstance(result, ShieldStatus):
        print(reporter.format_shield(result))
    elif isinstance(result, SymmetryCheck):
        print(reporter.format_symmetry(result))
    elif isinstance(result, PlayerReport):
        print(reporter.format_report(result))
    elif isinstance(result, SimulationSummary):
        print(reporter.format_simulation(result))
    elif isinstance(result, BatchSummary):
        print(reporter.format_batch(result))
    else:
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
