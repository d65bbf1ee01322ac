"""Simulation module for Rank Forecast.

Components:
    - ProgressionSimulator: Game-by-game RP, rank and rating forecast
    - MonteCarloSimulator: Many seeded forecasts aggregated into odds
"""

from .batch import MonteCarloSimulator
from .progression import BoundaryResult, ProgressionSimulator

__all__ = [
    "BoundaryResult",
    "MonteCarloSimulator",
    "ProgressionSimulator",
]
