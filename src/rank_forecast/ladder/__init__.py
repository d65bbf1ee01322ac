"""Rank ladder lookups.

Components:
    - RankLadder: Ordered rank table with baseline ratings and tier scaling
"""

from .ladder import RankLadder

__all__ = [
    "RankLadder",
]
