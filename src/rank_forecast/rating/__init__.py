"""Rating module for Rank Forecast.

Components:
    - RatingEstimator: Hidden rating and confidence from rank, RP and history
    - RPChangePredictor: Expected RP changes, opponent inference, symmetry
    - ShieldStatusTracker: Demotion shield status at the rank floor

Example:
    ```python
    from rank_forecast.rating import RatingEstimator, RPChangePredictor

    estimate = RatingEstimator().estimate("GOLD_1", 30, matches)
    RPChangePredictor.predict_counter_delta(18, Outcome.WIN, estimate.state.rating)
    ```
"""

from .estimator import RatingEstimator
from .predictor import RPChangePredictor
from .shield import ShieldStatusTracker

__all__ = [
    "RatingEstimator",
    "RPChangePredictor",
    "ShieldStatusTracker",
]
