"""Mean-reversion scorer: Bollinger Z-score extremes."""
from common.models import IndicatorPoint
from scoring.base import BaseScorer

Z_THRESHOLD = 2.0


class MeanReversionScorer(BaseScorer):
    name = "mean_rev"

    def score(self, current: IndicatorPoint, **kwargs) -> int:
        if current.z_score < -Z_THRESHOLD:
            return 1    # oversold
        if current.z_score > Z_THRESHOLD:
            return -1   # overbought
        return 0

    def describe(self, score: int, **kwargs) -> str:
        if score == 1:
            return "Statistical extension to downside (Oversold). Snap-back likely."
        if score == -1:
            return "Statistical extension to upside (Overbought). Pullback likely."
        return "Price is within normal statistical bands. No edge."
