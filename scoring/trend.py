"""Trend scorer: price vs the 200-day average."""
from common.models import IndicatorPoint
from scoring.base import BaseScorer, is_above


class TrendScorer(BaseScorer):
    name = "trend"

    def score(self, current: IndicatorPoint, **kwargs) -> int:
        # no SMA200 yet counts as "not above"
        return 1 if is_above(current.price, current.sma200) else -1

    def describe(self, score: int, **kwargs) -> str:
        if score == 1:
            return "Price is trading above the long-term 200-day average. Uptrend intact."
        return "Price is below the 200-day average. Primary trend is bearish."
