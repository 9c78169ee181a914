"""
Sentiment Scorer.

Primary source is the analyst consensus (Finnhub recommendation trends):

  raw = (2*strongBuy + buy - sell - 2*strongSell) / totalAnalysts

clamped to [-1, +1]; above +0.3 is bullish, below -0.3 bearish, neutral in
between.

Without consensus (no API key, failed fetch, or zero analysts) the score
falls back to a price proxy: price above SMA50 is bullish, otherwise bearish.
An absent SMA50 counts as "not above", the same policy as the trend factor.
"""
from typing import Optional

import numpy as np

from common.models import AnalystConsensus, IndicatorPoint
from scoring.base import BaseScorer, is_above

CONSENSUS_THRESHOLD = 0.3


def consensus_raw_score(consensus: AnalystConsensus) -> Optional[float]:
    """Weighted analyst score in [-2, 2], or None when nobody covers the stock."""
    total = consensus.total
    if total <= 0:
        return None
    return (2 * consensus.strong_buy + consensus.buy
            - consensus.sell - 2 * consensus.strong_sell) / total


class SentimentScorer(BaseScorer):
    name = "sentiment"

    def score(self, current: IndicatorPoint,
              consensus: Optional[AnalystConsensus] = None, **kwargs) -> int:
        raw = consensus_raw_score(consensus) if consensus is not None else None
        if raw is None:
            return 1 if is_above(current.price, current.sma50) else -1

        normalized = float(np.clip(raw, -1, 1))
        if normalized > CONSENSUS_THRESHOLD:
            return 1
        if normalized < -CONSENSUS_THRESHOLD:
            return -1
        return 0

    def describe(self, score: int,
                 consensus: Optional[AnalystConsensus] = None, **kwargs) -> str:
        raw = consensus_raw_score(consensus) if consensus is not None else None
        if raw is not None:
            c = consensus
            return (f"{c.total} analysts: {c.strong_buy + c.buy} Buy, {c.hold} Hold, "
                    f"{c.sell + c.strong_sell} Sell. Consensus score: {raw:.2f}.")
        if consensus is not None:
            return "No analyst data. Falling back to price vs SMA50."
        if score == 1:
            return "No analyst data available. Price above SMA50 used as proxy."
        return "No analyst data available. Price below SMA50 used as proxy."
