"""
Alpha Engine: factor aggregator.

Combines three factor scores, each in {-1, 0, +1}, into a weighted total:

  Trend           price vs SMA200
  Mean Reversion  Bollinger Z-score beyond ±2
  Sentiment       analyst consensus, fallback price vs SMA50

  totalScore = trend*w.trend + meanRev*w.mean_rev + sentiment*w.sentiment

Weights are used as given (no normalization). The verdict is BUY above
+0.2, SELL below -0.2, NEUTRAL otherwise. Scoring is a pure function of the
latest two indicator points, the weights and the optional consensus.
"""
from typing import Optional

from common.logger import get_logger
from common.models import AnalystConsensus, IndicatorPoint, ScoreResult, Verdict, Weights
from scoring.base import VERDICT_THRESHOLD
from scoring.mean_reversion import Z_THRESHOLD, MeanReversionScorer
from scoring.sentiment import SentimentScorer
from scoring.sizing import size_position, stop_loss_level
from scoring.trend import TrendScorer

logger = get_logger("aggregator")

FACTOR_LABELS = {
    "trend":     "Trend",
    "mean_rev":  "Mean Reversion",
    "sentiment": "Sentiment",
}

RISK_HIGH = "High (Reversal)"
RISK_MODERATE = "Moderate (Trend)"


def verdict_from_score(score: float) -> Verdict:
    if score > VERDICT_THRESHOLD:
        return Verdict.BUY
    if score < -VERDICT_THRESHOLD:
        return Verdict.SELL
    return Verdict.NEUTRAL


def contributions(factor_scores: dict[str, int], weights: Weights) -> dict[str, float]:
    """Each factor score times its weight."""
    return {
        "trend":     factor_scores["trend"] * weights.trend,
        "mean_rev":  factor_scores["mean_rev"] * weights.mean_rev,
        "sentiment": factor_scores["sentiment"] * weights.sentiment,
    }


def total_score(factor_scores: dict[str, int], weights: Weights) -> float:
    parts = contributions(factor_scores, weights)
    return parts["trend"] + parts["mean_rev"] + parts["sentiment"]


def conviction(total: float) -> float:
    """|total score| as a percentage."""
    return abs(total * 100)


def risk_level(current: IndicatorPoint) -> str:
    # outside the Bollinger bands the setup is a reversal bet
    if abs(current.z_score) > Z_THRESHOLD:
        return RISK_HIGH
    return RISK_MODERATE


def build_explanation(descriptions: dict[str, str]) -> str:
    return " | ".join(f"{FACTOR_LABELS.get(k, k)}: {v}" for k, v in descriptions.items())


def score(current: IndicatorPoint, previous: IndicatorPoint,
          consensus: Optional[AnalystConsensus] = None,
          weights: Optional[Weights] = None) -> ScoreResult:
    """Score the latest point against the one before it."""
    weights = weights or Weights()
    scorers = [TrendScorer(), MeanReversionScorer(), SentimentScorer()]

    factor_scores = {}
    descriptions = {}
    for scorer in scorers:
        value = scorer.score(current, consensus=consensus)
        factor_scores[scorer.name] = value
        descriptions[scorer.name] = scorer.describe(value, consensus=consensus)

    total = total_score(factor_scores, weights)
    verdict = verdict_from_score(total)
    position = size_position(current, previous, total)

    logger.info(f"scores: {', '.join(f'{k}={v:+d}' for k, v in factor_scores.items())}")
    logger.info(f"total={total:.2f} -> {verdict.value}, position={position:.1f}%")

    return ScoreResult(
        trend_score=factor_scores["trend"],
        rev_score=factor_scores["mean_rev"],
        sentiment_score=factor_scores["sentiment"],
        total_score=total,
        position_size=position,
        verdict=verdict,
        conviction=conviction(total),
        risk_level=risk_level(current),
        contributions=contributions(factor_scores, weights),
        stop_loss=stop_loss_level(current.price),
        descriptions=descriptions,
        explanation=build_explanation(descriptions),
    )
