"""Tests for scoring modules."""
import math
from datetime import date

import pytest

from common.models import AnalystConsensus, IndicatorPoint, Verdict, Weights
from scoring.aggregator import build_explanation, score, total_score, verdict_from_score
from scoring.base import is_above
from scoring.mean_reversion import MeanReversionScorer
from scoring.sentiment import SentimentScorer, consensus_raw_score
from scoring.sizing import (
    annualized_volatility, daily_return, size_position, stop_loss_level,
    volatility_target_size,
)
from scoring.trend import TrendScorer


def pt(price=100.0, sma50=None, sma200=None, z=0.0, day=2):
    return IndicatorPoint(date=date(2026, 1, day), price=price, volume=0,
                          sma50=sma50, sma200=sma200, z_score=z)


class TestAbsentPolicy:
    def test_absent_level_is_not_above(self):
        assert is_above(100.0, None) is False

    def test_plain_comparison(self):
        assert is_above(101.0, 100.0)
        assert not is_above(100.0, 100.0)


class TestTrendScorer:
    def setup_method(self):
        self.scorer = TrendScorer()

    def test_above_sma200(self):
        assert self.scorer.score(pt(price=110, sma200=100)) == 1

    def test_below_sma200(self):
        assert self.scorer.score(pt(price=90, sma200=100)) == -1

    def test_absent_sma200_is_bearish(self):
        assert self.scorer.score(pt(price=110, sma200=None)) == -1

    def test_description(self):
        assert "above" in self.scorer.describe(1)
        assert "bearish" in self.scorer.describe(-1)


class TestMeanReversionScorer:
    def setup_method(self):
        self.scorer = MeanReversionScorer()

    @pytest.mark.parametrize("z, expected", [(-2.5, 1), (2.5, -1), (0.0, 0), (2.0, 0), (-2.0, 0)])
    def test_thresholds(self, z, expected):
        assert self.scorer.score(pt(z=z)) == expected

    def test_description(self):
        assert "Oversold" in self.scorer.describe(1)
        assert "Overbought" in self.scorer.describe(-1)


class TestSentimentScorer:
    def setup_method(self):
        self.scorer = SentimentScorer()

    def test_no_consensus_uses_sma50(self):
        assert self.scorer.score(pt(price=105, sma50=100)) == 1
        assert self.scorer.score(pt(price=95, sma50=100)) == -1

    def test_no_consensus_absent_sma50_is_bearish(self):
        assert self.scorer.score(pt(price=105, sma50=None)) == -1

    def test_zero_analysts_falls_back(self):
        empty = AnalystConsensus()
        assert self.scorer.score(pt(price=105, sma50=100), consensus=empty) == 1
        assert "Falling back" in self.scorer.describe(1, consensus=empty)

    def test_bullish_consensus_clamped(self):
        c = AnalystConsensus(strong_buy=10)
        assert consensus_raw_score(c) == 2.0
        assert self.scorer.score(pt(price=90, sma50=100), consensus=c) == 1

    def test_bearish_consensus(self):
        c = AnalystConsensus(sell=5, strong_sell=5, hold=2)
        assert self.scorer.score(pt(price=110, sma50=100), consensus=c) == -1

    def test_threshold_is_exclusive(self):
        c = AnalystConsensus(buy=3, hold=7)
        assert consensus_raw_score(c) == pytest.approx(0.3)
        assert self.scorer.score(pt(), consensus=c) == 0

    def test_hold_heavy_is_neutral(self):
        c = AnalystConsensus(buy=2, hold=20, sell=2)
        assert self.scorer.score(pt(price=200, sma50=100), consensus=c) == 0

    def test_accepts_finnhub_keys(self):
        c = AnalystConsensus.model_validate(
            {"strongBuy": 3, "buy": 4, "hold": 2, "sell": 1, "strongSell": 0, "symbol": "AAPL"})
        assert c.strong_buy == 3
        assert c.total == 10

    def test_description_counts(self):
        c = AnalystConsensus(strong_buy=2, buy=3, hold=4, sell=1, strong_sell=1)
        text = self.scorer.describe(1, consensus=c)
        assert text.startswith("11 analysts: 5 Buy, 4 Hold, 2 Sell.")


class TestAggregator:
    def test_verdict_boundaries(self):
        assert verdict_from_score(0.21) == Verdict.BUY
        assert verdict_from_score(0.20) == Verdict.NEUTRAL
        assert verdict_from_score(-0.20) == Verdict.NEUTRAL
        assert verdict_from_score(-0.21) == Verdict.SELL

    def test_weights_not_normalized(self):
        scores = {"trend": 1, "mean_rev": 1, "sentiment": 1}
        assert total_score(scores, Weights(trend=1, mean_rev=1, sentiment=1)) == 3.0
        assert total_score(scores, Weights(trend=0, mean_rev=0, sentiment=0)) == 0.0

    def test_all_bullish(self):
        current = pt(price=110, sma50=100, sma200=100, z=-2.5)
        previous = pt(price=110, sma50=100, sma200=100, day=1)
        result = score(current, previous, None, Weights())
        assert (result.trend_score, result.rev_score, result.sentiment_score) == (1, 1, 1)
        assert result.total_score == pytest.approx(1.0)
        assert result.verdict == Verdict.BUY
        # zero return -> volatility floor -> capped at 25%
        assert result.position_size == pytest.approx(25.0)
        assert result.stop_loss == pytest.approx(101.2)

    def test_neutral_has_no_position(self):
        current = pt(price=110, sma50=120, sma200=100, z=0.0)
        previous = pt(price=100, day=1)
        result = score(current, previous, None, Weights(trend=0.4, mean_rev=0.4, sentiment=0.2))
        assert result.total_score == pytest.approx(0.2)
        assert result.verdict == Verdict.NEUTRAL
        assert result.position_size == 0.0

    def test_sell(self):
        current = pt(price=90, sma50=100, sma200=100, z=2.5)
        previous = pt(price=100, day=1)
        result = score(current, previous, AnalystConsensus(strong_sell=4), Weights())
        assert result.total_score == pytest.approx(-1.0)
        assert result.verdict == Verdict.SELL
        assert 0 < result.position_size <= 25

    def test_explanation_mentions_all_factors(self):
        result = score(pt(), pt(day=1))
        assert set(result.descriptions) == {"trend", "mean_rev", "sentiment"}
        assert "Trend:" in result.explanation
        assert "Mean Reversion:" in result.explanation
        assert build_explanation({"trend": "x"}) == "Trend: x"

    def test_contributions_and_conviction(self):
        current = pt(price=110, sma50=120, sma200=100, z=-2.5)
        result = score(current, pt(price=110, day=1), None,
                       Weights(trend=0.5, mean_rev=0.3, sentiment=0.2))
        assert result.contributions == pytest.approx(
            {"trend": 0.5, "mean_rev": 0.3, "sentiment": -0.2})
        assert sum(result.contributions.values()) == pytest.approx(result.total_score)
        assert result.conviction == pytest.approx(60.0)

    def test_conviction_of_bearish_score(self):
        result = score(pt(price=90, sma50=100, sma200=100, z=2.5), pt(price=90, day=1))
        assert result.total_score == pytest.approx(-1.0)
        assert result.conviction == pytest.approx(100.0)

    @pytest.mark.parametrize("z, expected", [
        (-2.5, "High (Reversal)"), (2.01, "High (Reversal)"),
        (2.0, "Moderate (Trend)"), (0.0, "Moderate (Trend)"), (-1.9, "Moderate (Trend)"),
    ])
    def test_risk_level(self, z, expected):
        assert score(pt(z=z), pt(day=1)).risk_level == expected


class TestSizing:
    def test_formula(self):
        # 0.15 / 0.3 * 0.5 = 0.25 -> 2.5%
        assert volatility_target_size(0.3, 0.5) == pytest.approx(2.5)

    def test_volatility_floor_and_cap(self):
        assert volatility_target_size(0.0, 1.0) == pytest.approx(25.0)
        assert volatility_target_size(0.005, 0.1) == pytest.approx(15.0)

    def test_negative_score_uses_magnitude(self):
        assert volatility_target_size(0.3, -0.5) == pytest.approx(2.5)

    def test_realized_volatility(self):
        current, previous = pt(price=101), pt(price=100, day=1)
        assert daily_return(current, previous) == pytest.approx(0.01)
        assert annualized_volatility(current, previous) == pytest.approx(0.01 * math.sqrt(252))
        expected = 0.15 / (0.01 * math.sqrt(252)) * 0.8 * 10
        assert size_position(current, previous, 0.8) == pytest.approx(expected)

    def test_below_threshold_reports_zero(self):
        current, previous = pt(price=101), pt(price=100, day=1)
        assert size_position(current, previous, 0.2) == 0.0
        assert size_position(current, previous, -0.15) == 0.0

    def test_zero_previous_price_guard(self):
        current = pt(price=100)
        # bypasses validation: a zero price never comes from the ingestors
        previous = IndicatorPoint.model_construct(date=date(2026, 1, 1), price=0.0, volume=0)
        size = size_position(current, previous, 1.0)
        assert math.isfinite(size)
        assert 0 <= size <= 25

    def test_stop_loss(self):
        assert stop_loss_level(100.0) == pytest.approx(92.0)
