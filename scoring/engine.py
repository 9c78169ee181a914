"""
Analysis pipeline: ticker → history → indicators → scores → report.

The historical and real-time pipelines run concurrently; scoring only needs
the history; the real-time snapshot is optional.
"""
import asyncio
from datetime import datetime, timezone
from typing import Optional

from common.logger import get_logger
from common.models import AnalysisReport, MarketSnapshot, PriceHistory, Weights
from ingest.finnhub import FinnhubIngestor
from ingest.synthetic import build_synthetic_series
from ingest.yahoo_finance import YahooFinanceIngestor
from scoring.aggregator import score
from scoring.indicators import compute_indicators

logger = get_logger("engine")


def analyze_series(ticker: str, history: PriceHistory,
                   snapshot: Optional[MarketSnapshot] = None,
                   weights: Optional[Weights] = None) -> AnalysisReport:
    ticker = ticker.upper()
    snapshot = snapshot or MarketSnapshot()
    weights = weights or Weights()

    if not history.points:
        logger.warning(f"Empty history for {ticker}. Using simulated data.")
        history = PriceHistory(ticker=ticker, points=build_synthetic_series(ticker),
                               source="simulated")

    if history.simulated:
        logger.warning(f"{ticker}: scoring simulated data, not market prices")

    series = compute_indicators(history.points)
    current = series[-1]
    # a one-point series has no prior day: zero return
    previous = series[-2] if len(series) > 1 else current

    logger.info(f"Scoring {ticker} ({history.source}, {len(series)} points)...")
    result = score(current, previous, snapshot.consensus, weights)

    return AnalysisReport(
        ticker=ticker,
        source=history.source,
        timestamp=datetime.now(timezone.utc),
        weights=weights,
        result=result,
        snapshot=snapshot,
        series=series,
    )


async def analyze_ticker(ticker: str, weights: Optional[Weights] = None,
                         history_ingestor: Optional[YahooFinanceIngestor] = None,
                         finnhub: Optional[FinnhubIngestor] = None) -> AnalysisReport:
    ticker = ticker.upper()
    history_ingestor = history_ingestor or YahooFinanceIngestor()
    finnhub = finnhub or FinnhubIngestor()

    history, snapshot = await asyncio.gather(
        asyncio.to_thread(history_ingestor.fetch, ticker),
        finnhub.fetch_snapshot(ticker),
    )
    report = analyze_series(ticker, history, snapshot, weights)
    logger.info(f"{ticker} total={report.result.total_score:.2f} → {report.result.verdict.value}")
    return report
