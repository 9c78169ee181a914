"""
Alpha Engine: entry point.
Prints the three-factor verdict and position size for each ticker.
Run: python run.py [TICKER ...]
"""
import asyncio
import sys

from common.logger import get_logger, new_request_id
from config.settings import DEFAULT_TICKER, DEFAULT_WEIGHTS
from common.models import Weights
from scoring.engine import analyze_ticker

logger = get_logger("run")

VERDICT_MARK = {"BUY": "🟢", "NEUTRAL": "🟡", "SELL": "🔴"}


async def main(tickers: list[str]):
    new_request_id()
    weights = Weights(**DEFAULT_WEIGHTS)

    print("\n" + "=" * 84)
    print("  ALPHA ENGINE  —  Trend / Mean Reversion / Sentiment")
    print("=" * 84)
    hdr = f"{'Ticker':<8} {'Price':>10} {'Trend':>6} {'MRev':>6} {'Sntmt':>6} {'Total':>7} {'Size':>7} {'Stop':>10}  Signal     Data"
    print(hdr)
    print("-" * 84)

    for ticker in tickers:
        try:
            report = await analyze_ticker(ticker, weights)
            r = report.result
            print(
                f"{report.ticker:<8}"
                f" {report.latest.price:>10.2f}"
                f" {r.trend_score:>+6d}"
                f" {r.rev_score:>+6d}"
                f" {r.sentiment_score:>+6d}"
                f" {r.total_score:>+7.2f}"
                f" {r.position_size:>6.1f}%"
                f" {r.stop_loss:>10.2f}"
                f"  {VERDICT_MARK[r.verdict.value]} {r.verdict.value:<8}"
                f" {report.source}"
            )
        except Exception as e:
            logger.error(f"{ticker}: {e}")
            print(f"{ticker:<8} {'ERROR':>60}  ❌ {e}")

    print("=" * 84)
    print("  Weights: " + " | ".join(f"{k}: {v:.0%}" for k, v in DEFAULT_WEIGHTS.items()))
    print("  Verdict: BUY > +0.20 | SELL < -0.20 | position sized to a 15% volatility target")
    print("=" * 84 + "\n")


if __name__ == "__main__":
    asyncio.run(main([t.upper() for t in sys.argv[1:]] or [DEFAULT_TICKER]))
