"""Synthetic fallback price history: seeded random walk with drift.

Used whenever live history is unavailable. The output depends only on the
ticker (and the end date), so a given symbol always draws the same chart.
"""
from datetime import date, timedelta
from typing import Optional

from common.models import PricePoint
from ingest.seeded import seeded_random, seeded_stream, ticker_seed
from scoring.indicators import DISPLAY_WINDOW

SERIES_LENGTH = 2 * DISPLAY_WINDOW    # warm-up + visible
MIN_PRICE = 5.0
DAILY_VOLATILITY = 0.02
MAX_VOLUME = 1_000_000
VOLUME_SEED_OFFSET = 1000


def build_synthetic_series(ticker: str, end: Optional[date] = None) -> list[PricePoint]:
    """
    Build SERIES_LENGTH daily points ending at `end` (today by default).

    The first DISPLAY_WINDOW points are warm-up so that the 200-day SMA is
    already valid on the first visible point.
    """
    end = end or date.today()
    seed = ticker_seed(ticker)

    price = 100 + 50 * seeded_random(seed)
    drift = 0.2 * (seeded_random(seed + 1) - 0.5)

    steps = seeded_stream(seed)
    volumes = seeded_stream(seed, offset=VOLUME_SEED_OFFSET)
    points = []
    for i, step, vol_draw in zip(range(SERIES_LENGTH), steps, volumes):
        volatility = price * DAILY_VOLATILITY
        price += volatility * (step - 0.5) + drift
        price = max(price, MIN_PRICE)
        points.append(PricePoint(
            date=end - timedelta(days=SERIES_LENGTH - 1 - i),
            price=price,
            volume=int(vol_draw * MAX_VOLUME),
        ))
    return points
