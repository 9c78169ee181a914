"""
Indicator engine: SMA50, SMA200, RSI14, Bollinger(20, 2) and Z-score.

Everything is computed over the full input, then cut to the last
DISPLAY_WINDOW points, so windowed indicators are already valid on the first
visible point. Absent values (window not yet filled) are None.

RSI note: indices 1..14 accumulate a cumulative bootstrap that only produces
a value at index 14 (1..13 stay at the neutral 50); later indices use a plain
trailing window of the last 14 prices. This is not Wilder smoothing and the
two phases are not continuous. Kept as is for output parity with the
charts users already know.
"""
import math
from typing import Sequence

import numpy as np
import pandas as pd

from common.models import IndicatorPoint, PricePoint

DISPLAY_WINDOW = 200
SMA_FAST = 50
SMA_SLOW = 200
RSI_PERIOD = 14
RSI_NEUTRAL = 50.0
BB_PERIOD = 20
BB_STD = 2.0


def to_frame(series: Sequence[PricePoint]) -> pd.DataFrame:
    return pd.DataFrame(
        {"price": [p.price for p in series], "volume": [p.volume for p in series]},
        index=pd.Index([p.date for p in series], name="date"),
    )


def rsi_series(prices: Sequence[float], period: int = RSI_PERIOD) -> list[float]:
    prices = list(prices)
    out = []
    gains = losses = 0.0
    for i, price in enumerate(prices):
        rsi = RSI_NEUTRAL
        if i > 0:
            change = price - prices[i - 1]
            if i <= period:
                if change > 0:
                    gains += change
                else:
                    losses -= change
                if i == period:
                    avg_gain = gains / period
                    avg_loss = losses / period
                    rsi = 100 - 100 / (1 + avg_gain / (avg_loss or 1))
            else:
                window = prices[i - period + 1:i + 1]
                g = l = 0.0
                for prev, cur in zip(window, window[1:]):
                    d = cur - prev
                    if d > 0:
                        g += d
                    else:
                        l -= d
                rsi = 100 - 100 / (1 + (g / period) / ((l / period) or 1))
        out.append(rsi)
    return out


def _population_std(window: np.ndarray) -> float:
    return float(np.sqrt(np.mean((window - window.mean()) ** 2)))


def compute_indicator_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Annotate a frame with a `price` column. Absent indicators are NaN."""
    out = df.copy()
    price = out["price"].astype(float)

    out["sma50"] = price.rolling(SMA_FAST).mean()
    out["sma200"] = price.rolling(SMA_SLOW).mean()
    out["rsi"] = rsi_series(price.tolist())

    # explicit windows: an all-equal window must give exactly mean == price, std == 0
    mean = price.rolling(BB_PERIOD).apply(np.mean, raw=True)
    std = price.rolling(BB_PERIOD).apply(_population_std, raw=True)
    out["bb_upper"] = mean + BB_STD * std
    out["bb_lower"] = mean - BB_STD * std
    divisor = std.where(std != 0, 1.0)
    out["z_score"] = ((price - mean) / divisor).fillna(0.0)
    return out


def _opt(value) -> float | None:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return None
    return float(value)


def compute_indicators(series: Sequence[PricePoint]) -> list[IndicatorPoint]:
    """One IndicatorPoint per input point, truncated to the last DISPLAY_WINDOW."""
    if not series:
        return []
    frame = compute_indicator_frame(to_frame(series))
    points = []
    for point, row in zip(series, frame.itertuples(index=False)):
        points.append(IndicatorPoint(
            date=point.date,
            price=point.price,
            volume=point.volume,
            sma50=_opt(row.sma50),
            sma200=_opt(row.sma200),
            rsi=float(row.rsi),
            bb_upper=_opt(row.bb_upper),
            bb_lower=_opt(row.bb_lower),
            z_score=float(row.z_score),
        ))
    return points[-DISPLAY_WINDOW:]
