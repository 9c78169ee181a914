"""
Volatility-target position sizing.

Exposure is scaled inversely to realized annualized volatility (one-day
return, annualized) and linearly to conviction |totalScore|. Loosely
"Kelly-style"; not the Kelly criterion.
"""
import math

from common.models import PricePoint
from scoring.base import VERDICT_THRESHOLD

TARGET_VOLATILITY = 0.15
VOLATILITY_FLOOR = 0.01
MAX_RAW_SIZE = 2.5
DISPLAY_SCALE = 10
TRADING_DAYS = 252
STOP_LOSS_PCT = 0.08


def daily_return(current: PricePoint, previous: PricePoint) -> float:
    return (current.price - previous.price) / (previous.price or 1)


def annualized_volatility(current: PricePoint, previous: PricePoint) -> float:
    return abs(daily_return(current, previous) * math.sqrt(TRADING_DAYS))


def volatility_target_size(annualized_vol: float, total_score: float) -> float:
    """Position size in percent, 0..MAX_RAW_SIZE * DISPLAY_SCALE."""
    raw = (TARGET_VOLATILITY / max(annualized_vol, VOLATILITY_FLOOR)) * abs(total_score)
    return min(raw, MAX_RAW_SIZE) * DISPLAY_SCALE


def size_position(current: PricePoint, previous: PricePoint, total_score: float) -> float:
    """Recommended position in percent; 0 unless the score clears the verdict threshold."""
    if abs(total_score) <= VERDICT_THRESHOLD:
        return 0.0
    return volatility_target_size(annualized_volatility(current, previous), total_score)


def stop_loss_level(price: float) -> float:
    return price * (1 - STOP_LOSS_PCT)
