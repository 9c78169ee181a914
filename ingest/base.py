"""Base ingestor abstract class."""
from abc import ABC, abstractmethod
import numpy as np
import pandas as pd
from common.logger import get_logger
from common.models import PriceHistory, PricePoint


class FetchFailure(Exception):
    """Network error, non-success status or empty payload from a data provider."""


class BaseIngestor(ABC):
    source = "unknown"

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    @abstractmethod
    def fetch(self, ticker: str) -> PriceHistory:
        """Fetch daily history. Never raises: falls back to simulated data."""
        pass

    def validate(self, df: pd.DataFrame) -> bool:
        return not df.empty and "close" in {c.lower() for c in df.columns}

    def to_points(self, df: pd.DataFrame) -> list[PricePoint]:
        """
        Convert an OHLCV frame indexed by timestamp into PricePoints, one per
        calendar day, strictly ascending. A live intraday bar sharing a day with
        the settled bar replaces it (last row wins).
        """
        df = df.rename(columns=str.lower)
        df = df.assign(close=pd.to_numeric(df["close"], errors="coerce"))
        close = df["close"]
        df = df[np.isfinite(close) & (close > 0)].sort_index()
        df = df[~pd.DatetimeIndex(df.index).normalize().duplicated(keep="last")]
        if "volume" in df.columns:
            volume = pd.to_numeric(df["volume"], errors="coerce").fillna(0)
        else:
            volume = pd.Series(0, index=df.index)
        return [
            PricePoint(date=ts.date(), price=float(px), volume=max(int(vol), 0))
            for ts, px, vol in zip(df.index, df["close"], volume)
        ]
