"""Core Pydantic models for the Alpha Engine."""
import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    date: datetime.date
    price: float = Field(gt=0)
    volume: int = Field(0, ge=0)


class IndicatorPoint(PricePoint):
    sma50: Optional[float] = None
    sma200: Optional[float] = None
    rsi: float = 50.0
    bb_upper: Optional[float] = None
    bb_lower: Optional[float] = None
    z_score: float = 0.0


class Weights(BaseModel):
    """Factor weights. Not normalized: the total scales with whatever is given."""
    trend: float = 0.4
    mean_rev: float = 0.4
    sentiment: float = 0.2


class AnalystConsensus(BaseModel):
    """One month of analyst recommendations (Finnhub /stock/recommendation)."""
    model_config = ConfigDict(populate_by_name=True)

    strong_buy: int = Field(0, alias="strongBuy", ge=0)
    buy: int = Field(0, ge=0)
    hold: int = Field(0, ge=0)
    sell: int = Field(0, ge=0)
    strong_sell: int = Field(0, alias="strongSell", ge=0)
    period: Optional[str] = None

    @property
    def total(self) -> int:
        return self.strong_buy + self.buy + self.hold + self.sell + self.strong_sell


class Verdict(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class ScoreResult(BaseModel):
    trend_score: int
    rev_score: int
    sentiment_score: int
    total_score: float
    position_size: float       # % of portfolio, 0..25
    verdict: Verdict
    conviction: float = 0.0    # |total_score| * 100, in %
    risk_level: str = ""
    contributions: dict[str, float] = {}   # factor score * weight
    stop_loss: Optional[float] = None
    descriptions: dict[str, str] = {}
    explanation: str = ""


class Quote(BaseModel):
    """Finnhub /quote payload: c=current, d=change, dp=change %, pc=previous close."""
    c: float
    d: Optional[float] = None
    dp: Optional[float] = None
    h: Optional[float] = None
    l: Optional[float] = None
    o: Optional[float] = None
    pc: Optional[float] = None


class CompanyProfile(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    ticker: Optional[str] = None
    logo: Optional[str] = None
    exchange: Optional[str] = None
    currency: Optional[str] = None
    finnhub_industry: Optional[str] = Field(None, alias="finnhubIndustry")


class MarketSnapshot(BaseModel):
    quote: Optional[Quote] = None
    consensus: Optional[AnalystConsensus] = None
    profile: Optional[CompanyProfile] = None


class PriceHistory(BaseModel):
    ticker: str
    points: list[PricePoint]
    source: str  # "yahoo" | "simulated"

    @property
    def simulated(self) -> bool:
        return self.source == "simulated"


class AnalysisReport(BaseModel):
    ticker: str
    source: str
    timestamp: datetime.datetime
    weights: Weights
    result: ScoreResult
    snapshot: MarketSnapshot = MarketSnapshot()
    series: list[IndicatorPoint] = []

    @property
    def latest(self) -> Optional[IndicatorPoint]:
        return self.series[-1] if self.series else None
