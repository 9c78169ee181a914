"""Alpha Engine: FastAPI REST API."""
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, HTTPException, Path, Query
from fastapi.middleware.cors import CORSMiddleware

from common.logger import get_logger, new_request_id
from common.models import AnalysisReport, PricePoint, Weights
from config.settings import DEFAULT_WEIGHTS
from ingest.synthetic import build_synthetic_series
from ingest.yahoo_finance import YahooFinanceIngestor
from scoring.engine import analyze_ticker
from scoring.indicators import compute_indicators

logger = get_logger("api")

TICKER_PATTERN = r"^[A-Za-z0-9.\-=^]{1,15}$"

app = FastAPI(title="Alpha Engine API", version="0.1.0")

app.add_middleware(CORSMiddleware,
    allow_origins=["*"], allow_methods=["GET", "OPTIONS"], allow_headers=["*"], max_age=86400)

# ── API routes (on a shared router, mounted at both "/" and "/api") ───────────

router = APIRouter()


def _weight(name: str):
    return Query(DEFAULT_WEIGHTS[name], ge=0, le=1)


@router.get("/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/analyze/{ticker}", response_model=AnalysisReport)
async def analyze(ticker: str = Path(..., pattern=TICKER_PATTERN),
                  trend: float = _weight("trend"),
                  mean_rev: float = _weight("mean_rev"),
                  sentiment: float = _weight("sentiment")):
    new_request_id()
    weights = Weights(trend=trend, mean_rev=mean_rev, sentiment=sentiment)
    try:
        return await analyze_ticker(ticker.upper(), weights)
    except Exception as e:
        logger.error(f"Analysis failed for {ticker}: {e}")
        raise HTTPException(500, str(e))


@router.get("/indicators/{ticker}")
def get_indicators(ticker: str = Path(..., pattern=TICKER_PATTERN)):
    new_request_id()
    history = YahooFinanceIngestor().fetch(ticker.upper())
    return {"ticker": history.ticker, "source": history.source,
            "series": compute_indicators(history.points)}


@router.get("/synthetic/{ticker}", response_model=list[PricePoint])
def get_synthetic(ticker: str = Path(..., pattern=TICKER_PATTERN)):
    return build_synthetic_series(ticker.upper())


# Mount routes at root and at /api
app.include_router(router)
app.include_router(router, prefix="/api")
