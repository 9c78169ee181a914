"""Configuration loader."""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(Path(__file__).parent.parent / ".env")

FINNHUB_API_KEY = os.getenv("FINNHUB_API_KEY", "")
FINNHUB_BASE_URL = os.getenv("FINNHUB_BASE_URL", "https://finnhub.io/api/v1")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_TICKER = os.getenv("DEFAULT_TICKER", "NFLX").strip().upper() or "NFLX"
HISTORY_PERIOD = os.getenv("HISTORY_PERIOD", "2y")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

DEFAULT_WEIGHTS = {
    "trend": 0.4,
    "mean_rev": 0.4,
    "sentiment": 0.2,
}
