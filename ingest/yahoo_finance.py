"""Yahoo Finance daily history via yfinance, with synthetic fallback."""
import pandas as pd

from common.models import PriceHistory
from config.settings import HISTORY_PERIOD
from ingest.base import BaseIngestor, FetchFailure
from ingest.synthetic import build_synthetic_series


class YahooFinanceIngestor(BaseIngestor):
    source = "yahoo"

    def __init__(self, period: str = HISTORY_PERIOD):
        super().__init__()
        self.period = period

    def fetch(self, ticker: str) -> PriceHistory:
        ticker = ticker.upper()
        try:
            points = self._convert(self._download(ticker))
            if not points:
                raise FetchFailure("No closes in response")
            self.logger.info(f"Got {len(points)} rows for {ticker}")
            return PriceHistory(ticker=ticker, points=points, source=self.source)
        except FetchFailure as e:
            self.logger.warning(f"Yahoo Finance failed for {ticker}: {e}. Using simulated data.")
            return self._mock_data(ticker)

    def _download(self, ticker: str) -> pd.DataFrame:
        try:
            import yfinance as yf
            self.logger.info(f"Fetching {ticker} from Yahoo Finance...")
            df = yf.Ticker(ticker).history(period=self.period, interval="1d", auto_adjust=True)
        except Exception as e:
            raise FetchFailure(str(e)) from e
        if df is None or not self.validate(df):
            raise FetchFailure("Empty response")
        return df

    def _convert(self, df: pd.DataFrame):
        # malformed rows (non-numeric, inf volume, non-datetime index) count as a failed fetch
        try:
            return self.to_points(df)
        except (KeyError, ValueError, TypeError, OverflowError, AttributeError) as e:
            raise FetchFailure(f"Malformed response: {e}") from e

    def _mock_data(self, ticker: str) -> PriceHistory:
        return PriceHistory(ticker=ticker, points=build_synthetic_series(ticker), source="simulated")
