"""
Finnhub real-time ingestor: quote, analyst recommendations, company profile.

All three are optional inputs. Scoring never waits on them being present: a
missing API key, a failed request or an empty payload all come back as None.
The snapshot fetches the three endpoints concurrently and a failure in one
does not discard the others.
"""
import asyncio
from typing import Optional

import requests
from pydantic import ValidationError

from common.logger import get_logger
from common.models import AnalystConsensus, CompanyProfile, MarketSnapshot, Quote
from config.settings import FINNHUB_API_KEY, FINNHUB_BASE_URL, HTTP_TIMEOUT
from ingest.base import FetchFailure


class FinnhubIngestor:
    def __init__(self, api_key: Optional[str] = None,
                 base_url: str = FINNHUB_BASE_URL, timeout: float = HTTP_TIMEOUT):
        self.api_key = FINNHUB_API_KEY if api_key is None else api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.logger = get_logger(self.__class__.__name__)

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def _get(self, path: str, ticker: str):
        try:
            resp = requests.get(f"{self.base_url}{path}",
                                params={"symbol": ticker, "token": self.api_key},
                                timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise FetchFailure(f"{path}: {e}") from e

    def fetch_quote(self, ticker: str) -> Optional[Quote]:
        if not self.enabled:
            return None
        try:
            data = self._get("/quote", ticker)
            if not isinstance(data, dict) or not data.get("c") or data["c"] <= 0:
                return None
            return Quote.model_validate(data)
        except (FetchFailure, ValidationError) as e:
            self.logger.warning(f"Finnhub quote failed for {ticker}: {e}")
            return None

    def fetch_consensus(self, ticker: str) -> Optional[AnalystConsensus]:
        """Most recent month of /stock/recommendation (Finnhub lists newest first)."""
        if not self.enabled:
            return None
        try:
            recs = self._get("/stock/recommendation", ticker)
            if not isinstance(recs, list) or not recs:
                return None
            return AnalystConsensus.model_validate(recs[0])
        except (FetchFailure, ValidationError) as e:
            self.logger.warning(f"Finnhub recommendations failed for {ticker}: {e}")
            return None

    def fetch_profile(self, ticker: str) -> Optional[CompanyProfile]:
        if not self.enabled:
            return None
        try:
            data = self._get("/stock/profile2", ticker)
            if not isinstance(data, dict) or not data.get("name"):
                return None
            return CompanyProfile.model_validate(data)
        except (FetchFailure, ValidationError) as e:
            self.logger.warning(f"Finnhub profile failed for {ticker}: {e}")
            return None

    async def fetch_snapshot(self, ticker: str) -> MarketSnapshot:
        ticker = ticker.upper()
        if not self.enabled:
            return MarketSnapshot()
        results = await asyncio.gather(
            asyncio.to_thread(self.fetch_quote, ticker),
            asyncio.to_thread(self.fetch_consensus, ticker),
            asyncio.to_thread(self.fetch_profile, ticker),
            return_exceptions=True,
        )
        quote, consensus, profile = [self._isolate(ticker, r) for r in results]
        return MarketSnapshot(quote=quote, consensus=consensus, profile=profile)

    def _isolate(self, ticker: str, result):
        if isinstance(result, Exception):
            self.logger.warning(f"Finnhub sub-fetch error for {ticker}: {result}")
            return None
        return result
