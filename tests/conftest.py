"""Pytest configuration."""
import sys
from pathlib import Path

import pytest

# Ensure project root is importable regardless of where pytest is invoked
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture(autouse=True)
def no_finnhub_key(monkeypatch):
    """A FINNHUB_API_KEY from a local .env must never reach the network in tests."""
    import ingest.finnhub
    monkeypatch.setattr(ingest.finnhub, "FINNHUB_API_KEY", "")
