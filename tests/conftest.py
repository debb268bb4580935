"""Shared fixtures: throwaway SQLite database and trade record factory."""

import os
import tempfile
from types import SimpleNamespace

import pytest

# Must be set before tradejournal.config is imported anywhere
_DB_DIR = tempfile.mkdtemp(prefix="tradejournal-test-")
os.environ["TJ_DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["TJ_LOG_LEVEL"] = "DEBUG"

TRADE_DEFAULTS = {
    "id": None,
    "user_id": "user-1",
    "account_id": 1,
    "mode": "live",
    "trade_date": "2024-01-15",
    "trade_time": "10:00",
    "day_of_week": "Monday",
    "market": "EURUSD",
    "setup_type": None,
    "liquidity": None,
    "direction": "Long",
    "mss": None,
    "evaluation": None,
    "trend": None,
    "news_related": False,
    "news_name": None,
    "news_intensity": None,
    "local_high_low": None,
    "trade_outcome": "Win",
    "break_even": False,
    "be_final_result": None,
    "reentry": False,
    "partials_taken": False,
    "executed": True,
    "launch_hour": False,
    "risk_per_trade": None,
    "risk_reward_ratio": None,
    "sl_size": None,
    "displacement_size": None,
    "calculated_profit": None,
    "pnl_percentage": None,
}


@pytest.fixture
def make_trade():
    """Build a plain trade record; keyword arguments override the defaults."""

    def _make(**overrides):
        unknown = set(overrides) - set(TRADE_DEFAULTS)
        if unknown:
            raise AssertionError(f"unknown trade fields: {sorted(unknown)}")
        return SimpleNamespace(**{**TRADE_DEFAULTS, **overrides})

    return _make


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from tradejournal.main import app

    with TestClient(app) as test_client:
        yield test_client
