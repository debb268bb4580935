"""Shared constants for trades, accounts and dashboard breakdowns."""

TRADING_MODES = ["live", "demo", "backtesting"]

AVAILABLE_CURRENCIES = ["USD", "EUR", "GBP", "JPY", "AUD", "CAD", "CHF", "CNY", "HKD", "NZD"]

TRADE_OUTCOMES = ["Win", "Lose"]
DIRECTIONS = ["Long", "Short"]
TREND_VALUES = ("Trend-following", "Counter-trend")

# Market symbol length bounds
MARKET_MIN_LENGTH = 2
MARKET_MAX_LENGTH = 10

# Fallback bucket labels
UNKNOWN = "Unknown"
NOT_EVALUATED = "Not Evaluated"
NEWS_NO_EVENT_LABEL = "News (no event)"

LOCAL_HL_LIQUIDATED = "liquidated"
LOCAL_HL_NOT_LIQUIDATED = "not_liquidated"

# Full-day 4-hour buckets: (label, start minute, end minute), both ends inclusive
TIME_INTERVALS: list[tuple[str, int, int]] = [
    ("00:00 - 03:59", 0, 3 * 60 + 59),
    ("04:00 - 07:59", 4 * 60, 7 * 60 + 59),
    ("08:00 - 11:59", 8 * 60, 11 * 60 + 59),
    ("12:00 - 15:59", 12 * 60, 15 * 60 + 59),
    ("16:00 - 19:59", 16 * 60, 19 * 60 + 59),
    ("20:00 - 23:59", 20 * 60, 23 * 60 + 59),
]

ALL_MARKETS = "all"
