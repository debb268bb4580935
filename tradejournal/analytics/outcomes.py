"""Trade classification primitives shared by every aggregator.

All functions are pure: they read trade attributes and never mutate them.
"""

import functools
import math
from collections.abc import Sequence
from datetime import date, datetime, time

from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig

WIN = "Win"
LOSE = "Lose"

# Fields the aggregators read directly; be_final_result is optional
TRADE_RECORD_FIELDS = (
    "trade_date",
    "trade_time",
    "day_of_week",
    "market",
    "setup_type",
    "liquidity",
    "direction",
    "mss",
    "evaluation",
    "trend",
    "news_related",
    "news_name",
    "news_intensity",
    "local_high_low",
    "trade_outcome",
    "break_even",
    "reentry",
    "partials_taken",
    "executed",
    "risk_per_trade",
    "risk_reward_ratio",
    "sl_size",
    "displacement_size",
    "calculated_profit",
)


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

def ensure_trades(trades) -> None:
    """Fail fast when the caller does not hand over a list of trade records."""
    if isinstance(trades, (str, bytes)) or not isinstance(trades, Sequence):
        raise TypeError(f"trades must be a list of trade records, got {type(trades).__name__}")
    for index, trade in enumerate(trades):
        missing = [attr for attr in TRADE_RECORD_FIELDS if not hasattr(trade, attr)]
        if missing:
            raise TypeError(f"trades[{index}] is not a trade record: missing {', '.join(missing)}")


def ensure_balance(balance) -> float:
    if isinstance(balance, bool) or not isinstance(balance, (int, float)):
        raise TypeError(f"account balance must be a number, got {type(balance).__name__}")
    if not math.isfinite(balance) or balance < 0:
        raise ValueError(f"account balance must be a finite number >= 0, got {balance}")
    return float(balance)


def validates_trades(func):
    """Decorator: validate the leading ``trades`` argument before aggregating."""

    @functools.wraps(func)
    def wrapper(trades, *args, **kwargs):
        ensure_trades(trades)
        return func(trades, *args, **kwargs)

    return wrapper


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def as_number(value) -> float | None:
    """Return a finite float, or None for null / non-numeric / NaN values."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def as_label(value) -> str | None:
    """Stripped string label, None when blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ValueError(f"trade_date must be a date or YYYY-MM-DD string, got {value!r}")


def minutes_of_day(value) -> int | None:
    """Minutes since midnight for an ``HH:MM[:SS]`` string or time object."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    if not isinstance(value, str) or not value.strip():
        return None
    parts = value.strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1]) if len(parts) > 1 else 0
    except ValueError:
        return None
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        return None
    return hours * 60 + minutes


def chronological(trades, by_time: bool = False) -> list:
    """Sorted copy, oldest first. Same-day order follows trade_time when ``by_time``."""
    if by_time:
        return sorted(trades, key=lambda t: (as_date(t.trade_date), minutes_of_day(t.trade_time) or 0))
    return sorted(trades, key=lambda t: as_date(t.trade_date))


# ---------------------------------------------------------------------------
# Outcome attribution
# ---------------------------------------------------------------------------

def is_executed(trade) -> bool:
    return trade.executed is not False


def executed_only(trades) -> list:
    return [t for t in trades if is_executed(t)]


def pnl_pool(trades, include_non_executed: bool = False) -> list:
    """Trades that bear P&L for a computation."""
    return list(trades) if include_non_executed else executed_only(trades)


def final_outcome(trade) -> str | None:
    """Win/Lose attribution; ``be_final_result`` is authoritative on BE trades."""
    if trade.break_even:
        explicit = getattr(trade, "be_final_result", None)
        if explicit in (WIN, LOSE):
            return explicit
    if trade.trade_outcome in (WIN, LOSE):
        return trade.trade_outcome
    return None


def is_local_high_low_liquidated(value) -> bool:
    """Local H/L flag as stored by any client: bool, "true", "1", 1."""
    if value is True:
        return True
    if value is False or value is None:
        return False
    return str(value).strip().lower() in ("true", "1")


# ---------------------------------------------------------------------------
# Risk & P&L
# ---------------------------------------------------------------------------

def risk_pct(trade, config: StatsConfig = DEFAULT_CONFIG) -> float:
    value = as_number(trade.risk_per_trade)
    return config.default_risk_pct if value is None else value


def risk_reward(trade, config: StatsConfig = DEFAULT_CONFIG) -> float:
    value = as_number(trade.risk_reward_ratio)
    return config.default_rr if value is None else value


def books_partials_win(trade, config: StatsConfig = DEFAULT_CONFIG) -> bool:
    return bool(trade.break_even) and bool(trade.partials_taken) and config.be_partials_count_as_win


def is_real_trade(trade, config: StatsConfig = DEFAULT_CONFIG) -> bool:
    """Non-BE trades, plus BE trades that booked a win through partials."""
    return not trade.break_even or books_partials_win(trade, config)


def is_profitable(trade, config: StatsConfig = DEFAULT_CONFIG) -> bool:
    if trade.break_even:
        return books_partials_win(trade, config)
    return trade.trade_outcome == WIN


def synthetic_pnl(trade, balance: float, config: StatsConfig = DEFAULT_CONFIG) -> float:
    """Risk-based P&L against a static balance.

    Win: +balance * risk% * RR. Loss: -balance * risk%. Break-even: 0, unless
    partials were taken, in which case it books a win.
    """
    risk_amount = balance * risk_pct(trade, config) / 100
    if trade.break_even:
        return risk_amount * risk_reward(trade, config) if books_partials_win(trade, config) else 0.0
    if trade.trade_outcome == WIN:
        return risk_amount * risk_reward(trade, config)
    if trade.trade_outcome == LOSE:
        return -risk_amount
    return 0.0


def realized_pnl(trade, balance: float, config: StatsConfig = DEFAULT_CONFIG) -> float:
    """Stored ``calculated_profit`` when present, risk-based P&L otherwise."""
    stored = as_number(trade.calculated_profit)
    return stored if stored is not None else synthetic_pnl(trade, balance, config)


def r_value(trade, config: StatsConfig = DEFAULT_CONFIG) -> float | None:
    """R-multiple of one trade: +RR on a win, -1 on a loss, 0 on break-even."""
    if trade.break_even:
        return 0.0
    if trade.trade_outcome == WIN:
        return risk_reward(trade, config)
    if trade.trade_outcome == LOSE:
        return -1.0
    return None
