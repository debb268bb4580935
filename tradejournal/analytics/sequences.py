"""Order-dependent aggregators: streaks, trade spacing, drawdown, equity curve.

Each function sorts its own copy of the input; callers may pass trades in any
order.
"""

from dataclasses import dataclass
from datetime import date

import numpy as np
import pandas as pd

from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.outcomes import (
    LOSE,
    WIN,
    as_date,
    chronological,
    ensure_balance,
    final_outcome,
    pnl_pool,
    realized_pnl,
    validates_trades,
)


@dataclass
class StreakStats:
    current_streak: int  # > 0 winning run, < 0 losing run
    max_winning_streak: int
    max_losing_streak: int


@dataclass
class EquityPoint:
    date: date
    balance: float
    drawdown_pct: float


@validates_trades
def streaks(
    trades,
    exclude_break_even: bool = True,
    sort_by_time: bool = False,
    count_non_outcome_as_loss: bool = False,
) -> StreakStats:
    """Current and longest win/loss runs.

    With ``exclude_break_even`` (the dashboard setting) BE trades neither
    extend nor break a run; otherwise they count by their final outcome.
    """
    current = max_wins = max_losses = 0
    for trade in chronological(trades, by_time=sort_by_time):
        if exclude_break_even and trade.break_even:
            continue
        outcome = final_outcome(trade)
        if outcome is None:
            if not count_non_outcome_as_loss:
                continue
            outcome = LOSE

        if outcome == WIN:
            current = current + 1 if current > 0 else 1
            max_wins = max(max_wins, current)
        else:
            current = current - 1 if current < 0 else -1
            max_losses = max(max_losses, -current)

    return StreakStats(current_streak=current, max_winning_streak=max_wins, max_losing_streak=max_losses)


@validates_trades
def average_days_between_trades(trades) -> float:
    """Mean calendar-day gap between consecutive trades, 1 decimal."""
    if len(trades) < 2:
        return 0.0
    days = [as_date(t.trade_date) for t in chronological(trades)]
    gaps = [(later - earlier).days for earlier, later in zip(days, days[1:])]
    return round(sum(gaps) / len(gaps), 1)


@validates_trades
def max_drawdown(
    trades,
    starting_balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Largest peak-to-trough decline of the running balance, in percent of the peak."""
    starting_balance = ensure_balance(starting_balance)
    ordered = chronological(pnl_pool(trades, include_non_executed))
    if not ordered:
        return 0.0

    pnls = np.array([realized_pnl(t, starting_balance, config) for t in ordered], dtype=float)
    balances = starting_balance + np.cumsum(pnls)
    peaks = np.maximum.accumulate(np.concatenate(([starting_balance], balances)))[1:]
    with np.errstate(divide="ignore", invalid="ignore"):
        drawdowns = np.where(peaks > 0, (peaks - balances) / peaks * 100, 0.0)
    return max(float(drawdowns.max()), 0.0)


@validates_trades
def equity_curve(
    trades,
    starting_balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> list[EquityPoint]:
    """End-of-day balance and drawdown for every trading day."""
    starting_balance = ensure_balance(starting_balance)
    pool = pnl_pool(trades, include_non_executed)
    if not pool:
        return []

    frame = pd.DataFrame(
        {
            "date": [as_date(t.trade_date) for t in pool],
            "pnl": [realized_pnl(t, starting_balance, config) for t in pool],
        }
    )
    daily = frame.groupby("date", sort=True)["pnl"].sum()
    equity = starting_balance + daily.cumsum()
    peak = equity.cummax().clip(lower=starting_balance)
    drawdown = ((peak - equity) / peak * 100).where(peak > 0, 0.0).clip(lower=0.0)

    return [
        EquityPoint(date=day, balance=round(float(balance), 2), drawdown_pct=round(float(dd), 2))
        for day, balance, dd in zip(daily.index, equity, drawdown)
    ]
