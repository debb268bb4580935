"""Per-month rollup for one calendar year, with best and worst month."""

import calendar
from dataclasses import dataclass, field

from tradejournal.analytics.counters import OutcomeTally
from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.outcomes import as_date, ensure_balance, is_executed, synthetic_pnl, validates_trades


@dataclass
class MonthlyStats:
    wins: int
    losses: int
    be_wins: int
    be_losses: int
    profit: float
    win_rate: float
    win_rate_with_be: float


@dataclass
class BestWorstMonth:
    month: str
    stats: MonthlyStats


@dataclass
class MonthlyRollup:
    monthly_data: dict[str, MonthlyStats] = field(default_factory=dict)  # calendar order
    best_month: BestWorstMonth | None = None
    worst_month: BestWorstMonth | None = None


@validates_trades
def monthly_stats(
    trades,
    year: int,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> MonthlyRollup:
    """Wins, losses and risk-based profit per month of ``year``.

    Only months with at least one trade are listed. Best and worst month are
    picked among months with a decided (non-BE) trade; ties keep the earlier
    month.
    """
    balance = ensure_balance(balance)
    tallies: dict[int, OutcomeTally] = {}
    profits: dict[int, float] = {}
    for trade in trades:
        day = as_date(trade.trade_date)
        if day.year != year:
            continue
        tallies.setdefault(day.month, OutcomeTally()).add(trade)
        if include_non_executed or is_executed(trade):
            profits[day.month] = profits.get(day.month, 0.0) + synthetic_pnl(trade, balance, config)

    rollup = MonthlyRollup()
    for month in sorted(tallies):
        tally = tallies[month]
        name = calendar.month_name[month]
        stats = MonthlyStats(
            wins=tally.wins,
            losses=tally.losses,
            be_wins=tally.be_wins,
            be_losses=tally.be_losses,
            profit=profits.get(month, 0.0),
            win_rate=tally.win_rate,
            win_rate_with_be=tally.win_rate_with_be,
        )
        rollup.monthly_data[name] = stats

        if tally.decided == 0:
            continue
        if rollup.best_month is None or stats.profit > rollup.best_month.stats.profit:
            rollup.best_month = BestWorstMonth(month=name, stats=stats)
        if rollup.worst_month is None or stats.profit < rollup.worst_month.stats.profit:
            rollup.worst_month = BestWorstMonth(month=name, stats=stats)
    return rollup
