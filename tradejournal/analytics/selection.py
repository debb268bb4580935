"""Dashboard filter selection and the full stats bundle.

The dashboard loads a period's trades once and computes ``DashboardStats`` for
its executed trades. Narrowing by market (or, in date-range mode, to
non-executed trades) reruns every aggregator on the narrowed subset; other
selections reuse the precomputed bundle.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum

from tradejournal.analytics import categories, sizes
from tradejournal.analytics.categories import EvaluationStats, GroupStats, MarketStats, NewsNameStats
from tradejournal.analytics.counters import PartialTradesStats, TradeCounts, partial_trades_stats, trade_counts
from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.macro import MacroStats, ProfitStats, macro_stats, profit_stats
from tradejournal.analytics.monthly import MonthlyRollup, monthly_stats
from tradejournal.analytics.outcomes import as_date, as_label, ensure_balance, executed_only, is_executed, validates_trades
from tradejournal.analytics.sequences import StreakStats, average_days_between_trades, streaks
from tradejournal.analytics.sizes import MarketAverage
from tradejournal.utils.constants import ALL_MARKETS

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    YEARLY = "yearly"
    DATE_RANGE = "dateRange"


class ExecutionFilter(str, Enum):
    ALL = "all"
    EXECUTED = "executed"
    NON_EXECUTED = "nonExecuted"


@dataclass
class FilterSelection:
    view_mode: ViewMode = ViewMode.YEARLY
    market: str = ALL_MARKETS
    execution: ExecutionFilter = ExecutionFilter.ALL
    year: int | None = None
    start_date: date | None = None
    end_date: date | None = None

    @property
    def market_filtered(self) -> bool:
        return (as_label(self.market) or ALL_MARKETS).lower() != ALL_MARKETS

    @property
    def targets_non_executed(self) -> bool:
        """Execution filtering only applies in date-range mode."""
        return self.view_mode == ViewMode.DATE_RANGE and self.execution == ExecutionFilter.NON_EXECUTED

    @property
    def stats_year(self) -> int:
        """Year the monthly rollup covers."""
        if self.view_mode == ViewMode.YEARLY and self.year is not None:
            return self.year
        if self.end_date is not None:
            return self.end_date.year
        return self.year if self.year is not None else date.today().year


@dataclass
class DashboardStats:
    trade_counts: TradeCounts
    partial_trades: PartialTradesStats
    streaks: StreakStats
    average_days_between_trades: float
    profit: ProfitStats
    macro: MacroStats
    monthly: MonthlyRollup
    setup_stats: list[GroupStats]
    liquidity_stats: list[GroupStats]
    direction_stats: list[GroupStats]
    day_stats: list[GroupStats]
    mss_stats: list[GroupStats]
    news_stats: list[GroupStats]
    news_name_stats: list[NewsNameStats]
    trend_stats: list[GroupStats]
    reentry_stats: list[GroupStats]
    break_even_stats: list[GroupStats]
    local_high_low_stats: dict[str, GroupStats]
    interval_stats: list[GroupStats]
    risk_stats: list[GroupStats]
    evaluation_stats: list[EvaluationStats]
    market_stats: list[MarketStats]
    sl_size_stats: list[GroupStats]
    displacement_stats: list[GroupStats]
    average_sl_size: list[MarketAverage]
    average_displacement: list[MarketAverage]
    non_executed_count: int
    partial_trades_count: int
    partials_be_count: int


def needs_recompute(selection: FilterSelection) -> bool:
    if selection.view_mode == ViewMode.YEARLY:
        return selection.market_filtered
    return selection.market_filtered or selection.targets_non_executed


def _in_period(trade, selection: FilterSelection) -> bool:
    day = as_date(trade.trade_date)
    if selection.view_mode == ViewMode.YEARLY:
        return selection.year is None or day.year == selection.year
    if selection.start_date is not None and day < selection.start_date:
        return False
    if selection.end_date is not None and day > selection.end_date:
        return False
    return True


@validates_trades
def period_trades(trades, selection: FilterSelection) -> list:
    """Trades inside the selected year or date range."""
    return [t for t in trades if _in_period(t, selection)]


@validates_trades
def select_trades(trades, selection: FilterSelection) -> list:
    """Apply the period, market and execution filters.

    Only a date-range selection of non-executed trades keeps planned trades;
    every other selection works on executed trades.
    """
    selected = period_trades(trades, selection)
    if selection.market_filtered:
        market = selection.market.strip().upper()
        selected = [t for t in selected if (as_label(t.market) or "").upper() == market]
    if selection.targets_non_executed:
        return [t for t in selected if not is_executed(t)]
    return executed_only(selected)


@validates_trades
def compute_dashboard_stats(
    trades,
    balance: float,
    year: int,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
    non_executed_count: int | None = None,
) -> DashboardStats:
    """Run every aggregator over ``trades``.

    ``non_executed_count`` overrides the count taken from ``trades`` when the
    caller has already dropped planned trades.
    """
    balance = ensure_balance(balance)
    partials = partial_trades_stats(trades)
    if non_executed_count is None:
        non_executed_count = sum(1 for t in trades if not is_executed(t))
    return DashboardStats(
        trade_counts=trade_counts(trades),
        partial_trades=partials,
        streaks=streaks(trades),
        average_days_between_trades=average_days_between_trades(trades),
        profit=profit_stats(trades, balance, config, include_non_executed),
        macro=macro_stats(trades, balance, config, include_non_executed),
        monthly=monthly_stats(trades, year, balance, config, include_non_executed),
        setup_stats=categories.setup_stats(trades),
        liquidity_stats=categories.liquidity_stats(trades),
        direction_stats=categories.direction_stats(trades),
        day_stats=categories.day_stats(trades),
        mss_stats=categories.mss_stats(trades),
        news_stats=categories.news_stats(trades),
        news_name_stats=categories.news_name_stats(trades),
        trend_stats=categories.trend_stats(trades),
        reentry_stats=categories.reentry_stats(trades),
        break_even_stats=categories.break_even_stats(trades),
        local_high_low_stats=categories.local_high_low_stats(trades),
        interval_stats=categories.interval_stats(trades),
        risk_stats=categories.risk_stats(trades, config),
        evaluation_stats=categories.evaluation_stats(trades, config=config),
        market_stats=categories.market_stats(trades, balance, config),
        sl_size_stats=sizes.sl_size_bucket_stats(trades, config),
        displacement_stats=sizes.displacement_bucket_stats(trades, config),
        average_sl_size=sizes.average_sl_size_per_market(trades),
        average_displacement=sizes.average_displacement_per_market(trades),
        non_executed_count=non_executed_count,
        partial_trades_count=partials.total_partial_trades,
        partials_be_count=partials.total_partials_be,
    )


@validates_trades
def resolve_dashboard_stats(
    trades,
    selection: FilterSelection,
    balance: float,
    cached: DashboardStats | None = None,
    config: StatsConfig = DEFAULT_CONFIG,
) -> DashboardStats:
    """Stats for ``selection``, reusing ``cached`` when no filter narrows the period."""
    if not needs_recompute(selection) and cached is not None:
        return cached

    in_period = period_trades(trades, selection)
    planned = sum(1 for t in in_period if not is_executed(t))
    subset = select_trades(in_period, selection)
    if needs_recompute(selection):
        logger.debug(
            f"Recomputing dashboard stats: mode={selection.view_mode.value} market={selection.market} "
            f"execution={selection.execution.value} trades={len(subset)}"
        )
    return compute_dashboard_stats(
        subset,
        balance,
        selection.stats_year,
        config,
        include_non_executed=selection.targets_non_executed,
        non_executed_count=planned,
    )
