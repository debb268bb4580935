"""Account-level ratios: profit factor, consistency, Sharpe, TQI, R-multiple.

Ratios are computed on risk-based P&L (percent of a static starting balance),
so they stay comparable whether or not a trade stored its own profit.
Currency totals and drawdown use realized P&L instead (see ``profit_stats``).
"""

from dataclasses import dataclass

from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.math_helpers import percentage, population_std, safe_ratio, sample_sharpe
from tradejournal.analytics.outcomes import (
    WIN,
    as_date,
    ensure_balance,
    is_profitable,
    is_real_trade,
    pnl_pool,
    r_value,
    realized_pnl,
    synthetic_pnl,
    validates_trades,
)
from tradejournal.analytics.sequences import max_drawdown


@dataclass
class MacroStats:
    profit_factor: float
    consistency_score: float  # per real trade
    consistency_score_with_be: float  # per trading day
    sharpe_with_be: float
    trade_quality_index: float
    multiple_r: float


@dataclass
class ProfitStats:
    total_profit: float
    average_profit: float
    average_pnl_percentage: float  # total profit as % of starting balance
    max_drawdown: float


# ---------------------------------------------------------------------------
# Individual metrics
# ---------------------------------------------------------------------------

@validates_trades
def profit_factor(
    trades,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Gross profit over gross loss of real trades; 0 without any loss."""
    balance = ensure_balance(balance)
    gross_profit = gross_loss = 0.0
    for trade in pnl_pool(trades, include_non_executed):
        if not is_real_trade(trade, config):
            continue
        pnl = synthetic_pnl(trade, balance, config)
        if pnl > 0:
            gross_profit += pnl
        else:
            gross_loss -= pnl
    return safe_ratio(gross_profit, gross_loss)


@validates_trades
def consistency_score(
    trades,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Share of real trades that were profitable, in percent."""
    real = [t for t in pnl_pool(trades, include_non_executed) if is_real_trade(t, config)]
    profitable = sum(1 for t in real if is_profitable(t, config))
    return percentage(profitable, len(real))


@validates_trades
def consistency_score_with_be(
    trades,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Share of trading days that closed with positive net P&L, in percent."""
    balance = ensure_balance(balance)
    daily: dict = {}
    for trade in pnl_pool(trades, include_non_executed):
        day = as_date(trade.trade_date)
        daily[day] = daily.get(day, 0.0) + synthetic_pnl(trade, balance, config)
    positive = sum(1 for pnl in daily.values() if pnl > 0)
    return percentage(positive, len(daily))


@validates_trades
def sharpe_ratio(
    trades,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Per-trade Sharpe ratio; BE trades without partials return 0."""
    balance = ensure_balance(balance)
    returns = [synthetic_pnl(t, balance, config) for t in pnl_pool(trades, include_non_executed)]
    return sample_sharpe(returns)


@validates_trades
def trade_quality_index(
    trades,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """TQI = win rate * 1 / (1 + population std dev of R), in (0, 1].

    Win rate here is wins over all decided trades, BE included in the total.
    """
    r_values = []
    wins = 0
    for trade in pnl_pool(trades, include_non_executed):
        r = r_value(trade, config)
        if r is None:
            continue
        r_values.append(r)
        if not trade.break_even and trade.trade_outcome == WIN:
            wins += 1
    if not r_values:
        return 0.0
    win_rate = wins / len(r_values)
    return win_rate * (1 / (1 + population_std(r_values)))


@validates_trades
def r_multiple_total(
    trades,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> float:
    """Sum of R: +RR per win, exactly -1 per loss, 0 per break-even."""
    values = (r_value(t, config) for t in pnl_pool(trades, include_non_executed))
    return float(sum(r for r in values if r is not None))


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

def macro_stats(
    trades,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> MacroStats:
    return MacroStats(
        profit_factor=profit_factor(trades, balance, config, include_non_executed),
        consistency_score=consistency_score(trades, config, include_non_executed),
        consistency_score_with_be=consistency_score_with_be(trades, balance, config, include_non_executed),
        sharpe_with_be=sharpe_ratio(trades, balance, config, include_non_executed),
        trade_quality_index=trade_quality_index(trades, config, include_non_executed),
        multiple_r=r_multiple_total(trades, config, include_non_executed),
    )


@validates_trades
def profit_stats(
    trades,
    balance: float,
    config: StatsConfig = DEFAULT_CONFIG,
    include_non_executed: bool = False,
) -> ProfitStats:
    """Realized profit totals and max drawdown of the P&L-bearing trades."""
    balance = ensure_balance(balance)
    pool = pnl_pool(trades, include_non_executed)
    total = sum(realized_pnl(t, balance, config) for t in pool)
    return ProfitStats(
        total_profit=total,
        average_profit=safe_ratio(total, len(pool)),
        average_pnl_percentage=percentage(total, balance),
        max_drawdown=max_drawdown(pool, balance, config, include_non_executed=True),
    )
