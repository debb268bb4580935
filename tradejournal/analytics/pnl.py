"""Risk-based P&L of a single trade, stored on the trade at creation time."""

from dataclasses import dataclass

from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.outcomes import LOSE, ensure_balance, risk_pct, risk_reward


@dataclass
class TradePnl:
    pnl_percentage: float
    calculated_profit: float


def trade_pnl(trade, balance: float, config: StatsConfig = DEFAULT_CONFIG) -> TradePnl:
    """-risk% on a loss, risk% * RR otherwise; 0 for break-even or an empty account."""
    balance = ensure_balance(balance)
    if balance == 0 or trade.break_even:
        return TradePnl(pnl_percentage=0.0, calculated_profit=0.0)

    risk = risk_pct(trade, config)
    pct = -risk if trade.trade_outcome == LOSE else risk * risk_reward(trade, config)
    return TradePnl(pnl_percentage=pct, calculated_profit=pct / 100 * balance)
