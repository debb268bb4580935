"""Dashboard stats → bar-chart payloads."""

from tradejournal.analytics.categories import EvaluationStats, GroupStats
from tradejournal.analytics.selection import DashboardStats
from tradejournal.analytics.sizes import MarketAverage
from tradejournal.schemas.chart import (
    SingleValueChart,
    SingleValueDatum,
    WinsLossesChart,
    WinsLossesDatum,
)

# category -> (DashboardStats attribute, title)
WINS_LOSSES_CHARTS = {
    "setup": ("setup_stats", "Setup Statistics"),
    "liquidity": ("liquidity_stats", "Liquidity Statistics"),
    "direction": ("direction_stats", "Long/Short Statistics"),
    "day": ("day_stats", "Day of Week Statistics"),
    "mss": ("mss_stats", "MSS Statistics"),
    "news": ("news_stats", "News Statistics"),
    "news-name": ("news_name_stats", "News Event Statistics"),
    "trend": ("trend_stats", "Trend Statistics"),
    "reentry": ("reentry_stats", "Re-entry Statistics"),
    "break-even": ("break_even_stats", "Break Even Statistics"),
    "local-high-low": ("local_high_low_stats", "Local High/Low Statistics"),
    "interval": ("interval_stats", "Time Interval Statistics"),
    "risk": ("risk_stats", "Risk per Trade Statistics"),
    "evaluation": ("evaluation_stats", "Evaluation Grade Statistics"),
    "market": ("market_stats", "Market Statistics"),
    "sl-size": ("sl_size_stats", "SL Size Statistics"),
    "displacement": ("displacement_stats", "Displacement Size Statistics"),
}

SINGLE_VALUE_CHARTS = {
    "sl-size-average": ("average_sl_size", "Average SL Size per Market"),
    "displacement-average": ("average_displacement", "Average Displacement per Market"),
    "market-profit": ("market_stats", "Profit per Market"),
}

CHART_CATEGORIES = tuple(WINS_LOSSES_CHARTS) + tuple(SINGLE_VALUE_CHARTS)


def wins_losses_datum(group: GroupStats | EvaluationStats) -> WinsLossesDatum:
    if isinstance(group, EvaluationStats):
        return WinsLossesDatum(
            category=group.grade,
            total_trades=group.total,
            wins=group.wins,
            losses=group.losses,
            win_rate=group.win_rate,
            win_rate_with_be=group.win_rate_with_be,
        )
    return WinsLossesDatum(
        category=group.label,
        total_trades=group.total,
        wins=group.wins,
        losses=group.losses,
        be_wins=group.be_wins,
        be_losses=group.be_losses,
        win_rate=group.win_rate,
        win_rate_with_be=group.win_rate_with_be,
    )


def _single_value_datum(item) -> SingleValueDatum:
    if isinstance(item, MarketAverage):
        return SingleValueDatum(category=item.market, value=item.average, total_trades=item.total_trades)
    # MarketStats
    return SingleValueDatum(category=item.label, value=round(item.profit, 2), total_trades=item.total)


def build_chart(category: str, stats: DashboardStats) -> WinsLossesChart | SingleValueChart:
    """Chart payload for one dashboard category; KeyError for unknown categories."""
    if category in WINS_LOSSES_CHARTS:
        attr, title = WINS_LOSSES_CHARTS[category]
        groups = getattr(stats, attr)
        if isinstance(groups, dict):
            groups = list(groups.values())
        return WinsLossesChart(title=title, data=[wins_losses_datum(g) for g in groups])

    if category in SINGLE_VALUE_CHARTS:
        attr, title = SINGLE_VALUE_CHARTS[category]
        return SingleValueChart(title=title, data=[_single_value_datum(i) for i in getattr(stats, attr)])

    raise KeyError(category)
