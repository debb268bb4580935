"""Categorical breakdowns: one group-by algorithm, many grouping keys.

Trades whose key is missing land in a fallback bucket; nothing is dropped
except where a breakdown is defined over a subset (trend, re-entry, news
names, listed evaluation grades).
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, replace

from tradejournal.analytics.counters import OutcomeTally
from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.math_helpers import percentage
from tradejournal.analytics.outcomes import (
    as_label,
    as_number,
    ensure_balance,
    is_executed,
    is_local_high_low_liquidated,
    minutes_of_day,
    realized_pnl,
    risk_pct,
    validates_trades,
)
from tradejournal.utils.constants import (
    LOCAL_HL_LIQUIDATED,
    LOCAL_HL_NOT_LIQUIDATED,
    NEWS_NO_EVENT_LABEL,
    NOT_EVALUATED,
    TIME_INTERVALS,
    TREND_VALUES,
    UNKNOWN,
)


@dataclass
class GroupStats:
    label: str
    total: int
    wins: int
    losses: int
    break_even: int
    be_wins: int
    be_losses: int
    win_rate: float
    win_rate_with_be: float

    @classmethod
    def from_tally(cls, label: str, tally: OutcomeTally) -> "GroupStats":
        return cls(
            label=label,
            total=tally.total,
            wins=tally.wins,
            losses=tally.losses,
            break_even=tally.break_even,
            be_wins=tally.be_wins,
            be_losses=tally.be_losses,
            win_rate=tally.win_rate,
            win_rate_with_be=tally.win_rate_with_be,
        )


@dataclass
class MarketStats(GroupStats):
    profit: float = 0.0
    pnl_percentage: float = 0.0


@dataclass
class NewsNameStats(GroupStats):
    average_intensity: float | None = None


@dataclass
class EvaluationStats:
    grade: str
    total: int
    wins: int
    losses: int
    break_even: int
    win_rate: float
    win_rate_with_be: float


# ---------------------------------------------------------------------------
# Generic grouping
# ---------------------------------------------------------------------------

def _tally_by(trades, key: Callable, fallback: str = UNKNOWN) -> dict[str, OutcomeTally]:
    tallies: dict[str, OutcomeTally] = {}
    for trade in trades:
        label = as_label(key(trade)) or fallback
        tallies.setdefault(label, OutcomeTally()).add(trade)
    return tallies


@validates_trades
def group_stats(trades, key: Callable, fallback: str = UNKNOWN) -> list[GroupStats]:
    """Per-bucket tallies for an arbitrary key extractor, largest bucket first."""
    stats = [GroupStats.from_tally(label, tally) for label, tally in _tally_by(trades, key, fallback).items()]
    return sorted(stats, key=lambda s: s.total, reverse=True)


def ordered_group_stats(trades, labels, key: Callable, fallback: str = UNKNOWN) -> list[GroupStats]:
    """Fixed-order breakdown: every listed label is reported, even when empty.

    Trades mapping to no listed label go to ``fallback``, reported only when
    non-empty.
    """
    tallies = {label: OutcomeTally() for label in labels}
    leftover = OutcomeTally()
    for trade in trades:
        label = key(trade)
        if label in tallies:
            tallies[label].add(trade)
        else:
            leftover.add(trade)
    stats = [GroupStats.from_tally(label, tally) for label, tally in tallies.items()]
    if leftover.total:
        stats.append(GroupStats.from_tally(fallback, leftover))
    return stats


# ---------------------------------------------------------------------------
# Simple keyed breakdowns
# ---------------------------------------------------------------------------

def setup_stats(trades) -> list[GroupStats]:
    return group_stats(trades, lambda t: t.setup_type)


def liquidity_stats(trades) -> list[GroupStats]:
    return group_stats(trades, lambda t: t.liquidity)


def direction_stats(trades) -> list[GroupStats]:
    return group_stats(trades, lambda t: t.direction)


def day_stats(trades) -> list[GroupStats]:
    return group_stats(trades, lambda t: t.day_of_week)


def mss_stats(trades) -> list[GroupStats]:
    # Trades without an MSS tag are plain market-structure shifts
    return group_stats(trades, lambda t: t.mss, fallback="Normal")


def news_stats(trades) -> list[GroupStats]:
    return group_stats(trades, lambda t: "News" if t.news_related else "No News")


@validates_trades
def trend_stats(trades) -> list[GroupStats]:
    """Only trades tagged Trend-following or Counter-trend."""
    tagged = [t for t in trades if as_label(t.trend) in TREND_VALUES]
    return group_stats(tagged, lambda t: as_label(t.trend))


@validates_trades
def reentry_stats(trades) -> list[GroupStats]:
    subset = [t for t in trades if t.reentry]
    return [GroupStats.from_tally("ReEntry", OutcomeTally.of(subset))] if subset else []


@validates_trades
def break_even_stats(trades) -> list[GroupStats]:
    """BE trades as one bucket; win rate is BE wins over BE trades with a final result."""
    subset = [t for t in trades if t.break_even]
    if not subset:
        return []
    tally = OutcomeTally.of(subset)
    group = GroupStats.from_tally("Break Even", tally)
    return [replace(group, win_rate=percentage(tally.be_wins, tally.be_wins + tally.be_losses))]


@validates_trades
def local_high_low_stats(trades) -> dict[str, GroupStats]:
    """Both buckets are always present."""
    groups = ordered_group_stats(
        trades,
        (LOCAL_HL_LIQUIDATED, LOCAL_HL_NOT_LIQUIDATED),
        lambda t: LOCAL_HL_LIQUIDATED if is_local_high_low_liquidated(t.local_high_low) else LOCAL_HL_NOT_LIQUIDATED,
    )
    return {g.label: g for g in groups}


@validates_trades
def market_stats(trades, balance: float, config: StatsConfig = DEFAULT_CONFIG) -> list[MarketStats]:
    """Per-market tallies plus realized profit of executed trades and its share of balance."""
    balance = ensure_balance(balance)
    profits: dict[str, float] = {}
    for trade in trades:
        label = as_label(trade.market) or UNKNOWN
        if is_executed(trade):
            profits[label] = profits.get(label, 0.0) + realized_pnl(trade, balance, config)
    result = []
    for group in group_stats(trades, lambda t: t.market):
        profit = profits.get(group.label, 0.0)
        result.append(MarketStats(**vars(group), profit=profit, pnl_percentage=percentage(profit, balance)))
    return result


@validates_trades
def news_name_stats(trades, include_unnamed: bool = False) -> list[NewsNameStats]:
    """Per news event, with the average intensity (1 to 3) of the tagged trades."""
    named: dict[str, list] = {}
    unnamed = []
    for trade in trades:
        if not trade.news_related:
            continue
        name = as_label(trade.news_name)
        if name:
            named.setdefault(name, []).append(trade)
        else:
            unnamed.append(trade)

    result = []
    for name, bucket in named.items():
        group = GroupStats.from_tally(name, OutcomeTally.of(bucket))
        intensities = [
            v for v in (as_number(t.news_intensity) for t in bucket)
            if v is not None and 1 <= v <= 3
        ]
        average = round(sum(intensities) / len(intensities), 1) if intensities else None
        result.append(NewsNameStats(**vars(group), average_intensity=average))
    if include_unnamed and unnamed:
        group = GroupStats.from_tally(NEWS_NO_EVENT_LABEL, OutcomeTally.of(unnamed))
        result.append(NewsNameStats(**vars(group)))
    return sorted(result, key=lambda s: s.total, reverse=True)


# ---------------------------------------------------------------------------
# Fixed-order breakdowns
# ---------------------------------------------------------------------------

def interval_label(trade_time) -> str | None:
    minutes = minutes_of_day(trade_time)
    if minutes is None:
        return None
    for label, start, end in TIME_INTERVALS:
        if start <= minutes <= end:
            return label
    return None


@validates_trades
def interval_stats(trades) -> list[GroupStats]:
    """Six 4-hour buckets covering the day; unparseable times go to Unknown."""
    labels = [label for label, _, _ in TIME_INTERVALS]
    return ordered_group_stats(trades, labels, lambda t: interval_label(t.trade_time))


def risk_label(level: float) -> str:
    return f"{level:g}%"


@validates_trades
def risk_stats(trades, config: StatsConfig = DEFAULT_CONFIG) -> list[GroupStats]:
    """One bucket per configured risk level; null risk takes the default level."""
    labels = [risk_label(level) for level in config.risk_levels]

    def key(trade):
        risk = risk_pct(trade, config)
        for level, label in zip(config.risk_levels, labels):
            if math.isclose(risk, level, abs_tol=1e-9):
                return label
        return None

    return ordered_group_stats(trades, labels, key, fallback="Other")


@validates_trades
def evaluation_stats(trades, grade_order=None, config: StatsConfig = DEFAULT_CONFIG) -> list[EvaluationStats]:
    """Stats per evaluation grade in priority order; unlisted grades are dropped."""
    order = tuple(grade_order) if grade_order is not None else config.grade_order
    tallies = _tally_by(trades, lambda t: t.evaluation, fallback=NOT_EVALUATED)
    return [
        EvaluationStats(
            grade=grade,
            total=tallies[grade].total,
            wins=tallies[grade].wins,
            losses=tallies[grade].losses,
            break_even=tallies[grade].break_even,
            win_rate=tallies[grade].win_rate,
            win_rate_with_be=tallies[grade].win_rate_with_be,
        )
        for grade in order
        if grade in tallies
    ]
