"""Stop-loss and displacement size breakdowns.

Two views of a numeric trade attribute: outcome tallies per size range, and
the average size per market.
"""

from dataclasses import dataclass

from tradejournal.analytics.categories import GroupStats, ordered_group_stats
from tradejournal.analytics.defaults import DEFAULT_CONFIG, StatsConfig
from tradejournal.analytics.outcomes import as_label, as_number, validates_trades
from tradejournal.utils.constants import UNKNOWN


@dataclass(frozen=True)
class SizeBucket:
    label: str
    lower: float
    upper: float | None  # None = open-ended

    def contains(self, value: float) -> bool:
        return value >= self.lower and (self.upper is None or value < self.upper)


@dataclass
class MarketAverage:
    market: str
    average: float
    total_trades: int


def make_buckets(edges) -> list[SizeBucket]:
    """[e0, e1), [e1, e2), ..., [en, inf) with labels like ``10-20`` and ``40+``."""
    buckets = []
    for index, lower in enumerate(edges):
        upper = edges[index + 1] if index + 1 < len(edges) else None
        label = f"{lower:g}+" if upper is None else f"{lower:g}-{upper:g}"
        buckets.append(SizeBucket(label=label, lower=lower, upper=upper))
    return buckets


def bucket_for(value, buckets: list[SizeBucket]) -> str | None:
    number = as_number(value)
    if number is None:
        return None
    for bucket in buckets:
        if bucket.contains(number):
            return bucket.label
    return None


def _bucket_stats(trades, attr: str, edges) -> list[GroupStats]:
    buckets = make_buckets(edges)
    return ordered_group_stats(
        trades,
        [b.label for b in buckets],
        lambda t: bucket_for(getattr(t, attr), buckets),
    )


@validates_trades
def sl_size_bucket_stats(trades, config: StatsConfig = DEFAULT_CONFIG) -> list[GroupStats]:
    return _bucket_stats(trades, "sl_size", config.sl_size_bucket_edges)


@validates_trades
def displacement_bucket_stats(trades, config: StatsConfig = DEFAULT_CONFIG) -> list[GroupStats]:
    return _bucket_stats(trades, "displacement_size", config.displacement_bucket_edges)


def _average_per_market(trades, attr: str) -> list[MarketAverage]:
    totals: dict[str, int] = {}
    sums: dict[str, tuple[float, int]] = {}
    for trade in trades:
        market = as_label(trade.market) or UNKNOWN
        totals[market] = totals.get(market, 0) + 1
        value = as_number(getattr(trade, attr))
        if value is None or value <= 0:
            continue
        running, count = sums.get(market, (0.0, 0))
        sums[market] = (running + value, count + 1)

    averages = [
        MarketAverage(market=market, average=round(running / count, 2), total_trades=totals[market])
        for market, (running, count) in sums.items()
    ]
    return sorted(averages, key=lambda a: a.average, reverse=True)


@validates_trades
def average_sl_size_per_market(trades) -> list[MarketAverage]:
    """Average positive SL size per market; markets without one are omitted."""
    return _average_per_market(trades, "sl_size")


@validates_trades
def average_displacement_per_market(trades) -> list[MarketAverage]:
    """Average positive displacement per market; markets without one are omitted."""
    return _average_per_market(trades, "displacement_size")
