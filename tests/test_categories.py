"""Tests for categorical breakdowns."""

import pytest

from tradejournal.analytics import categories
from tradejournal.analytics.defaults import StatsConfig


def _by_label(stats):
    return {s.label: s for s in stats}


# ---------------------------------------------------------------------------
# 1. Generic grouping
# ---------------------------------------------------------------------------

class TestGroupStats:
    def test_market_scenario(self, make_trade):
        trades = [
            make_trade(market="EURUSD", trade_outcome="Win"),
            make_trade(market="EURUSD", trade_outcome="Lose"),
            make_trade(market="EURUSD", trade_outcome="Win", break_even=True),
            make_trade(market="GBPUSD", trade_outcome="Win"),
        ]
        stats = categories.group_stats(trades, lambda t: t.market)
        assert [s.label for s in stats] == ["EURUSD", "GBPUSD"]
        eur = stats[0]
        assert (eur.total, eur.wins, eur.losses, eur.break_even, eur.be_wins) == (3, 1, 1, 1, 1)
        assert eur.win_rate == 50
        assert eur.win_rate_with_be == pytest.approx(100 / 3)
        assert stats[1].win_rate == 100

    def test_missing_key_goes_to_fallback(self, make_trade):
        trades = [make_trade(setup_type=None), make_trade(setup_type="  "), make_trade(setup_type="OB")]
        stats = _by_label(categories.setup_stats(trades))
        assert stats["Unknown"].total == 2
        assert stats["OB"].total == 1

    def test_nothing_dropped(self, make_trade):
        trades = [make_trade(liquidity=v) for v in ("Major", None, "Minor", "Major")]
        assert sum(s.total for s in categories.liquidity_stats(trades)) == len(trades)

    def test_sorted_by_total_descending(self, make_trade):
        trades = [make_trade(direction="Short")] + [make_trade(direction="Long") for _ in range(3)]
        assert [s.label for s in categories.direction_stats(trades)] == ["Long", "Short"]

    def test_mss_fallback_is_normal(self, make_trade):
        stats = categories.mss_stats([make_trade(mss=None)])
        assert stats[0].label == "Normal"

    def test_news_buckets(self, make_trade):
        stats = _by_label(categories.news_stats([make_trade(news_related=True), make_trade(news_related=False)]))
        assert set(stats) == {"News", "No News"}

    def test_empty_input(self):
        assert categories.setup_stats([]) == []
        assert categories.market_stats([], 1000) == []


# ---------------------------------------------------------------------------
# 2. Subset breakdowns
# ---------------------------------------------------------------------------

class TestSubsetBreakdowns:
    def test_trend_only_tagged(self, make_trade):
        trades = [
            make_trade(trend="Trend-following"),
            make_trade(trend="Counter-trend", trade_outcome="Lose"),
            make_trade(trend=None),
            make_trade(trend="Sideways"),
        ]
        stats = _by_label(categories.trend_stats(trades))
        assert set(stats) == {"Trend-following", "Counter-trend"}

    def test_reentry(self, make_trade):
        stats = categories.reentry_stats([make_trade(reentry=True), make_trade(reentry=False)])
        assert len(stats) == 1
        assert stats[0].label == "ReEntry"
        assert stats[0].total == 1
        assert categories.reentry_stats([make_trade()]) == []

    def test_break_even_win_rate(self, make_trade):
        trades = [
            make_trade(break_even=True, trade_outcome="Win"),
            make_trade(break_even=True, trade_outcome="Lose"),
            make_trade(break_even=True, trade_outcome="Lose", be_final_result="Win"),
            make_trade(break_even=False),
        ]
        [stats] = categories.break_even_stats(trades)
        assert stats.total == 3
        assert stats.win_rate == pytest.approx(200 / 3)

    def test_local_high_low_accepts_strings(self, make_trade):
        trades = [
            make_trade(local_high_low=True),
            make_trade(local_high_low="true"),
            make_trade(local_high_low="1"),
            make_trade(local_high_low=None),
        ]
        stats = categories.local_high_low_stats(trades)
        assert stats["liquidated"].total == 3
        assert stats["not_liquidated"].total == 1

    def test_local_high_low_both_buckets_when_empty(self):
        assert set(categories.local_high_low_stats([])) == {"liquidated", "not_liquidated"}

    def test_news_names_with_intensity(self, make_trade):
        trades = [
            make_trade(news_related=True, news_name="CPI", news_intensity=3),
            make_trade(news_related=True, news_name="CPI", news_intensity=2),
            make_trade(news_related=True, news_name="NFP", news_intensity=None),
            make_trade(news_related=True, news_name=None),
            make_trade(news_related=False, news_name="FOMC"),
        ]
        stats = _by_label(categories.news_name_stats(trades))
        assert set(stats) == {"CPI", "NFP"}
        assert stats["CPI"].average_intensity == 2.5
        assert stats["NFP"].average_intensity is None

        with_unnamed = _by_label(categories.news_name_stats(trades, include_unnamed=True))
        assert with_unnamed["News (no event)"].total == 1


# ---------------------------------------------------------------------------
# 3. Fixed-order breakdowns
# ---------------------------------------------------------------------------

class TestFixedOrder:
    def test_intervals_listed_in_order(self, make_trade):
        trades = [make_trade(trade_time="09:15"), make_trade(trade_time="23:59"), make_trade(trade_time="00:00")]
        stats = categories.interval_stats(trades)
        assert [s.label for s in stats] == [
            "00:00 - 03:59",
            "04:00 - 07:59",
            "08:00 - 11:59",
            "12:00 - 15:59",
            "16:00 - 19:59",
            "20:00 - 23:59",
        ]
        totals = {s.label: s.total for s in stats}
        assert totals["08:00 - 11:59"] == 1
        assert totals["20:00 - 23:59"] == 1
        assert totals["00:00 - 03:59"] == 1

    def test_unparseable_time_goes_to_unknown(self, make_trade):
        stats = categories.interval_stats([make_trade(trade_time="soon")])
        assert stats[-1].label == "Unknown"
        assert stats[-1].total == 1

    def test_risk_buckets(self, make_trade):
        trades = [
            make_trade(risk_per_trade=0.25),
            make_trade(risk_per_trade=None),
            make_trade(risk_per_trade=0.5),
            make_trade(risk_per_trade=2),
        ]
        stats = categories.risk_stats(trades)
        totals = {s.label: s.total for s in stats}
        assert [s.label for s in stats][:6] == ["0.25%", "0.3%", "0.35%", "0.5%", "0.7%", "1%"]
        assert totals["0.25%"] == 1
        assert totals["0.5%"] == 2
        assert totals["Other"] == 1

    def test_risk_levels_configurable(self, make_trade):
        config = StatsConfig(risk_levels=(1.0, 2.0))
        stats = categories.risk_stats([make_trade(risk_per_trade=2)], config)
        assert [s.label for s in stats] == ["1%", "2%"]

    def test_evaluation_grade_order(self, make_trade):
        trades = [
            make_trade(evaluation="C"),
            make_trade(evaluation="A+"),
            make_trade(evaluation="B", break_even=True),
            make_trade(evaluation="Z"),
            make_trade(evaluation=None),
        ]
        stats = categories.evaluation_stats(trades)
        assert [s.grade for s in stats] == ["A+", "B", "C"]
        assert stats[1].break_even == 1

    def test_evaluation_grade_override(self, make_trade):
        trades = [make_trade(evaluation="Z"), make_trade(evaluation="A")]
        stats = categories.evaluation_stats(trades, grade_order=["Z"])
        assert [s.grade for s in stats] == ["Z"]


# ---------------------------------------------------------------------------
# 4. Market profit
# ---------------------------------------------------------------------------

class TestMarketStats:
    def test_profit_from_executed_trades(self, make_trade):
        trades = [
            make_trade(market="NQ", trade_outcome="Win", calculated_profit=200),
            make_trade(market="NQ", trade_outcome="Lose", calculated_profit=-50),
            make_trade(market="NQ", trade_outcome="Win", calculated_profit=999, executed=False),
            make_trade(market="ES", trade_outcome="Lose"),
        ]
        stats = _by_label(categories.market_stats(trades, 10_000))
        assert stats["NQ"].total == 3
        assert stats["NQ"].profit == pytest.approx(150.0)
        assert stats["NQ"].pnl_percentage == pytest.approx(1.5)
        assert stats["ES"].profit == pytest.approx(-50.0)
