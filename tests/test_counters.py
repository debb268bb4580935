"""Tests for outcome classification, trade counts and partial-trade stats."""

from types import SimpleNamespace

import pytest

from tradejournal.analytics.categories import market_stats
from tradejournal.analytics.counters import OutcomeTally, partial_trades_stats, trade_counts
from tradejournal.analytics.outcomes import (
    as_date,
    ensure_balance,
    final_outcome,
    minutes_of_day,
    realized_pnl,
    synthetic_pnl,
)
from tradejournal.analytics.defaults import StatsConfig
from tradejournal.analytics.pnl import trade_pnl


# ---------------------------------------------------------------------------
# 1. Input contract
# ---------------------------------------------------------------------------

class TestInputContract:
    def test_trades_must_be_a_list(self):
        with pytest.raises(TypeError):
            trade_counts("not a list")

    def test_trades_must_be_records(self):
        with pytest.raises(TypeError):
            trade_counts([{"trade_outcome": "Win"}])

    def test_record_missing_break_even_rejected(self, make_trade):
        trade = make_trade()
        del trade.break_even
        with pytest.raises(TypeError, match=r"trades\[0\] is not a trade record: missing break_even"):
            trade_counts([trade])

    def test_bare_outcome_and_date_rejected(self):
        bare = SimpleNamespace(trade_outcome="Win", trade_date="2024-01-02")
        with pytest.raises(TypeError, match="market") as excinfo:
            market_stats([bare], 10_000)
        assert "break_even" in str(excinfo.value)
        assert "trade_outcome" not in str(excinfo.value)

    def test_be_final_result_optional(self, make_trade):
        trade = make_trade(break_even=True)
        del trade.be_final_result
        assert trade_counts([trade]).break_even == 1

    def test_dict_input_rejected(self):
        with pytest.raises(TypeError):
            trade_counts({"a": 1})

    def test_negative_balance_rejected(self):
        with pytest.raises(ValueError):
            ensure_balance(-1)

    def test_non_numeric_balance_rejected(self):
        with pytest.raises(TypeError):
            ensure_balance("1000")
        with pytest.raises(TypeError):
            ensure_balance(True)

    def test_unparseable_date_rejected(self):
        with pytest.raises(ValueError):
            as_date("15/01/2024")

    def test_iso_datetime_string_accepted(self):
        assert as_date("2024-03-05T10:00:00Z").isoformat() == "2024-03-05"


# ---------------------------------------------------------------------------
# 2. Outcome attribution
# ---------------------------------------------------------------------------

class TestFinalOutcome:
    def test_be_final_result_overrides_outcome(self, make_trade):
        trade = make_trade(trade_outcome="Lose", break_even=True, be_final_result="Win")
        assert final_outcome(trade) == "Win"

    def test_be_final_result_ignored_on_non_be_trade(self, make_trade):
        trade = make_trade(trade_outcome="Lose", break_even=False, be_final_result="Win")
        assert final_outcome(trade) == "Lose"

    def test_missing_outcome(self, make_trade):
        assert final_outcome(make_trade(trade_outcome=None)) is None


class TestMinutesOfDay:
    def test_parses_hh_mm_and_seconds(self):
        assert minutes_of_day("09:30") == 570
        assert minutes_of_day("23:59:59") == 23 * 60 + 59

    def test_rejects_garbage(self):
        assert minutes_of_day("late") is None
        assert minutes_of_day("25:00") is None
        assert minutes_of_day(None) is None


# ---------------------------------------------------------------------------
# 3. Trade counts
# ---------------------------------------------------------------------------

class TestTradeCounts:
    def test_empty(self):
        counts = trade_counts([])
        assert counts.total_trades == 0
        assert counts.win_rate == 0
        assert counts.win_rate_with_be == 0

    def test_mixed(self, make_trade):
        trades = [
            make_trade(trade_outcome="Win"),
            make_trade(trade_outcome="Win"),
            make_trade(trade_outcome="Lose"),
            make_trade(trade_outcome="Win", break_even=True),
            make_trade(trade_outcome="Lose", break_even=True),
        ]
        counts = trade_counts(trades)
        assert counts.total_trades == 5
        assert (counts.wins, counts.losses, counts.break_even) == (2, 1, 2)
        assert (counts.be_wins, counts.be_losses) == (1, 1)
        assert counts.win_rate == pytest.approx(200 / 3)
        assert counts.win_rate_with_be == pytest.approx(40.0)
        assert counts.total_wins == 3
        assert counts.total_losses == 2

    def test_rates_stay_in_bounds(self, make_trade):
        trades = [make_trade(trade_outcome="Win") for _ in range(7)]
        counts = trade_counts(trades)
        assert counts.win_rate == 100
        assert 0 <= counts.win_rate_with_be <= 100

    def test_adding_be_lowers_with_be_rate_only(self, make_trade):
        trades = [make_trade(trade_outcome="Win"), make_trade(trade_outcome="Lose")]
        before = trade_counts(trades)
        after = trade_counts(trades + [make_trade(trade_outcome="Win", break_even=True)])
        assert after.win_rate_with_be < before.win_rate_with_be
        assert after.win_rate_with_be == pytest.approx(100 / 3)
        assert after.win_rate == before.win_rate == 50

    def test_input_not_mutated(self, make_trade):
        trades = [make_trade(trade_date="2024-02-01"), make_trade(trade_date="2024-01-01")]
        snapshot = [vars(t).copy() for t in trades]
        first = trade_counts(trades)
        assert trade_counts(trades) == first
        assert [vars(t) for t in trades] == snapshot

    def test_tally_counts_be_without_result_as_neutral(self, make_trade):
        tally = OutcomeTally.of([make_trade(trade_outcome=None, break_even=True)])
        assert tally.be_neutral == 1
        assert tally.break_even == 1


# ---------------------------------------------------------------------------
# 4. Partial trades
# ---------------------------------------------------------------------------

class TestPartialTrades:
    def test_partials_split(self, make_trade):
        trades = [
            make_trade(partials_taken=True, trade_outcome="Win"),
            make_trade(partials_taken=True, trade_outcome="Lose"),
            make_trade(partials_taken=True, break_even=True, trade_outcome="Lose", be_final_result="Win"),
            make_trade(partials_taken=False, trade_outcome="Win"),
        ]
        stats = partial_trades_stats(trades)
        assert (stats.partial_wins, stats.partial_losses) == (1, 1)
        assert (stats.be_partial_wins, stats.be_partial_losses) == (1, 0)
        assert stats.partial_win_rate == 50
        assert stats.partial_win_rate_with_be == pytest.approx(200 / 3)
        assert stats.total_partial_trades == 3
        assert stats.total_partials_be == 1


# ---------------------------------------------------------------------------
# 5. P&L primitives
# ---------------------------------------------------------------------------

class TestPnl:
    def test_null_risk_and_rr_use_defaults(self, make_trade):
        assert synthetic_pnl(make_trade(trade_outcome="Win"), 10_000) == pytest.approx(100.0)
        assert synthetic_pnl(make_trade(trade_outcome="Lose"), 10_000) == pytest.approx(-50.0)

    def test_be_partials_policy(self, make_trade):
        trade = make_trade(break_even=True, partials_taken=True, risk_per_trade=1, risk_reward_ratio=3)
        assert synthetic_pnl(trade, 1000) == pytest.approx(30.0)
        assert synthetic_pnl(trade, 1000, StatsConfig(be_partials_count_as_win=False)) == 0

    def test_realized_prefers_stored_profit(self, make_trade):
        trade = make_trade(trade_outcome="Win", calculated_profit=42.5)
        assert realized_pnl(trade, 10_000) == 42.5

    def test_trade_pnl_calculator(self, make_trade):
        win = trade_pnl(make_trade(trade_outcome="Win", risk_per_trade=1, risk_reward_ratio=2.5), 2000)
        assert win.pnl_percentage == pytest.approx(2.5)
        assert win.calculated_profit == pytest.approx(50.0)
        loss = trade_pnl(make_trade(trade_outcome="Lose", risk_per_trade=1), 2000)
        assert loss.pnl_percentage == pytest.approx(-1.0)
        assert loss.calculated_profit == pytest.approx(-20.0)

    def test_trade_pnl_zero_for_be_and_empty_account(self, make_trade):
        assert trade_pnl(make_trade(break_even=True), 2000).calculated_profit == 0
        assert trade_pnl(make_trade(trade_outcome="Win"), 0).pnl_percentage == 0
