"""Win/loss counting and win rates.

``OutcomeTally`` is the single counting rule every breakdown reuses: plain
wins and losses exclude break-even trades, which are tallied separately and
only ever inflate the with-BE denominator.
"""

from dataclasses import dataclass

from tradejournal.analytics.math_helpers import percentage
from tradejournal.analytics.outcomes import LOSE, WIN, final_outcome, validates_trades


@dataclass
class OutcomeTally:
    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    be_neutral: int = 0

    def add(self, trade) -> None:
        outcome = final_outcome(trade)
        if trade.break_even:
            if outcome == WIN:
                self.be_wins += 1
            elif outcome == LOSE:
                self.be_losses += 1
            else:
                self.be_neutral += 1
        elif outcome == WIN:
            self.wins += 1
        elif outcome == LOSE:
            self.losses += 1

    @classmethod
    def of(cls, trades) -> "OutcomeTally":
        tally = cls()
        for trade in trades:
            tally.add(trade)
        return tally

    @property
    def break_even(self) -> int:
        return self.be_wins + self.be_losses + self.be_neutral

    @property
    def decided(self) -> int:
        return self.wins + self.losses

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.break_even

    @property
    def win_rate(self) -> float:
        return percentage(self.wins, self.decided)

    @property
    def win_rate_with_be(self) -> float:
        return percentage(self.wins, self.total)


@dataclass
class TradeCounts:
    total_trades: int
    wins: int  # non-BE
    losses: int  # non-BE
    break_even: int
    be_wins: int
    be_losses: int
    win_rate: float
    win_rate_with_be: float

    @property
    def total_wins(self) -> int:
        return self.wins + self.be_wins

    @property
    def total_losses(self) -> int:
        return self.losses + self.be_losses


@validates_trades
def trade_counts(trades) -> TradeCounts:
    """Counts and both win-rate variants for a list of trades."""
    tally = OutcomeTally.of(trades)
    return TradeCounts(
        total_trades=len(trades),
        wins=tally.wins,
        losses=tally.losses,
        break_even=tally.break_even,
        be_wins=tally.be_wins,
        be_losses=tally.be_losses,
        win_rate=tally.win_rate,
        win_rate_with_be=tally.win_rate_with_be,
    )


@dataclass
class PartialTradesStats:
    partial_wins: int
    partial_losses: int
    be_partial_wins: int
    be_partial_losses: int
    partial_win_rate: float  # non-BE partials only
    partial_win_rate_with_be: float  # BE partials with a final result count
    total_partial_trades: int
    total_partials_be: int


@validates_trades
def partial_trades_stats(trades) -> PartialTradesStats:
    """Stats for trades where partial profits were taken."""
    tally = OutcomeTally.of(t for t in trades if t.partials_taken)
    wins_with_be = tally.wins + tally.be_wins
    decided_with_be = tally.decided + tally.be_wins + tally.be_losses
    return PartialTradesStats(
        partial_wins=tally.wins,
        partial_losses=tally.losses,
        be_partial_wins=tally.be_wins,
        be_partial_losses=tally.be_losses,
        partial_win_rate=tally.win_rate,
        partial_win_rate_with_be=percentage(wins_with_be, decided_with_be),
        total_partial_trades=tally.total,
        total_partials_be=tally.break_even,
    )
