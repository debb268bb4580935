"""CLI tool for journal operations.

Usage:
    python -m tradejournal.cli create-account
    python -m tradejournal.cli summary <account_id> [year]
"""

import sys
from datetime import date

from pydantic import ValidationError
from sqlmodel import Session

from tradejournal.analytics.selection import FilterSelection, ViewMode, resolve_dashboard_stats
from tradejournal.config import settings
from tradejournal.database import engine, create_db_and_tables
from tradejournal.models.account import Account
from tradejournal.schemas.account import AccountCreate
from tradejournal.services.trade_store import fetch_all_trades


def create_account():
    """Create a trading account interactively."""
    create_db_and_tables()

    user_id = input("User id: ").strip()
    if not user_id:
        print("User id cannot be empty.")
        sys.exit(1)

    try:
        data = AccountCreate(
            name=input("Account name: "),
            account_balance=float(input("Starting balance: ") or 0),
            currency=input("Currency [USD]: ") or "USD",
            mode=input("Mode (live/demo/backtesting) [live]: ") or "live",
        )
    except (ValidationError, ValueError) as e:
        print(f"Invalid account: {e}")
        sys.exit(1)

    account = Account(user_id=user_id, **data.model_dump())
    with Session(engine) as session:
        session.add(account)
        session.commit()
        session.refresh(account)

    print(f"\nAccount '{account.name}' created with id {account.id}.")


def summary(account_id: int, year: int):
    """Print the headline stats of one account for a year."""
    create_db_and_tables()

    with Session(engine) as session:
        account = session.get(Account, account_id)
        if account is None:
            print(f"Account {account_id} not found.")
            sys.exit(1)
        trades = fetch_all_trades(
            session,
            account.user_id,
            account.id,
            mode=account.mode,
            start_date=date(year, 1, 1),
            end_date=date(year, 12, 31),
        )

    selection = FilterSelection(view_mode=ViewMode.YEARLY, year=year)
    stats = resolve_dashboard_stats(trades, selection, account.account_balance, config=settings.stats_config())
    counts = stats.trade_counts

    print(f"\n{account.name} ({account.currency}), {year}")
    print(f"  Trades:            {counts.total_trades}")
    print(f"  Wins / Losses:     {counts.wins} / {counts.losses}  (BE {counts.break_even})")
    print(f"  Win rate:          {counts.win_rate:.1f}%  ({counts.win_rate_with_be:.1f}% with BE)")
    print(f"  Total profit:      {stats.profit.total_profit:.2f}")
    print(f"  Max drawdown:      {stats.profit.max_drawdown:.2f}%")
    print(f"  Profit factor:     {stats.macro.profit_factor:.2f}")
    print(f"  Sharpe:            {stats.macro.sharpe_with_be:.2f}")
    print(f"  TQI:               {stats.macro.trade_quality_index:.2f}")
    print(f"  R total:           {stats.macro.multiple_r:.2f}")
    print(f"  Streaks (W / L):   {stats.streaks.max_winning_streak} / {stats.streaks.max_losing_streak}")
    if stats.monthly.best_month:
        print(f"  Best month:        {stats.monthly.best_month.month} ({stats.monthly.best_month.stats.profit:.2f})")
    if stats.monthly.worst_month:
        print(f"  Worst month:       {stats.monthly.worst_month.month} ({stats.monthly.worst_month.stats.profit:.2f})")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m tradejournal.cli <command>")
        print("Commands: create-account, summary <account_id> [year]")
        sys.exit(1)

    command = sys.argv[1]
    if command == "create-account":
        create_account()
    elif command == "summary":
        if len(sys.argv) < 3:
            print("Usage: python -m tradejournal.cli summary <account_id> [year]")
            sys.exit(1)
        year = int(sys.argv[3]) if len(sys.argv) > 3 else date.today().year
        summary(int(sys.argv[2]), year)
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
