"""Trade and account persistence.

Trades are fetched in fixed-size offset pages, newest first, until the exact
row count for the filter has been read.
"""

import logging
from datetime import date

from sqlmodel import Session, func, select

from tradejournal.analytics.defaults import StatsConfig
from tradejournal.analytics.pnl import trade_pnl
from tradejournal.config import settings
from tradejournal.models.account import Account
from tradejournal.models.trade import Trade
from tradejournal.schemas.trade import TradeCreate

logger = logging.getLogger(__name__)


def _trade_filters(
    user_id: str,
    account_id: int,
    mode: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    executed: bool | None = None,
) -> list:
    clauses = [Trade.user_id == user_id, Trade.account_id == account_id]
    if mode is not None:
        clauses.append(Trade.mode == mode)
    if start_date is not None:
        clauses.append(Trade.trade_date >= start_date)
    if end_date is not None:
        clauses.append(Trade.trade_date <= end_date)
    if executed is True:
        # null counts as executed
        clauses.append((Trade.executed == True) | (Trade.executed == None))  # noqa: E711, E712
    elif executed is False:
        clauses.append(Trade.executed == False)  # noqa: E712
    return clauses


def count_trades(session: Session, user_id: str, account_id: int, **filters) -> int:
    clauses = _trade_filters(user_id, account_id, **filters)
    return session.exec(select(func.count()).select_from(Trade).where(*clauses)).one()


def fetch_trade_page(
    session: Session,
    user_id: str,
    account_id: int,
    offset: int = 0,
    limit: int | None = None,
    **filters,
) -> list[Trade]:
    limit = limit or settings.trades_page_size
    stmt = (
        select(Trade)
        .where(*_trade_filters(user_id, account_id, **filters))
        .order_by(Trade.trade_date.desc(), Trade.id.desc())
        .offset(offset)
        .limit(limit)
    )
    return list(session.exec(stmt).all())


def fetch_all_trades(
    session: Session,
    user_id: str,
    account_id: int,
    page_size: int | None = None,
    **filters,
) -> list[Trade]:
    """Every trade matching the filters, read page by page."""
    page_size = page_size or settings.trades_page_size
    total = count_trades(session, user_id, account_id, **filters)
    trades: list[Trade] = []
    while len(trades) < total:
        page = fetch_trade_page(session, user_id, account_id, offset=len(trades), limit=page_size, **filters)
        if not page:
            break
        trades.extend(page)
    logger.debug(f"Fetched {len(trades)}/{total} trades for account {account_id}")
    return trades


def get_account(session: Session, user_id: str, account_id: int) -> Account | None:
    account = session.get(Account, account_id)
    if account is None or account.user_id != user_id:
        return None
    return account


def get_active_account(session: Session, user_id: str, mode: str | None = None) -> Account | None:
    stmt = select(Account).where(Account.user_id == user_id, Account.is_active == True)  # noqa: E712
    if mode is not None:
        stmt = stmt.where(Account.mode == mode)
    return session.exec(stmt.order_by(Account.id)).first()


def create_trade(
    session: Session,
    user_id: str,
    payload: TradeCreate,
    account: Account,
    config: StatsConfig | None = None,
) -> Trade:
    """Persist a trade, deriving P&L and weekday when the client did not send them."""
    trade = Trade(user_id=user_id, **payload.model_dump())
    if trade.day_of_week is None:
        trade.day_of_week = trade.trade_date.strftime("%A")
    if trade.calculated_profit is None or trade.pnl_percentage is None:
        pnl = trade_pnl(trade, account.account_balance, config or settings.stats_config())
        if trade.calculated_profit is None:
            trade.calculated_profit = pnl.calculated_profit
        if trade.pnl_percentage is None:
            trade.pnl_percentage = pnl.pnl_percentage
    session.add(trade)
    session.commit()
    session.refresh(trade)
    logger.info(f"Trade {trade.id} created: {trade.market} {trade.trade_outcome} on {trade.trade_date}")
    return trade
