"""Trade journal API."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.config import settings
from tradejournal.database import get_session
from tradejournal.models.trade import Trade
from tradejournal.schemas.trade import TradeCreate, TradePage, TradeRead
from tradejournal.services import trade_store
from tradejournal.api.deps import get_current_user_id

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.get("", response_model=TradePage)
def list_trades(
    account_id: int,
    mode: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    executed: bool | None = None,
    limit: int | None = None,
    offset: int = 0,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    limit = min(limit or settings.trades_page_size, settings.trades_page_size)
    filters = {"mode": mode, "start_date": start_date, "end_date": end_date, "executed": executed}
    items = trade_store.fetch_trade_page(session, user_id, account_id, offset=offset, limit=limit, **filters)
    total = trade_store.count_trades(session, user_id, account_id, **filters)
    return TradePage(
        items=[TradeRead.model_validate(t) for t in items],
        total=total,
        offset=offset,
        limit=limit,
    )


@router.post("", response_model=TradeRead, status_code=201)
def create_trade(
    data: TradeCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    account = trade_store.get_account(session, user_id, data.account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return trade_store.create_trade(session, user_id, data, account)


@router.get("/{trade_id}", response_model=TradeRead)
def get_trade(
    trade_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    trade = session.get(Trade, trade_id)
    if not trade or trade.user_id != user_id:
        raise HTTPException(status_code=404, detail="Trade not found")
    return trade
