"""Dashboard API — summary stats, equity curves and chart data."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from tradejournal.analytics.selection import (
    DashboardStats,
    ExecutionFilter,
    FilterSelection,
    ViewMode,
    resolve_dashboard_stats,
)
from tradejournal.analytics.sequences import equity_curve
from tradejournal.api.deps import get_current_user_id, get_user_account
from tradejournal.config import settings
from tradejournal.database import get_session
from tradejournal.models.account import Account
from tradejournal.schemas.chart import ChartData
from tradejournal.services.chart_data import CHART_CATEGORIES, build_chart
from tradejournal.services.trade_store import fetch_all_trades
from tradejournal.utils.constants import ALL_MARKETS
from tradejournal.utils.date_ranges import DateRange, build_preset_range, is_custom_date_range

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"], dependencies=[Depends(get_current_user_id)])


def get_selection(
    view_mode: ViewMode = ViewMode.YEARLY,
    year: int | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    preset: str | None = None,
    market: str = ALL_MARKETS,
    execution: ExecutionFilter = ExecutionFilter.ALL,
) -> FilterSelection:
    """Query parameters → FilterSelection. Date-range mode defaults to the current month."""
    if view_mode == ViewMode.YEARLY:
        return FilterSelection(view_mode=view_mode, market=market, execution=execution, year=year or date.today().year)

    if preset is not None or start_date is None or end_date is None:
        try:
            date_range = build_preset_range(preset or "month")
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        start_date, end_date = date_range.start_date, date_range.end_date
    if start_date > end_date:
        raise HTTPException(status_code=422, detail="start_date must be on or before end_date")
    return FilterSelection(
        view_mode=view_mode,
        market=market,
        execution=execution,
        start_date=start_date,
        end_date=end_date,
    )


def _period_bounds(selection: FilterSelection) -> tuple[date, date]:
    if selection.view_mode == ViewMode.YEARLY:
        return date(selection.year, 1, 1), date(selection.year, 12, 31)
    return selection.start_date, selection.end_date


def _load_stats(session: Session, account: Account, selection: FilterSelection) -> DashboardStats:
    start, end = _period_bounds(selection)
    trades = fetch_all_trades(
        session, account.user_id, account.id, mode=account.mode, start_date=start, end_date=end
    )
    try:
        return resolve_dashboard_stats(trades, selection, account.account_balance, config=settings.stats_config())
    except (TypeError, ValueError) as e:
        logger.warning(f"Dashboard stats failed for account {account.id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/summary")
def dashboard_summary(
    account: Account = Depends(get_user_account),
    selection: FilterSelection = Depends(get_selection),
    session: Session = Depends(get_session),
):
    """Every dashboard aggregate for the selected period and filters."""
    stats = _load_stats(session, account, selection)
    custom_range = None
    if selection.view_mode == ViewMode.DATE_RANGE:
        custom_range = is_custom_date_range(DateRange(selection.start_date, selection.end_date))
    return {
        "account_id": account.id,
        "currency": account.currency,
        "account_balance": account.account_balance,
        "view_mode": selection.view_mode.value,
        "market": selection.market,
        "execution": selection.execution.value,
        "year": selection.year,
        "start_date": selection.start_date,
        "end_date": selection.end_date,
        "is_custom_range": custom_range,
        "stats": stats,
    }


@router.get("/equity/{account_id}")
def account_equity_curve(
    year: int | None = None,
    account: Account = Depends(get_user_account),
    session: Session = Depends(get_session),
):
    """Daily equity curve of executed trades, for one year or all time."""
    start = date(year, 1, 1) if year else None
    end = date(year, 12, 31) if year else None
    trades = fetch_all_trades(session, account.user_id, account.id, mode=account.mode, start_date=start, end_date=end)
    try:
        points = equity_curve(trades, account.account_balance, settings.stats_config())
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [
        {
            "date": p.date.isoformat(),
            "balance": p.balance,
            "drawdown_pct": p.drawdown_pct,
        }
        for p in points
    ]


@router.get("/chart/{category}", response_model=ChartData)
def dashboard_chart(
    category: str,
    account: Account = Depends(get_user_account),
    selection: FilterSelection = Depends(get_selection),
    session: Session = Depends(get_session),
):
    if category not in CHART_CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown chart category '{category}'")
    stats = _load_stats(session, account, selection)
    return build_chart(category, stats)
