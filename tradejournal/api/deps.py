"""Shared API dependencies."""

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from tradejournal.database import get_session
from tradejournal.models.account import Account
from tradejournal.services.trade_store import get_account


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """User id forwarded by the upstream auth provider."""
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return user_id


def get_user_account(
    account_id: int,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
) -> Account:
    account = get_account(session, user_id, account_id)
    if account is None:
        raise HTTPException(status_code=404, detail="Account not found")
    return account
