"""Account CRUD API."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from tradejournal.database import get_session
from tradejournal.models.account import Account
from tradejournal.schemas.account import AccountCreate, AccountRead
from tradejournal.api.deps import get_current_user_id, get_user_account
from tradejournal.services.trade_store import get_active_account

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountRead])
def list_accounts(
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    stmt = select(Account).where(Account.user_id == user_id).order_by(Account.id)
    return session.exec(stmt).all()


@router.post("", response_model=AccountRead, status_code=201)
def create_account(
    data: AccountCreate,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    account = Account(user_id=user_id, **data.model_dump())
    session.add(account)
    session.commit()
    session.refresh(account)
    logger.info(f"Account {account.id} created for user {user_id}")
    return account


@router.get("/active", response_model=AccountRead)
def active_account(
    mode: str | None = None,
    user_id: str = Depends(get_current_user_id),
    session: Session = Depends(get_session),
):
    """First active account of the user, optionally for one mode."""
    account = get_active_account(session, user_id, mode)
    if account is None:
        raise HTTPException(status_code=404, detail="No active account")
    return account


@router.get("/{account_id}", response_model=AccountRead)
def get_account(account: Account = Depends(get_user_account)):
    return account
