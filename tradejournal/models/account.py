"""Account model — balance and currency the statistics are measured against."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class Account(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    name: str
    account_balance: float = 0.0
    currency: str = "USD"
    mode: str = "live"  # "live", "demo", "backtesting"
    is_active: bool = Field(default=True)
    description: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
