"""Trade model — one journaled trade, executed or only planned."""

from datetime import date, datetime, timezone
from sqlmodel import SQLModel, Field


class Trade(SQLModel, table=True):
    __tablename__ = "trade"

    id: int | None = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)
    account_id: int = Field(foreign_key="account.id", index=True)
    mode: str = Field(default="live", index=True)  # "live", "demo", "backtesting"

    trade_date: date = Field(index=True)
    trade_time: str | None = None  # "HH:MM" or "HH:MM:SS"
    day_of_week: str | None = None

    market: str = Field(index=True)
    setup_type: str | None = None
    liquidity: str | None = None
    direction: str | None = None  # "Long" or "Short"
    mss: str | None = None
    evaluation: str | None = None  # "A+", "A", "B", "C"
    trend: str | None = None
    news_related: bool = False
    news_name: str | None = None
    news_intensity: int | None = None  # 1..3
    local_high_low: bool | None = None

    trade_outcome: str  # "Win" or "Lose"
    break_even: bool = False
    be_final_result: str | None = None  # overrides trade_outcome on BE trades
    reentry: bool = False
    partials_taken: bool = False
    executed: bool | None = True
    launch_hour: bool = False

    risk_per_trade: float | None = None  # percent of account
    risk_reward_ratio: float | None = None
    sl_size: float | None = None
    displacement_size: float | None = None

    calculated_profit: float | None = None
    pnl_percentage: float | None = None
    notes: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
