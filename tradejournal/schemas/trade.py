"""Pydantic schemas for Trade API."""

from datetime import date, datetime
import re

from pydantic import BaseModel, Field, field_validator, model_validator

from tradejournal.utils.constants import (
    DIRECTIONS,
    MARKET_MAX_LENGTH,
    MARKET_MIN_LENGTH,
    TRADE_OUTCOMES,
    TRADING_MODES,
)

# Letters and digits, optionally one slash for pairs: EURUSD, EUR/USD, DE30EU
_MARKET_RE = re.compile(r"^[A-Z0-9]+(/[A-Z0-9]+)?$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?$")


def normalize_market(value: str) -> str:
    """Trimmed, upper-cased market symbol; raises ValueError when malformed."""
    market = value.strip().upper()
    if not market:
        raise ValueError("Market is required.")
    if len(market) < MARKET_MIN_LENGTH:
        raise ValueError(f"Market must be at least {MARKET_MIN_LENGTH} characters.")
    if len(market) > MARKET_MAX_LENGTH:
        raise ValueError(f"Market must be at most {MARKET_MAX_LENGTH} characters.")
    if not _MARKET_RE.fullmatch(market):
        raise ValueError("Use only letters and numbers, or a pair with one slash (e.g. EURUSD, EUR/USD).")
    return market


class TradeCreate(BaseModel):
    account_id: int
    mode: str = "live"
    trade_date: date
    trade_time: str | None = None
    day_of_week: str | None = None

    market: str
    setup_type: str | None = Field(default=None, max_length=120)
    liquidity: str | None = Field(default=None, max_length=120)
    direction: str | None = None
    mss: str | None = Field(default=None, max_length=120)
    evaluation: str | None = Field(default=None, max_length=8)
    trend: str | None = None
    news_related: bool = False
    news_name: str | None = Field(default=None, max_length=120)
    news_intensity: int | None = Field(default=None, ge=1, le=3)
    local_high_low: bool | None = None

    trade_outcome: str
    break_even: bool = False
    be_final_result: str | None = None
    reentry: bool = False
    partials_taken: bool = False
    executed: bool | None = True
    launch_hour: bool = False

    risk_per_trade: float | None = Field(default=None, ge=0, le=100)
    risk_reward_ratio: float | None = Field(default=None, ge=0)
    sl_size: float | None = Field(default=None, ge=0)
    displacement_size: float | None = Field(default=None, ge=0)

    calculated_profit: float | None = None
    pnl_percentage: float | None = None
    notes: str | None = None

    @field_validator("market")
    @classmethod
    def _validate_market(cls, value: str) -> str:
        return normalize_market(value)

    @field_validator("trade_outcome")
    @classmethod
    def _validate_outcome(cls, value: str) -> str:
        if value not in TRADE_OUTCOMES:
            raise ValueError(f"must be one of: {', '.join(TRADE_OUTCOMES)}")
        return value

    @field_validator("be_final_result")
    @classmethod
    def _validate_be_result(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if value not in TRADE_OUTCOMES:
            raise ValueError(f"must be one of: {', '.join(TRADE_OUTCOMES)}")
        return value

    @field_validator("direction")
    @classmethod
    def _validate_direction(cls, value: str | None) -> str | None:
        if value is None:
            return None
        if value not in DIRECTIONS:
            raise ValueError(f"must be one of: {', '.join(DIRECTIONS)}")
        return value

    @field_validator("mode")
    @classmethod
    def _validate_mode(cls, value: str) -> str:
        if value not in TRADING_MODES:
            raise ValueError(f"must be one of: {', '.join(TRADING_MODES)}")
        return value

    @field_validator("trade_time")
    @classmethod
    def _validate_time(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not _TIME_RE.fullmatch(text):
            raise ValueError("must be HH:MM or HH:MM:SS")
        return text

    @model_validator(mode="after")
    def _validate_break_even(self):
        if self.be_final_result is not None and not self.break_even:
            raise ValueError("be_final_result is only allowed on break-even trades")
        return self


class TradeRead(BaseModel):
    id: int
    user_id: str
    account_id: int
    mode: str
    trade_date: date
    trade_time: str | None
    day_of_week: str | None
    market: str
    setup_type: str | None
    liquidity: str | None
    direction: str | None
    mss: str | None
    evaluation: str | None
    trend: str | None
    news_related: bool
    news_name: str | None
    news_intensity: int | None
    local_high_low: bool | None
    trade_outcome: str
    break_even: bool
    be_final_result: str | None
    reentry: bool
    partials_taken: bool
    executed: bool | None
    launch_hour: bool
    risk_per_trade: float | None
    risk_reward_ratio: float | None
    sl_size: float | None
    displacement_size: float | None
    calculated_profit: float | None
    pnl_percentage: float | None
    notes: str | None
    created_at: datetime

    model_config = {"from_attributes": True}


class TradePage(BaseModel):
    items: list[TradeRead]
    total: int
    offset: int
    limit: int
