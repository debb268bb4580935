"""Pydantic schemas for Account API."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from tradejournal.utils.constants import AVAILABLE_CURRENCIES, TRADING_MODES


class AccountCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    account_balance: float = Field(default=0.0, ge=0)
    currency: str = "USD"
    mode: str = "live"
    is_active: bool = True
    description: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def _trim_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("must not be empty")
        return text

    @field_validator("currency")
    @classmethod
    def _validate_currency(cls, value: str) -> str:
        code = value.strip().upper()
        if code not in AVAILABLE_CURRENCIES:
            raise ValueError(f"must be one of: {', '.join(AVAILABLE_CURRENCIES)}")
        return code

    @field_validator("mode")
    @classmethod
    def _validate_mode(cls, value: str) -> str:
        if value not in TRADING_MODES:
            raise ValueError(f"must be one of: {', '.join(TRADING_MODES)}")
        return value


class AccountRead(BaseModel):
    id: int
    user_id: str
    name: str
    account_balance: float
    currency: str
    mode: str
    is_active: bool
    description: str | None
    created_at: datetime

    model_config = {"from_attributes": True}
