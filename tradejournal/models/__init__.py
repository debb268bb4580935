"""Database models."""

from tradejournal.models.account import Account
from tradejournal.models.trade import Trade

__all__ = [
    "Account",
    "Trade",
]
