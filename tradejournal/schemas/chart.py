"""Pydantic schemas for dashboard bar-chart data.

Two chart shapes share one endpoint; ``kind`` tells them apart.
"""

import math
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, computed_field


class WinsLossesDatum(BaseModel):
    category: str
    total_trades: int = 0
    wins: int = 0
    losses: int = 0
    be_wins: int = 0
    be_losses: int = 0
    win_rate: float = 0.0
    win_rate_with_be: float = 0.0


class SingleValueDatum(BaseModel):
    category: str
    value: float | None = None
    total_trades: int = 0


class WinsLossesChart(BaseModel):
    kind: Literal["winsLossesWinRate"] = "winsLossesWinRate"
    title: str
    data: list[WinsLossesDatum] = []

    @computed_field
    @property
    def is_empty(self) -> bool:
        return all(
            d.total_trades == 0 and d.wins == 0 and d.losses == 0 and d.be_wins == 0 and d.be_losses == 0
            for d in self.data
        )


class SingleValueChart(BaseModel):
    kind: Literal["singleValue"] = "singleValue"
    title: str
    data: list[SingleValueDatum] = []

    @computed_field
    @property
    def is_empty(self) -> bool:
        return all(d.value is None or not math.isfinite(d.value) for d in self.data)


ChartData = Annotated[Union[WinsLossesChart, SingleValueChart], Field(discriminator="kind")]
