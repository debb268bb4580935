"""Tunable defaults for the statistics layer.

Every aggregator takes a ``StatsConfig``; ``DEFAULT_CONFIG`` carries the values
the dashboard uses when nothing else is configured.
"""

from pydantic import BaseModel, Field, field_validator


class StatsConfig(BaseModel):
    # Fallbacks for null trade fields
    default_risk_pct: float = Field(default=0.5, ge=0)
    default_rr: float = Field(default=2.0, ge=0)

    # Risk-per-trade buckets (percent of account)
    risk_levels: tuple[float, ...] = (0.25, 0.3, 0.35, 0.5, 0.7, 1.0)

    # Evaluation grades, in display priority
    grade_order: tuple[str, ...] = ("A+", "A", "B", "C")

    # Lower edges of the half-open size ranges; the last range is open-ended
    sl_size_bucket_edges: tuple[float, ...] = (0, 10, 20, 30, 40)
    displacement_bucket_edges: tuple[float, ...] = (0, 10, 20, 30, 40)

    # A break-even trade with partials taken books a full win
    be_partials_count_as_win: bool = True

    model_config = {"frozen": True}

    @field_validator("sl_size_bucket_edges", "displacement_bucket_edges")
    @classmethod
    def _validate_edges(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        if not value:
            raise ValueError("must contain at least one edge")
        if any(b <= a for a, b in zip(value, value[1:])):
            raise ValueError("edges must be strictly increasing")
        return value


DEFAULT_CONFIG = StatsConfig()
