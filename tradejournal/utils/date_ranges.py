"""Dashboard date-range presets."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta

PRESETS = ("year", "15days", "30days", "month")


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date


def build_preset_range(preset: str, today: date | None = None) -> DateRange:
    """Current year, last 15 / 30 days (today included), or current month."""
    today = today or date.today()
    if preset == "year":
        return DateRange(date(today.year, 1, 1), date(today.year, 12, 31))
    if preset == "15days":
        return DateRange(today - timedelta(days=14), today)
    if preset == "30days":
        return DateRange(today - timedelta(days=29), today)
    if preset == "month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return DateRange(date(today.year, today.month, 1), date(today.year, today.month, last_day))
    raise ValueError(f"Unknown date-range preset '{preset}', expected one of {', '.join(PRESETS)}")


def matching_preset(date_range: DateRange, today: date | None = None) -> str | None:
    for preset in PRESETS:
        if build_preset_range(preset, today) == date_range:
            return preset
    return None


def is_custom_date_range(date_range: DateRange, today: date | None = None) -> bool:
    return matching_preset(date_range, today) is None
