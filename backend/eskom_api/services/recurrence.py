"""Normalize the three raw schedule shapes into RecurringOutage."""

from datetime import time

from eskom_api.errors import ValidationError
from eskom_api.schemas.outage import (
    MonthlyRecurrence,
    PeriodicRecurrence,
    RecurringOutage,
    WeeklyRecurrence,
)
from eskom_api.services.csv_parser import (
    RawMonthlyShedding,
    RawPeriodicShedding,
    RawShedding,
    RawWeeklyShedding,
    parse_calendar_date,
    parse_time_of_day,
)


def _window(raw: RawShedding) -> tuple[time, time]:
    return (
        parse_time_of_day(raw.start_time, "start_time"),
        parse_time_of_day(raw.finish_time, "finsh_time"),
    )


def normalize_weekly(raw: RawWeeklyShedding) -> RecurringOutage:
    if not 1 <= raw.day_of_week <= 7:
        raise ValidationError(
            f"Day of the week must be one of 1, 2, 3, 4, 5, 6, 7, got {raw.day_of_week}"
        )
    start, finish = _window(raw)
    return RecurringOutage(
        start_time=start,
        finish_time=finish,
        stage=raw.stage,
        recurrence=WeeklyRecurrence(),
        day1_of_recurrence=raw.day_of_week,
    )


def normalize_monthly(raw: RawMonthlyShedding) -> RecurringOutage:
    if not 1 <= raw.date_of_month <= 31:
        raise ValidationError(
            f"Date of month must be in the range [1, 31], got {raw.date_of_month}"
        )
    start, finish = _window(raw)
    return RecurringOutage(
        start_time=start,
        finish_time=finish,
        stage=raw.stage,
        recurrence=MonthlyRecurrence(),
        day1_of_recurrence=raw.date_of_month,
    )


def normalize_periodic(raw: RawPeriodicShedding) -> RecurringOutage:
    if not 1 <= raw.day_of_cycle <= raw.period_of_cycle:
        raise ValidationError(
            f"Day of the cycle {raw.day_of_cycle} must be between 1 and "
            f"the period of the cycle {raw.period_of_cycle}"
        )
    offset = parse_calendar_date(raw.start_of_cycle, "start_of_cycle")
    start, finish = _window(raw)
    return RecurringOutage(
        start_time=start,
        finish_time=finish,
        stage=raw.stage,
        recurrence=PeriodicRecurrence(offset=offset, period_days=raw.period_of_cycle),
        day1_of_recurrence=raw.day_of_cycle,
    )


_NORMALIZERS = {
    "weekly": normalize_weekly,
    "monthly": normalize_monthly,
    "periodic": normalize_periodic,
}


def normalize(raw: RawShedding) -> RecurringOutage:
    """Convert any raw schedule row into a RecurringOutage."""
    return _NORMALIZERS[raw.kind](raw)
