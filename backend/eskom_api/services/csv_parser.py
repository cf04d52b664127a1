"""CSV decoding for the eskom-calendar feeds.

Two schemas are handled:
  - the machine friendly outage feed (one row per dated outage)
  - per-area recurring schedules, whose header row decides between the
    monthly, weekly and N-day-cycle shapes

Rows that fail to decode are either skipped with a warning or, in strict
mode, reported together in one ParseError.
"""

import csv
import io
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from eskom_api.config import settings
from eskom_api.errors import ParseError
from eskom_api.schemas.outage import PowerOutage

logger = logging.getLogger(__name__)

_OUTAGE_COLUMNS = ("area_name", "stage", "start", "source")
_FINISH_COLUMNS = ("finsh", "finish")
_PERIODIC_MARKER = re.compile(r"^day_of_(\d+)_day_cycle$")

R = TypeVar("R")

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"


def parse_time_of_day(value: str, field: str = "time") -> time:
    try:
        return datetime.strptime(value, TIME_FORMAT).time()
    except ValueError as e:
        raise ParseError(f"Invalid {field} {value!r}, expected HH:MM") from e


def parse_calendar_date(value: str, field: str = "date") -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise ParseError(f"Invalid {field} {value!r}, expected YYYY-MM-DD") from e


class RawWeeklyShedding(BaseModel):
    """A slot repeating on the same weekday, Monday being 1."""
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["weekly"] = "weekly"
    start_time: str
    finish_time: str = Field(alias="finsh_time")
    stage: int
    day_of_week: int


class RawMonthlyShedding(BaseModel):
    """A slot repeating on the same date every month."""
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["monthly"] = "monthly"
    start_time: str
    finish_time: str = Field(alias="finsh_time")
    stage: int
    date_of_month: int


class RawPeriodicShedding(BaseModel):
    """A slot repeating every ``period_of_cycle`` days from ``start_of_cycle``."""
    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["periodic"] = "periodic"
    start_time: str
    finish_time: str = Field(alias="finsh_time")
    stage: int
    day_of_cycle: int  # first day of the cycle is 1
    period_of_cycle: int
    start_of_cycle: str


RawShedding = Annotated[
    RawWeeklyShedding | RawMonthlyShedding | RawPeriodicShedding,
    Field(discriminator="kind"),
]

_raw_shedding_adapter = TypeAdapter(RawShedding)


class ScheduleShape(str, Enum):
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    PERIODIC = "periodic"


@dataclass(frozen=True)
class RowError:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


def _read_rows(text: str) -> tuple[list[str], list[tuple[int, dict]]]:
    """Split CSV text into its header and (line number, record) pairs."""
    reader = csv.DictReader(io.StringIO(text))
    try:
        headers = reader.fieldnames
        if not headers:
            raise ParseError("CSV has no header row")
        rows = [(reader.line_num, record) for record in reader]
    except csv.Error as e:
        raise ParseError(f"Malformed CSV near line {reader.line_num}: {e}") from e
    return list(headers), rows


def _field_count_error(record: dict, width: int) -> str | None:
    extra = record.get(None) or []
    present = [v for k, v in record.items() if k is not None and v is not None]
    count = len(present) + len(extra)
    if count != width:
        return f"found {count} fields, header has {width}"
    return None


def _describe(exc: PydanticValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )


def _decode_rows(
    rows: Iterable[tuple[int, dict]],
    width: int,
    build: Callable[[dict], R],
    what: str,
    strict: bool,
) -> list[R]:
    decoded: list[R] = []
    errors: list[RowError] = []
    for line, record in rows:
        problem = _field_count_error(record, width)
        if problem:
            errors.append(RowError(line, problem))
            continue
        try:
            decoded.append(build(record))
        except PydanticValidationError as e:
            errors.append(RowError(line, _describe(e)))
        except ParseError as e:
            errors.append(RowError(line, e.message))

    if errors:
        if strict:
            raise ParseError(
                f"Malformed rows in {what}: " + "; ".join(str(e) for e in errors)
            )
        logger.warning(
            "Skipped %d malformed rows in %s (first: %s)", len(errors), what, errors[0]
        )
    return decoded


def parse_outages(text: str, strict: bool | None = None) -> list[PowerOutage]:
    """Decode the machine friendly outage feed."""
    if strict is None:
        strict = settings.strict_rows

    headers, rows = _read_rows(text)
    missing = [c for c in _OUTAGE_COLUMNS if c not in headers]
    if not any(c in headers for c in _FINISH_COLUMNS):
        missing.append("finsh")
    if missing:
        raise ParseError(
            f"Outage feed is missing columns {missing}, headers were {headers}"
        )

    return _decode_rows(rows, len(headers), PowerOutage.model_validate, "outage feed", strict)


def detect_schedule_shape(headers: Iterable[str]) -> ScheduleShape:
    """Pick the schedule shape from the marker column present in the header row."""
    headers = list(headers)
    if "date_of_month" in headers:
        return ScheduleShape.MONTHLY
    if "day_of_week" in headers:
        return ScheduleShape.WEEKLY
    if any(_PERIODIC_MARKER.match(h) for h in headers):
        return ScheduleShape.PERIODIC
    raise ParseError(f"Couldn't parse headers {headers}")


def _check_formats(raw: RawShedding) -> RawShedding:
    """Reject rows whose times or cycle start are not in the strict formats."""
    parse_time_of_day(raw.start_time, "start_time")
    parse_time_of_day(raw.finish_time, "finsh_time")
    if isinstance(raw, RawPeriodicShedding):
        parse_calendar_date(raw.start_of_cycle, "start_of_cycle")
    return raw


def _periodic_builder(headers: list[str]) -> Callable[[dict], RawPeriodicShedding]:
    marker = next(h for h in headers if _PERIODIC_MARKER.match(h))
    period = _PERIODIC_MARKER.match(marker).group(1)

    def build(record: dict) -> RawPeriodicShedding:
        values = dict(record)
        values.setdefault("day_of_cycle", values.get(marker))
        values.setdefault("period_of_cycle", period)
        values["kind"] = ScheduleShape.PERIODIC.value
        return _check_formats(_raw_shedding_adapter.validate_python(values))

    return build


def parse_schedule(text: str, strict: bool | None = None) -> list[RawShedding]:
    """Decode a recurring schedule CSV into raw rows of its detected shape."""
    if strict is None:
        strict = settings.strict_rows

    headers, rows = _read_rows(text)
    shape = detect_schedule_shape(headers)

    if shape is ScheduleShape.PERIODIC:
        build = _periodic_builder(headers)
    else:
        def build(record: dict) -> RawShedding:
            raw = _raw_shedding_adapter.validate_python({**record, "kind": shape.value})
            return _check_formats(raw)

    logger.debug("Schedule CSV detected as %s with %d rows", shape.value, len(rows))
    return _decode_rows(rows, len(headers), build, f"{shape.value} schedule", strict)
