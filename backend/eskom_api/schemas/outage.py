from datetime import date, datetime, time
from enum import Enum
from functools import total_ordering
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import AliasChoices, AwareDatetime, BaseModel, Field


class PowerOutage(BaseModel):
    """A dated outage for one area, as published in the machine friendly feed."""

    area_name: str
    stage: int
    start: AwareDatetime
    # upstream spells the column "finsh"
    finish: AwareDatetime = Field(validation_alias=AliasChoices("finsh", "finish"))
    source: str = ""


class WeeklyRecurrence(BaseModel):
    kind: Literal["weekly"] = "weekly"


class MonthlyRecurrence(BaseModel):
    kind: Literal["monthly"] = "monthly"


class PeriodicRecurrence(BaseModel):
    kind: Literal["periodic"] = "periodic"
    offset: date  # day 1 of the first cycle
    period_days: int


Recurrence = Annotated[
    WeeklyRecurrence | MonthlyRecurrence | PeriodicRecurrence,
    Field(discriminator="kind"),
]


class RecurringOutage(BaseModel):
    start_time: time
    finish_time: time  # may be earlier than start_time for overnight slots
    stage: int
    recurrence: Recurrence
    day1_of_recurrence: int  # day of week, day of month or day of cycle


class RecurringSchedule(BaseModel):
    id: int = 0
    outages: list[RecurringOutage] = []
    source: list[str] = []
    info: list[str] = []
    last_updated: datetime | None = None
    valid_from: datetime | None = None
    valid_until: datetime | None = None


class Province(str, Enum):
    EASTERN_CAPE = "EasternCape"
    FREE_STATE = "FreeState"
    GAUTENG = "Gauteng"
    KWAZULU_NATAL = "KwaZuluNatal"
    LIMPOPO = "Limpopo"
    MPUMALANGA = "Mpumalanga"
    NORTH_WEST = "NorthWest"
    NORTHERN_CAPE = "NorthernCape"
    WESTERN_CAPE = "WesternCape"


class Coords(BaseModel):
    lat: float
    lng: float


class ContiguousRegion(BaseModel):
    """A fully connected region: every boundary point reachable from every other."""

    boundary: list[Coords] = []


class Area(BaseModel):
    id: int = 0
    schedule_id: int = 0
    name: str
    aliases: list[str] = []
    province: Province | None = None
    municipality: str | None = None
    coords: list[ContiguousRegion] = []


T = TypeVar("T")


@total_ordering
class SearchResult(BaseModel, Generic[T]):
    """A scored search hit. Compares by score only, never by payload."""

    score: int
    result: T

    def __eq__(self, other):
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score == other.score

    def __lt__(self, other):
        if not isinstance(other, SearchResult):
            return NotImplemented
        return self.score < other.score
