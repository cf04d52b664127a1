"""Recurring schedule assembly: fetch an area's CSV, decode, normalize."""

import logging

from eskom_api.schemas.outage import RecurringSchedule
from eskom_api.services import feed_client
from eskom_api.services.csv_parser import parse_schedule
from eskom_api.services.recurrence import normalize

logger = logging.getLogger(__name__)


def build_schedule(text: str) -> RecurringSchedule:
    outages = [normalize(raw) for raw in parse_schedule(text)]
    # TODO: fill id, source, info and validity dates once the upstream CSVs carry them
    return RecurringSchedule(outages=outages)


async def get_recurring_schedule(area_name: str) -> RecurringSchedule:
    text = await feed_client.fetch_schedule_feed(area_name)
    schedule = build_schedule(text)
    logger.info("Schedule for %s: %d recurring outages", area_name, len(schedule.outages))
    return schedule
