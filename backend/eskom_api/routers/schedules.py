from fastapi import APIRouter

from eskom_api.schemas.outage import RecurringSchedule
from eskom_api.services.schedules import get_recurring_schedule

router = APIRouter(tags=["schedules"])


@router.get("/schedules/{area_name}", response_model=RecurringSchedule)
async def get_area_schedule(area_name: str):
    """Get the recurring loadshedding schedule of an area."""
    return await get_recurring_schedule(area_name)
