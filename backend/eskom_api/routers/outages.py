from fastapi import APIRouter

from eskom_api.schemas.outage import PowerOutage
from eskom_api.services import feed_client
from eskom_api.services.area_query import outages_for_area

router = APIRouter(tags=["outages"])


@router.get("/outages/{area_name}", response_model=list[PowerOutage])
async def get_area_outages(area_name: str):
    """Get every scheduled outage for an area, by exact area name."""
    outages = await feed_client.fetch_outage_feed()
    return outages_for_area(outages, area_name)
