from fastapi import APIRouter

from eskom_api.schemas.outage import Area, SearchResult
from eskom_api.services import feed_client
from eskom_api.services.area_query import MATCH_ALL, fuzzy_search, list_areas

router = APIRouter(tags=["areas"])


@router.get("/list_areas", response_model=list[str])
async def list_all_areas():
    """List every area name in the outage feed, sorted."""
    return await list_matching_areas(MATCH_ALL)


@router.get("/list_areas/{regex}", response_model=list[str])
async def list_matching_areas(regex: str):
    """List the sorted area names matching a regular expression."""
    outages = await feed_client.fetch_outage_feed()
    return list_areas(outages, regex)


@router.get("/fuzzy_search/{query}", response_model=list[SearchResult[Area]])
async def search_areas(query: str):
    """Fuzzy search area names, best match first."""
    outages = await feed_client.fetch_outage_feed()
    return fuzzy_search(outages, query)
