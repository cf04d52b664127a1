"""eskom-calendar feed client.

Fetches the machine friendly outage feed and the per-area schedule CSVs
from GitHub. No caching and no retries: every call hits the network, and
any failure surfaces as a FetchError.
"""

import logging
from urllib.parse import quote

import httpx

from eskom_api.config import settings
from eskom_api.errors import FetchError
from eskom_api.schemas.outage import PowerOutage
from eskom_api.services.csv_parser import parse_outages

logger = logging.getLogger(__name__)


async def fetch_text(url: str) -> str:
    """GET ``url`` and return its decoded body."""
    try:
        async with httpx.AsyncClient(
            timeout=settings.http_timeout_seconds, follow_redirects=True
        ) as client:
            resp = await client.get(url, headers={"User-Agent": settings.user_agent})
            resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning("Upstream returned %s for %s", e.response.status_code, url)
        raise FetchError(
            f"Failed to get {url}: upstream returned HTTP {e.response.status_code}"
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning("Upstream fetch failed for %s: %s", url, e)
        raise FetchError(f"Failed to get {url}: {e.__class__.__name__}: {e}") from e

    encoding = resp.encoding or "utf-8"
    try:
        text = resp.content.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise FetchError(f"Failed to decode the body of {url} as {encoding}") from e

    logger.info("Fetched %d bytes from %s", len(resp.content), url)
    return text


def schedule_url(area_name: str) -> str:
    return f"{settings.schedule_base_url.rstrip('/')}/{quote(area_name, safe='')}.csv"


async def fetch_outage_feed() -> list[PowerOutage]:
    """Fetch and decode every dated outage in the machine friendly feed."""
    text = await fetch_text(settings.outage_feed_url)
    outages = parse_outages(text)
    logger.info("Outage feed: %d outages", len(outages))
    return outages


async def fetch_schedule_feed(area_name: str) -> str:
    """Fetch the raw recurring schedule CSV for one area."""
    return await fetch_text(schedule_url(area_name))
