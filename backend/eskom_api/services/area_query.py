"""Queries over a fetched outage feed: per-area outages, area listing, fuzzy search.

Areas are not stored anywhere; they are the distinct ``area_name`` values of
the outages passed in.
"""

import logging
import re
from collections.abc import Iterable, Sequence

from eskom_api.errors import NotFoundError, RegexError
from eskom_api.schemas.outage import Area, PowerOutage, SearchResult
from eskom_api.services.fuzzy import fuzzy_score

logger = logging.getLogger(__name__)

MATCH_ALL = ".*"

_NON_WORD = re.compile(r"[^A-Za-z0-9_]")


def normalize_area_text(text: str) -> str:
    """Replace every char outside [A-Za-z0-9_] with a space and lowercase."""
    return _NON_WORD.sub(" ", text).lower()


def _distinct_names(outages: Iterable[PowerOutage]) -> list[str]:
    return list(dict.fromkeys(o.area_name for o in outages))


def outages_for_area(outages: Sequence[PowerOutage], area_name: str) -> list[PowerOutage]:
    matching = [o for o in outages if o.area_name == area_name]
    if not matching:
        raise NotFoundError(f"No areas found that match `{area_name}`")
    return matching


def list_areas(outages: Sequence[PowerOutage], pattern: str = MATCH_ALL) -> list[str]:
    """Sorted distinct area names containing a match for ``pattern``."""
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise RegexError(f"Error parsing '{pattern}' as regex: {e}") from e

    return sorted(name for name in _distinct_names(outages) if regex.search(name))


def fuzzy_search(outages: Sequence[PowerOutage], query: str) -> list[SearchResult[Area]]:
    """Rank distinct area names against ``query``, best match first."""
    needle = normalize_area_text(query)
    results = []
    for name in _distinct_names(outages):
        score = fuzzy_score(normalize_area_text(name), needle)
        if score is not None:
            results.append(SearchResult[Area](score=score, result=Area(name=name)))

    results.sort(key=lambda r: r.score, reverse=True)
    logger.debug("Fuzzy search %r: %d matches", query, len(results))
    return results
