"""Tests for area listing, per-area outages and fuzzy search."""

from datetime import datetime, timedelta, timezone

import pytest

from eskom_api.errors import NotFoundError, ParseError, RegexError
from eskom_api.schemas.outage import Area, PowerOutage, SearchResult
from eskom_api.services.area_query import (
    fuzzy_search,
    list_areas,
    normalize_area_text,
    outages_for_area,
)
from eskom_api.services.fuzzy import fuzzy_score

SAST = timezone(timedelta(hours=2))


def _outage(area_name: str, hour: int = 16, stage: int = 2) -> PowerOutage:
    start = datetime(2023, 3, 14, hour, 0, tzinfo=SAST)
    return PowerOutage(
        area_name=area_name,
        stage=stage,
        start=start,
        finish=start + timedelta(hours=2, minutes=30),
        source="https://twitter.com/Eskom_SA",
    )


FEED = [
    _outage("western-cape-stellenbosch", 16),
    _outage("city-of-cape-town-area-1", 20),
    _outage("western-cape-stellenbosch", 23, stage=4),
    _outage("gauteng-ekurhuleni-block-3", 6),
    _outage("city-of-cape-town-area-10", 8),
]


# --- outages_for_area ---

def test_outages_for_area():
    outages = outages_for_area(FEED, "western-cape-stellenbosch")
    assert len(outages) == 2
    assert all(o.area_name == "western-cape-stellenbosch" for o in outages)


def test_outages_for_area_is_exact_match():
    outages = outages_for_area(FEED, "city-of-cape-town-area-1")
    assert [o.area_name for o in outages] == ["city-of-cape-town-area-1"]


def test_outages_for_unknown_area():
    with pytest.raises(NotFoundError, match="atlantis"):
        outages_for_area(FEED, "atlantis")


def test_power_outage_structural_equality():
    assert _outage("a") == _outage("a")
    assert _outage("a") != _outage("a", stage=5)


# --- list_areas ---

def test_list_all_areas_sorted_and_distinct():
    expected = sorted({o.area_name for o in FEED})
    assert list_areas(FEED) == expected
    assert list_areas(FEED, ".*") == expected


def test_list_areas_unanchored_search():
    assert list_areas(FEED, "cape-town") == [
        "city-of-cape-town-area-1",
        "city-of-cape-town-area-10",
    ]
    assert list_areas(FEED, "area-1$") == ["city-of-cape-town-area-1"]


def test_list_areas_no_match():
    assert list_areas(FEED, "^limpopo") == []


def test_list_areas_invalid_regex():
    with pytest.raises(RegexError) as exc_info:
        list_areas(FEED, "(")
    assert isinstance(exc_info.value, ParseError)
    assert exc_info.value.status_code == 400


# --- fuzzy search ---

def test_normalize_area_text():
    assert normalize_area_text("Western-Cape/Stellenbosch") == "western cape stellenbosch"
    assert normalize_area_text("area_1") == "area_1"


def test_fuzzy_search_finds_area():
    results = fuzzy_search(FEED, "stellenbosch")
    assert results[0].result.name == "western-cape-stellenbosch"
    assert results[0].score > 0


def test_fuzzy_search_unrelated_query():
    assert fuzzy_search(FEED, "zzzqqqxxx") == []


def test_fuzzy_search_descending_and_distinct():
    results = fuzzy_search(FEED, "cape")
    names = [r.result.name for r in results]
    assert len(names) == len(set(names))
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_fuzzy_search_only_fills_name():
    area = fuzzy_search(FEED, "ekurhuleni")[0].result
    assert area.name == "gauteng-ekurhuleni-block-3"
    assert area.id == 0
    assert area.schedule_id == 0
    assert area.aliases == []
    assert area.province is None
    assert area.municipality is None
    assert area.coords == []


def test_fuzzy_search_is_deterministic():
    first = [r.model_dump() for r in fuzzy_search(FEED, "cape town")]
    second = [r.model_dump() for r in fuzzy_search(FEED, "cape town")]
    assert first == second


def test_search_result_compares_score_only():
    a = SearchResult[Area](score=10, result=Area(name="a"))
    b = SearchResult[Area](score=10, result=Area(name="b"))
    c = SearchResult[Area](score=3, result=Area(name="a"))
    assert a == b
    assert c < a
    assert max([c, a]).score == 10


# --- fuzzy scoring ---

def test_fuzzy_score_requires_subsequence():
    assert fuzzy_score("western cape stellenbosch", "zzz") is None
    assert fuzzy_score("abc", "cba") is None


def test_fuzzy_score_empty_pattern():
    assert fuzzy_score("anything", "") == 0


def test_fuzzy_score_prefers_contiguous_matches():
    assert fuzzy_score("abc def", "abc") > fuzzy_score("axbxc", "abc")


def test_fuzzy_score_prefers_start_of_word():
    assert fuzzy_score("cape town", "t") > fuzzy_score("cattle", "t")


def test_fuzzy_score_case_insensitive():
    assert fuzzy_score("Stellenbosch", "STEL") == fuzzy_score("Stellenbosch", "stel")
