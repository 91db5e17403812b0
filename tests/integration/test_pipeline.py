"""
Integration tests for the full pipeline.
Tests: captured JSON documents -> candidate selection -> extraction -> compacted envelope.
"""

import json
import threading
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import requests

from menumine.config.extraction_config import ExtractionConfig
from menumine.contexts.compaction import build_ok_envelope, payload_bytes
from menumine.contexts.orchestration import PipelineState, run_pipeline
from menumine.exceptions import FallbackProbeFailed

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
START = "2026-02-10"
NOW = datetime(2026, 2, 10, 7, 5, tzinfo=ZoneInfo("America/Chicago"))


def load_fixture(name):
    return json.loads((FIXTURES_PATH / name).read_text(encoding="utf-8"))


def sections_of(outcome):
    return [(s.name, s.items) for s in outcome.result.sections]


def lunch_day(*names):
    return {"Lunch": [{"name": n, "displayCategory": "Entrees"} for n in names]}


@pytest.mark.integration
def test_happy_path_day_map():
    """Duplicate pairs collapse and equal-size sections keep first-seen order."""
    document = {
        "02/10/2026": {
            "Lunch": [
                {"name": "Pizza", "displayCategory": "Entrees"},
                {"name": "Pizza", "displayCategory": "Entrees"},
                {"name": "Salad", "displayCategory": "Sides"},
            ]
        }
    }
    config = ExtractionConfig(keyword_pattern="lunch", min_group_pairs=2)

    outcome = run_pipeline([("menu", document)], config, start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.result.date == START
    assert sections_of(outcome) == [("Entrees", ["Pizza"]), ("Sides", ["Salad"])]
    assert outcome.result.fallback_items == []
    assert outcome.envelope["sections"] == [
        {"name": "Entrees", "items_joined": "Pizza"},
        {"name": "Sides", "items_joined": "Salad"},
    ]


@pytest.mark.integration
def test_happy_path_default_threshold_needs_three_pairs():
    document = {
        "02/10/2026": {
            "Lunch": [
                {"name": "Pizza", "displayCategory": "Entrees"},
                {"name": "Salad", "displayCategory": "Sides"},
            ]
        }
    }
    outcome = run_pipeline([("menu", document)], ExtractionConfig(), start_date=START, now=NOW)
    assert outcome.status == "error"

    document["02/10/2026"]["Lunch"].append({"name": "Burger", "displayCategory": "Entrees"})
    outcome = run_pipeline([("menu", document)], ExtractionConfig(), start_date=START, now=NOW)
    assert outcome.status == "ok"
    assert sections_of(outcome) == [("Entrees", ["Pizza", "Burger"]), ("Sides", ["Salad"])]


@pytest.mark.integration
def test_day_map_item_level_pass():
    documents = [
        ("analytics.json", load_fixture("analytics.json")),
        ("day_map_menu.json", load_fixture("day_map_menu.json")),
    ]

    outcome = run_pipeline(documents, ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.strategy == "date-map"
    assert outcome.source == "day_map_menu.json"
    assert sections_of(outcome) == [
        ("Sides", ["Green Beans", "Garlic Bread"]),
        ("Entrees", ["Chicken Parmesan"]),
        ("Chef's Table", ["Chicken Parmesan"]),
        ("Deli", ["Garlic Bread"]),
        ("Soups", ["Tomato Basil Soup"]),
    ]
    assert "Buttermilk Pancakes" not in json.dumps(outcome.envelope)
    assert outcome.envelope["note"] == "Today"
    assert outcome.envelope["date_display"] == "Tue, Feb 10"
    assert outcome.states == [
        PipelineState.START,
        PipelineState.CANDIDATES_GATHERED,
        PipelineState.STRUCTURED_EXTRACTION_TRIED,
        PipelineState.RESULT_FOUND,
        PipelineState.SUCCESS,
    ]


@pytest.mark.integration
def test_day_map_skips_to_next_day():
    documents = [("day_map_menu.json", load_fixture("day_map_menu.json"))]
    outcome = run_pipeline(documents, ExtractionConfig(), start_date="2026-02-11", now=NOW)

    assert outcome.result.date == "2026-02-11"
    assert sections_of(outcome) == [("Entrees", ["Beef Stroganoff"])]
    assert outcome.envelope["note"] is None


@pytest.mark.integration
def test_generic_day_array():
    documents = [("weekly_days.json", load_fixture("weekly_days.json"))]

    outcome = run_pipeline(documents, ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.strategy == "generic"
    assert outcome.result.date == START
    assert sections_of(outcome) == [
        ("Sides", ["Spanish Rice", "Black Beans"]),
        ("Intl", ["Chicken Tacos"]),
        ("Desserts", ["Churros"]),
    ]
    assert PipelineState.GENERIC_EXTRACTION_TRIED in outcome.states
    assert outcome.final_state == PipelineState.SUCCESS


@pytest.mark.integration
def test_day_map_skips_impossible_calendar_day():
    document = {
        "02/30/2026": lunch_day("Ghost Pizza", "Ghost Salad", "Ghost Soup"),
        "03/02/2026": lunch_day("Pizza", "Salad", "Soup"),
    }

    outcome = run_pipeline([("menu", document)], ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.result.date == "2026-03-02"
    assert outcome.envelope["date_display"] == "Mon, Mar 2"
    assert "Ghost" not in json.dumps(outcome.envelope)


@pytest.mark.integration
def test_day_map_with_only_impossible_days_reports_error():
    document = {"02/30/2026": lunch_day("Pizza", "Salad", "Soup")}

    outcome = run_pipeline([("menu", document)], ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "error"
    assert outcome.error_kind == "NoResultFound"
    assert outcome.envelope["status"] == "error"


@pytest.mark.integration
def test_generic_day_array_skips_impossible_calendar_day():
    document = load_fixture("weekly_days.json")
    days = document["data"]["weeks"][0]["days"]
    days[1]["date"] = "2026-13-45"

    documents = [("weekly_days.json", document)]
    outcome = run_pipeline(documents, ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.strategy == "generic"
    assert outcome.result.date == "2026-02-11"
    assert outcome.envelope["date_display"] == "Wed, Feb 11"
    assert "Chicken Tacos" not in json.dumps(outcome.envelope)


@pytest.mark.integration
def test_keyword_is_configurable():
    documents = [("weekly_days.json", load_fixture("weekly_days.json"))]
    config = ExtractionConfig(keyword_pattern=r"\bbreakfast\b", generic_names=("breakfast",))

    outcome = run_pipeline(documents, config, start_date=START, now=NOW)

    assert sections_of(outcome) == [("Grill", ["Scrambled Eggs", "Bacon", "Hash Browns"])]


@pytest.mark.integration
def test_no_result_found():
    documents = [("no_menu.json", load_fixture("no_menu.json"))]

    outcome = run_pipeline(documents, ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "error"
    assert outcome.error_kind == "NoResultFound"
    assert outcome.source == "no_menu.json"
    assert outcome.final_state == PipelineState.FAILURE
    assert outcome.envelope["status"] == "error"
    assert outcome.envelope["error"].startswith("Could not locate a matching menu")
    assert outcome.envelope["sections"] == []
    assert outcome.fits_budget
    assert outcome.oversize is None


@pytest.mark.integration
def test_no_candidates():
    outcome = run_pipeline([], ExtractionConfig(), start_date=START, now=NOW)

    assert outcome.status == "error"
    assert outcome.error_kind == "NoCandidateData"
    assert outcome.states == [PipelineState.START, PipelineState.FAILURE]
    assert outcome.envelope["error"].startswith("Captured 0 usable JSON documents.")


@pytest.mark.integration
def test_all_documents_below_minimum_size():
    config = ExtractionConfig(min_document_bytes=10_000)
    documents = [("analytics.json", load_fixture("analytics.json"))]

    outcome = run_pipeline(documents, config, start_date=START, now=NOW)

    assert outcome.error_kind == "NoCandidateData"
    assert "1 of 1 documents skipped" in str(outcome.error)


@pytest.mark.integration
def test_fallback_probe_supplies_result():
    """A captured page without a day-map triggers probes; the first hit wins."""
    requested = []
    day_map = load_fixture("day_map_menu.json")

    def fetch(url, timeout_s):
        requested.append(url)
        if len(requested) == 1:
            raise FallbackProbeFailed(url, ConnectionError("reset"))
        return day_map

    documents = [("https://dining.test/menu?menuId=314", load_fixture("no_menu.json"))]
    outcome = run_pipeline(documents, ExtractionConfig(), fetch=fetch, start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.strategy == "fallback"
    assert len(requested) == 2
    assert "menuId=314&date=02/10/2026" in requested[0]
    assert "menuId=314&date=02/11/2026" in requested[1]
    assert outcome.source == requested[1]
    assert outcome.result.date == START


@pytest.mark.integration
def test_fallback_survives_raw_transport_error():
    requested = []
    day_map = load_fixture("day_map_menu.json")

    def fetch(url, timeout_s):
        requested.append(url)
        if len(requested) == 1:
            raise requests.Timeout("read timed out")
        return day_map

    documents = [("https://dining.test/menu?menuId=314", load_fixture("no_menu.json"))]
    outcome = run_pipeline(documents, ExtractionConfig(), fetch=fetch, start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert outcome.strategy == "fallback"
    assert outcome.source == requested[1]


@pytest.mark.integration
def test_fallback_cancelled_falls_through_to_generic():
    requested = []
    cancel = threading.Event()
    cancel.set()

    documents = [("https://dining.test/menu?menuId=314", load_fixture("weekly_days.json"))]
    outcome = run_pipeline(
        documents,
        ExtractionConfig(),
        fetch=lambda url, timeout_s: requested.append(url),
        start_date=START,
        now=NOW,
        cancel_event=cancel,
    )

    assert requested == []
    assert outcome.strategy == "generic"


@pytest.mark.integration
def test_forced_compaction_respects_narrowest_caps():
    """A menu too large for every profile but the last is cut to that profile's caps."""
    day = {
        f"Station {s}": [
            {"name": f"Dish {s}-{i} " + "z" * 40, "meal": "Lunch", "displayStation": f"Station Number {s}"}
            for i in range(4)
        ]
        for s in range(8)
    }
    documents = [("menu", {"02/10/2026": day})]
    base = ExtractionConfig()
    last_profile = base.profiles[-1]

    full = run_pipeline(documents, base, start_date=START, now=NOW)
    last_size = payload_bytes(build_ok_envelope(full.result, last_profile, base, NOW))

    outcome = run_pipeline(documents, ExtractionConfig(byte_budget=last_size), start_date=START, now=NOW)

    assert outcome.fits_budget
    assert outcome.compaction.profile_index == len(base.profiles) - 1
    assert outcome.compaction.attempt_sizes == sorted(outcome.compaction.attempt_sizes, reverse=True)
    sections = outcome.envelope["sections"]
    assert len(sections) == last_profile.section_limit
    for section in sections:
        assert section["name"].endswith("…")
        assert len(section["items_joined"].split(", ")) == last_profile.items_per_section
        assert section["items_joined"].endswith("…")


@pytest.mark.integration
def test_oversize_is_reported_not_raised():
    documents = [("day_map_menu.json", load_fixture("day_map_menu.json"))]
    outcome = run_pipeline(documents, ExtractionConfig(byte_budget=40), start_date=START, now=NOW)

    assert outcome.status == "ok"
    assert not outcome.fits_budget
    assert outcome.oversize.budget == 40
    assert outcome.oversize.byte_size == outcome.compaction.byte_size
    assert payload_bytes(outcome.envelope) == outcome.compaction.byte_size
