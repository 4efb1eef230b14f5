"""Unit tests for catalog loading."""
import json
import logging
from datetime import datetime, timedelta, timezone

import pandas as pd
import pytest

from conftest import NOW
from countrypal.engine import EventCatalog, compute_visible_events
from countrypal.loader import event_from_record, events_to_records, load_catalog
from countrypal.models import CatalogError, EventCategory, FilterState


CSV_TEXT = """Name,Category,Start,End,Venue,Address,Lat,Lng,Contact,Sponsored
Cuckfield Quiz Night,Community Event,2026-10-20 19:00,2026-10-20 22:00,Queen's Hall,High Street,50.9978,-0.1421,quiz@example.org,yes
Apple Day,farmers market,2026-10-18 10:00,2026-10-18 14:00,Orchard,Lindfield,51.0131,-0.0759,,
Backwards Fair,Craft Fair,2026-10-20 19:00,2026-10-20 18:00,Hall,Street,51.0,0.0,,
Mystery Night,Rave,2026-10-20 19:00,2026-10-20 22:00,Barn,Lane,51.0,0.0,,
Lost Fete,Village Fete,2026-10-21 10:00,2026-10-21 12:00,Field,Lane,,,,
"""


class TestLoadCatalog:
    """Test cases for load_catalog."""

    def test_csv_with_aliases_and_bad_rows(self, tmp_path, caplog):
        """Good rows load; bad rows are skipped with a warning."""
        path = tmp_path / "events.csv"
        path.write_text(CSV_TEXT, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="countrypal.loader"):
            events = load_catalog(str(path))

        assert [e.title for e in events] == ["Cuckfield Quiz Night", "Apple Day"]
        quiz, apple = events
        assert quiz.category is EventCategory.COMMUNITY
        assert quiz.start_date == datetime(2026, 10, 20, 19, 0)
        assert quiz.location.venue == "Queen's Hall"
        assert quiz.location.latitude == pytest.approx(50.9978)
        assert quiz.is_sponsored is True
        assert apple.category is EventCategory.FARMERS_MARKET
        assert apple.is_sponsored is False
        assert apple.contact_info == ""
        assert apple.image_url is None

        skipped = [r for r in caplog.records if "Skipping catalog row" in r.getMessage()]
        assert len(skipped) == 3

    def test_utc_suffixed_dates_load_as_local_naive(self, tmp_path):
        """'Z' and offset timestamps become naive local time like the catalog clock."""
        path = tmp_path / "utc.csv"
        path.write_text(
            "title,category,start_date,end_date,latitude,longitude\n"
            "Quiz,Community Event,2030-06-01T10:00:00Z,2030-06-01T12:00:00+01:00,51.0,-0.1\n",
            encoding="utf-8",
        )

        [event] = load_catalog(str(path))

        assert event.start_date.tzinfo is None
        assert event.end_date.tzinfo is None
        assert event.start_date == datetime(2030, 6, 1, 10, 0, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
        assert event.end_date - event.start_date == timedelta(hours=1)
        assert event.is_upcoming(NOW)
        assert not event.is_past(NOW)

    def test_mixed_offset_and_naive_dates(self, tmp_path):
        path = tmp_path / "mixed.csv"
        path.write_text(
            "title,category,start_date,end_date,latitude,longitude\n"
            "Late,Book Sale,2030-06-02T10:00:00Z,2030-06-02T12:00:00Z,51.0,-0.1\n"
            "Early,Book Sale,2030-06-01 10:00,2030-06-01 12:00,51.0,-0.1\n"
            "Gone,Book Sale,2020-06-01T10:00:00Z,2020-06-01T12:00:00Z,51.0,-0.1\n",
            encoding="utf-8",
        )

        events = load_catalog(str(path))

        assert len(events) == 3
        assert all(e.start_date.tzinfo is None for e in events)
        shown = compute_visible_events(events, FilterState(), None, NOW)
        assert [e.title for e in shown] == ["Early", "Late"]
        everything = compute_visible_events(events, FilterState(show_upcoming_only=False), None, NOW)
        assert [e.title for e in everything] == ["Gone", "Early", "Late"]

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "events.csv"
        path.write_text("title,category,start_date,end_date\nA,Book Sale,2026-10-20,2026-10-20\n", encoding="utf-8")
        with pytest.raises(KeyError):
            load_catalog(str(path))

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "events.txt"
        path.write_text("nothing", encoding="utf-8")
        with pytest.raises(ValueError):
            load_catalog(str(path))

    def test_json_records(self, tmp_path):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([{
            "event_id": "abc-123",
            "title": "Balcombe Harvest Festival",
            "description": "Harvest supper",
            "category": "Seasonal Event",
            "startDate": "2026-11-25T18:00:00",
            "endDate": "2026-11-25T21:00:00",
            "venue": "St Mary's Church",
            "address": "Bramble Hill, Balcombe",
            "latitude": 51.0531,
            "longitude": -0.1289,
            "contactInfo": "harvest@balcombe.org",
            "imageURL": None,
            "isSponsored": False,
        }]), encoding="utf-8")

        events = load_catalog(str(path))

        assert len(events) == 1
        assert events[0].event_id == "abc-123"
        assert events[0].category is EventCategory.SEASONAL
        assert events[0].end_date == datetime(2026, 11, 25, 21, 0)

    def test_excel(self, tmp_path):
        path = tmp_path / "events.xlsx"
        pd.DataFrame([{
            "Title": "Horsted Keynes Craft Fair",
            "Category": "Craft Fair",
            "Start Date": datetime(2026, 10, 28, 10, 0),
            "End Date": datetime(2026, 10, 28, 16, 0),
            "Venue": "Village Hall",
            "Address": "Church Lane",
            "Latitude": 51.0428,
            "Longitude": -0.0395,
        }]).to_excel(path, index=False, engine="openpyxl")

        events = load_catalog(str(path))

        assert len(events) == 1
        assert events[0].category is EventCategory.CRAFT_FAIR
        assert events[0].start_date == datetime(2026, 10, 28, 10, 0)

    def test_exported_json_loads_back(self, sample_events, tmp_path):
        path = tmp_path / "export.json"
        EventCatalog(events=sample_events, clock=lambda: NOW).export_json(str(path))

        loaded = load_catalog(str(path))

        assert [e.event_id for e in loaded] == [e.event_id for e in sorted(sample_events, key=lambda e: e.start_date)]
        assert loaded[0].start_date == NOW.replace(day=17)


class TestRecords:
    """Test cases for record conversion helpers."""

    def test_invalid_coordinates_rejected(self):
        with pytest.raises(CatalogError):
            event_from_record({
                "title": "Nowhere", "category": "Book Sale",
                "start_date": "2026-10-20 10:00", "end_date": "2026-10-20 12:00",
                "latitude": 123.0, "longitude": 0.0,
            })

    def test_missing_required_field(self):
        with pytest.raises(CatalogError):
            event_from_record({"title": "No dates", "category": "Book Sale", "latitude": 51.0, "longitude": 0.0})

    def test_unparseable_date(self):
        with pytest.raises(CatalogError):
            event_from_record({
                "title": "Someday", "category": "Book Sale",
                "start_date": "not a date", "end_date": "2026-10-20 12:00",
                "latitude": 51.0, "longitude": 0.0,
            })

    def test_records_carry_labels_and_iso_dates(self, sample_events):
        rec = events_to_records(sample_events[:1])[0]
        assert rec["category"] == "Village Fete"
        assert rec["start_date"] == sample_events[0].start_date.isoformat()
        assert rec["is_sponsored"] is True
        assert event_from_record(rec) == sample_events[0]
