"""Shared fixtures for CountryPal tests."""
from datetime import datetime, timedelta

import pytest

from countrypal.models import Event, EventCategory, EventLocation
from countrypal.sample_data import load_sample_events

# Wednesday, 14 October 2026, midday
NOW = datetime(2026, 10, 14, 12, 0)

HAYWARDS_HEATH = (51.0044, -0.1021)


def make_event(
    title="Test Event",
    category=EventCategory.COMMUNITY,
    start=None,
    hours=2,
    description="",
    venue="Village Hall",
    address="High Street",
    latitude=51.0044,
    longitude=-0.1021,
    **kwargs,
):
    """Build an Event with sensible defaults; `start` defaults to one day after NOW."""
    start = start or NOW + timedelta(days=1)
    return Event(
        title=title,
        description=description,
        category=category,
        start_date=start,
        end_date=start + timedelta(hours=hours),
        location=EventLocation(venue=venue, address=address, latitude=latitude, longitude=longitude),
        contact_info="info@example.org",
        **kwargs,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def sample_events():
    """The built-in eleven-event catalog, anchored at NOW."""
    return load_sample_events(NOW)
