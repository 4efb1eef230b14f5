"""
Catalog loader (CSV / Excel / JSON -> Event list)
=================================================

This module reads an event catalog file and converts each row into an `Event`.

Key ideas:
- We try multiple possible column names because feeds name things differently
  ("start", "Start Date", "startDate", ...).
- Conversion helpers (_to_float/_to_str/_to_bool) safely handle blank cells.
- Timestamps with an offset are converted to naive local time, so every
  loaded event compares cleanly against the naive catalog clock.
- Rows that fail validation are logged and skipped; the rest still load.
- The loader returns immutable records; it never writes back to the file.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging
import os
import re

import pandas as pd

from .geo import is_valid_coordinate
from .models import CatalogError, Event, EventCategory, EventLocation

logger = logging.getLogger(__name__)

# Column order used by exports (and accepted back by the loader)
RECORD_FIELDS = (
    "event_id", "title", "description", "category", "start_date", "end_date",
    "venue", "address", "latitude", "longitude", "contact_info", "image_url",
    "is_sponsored",
)

_ALIASES: Dict[str, tuple] = {
    "event_id": ("event_id", "id", "uuid"),
    "title": ("title", "name", "event"),
    "description": ("description", "details", "summary"),
    "category": ("category", "type", "tag"),
    "start_date": ("start_date", "start", "starts", "start time", "startDate"),
    "end_date": ("end_date", "end", "ends", "end time", "endDate"),
    "venue": ("venue", "place"),
    "address": ("address", "location"),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lon", "lng", "long"),
    "contact_info": ("contact_info", "contact", "contactInfo"),
    "image_url": ("image_url", "image", "imageURL"),
    "is_sponsored": ("is_sponsored", "sponsored", "isSponsored"),
}
_REQUIRED = ("title", "category", "start_date", "end_date", "latitude", "longitude")


def _missing(x: Any) -> bool:
    if x is None:
        return True
    try:
        return bool(pd.isna(x))
    except (TypeError, ValueError):
        return False


def _to_str(x: Any) -> str:
    if _missing(x): return ""
    return str(x).strip()


def _to_opt_str(x: Any) -> Optional[str]:
    s = _to_str(x)
    return s or None


def _to_float(x: Any) -> float:
    """Convert a cell to float; blanks become NaN so coordinate checks catch them."""
    if _missing(x): return float("nan")
    try: return float(x)
    except (TypeError, ValueError): return float("nan")


def _to_bool(x: Any) -> bool:
    if _missing(x): return False
    if isinstance(x, str):
        return x.strip().lower() in ("1", "true", "yes", "y", "t")
    return bool(x)


def _to_datetime(x: Any, field: str) -> datetime:
    if _missing(x) or _to_str(x) == "":
        raise CatalogError(f"Missing required field: {field}")
    try:
        ts = pd.to_datetime(x)
    except (TypeError, ValueError) as e:
        raise CatalogError(f"Invalid {field}: {x!r}") from e
    if pd.isna(ts):
        raise CatalogError(f"Invalid {field}: {x!r}")
    dt = ts.to_pydatetime()
    # offsets ("Z", "+01:00") become naive local time, matching datetime.now()
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())


def _col(columns: Iterable[str], field: str) -> Optional[str]:
    """Find the column for `field` among its aliases, or None."""
    norm_map = {_norm(c): c for c in columns}
    for alias in _ALIASES[field]:
        hit = norm_map.get(_norm(alias))
        if hit is not None:
            return hit
    return None


def event_from_record(rec: Mapping[str, Any]) -> Event:
    """Build one Event from a plain mapping (one CSV/Excel row or JSON object).

    Keys follow RECORD_FIELDS or any alias in _ALIASES.
    """
    cols = {f: _col(rec.keys(), f) for f in _ALIASES}
    for f in _REQUIRED:
        if cols[f] is None:
            raise CatalogError(f"Missing required field: {f}")

    def get(f: str) -> Any:
        c = cols[f]
        return rec[c] if c is not None else None

    kwargs: Dict[str, Any] = dict(
        title=_to_str(get("title")),
        description=_to_str(get("description")),
        category=EventCategory.from_label(_to_str(get("category"))),
        start_date=_to_datetime(get("start_date"), "start_date"),
        end_date=_to_datetime(get("end_date"), "end_date"),
        location=EventLocation(
            venue=_to_str(get("venue")),
            address=_to_str(get("address")),
            latitude=_to_float(get("latitude")),
            longitude=_to_float(get("longitude")),
        ),
        contact_info=_to_str(get("contact_info")),
        image_url=_to_opt_str(get("image_url")),
        is_sponsored=_to_bool(get("is_sponsored")),
    )
    loc = kwargs["location"]
    if not is_valid_coordinate(loc.latitude, loc.longitude):
        raise CatalogError(f"Invalid coordinates for '{kwargs['title']}': ({loc.latitude}, {loc.longitude})")
    event_id = _to_opt_str(get("event_id"))
    if event_id:
        kwargs["event_id"] = event_id
    return Event(**kwargs)


def events_to_records(events: Iterable[Event]) -> List[Dict[str, Any]]:
    """Flatten events into JSON/CSV friendly dicts keyed by RECORD_FIELDS."""
    return [
        {
            "event_id": e.event_id,
            "title": e.title,
            "description": e.description,
            "category": e.category.label,
            "start_date": e.start_date.isoformat(),
            "end_date": e.end_date.isoformat(),
            "venue": e.location.venue,
            "address": e.location.address,
            "latitude": e.location.latitude,
            "longitude": e.location.longitude,
            "contact_info": e.contact_info,
            "image_url": e.image_url,
            "is_sponsored": e.is_sponsored,
        }
        for e in events
    ]


def _read_frame(path: str) -> pd.DataFrame:
    ext = os.path.splitext(path)[1].lower()
    if ext == ".csv":
        return pd.read_csv(path)
    if ext in (".xlsx", ".xlsm"):
        return pd.read_excel(path, engine="openpyxl")
    if ext == ".json":
        return pd.read_json(path, orient="records", convert_dates=False)
    raise ValueError(f"Unsupported catalog format {ext!r}: use .csv, .xlsx or .json")


def load_catalog(path: str) -> List[Event]:
    """Load an event catalog file.

    Raises KeyError if a required column is missing entirely; individual bad
    rows are skipped with a warning.
    """
    df = _read_frame(path)
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)

    for f in _REQUIRED:
        if _col(df.columns, f) is None:
            raise KeyError(f"Missing required column. Tried={_ALIASES[f]}. Available={list(df.columns)}")

    events: List[Event] = []
    for i, row in df.iterrows():
        try:
            events.append(event_from_record(row.to_dict()))
        except CatalogError as e:
            logger.warning("Skipping catalog row %s: %s", i, e)
    logger.info("Loaded %d of %d catalog rows from %s", len(events), len(df), path)
    return events
