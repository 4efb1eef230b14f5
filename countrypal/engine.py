"""
Core engine (CountryPal)
========================

This is the heart of the project. The engine answers one question: which
events should the user see right now?

1) Load catalog -> list of Event records (immutable)
2) Hold the current FilterState and optional user location
3) Derive the visible events with `compute_visible_events` (pure function)
4) Recompute and notify subscribers whenever an input changes (EventCatalog)

Predicate pipeline (all conjunctive, applied in this order):
- upcoming only  : drop events that already ended
- categories     : keep selected categories (empty selection -> nothing)
- search         : case-insensitive substring in title/description/venue/address
- this weekend   : start inside [Saturday 00:00, Monday 00:00) of the current ISO week
- near me        : within 10 km of the user (no-op without a location fix)
- family friendly: family categories, or "family"/"child" in title/description

The result is ordered by start date with a stable merge sort.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple
import logging

from .geo import Coordinate, haversine_m, is_valid_coordinate
from .models import (ALL_CATEGORIES, Event, EventCategory, FilterState,
                     toggle_category)
from .sorting import merge_sort

logger = logging.getLogger(__name__)

NEAR_ME_RADIUS_M = 10_000.0
WEEKEND_LENGTH = timedelta(days=2)
FAMILY_CATEGORIES: FrozenSet[EventCategory] = frozenset({
    EventCategory.VILLAGE_FETE,
    EventCategory.FARMERS_MARKET,
    EventCategory.CRAFT_FAIR,
    EventCategory.COMMUNITY,
})
FAMILY_KEYWORDS = ("family", "child")

__all__ = [
    "compute_visible_events", "toggle_category", "weekend_window",
    "matches_search", "is_family_friendly", "is_near", "category_counts",
    "EventCatalog", "NEAR_ME_RADIUS_M",
]


# ---------------- Predicates ----------------
def matches_search(event: Event, text: str) -> bool:
    """Case-insensitive substring match on title, description, venue and address.

    The text is used as typed (whitespace included); only "" matches everything.
    """
    needle = (text or "").casefold()
    if not needle:
        return True
    haystacks = (event.title, event.description, event.location.venue, event.location.address)
    return any(needle in h.casefold() for h in haystacks)


def weekend_window(now: datetime) -> Tuple[datetime, datetime]:
    """Return the half-open [start, end) window of the current weekend.

    Weeks start on Monday (ISO). The week ends at the next Monday 00:00 in
    `now`'s timezone; the weekend is the two days before that. If the week end
    falls outside the representable calendar the window starts at `now`.
    """
    try:
        next_monday = now.date() + timedelta(days=7 - now.weekday())
        start = datetime.combine(next_monday, time.min, tzinfo=now.tzinfo) - WEEKEND_LENGTH
    except OverflowError:
        start = now
    try:
        end = start + WEEKEND_LENGTH
    except OverflowError:
        end = datetime.max.replace(tzinfo=now.tzinfo)
    return start, end


def is_near(event: Event, user: Coordinate, radius_m: float = NEAR_ME_RADIUS_M) -> bool:
    """Within `radius_m` of `user`.

    Events with missing/NaN/out-of-range coordinates are excluded on purpose:
    a NaN distance would compare False anyway, this makes it explicit.
    """
    loc = event.location
    if not is_valid_coordinate(loc.latitude, loc.longitude):
        return False
    return haversine_m(user, loc.coordinate) <= radius_m


def is_family_friendly(event: Event) -> bool:
    if event.category in FAMILY_CATEGORIES:
        return True
    text = f"{event.title}\n{event.description}".casefold()
    return any(k in text for k in FAMILY_KEYWORDS)


def category_counts(events: Iterable[Event]) -> Dict[EventCategory, int]:
    """Number of events per category (every category present, zero included)."""
    counts = {c: 0 for c in EventCategory}
    for e in events:
        counts[e.category] += 1
    return counts


# ---------------- Derivation ----------------
def compute_visible_events(
    events: Sequence[Event],
    state: FilterState,
    user_location: Optional[Coordinate],
    now: datetime,
) -> List[Event]:
    """Return the events to display for `state`, ordered by start date.

    Pure: inputs are never modified and the same inputs always give the same
    ordered output. An empty list is a normal result.
    """
    out: List[Event] = list(events)

    if state.show_upcoming_only:
        out = [e for e in out if not e.is_past(now)]

    selected = state.selected_categories
    if selected != ALL_CATEGORIES:
        out = [e for e in out if e.category in selected]

    if state.search_text:
        out = [e for e in out if matches_search(e, state.search_text)]

    if state.this_weekend:
        start, end = weekend_window(now)
        out = [e for e in out if start <= e.start_date < end]

    # fail-open: no usable fix means nothing is hidden
    if state.near_me and user_location is not None and is_valid_coordinate(*user_location):
        out = [e for e in out if is_near(e, user_location)]

    if state.family_friendly:
        out = [e for e in out if is_family_friendly(e)]

    return merge_sort(out, key=lambda e: e.start_date)


# ---------------- Reactive catalog ----------------
Subscriber = Callable[[List[Event]], None]


@dataclass
class EventCatalog:
    """Reactive holder of the catalog, filter state and user location.

    Every setter replaces one immutable input, recomputes `visible` through
    `compute_visible_events` and calls each subscriber with the new list.
    Single owner: not thread-safe, callers serialize access.
    """
    events: List[Event]
    state: FilterState = field(default_factory=FilterState)
    user_location: Optional[Coordinate] = None
    clock: Callable[[], datetime] = datetime.now
    visible: List[Event] = field(init=False, default_factory=list)
    _subscribers: List[Subscriber] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.events = list(self.events)
        self._recompute()

    # ---------------- Observers ----------------
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`; it is called with the current list immediately.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)
        callback(list(self.visible))

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)
        return _unsubscribe

    def _recompute(self) -> List[Event]:
        self.visible = compute_visible_events(self.events, self.state, self.user_location, self.clock())
        logger.debug("Recomputed visible events: %d of %d", len(self.visible), len(self.events))
        for cb in list(self._subscribers):
            cb(list(self.visible))
        return self.visible

    # ---------------- Inputs ----------------
    def replace_events(self, events: Iterable[Event]) -> List[Event]:
        self.events = list(events)
        logger.info("Catalog replaced with %d events", len(self.events))
        return self._recompute()

    def set_state(self, state: FilterState) -> List[Event]:
        self.state = state
        return self._recompute()

    def set_search_text(self, text: str) -> List[Event]:
        return self.set_state(self.state.with_search_text(text))

    def toggle_category(self, category: EventCategory) -> List[Event]:
        return self.set_state(self.state.with_category_toggled(category))

    def select_all_categories(self) -> List[Event]:
        return self.set_state(self.state.with_all_categories())

    def clear_categories(self) -> List[Event]:
        return self.set_state(self.state.with_no_categories())

    def set_toggle(self, name: str, value: Optional[bool] = None) -> List[Event]:
        return self.set_state(self.state.with_toggle(name, value))

    def reset_filters(self) -> List[Event]:
        return self.set_state(FilterState())

    def set_user_location(self, location: Optional[Coordinate]) -> List[Event]:
        self.user_location = Coordinate(*location) if location is not None else None
        return self._recompute()

    # ---------------- Output operations ----------------
    def summary(self) -> str:
        return f"Showing {len(self.visible)} of {len(self.events)} events"

    def export_csv(self, path: str) -> None:
        import csv
        from .loader import RECORD_FIELDS, events_to_records
        rows = events_to_records(self.visible)
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.DictWriter(f, fieldnames=list(RECORD_FIELDS))
            w.writeheader()
            for r in rows:
                w.writerow(r)

    def export_json(self, path: str) -> None:
        """Export the visible events to a JSON file (list of records)."""
        import json
        from .loader import events_to_records
        with open(path, "w", encoding="utf-8") as f:
            json.dump(events_to_records(self.visible), f, ensure_ascii=False, indent=2)
