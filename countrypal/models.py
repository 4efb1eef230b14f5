"""
Data model (Event, EventLocation, EventCategory, FilterState)
=============================================================

Each catalog entry is converted into an `Event` object. Events are immutable
(`frozen=True`) so that:
- events cannot be accidentally modified after loading, and
- filters/sorts select events rather than editing them.

`FilterState` is immutable too: every toggle returns a new state, so two
components never share a half-updated selection.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional
import uuid

from .geo import Coordinate


class CatalogError(ValueError):
    """Raised for malformed event data (bad dates, unknown category, ...)."""


class EventCategory(Enum):
    """Closed set of event tags. Value = (label, color, icon)."""
    VILLAGE_FETE = ("Village Fete", "green", "house.fill")
    FARMERS_MARKET = ("Farmers Market", "orange", "leaf.fill")
    BOOK_SALE = ("Book Sale", "blue", "book.fill")
    CRAFT_FAIR = ("Craft Fair", "purple", "paintbrush.fill")
    COMMUNITY = ("Community Event", "red", "person.3.fill")
    SEASONAL = ("Seasonal Event", "brown", "star.fill")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def color(self) -> str:
        return self.value[1]

    @property
    def icon(self) -> str:
        return self.value[2]

    @classmethod
    def from_label(cls, text: str) -> "EventCategory":
        """Resolve a display label ("Farmers Market") or member name ("farmers_market")."""
        key = _norm(text)
        for c in cls:
            if key in (_norm(c.label), _norm(c.name)):
                return c
        raise CatalogError(f"Unknown event category: {text!r}")


ALL_CATEGORIES: FrozenSet[EventCategory] = frozenset(EventCategory)


def _norm(s: str) -> str:
    return "".join(ch for ch in str(s).lower() if ch.isalnum())


@dataclass(frozen=True)
class EventLocation:
    """Venue, free-text address and WGS84 position of one event."""
    venue: str
    address: str
    latitude: float
    longitude: float

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


@dataclass(frozen=True)
class Event:
    """Immutable record for one catalog event."""
    title: str
    description: str
    category: EventCategory
    start_date: datetime
    end_date: datetime
    location: EventLocation
    contact_info: str
    image_url: Optional[str] = None
    is_sponsored: bool = False
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise CatalogError("Event is missing required field: title")
        if self.end_date < self.start_date:
            raise CatalogError(
                f"Event '{self.title}' ends ({self.end_date}) before it starts ({self.start_date})"
            )

    def is_upcoming(self, now: datetime) -> bool:
        return self.start_date > now

    def is_ongoing(self, now: datetime) -> bool:
        return self.start_date <= now <= self.end_date

    def is_past(self, now: datetime) -> bool:
        return self.end_date < now

    def duration_text(self) -> str:
        """Human-readable span, e.g. '24 Oct 2026, 10:00 - 16:00'."""
        start = self.start_date.strftime("%d %b %Y, %H:%M")
        if self.start_date.date() == self.end_date.date():
            return f"{start} - {self.end_date.strftime('%H:%M')}"
        return f"{start} - {self.end_date.strftime('%d %b %Y, %H:%M')}"


def toggle_category(selected: FrozenSet[EventCategory], category: EventCategory) -> FrozenSet[EventCategory]:
    """Return a new set with `category` removed if present, added otherwise."""
    if category in selected:
        return frozenset(selected - {category})
    return frozenset(selected | {category})


# Names accepted by FilterState.with_toggle
TOGGLES = ("show_upcoming_only", "this_weekend", "near_me", "family_friendly")


@dataclass(frozen=True)
class FilterState:
    """The user's current filter choices.

    An empty `selected_categories` shows nothing; the full set applies no
    category restriction.
    """
    search_text: str = ""
    selected_categories: FrozenSet[EventCategory] = ALL_CATEGORIES
    show_upcoming_only: bool = True
    this_weekend: bool = False
    near_me: bool = False
    family_friendly: bool = False

    def with_search_text(self, text: str) -> "FilterState":
        return replace(self, search_text=text or "")

    def with_toggle(self, name: str, value: Optional[bool] = None) -> "FilterState":
        """Flip (or set, when `value` is given) one of the boolean filters."""
        if name not in TOGGLES:
            raise ValueError(f"toggle must be one of: {', '.join(TOGGLES)}")
        new = (not getattr(self, name)) if value is None else bool(value)
        return replace(self, **{name: new})

    def with_category_toggled(self, category: EventCategory) -> "FilterState":
        return replace(self, selected_categories=toggle_category(self.selected_categories, category))

    def with_all_categories(self) -> "FilterState":
        return replace(self, selected_categories=ALL_CATEGORIES)

    def with_no_categories(self) -> "FilterState":
        return replace(self, selected_categories=frozenset())
