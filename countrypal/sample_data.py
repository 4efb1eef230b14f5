"""
Built-in sample catalog
=======================

Eleven Mid Sussex events used when no catalog file is given. Dates are fixed
offsets (days, then duration in hours) from the load time, so every sample
event is in the future when the catalog is built.
"""

from __future__ import annotations
from datetime import datetime, timedelta
from typing import List, Optional

from .models import Event, EventCategory, EventLocation

# (title, description, category, day offset, duration hours, venue, address, lat, lon, contact, sponsored)
_SAMPLES = [
    ("Haywards Heath Summer Fete",
     "A traditional village fete with stalls, games, local produce, live music, and activities for all the family. "
     "Enjoy homemade cakes, craft stalls, and traditional games.",
     EventCategory.VILLAGE_FETE, 7, 6,
     "Victoria Park", "Victoria Park, Haywards Heath, RH16 3AZ", 51.0044, -0.1021,
     "haywardsheath.fete@gmail.com | 01444 458291", True),
    ("Burgess Hill Farmers Market",
     "Fresh local produce from Sussex farms including vegetables, meat, dairy, bread, and artisan foods. "
     "Supporting local farmers and producers.",
     EventCategory.FARMERS_MARKET, 3, 4,
     "Burgess Hill Town Centre", "Cyprus Road, Burgess Hill, RH15 8DX", 50.9578, -0.1290,
     "info@burgesshillmarket.co.uk | 01444 247726", False),
    ("East Grinstead Book Fair",
     "Large indoor book sale with thousands of books including rare finds, children's books, fiction, non-fiction, "
     "and local history. Proceeds to local charities.",
     EventCategory.BOOK_SALE, 10, 5,
     "Chequer Mead Theatre", "Chequer Mead Theatre, De La Warr Road, East Grinstead, RH19 3BS", 51.1240, 0.0074,
     "eastgrinstead.books@gmail.com | 01342 328616", False),
    ("Horsted Keynes Craft Fair",
     "Handmade crafts by local artisans including pottery, woodwork, textiles, jewelry, and artwork. "
     "Perfect for unique gifts and supporting local makers.",
     EventCategory.CRAFT_FAIR, 14, 6,
     "Village Hall", "Horsted Keynes Village Hall, Church Lane, Horsted Keynes, RH17 7DF", 51.0428, -0.0395,
     "crafts@horstedkeynes.org | 01825 790314", False),
    ("Cuckfield Community Day",
     "Annual community celebration with local history displays, live entertainment, food stalls, "
     "children's activities, and demonstrations by local groups.",
     EventCategory.COMMUNITY, 21, 7,
     "Recreation Ground", "Cuckfield Recreation Ground, High Street, Cuckfield, RH17 5JZ", 50.9978, -0.1421,
     "info@cuckfieldcommunity.org | 01444 413747", False),
    ("Lindfield Bonfire Night",
     "Traditional Guy Fawkes celebration with bonfire, fireworks display, hot food, mulled wine, "
     "and torchlight procession through the village.",
     EventCategory.SEASONAL, 35, 4,
     "Lindfield Common", "Lindfield Common, Lewes Road, Lindfield, RH16 2LH", 51.0131, -0.0759,
     "bonfire@lindfield.org | 01444 482701", False),
    ("Ardingly Antiques Fair",
     "One of the UK's largest outdoor antiques fairs with over 1,500 stalls selling furniture, collectibles, "
     "vintage items, and curiosities.",
     EventCategory.CRAFT_FAIR, 28, 8,
     "South of England Showground", "South of England Showground, Ardingly, RH17 6TL", 51.0234, -0.0856,
     "info@iacf.co.uk | 01444 482514", True),
    ("Turners Hill Village Market",
     "Monthly village market with local produce, plants, homemade goods, and community stalls. "
     "Perfect for meeting neighbors and supporting local businesses.",
     EventCategory.FARMERS_MARKET, 12, 3,
     "Village Green", "Turners Hill Village Green, East Street, Turners Hill, RH10 4QQ", 51.1087, -0.0642,
     "market@turnershill.org | 01342 715337", False),
    ("Balcombe Harvest Festival",
     "Traditional harvest celebration with church service, harvest supper, live music, "
     "and displays of local produce and flowers.",
     EventCategory.SEASONAL, 42, 5,
     "St Mary's Church", "St Mary's Church, Bramble Hill, Balcombe, RH17 6HR", 51.0531, -0.1289,
     "harvest@balcombe.org | 01444 811264", False),
    ("Handcross Christmas Market",
     "Festive market with Christmas gifts, decorations, seasonal food, mulled wine, "
     "and visits from Father Christmas for the children.",
     EventCategory.SEASONAL, 85, 6,
     "Village Hall", "Handcross Village Hall, Brighton Road, Handcross, RH17 6BJ", 51.0787, -0.1687,
     "christmas@handcross.org | 01444 400928", False),
    ("Hurstpierpoint Library Book Sale",
     "Donated paperbacks, hardbacks, maps and local history pamphlets at pocket-money prices. "
     "All proceeds go to the Friends of Hurstpierpoint Library.",
     EventCategory.BOOK_SALE, 17, 3,
     "Hurstpierpoint Library", "Trinity Road, Hurstpierpoint, BN6 9UY", 50.9336, -0.1795,
     "friends@hurstlibrary.org.uk | 01273 834567", False),
]


def load_sample_events(now: Optional[datetime] = None) -> List[Event]:
    """Build the sample catalog relative to `now` (defaults to the current time)."""
    now = now or datetime.now()
    events: List[Event] = []
    for (title, description, category, days, hours, venue, address, lat, lon, contact, sponsored) in _SAMPLES:
        start = now + timedelta(days=days)
        events.append(Event(
            title=title,
            description=description,
            category=category,
            start_date=start,
            end_date=start + timedelta(hours=hours),
            location=EventLocation(venue=venue, address=address, latitude=lat, longitude=lon),
            contact_info=contact,
            is_sponsored=sponsored,
        ))
    return events
