"""
CountryPal Command Line Interface (CLI)
=======================================

This file provides the interactive terminal program you run like:

    python -m countrypal.cli
    python -m countrypal.cli --catalog "path/to/events.csv"

It demonstrates:
- Argument parsing (argparse)
- A REPL loop (Read-Eval-Print Loop) for commands
- Mapping user commands to EventCatalog inputs (search, categories, toggles, location)

Every command that changes an input prints the new "Showing X of Y events" line.
"""

from __future__ import annotations
from typing import Iterable, List
import argparse, logging, shlex

from .engine import EventCatalog, category_counts
from .geo import Coordinate, distance_text, region_for
from .loader import load_catalog
from .models import Event, EventCategory
from .sample_data import load_sample_events

logger = logging.getLogger(__name__)

HELP = """
Commands:
  help
  show [n]
  stats
  reset

  search <text>                    (search alone clears the search)
  category "<Category>"            toggle one category, e.g. category "Farmers Market"
  categories all|none
  toggle upcoming|weekend|near|family
  location <lat> <lon>             e.g. location 51.0044 -0.1021
  location clear

  export csv|json "<path>"
  report "<path.docx>"
  quit

Categories: Village Fete, Farmers Market, Book Sale, Craft Fair, Community Event, Seasonal Event
"""

_TOGGLE_NAMES = {
    "upcoming": "show_upcoming_only",
    "weekend": "this_weekend",
    "near": "near_me",
    "family": "family_friendly",
}


def build_catalog(catalog_path: str = None) -> EventCatalog:
    """Load the catalog file (or the built-in sample) into an EventCatalog."""
    events = load_catalog(catalog_path) if catalog_path else load_sample_events()
    return EventCatalog(events=events)


def main(argv: List[str] = None):
    """Entry point for the CountryPal CLI.

    1) Load catalog
    2) Build the reactive EventCatalog
    3) Start an interactive REPL
    """
    ap = argparse.ArgumentParser(description="Browse and filter community events.")
    ap.add_argument("--catalog", help="Path to an event catalog (.csv, .xlsx or .json); default: built-in sample")
    ap.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING or ERROR")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    print("Loading catalog...")
    engine = build_catalog(args.catalog)
    print(f"Loaded {len(engine.events)} events. {engine.summary()}. Type 'help' for commands.")
    while True:
        try:
            line = input("countrypal> ")
        except EOFError:
            break
        if not line.strip():
            continue
        if line.strip().lower() in ("quit", "exit"):
            break
        try:
            handle(engine, line.lstrip())
        except Exception as e:
            logger.debug("Command failed: %s", line, exc_info=True)
            print(f"Error: {e}")


def handle(engine: EventCatalog, line: str) -> None:
    """Handle one CLI command line.

    This parses the command and calls the appropriate EventCatalog method.
    """
    # search keeps the raw text after "search ", spaces included
    if line.lower() == "search" or line.lower().startswith("search "):
        text = line[len("search "):]
        engine.set_search_text(text)
        print(f"Search {'cleared' if not text else repr(text)}. {engine.summary()}")
        return

    parts = shlex.split(line)
    cmd = parts[0].lower()

    if cmd == "help":
        print(HELP)
        return

    if cmd == "stats":
        print(engine.summary())
        for cat, n in category_counts(engine.visible).items():
            mark = "x" if cat in engine.state.selected_categories else " "
            print(f"  [{mark}] {cat.label}: {n}")
        s = engine.state
        print(f"upcoming={s.show_upcoming_only} weekend={s.this_weekend} near={s.near_me} family={s.family_friendly}")
        loc = engine.user_location
        print(f"location={'none' if loc is None else f'{loc.latitude:.4f},{loc.longitude:.4f}'}")
        region = region_for(loc)
        print(f"map={region.center.latitude:.4f},{region.center.longitude:.4f} span={region.latitude_delta:g}")
        return

    if cmd == "reset":
        engine.reset_filters()
        print(f"Filters reset. {engine.summary()}")
        return

    if cmd == "category":
        if len(parts) < 2:
            raise ValueError('Usage: category "<Category>"')
        cat = EventCategory.from_label(" ".join(parts[1:]))
        engine.toggle_category(cat)
        state = "on" if cat in engine.state.selected_categories else "off"
        print(f"{cat.label} {state}. {engine.summary()}")
        return

    if cmd == "categories":
        which = parts[1].lower() if len(parts) >= 2 else ""
        if which == "all":
            engine.select_all_categories()
        elif which == "none":
            engine.clear_categories()
        else:
            raise ValueError("categories must be: all | none")
        print(engine.summary())
        return

    if cmd == "toggle":
        name = _TOGGLE_NAMES.get(parts[1].lower()) if len(parts) >= 2 else None
        if name is None:
            raise ValueError("toggle must be: upcoming | weekend | near | family")
        engine.set_toggle(name)
        print(f"{parts[1].lower()}={'on' if getattr(engine.state, name) else 'off'}. {engine.summary()}")
        return

    if cmd == "location":
        if len(parts) == 2 and parts[1].lower() == "clear":
            engine.set_user_location(None)
            print(f"Location cleared. {engine.summary()}")
            return
        if len(parts) != 3:
            raise ValueError("Usage: location <lat> <lon>  OR  location clear")
        lat, lon = float(parts[1]), float(parts[2])
        engine.set_user_location(Coordinate(lat, lon))
        print(f"Location set to {lat:.4f},{lon:.4f}. {engine.summary()}")
        return

    if cmd == "show":
        n = int(parts[1]) if len(parts) >= 2 else 10
        if n < 1:
            raise ValueError("show count must be at least 1")
        _print_rows(engine.visible[:n], engine.user_location)
        if len(engine.visible) > n:
            print(f"... ({len(engine.visible)} total, showing {n})")
        return

    if cmd == "report":
        from .report import generate_docx_report
        if len(parts) < 2:
            raise ValueError('Usage: report "<path.docx>"')
        generate_docx_report(engine.visible, parts[1], state=engine.state)
        print(f"Report written to {parts[1]}")
        return

    if cmd == "export":
        # export <csv|json> "<path>"
        if len(parts) < 3:
            print('Usage: export csv "out.csv"  OR  export json "out.json"')
            return

        fmt = parts[1].lower()
        out_path = parts[2]

        if not engine.visible:
            print("Nothing to export: no events are visible.")
            return

        if fmt == "csv":
            engine.export_csv(out_path)
            print(f"Exported CSV to {out_path}")
            return

        if fmt == "json":
            engine.export_json(out_path)
            print(f"Exported JSON to {out_path}")
            return

        print("Unknown export format. Use: csv or json")
        return

    print("Unknown command. Type 'help'.")
    return


def _print_rows(rows: Iterable[Event], user_location: Coordinate = None) -> None:
    for e in rows:
        dist = distance_text(user_location, e.location.coordinate)
        sponsored = " *sponsored*" if e.is_sponsored else ""
        print(f"{e.title} | {e.category.label} | {e.duration_text()} | {e.location.venue}"
              + (f" | {dist}" if dist else "") + sponsored)


if __name__ == "__main__":
    main()
