from __future__ import annotations

"""
CountryPal event digest
-----------------------
This module writes a DOCX digest of a list of events (normally the visible
set of an EventCatalog).

Design goals:
- Keep CountryPal usable even if report dependencies are missing (lazy imports).
- Show what produced the list: the active filters are printed next to the table.
- One chart only (events per category), skipped when the list has a single category.
"""

from dataclasses import dataclass
from collections import Counter
from datetime import datetime
from typing import List, Optional, Sequence
import logging
import os
import tempfile

from .models import ALL_CATEGORIES, Event, EventCategory, FilterState

logger = logging.getLogger(__name__)


@dataclass
class ReportConfig:
    """High-level knobs to control how the digest is written."""
    title: str = "CountryPal Event Digest"
    subtitle: str = "Community events in Mid Sussex"
    # Rows shown in the event table
    max_rows: int = 50


def describe_filters(state: FilterState) -> List[str]:
    """One line per active filter, in pipeline order."""
    lines: List[str] = []
    if state.show_upcoming_only:
        lines.append("Upcoming and ongoing events only")
    if state.selected_categories != ALL_CATEGORIES:
        names = [c.label for c in EventCategory if c in state.selected_categories]
        lines.append("Categories: " + (", ".join(names) if names else "none"))
    if state.search_text:
        lines.append(f"Search: \"{state.search_text}\"")
    if state.this_weekend:
        lines.append("This weekend")
    if state.near_me:
        lines.append("Near me (10 km)")
    if state.family_friendly:
        lines.append("Family friendly")
    return lines or ["No filters"]


def generate_docx_report(
    events: Sequence[Event],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    state: Optional[FilterState] = None,
) -> str:
    """Generate a DOCX digest + category chart for a list of events."""
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install with: python -m pip install matplotlib"
        ) from e

    if not events:
        raise ValueError("No events to report on (visible set is empty).")

    counts = Counter(e.category for e in events)

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    # the chart image only lives until the document is saved
    with tempfile.TemporaryDirectory(prefix="countrypal_report_") as tmpdir:
        # -----------------------------
        # 1) Chart
        # -----------------------------
        chart_path: Optional[str] = None
        if len(counts) > 1:
            cats = [c for c in EventCategory if counts[c]]
            plt.figure()
            plt.bar([c.label for c in cats], [counts[c] for c in cats], color=[c.color for c in cats])
            plt.xticks(rotation=45, ha="right")
            plt.title("Events per category")
            plt.ylabel("Count")
            plt.tight_layout()
            chart_path = os.path.join(tmpdir, "categories.png")
            plt.savefig(chart_path, dpi=150)
            plt.close()

        # -----------------------------
        # 2) Document
        # -----------------------------
        doc = Document()
        style = doc.styles["Normal"]
        style.font.name = "Calibri"
        style.font.size = Pt(11)

        def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
            p = doc.add_paragraph()
            r = p.add_run(text)
            r.bold = bold
            r.italic = italic
            r.font.size = Pt(size)
            p.alignment = WD_ALIGN_PARAGRAPH.CENTER

        _center_title(config.title, 22, bold=True)
        _center_title(config.subtitle, 12, italic=True)

        doc.add_heading("Filters", level=1)
        for line in describe_filters(state or FilterState()):
            doc.add_paragraph(line, style="List Bullet")

        doc.add_heading("Summary", level=1)
        doc.add_paragraph(f"Events in digest: {len(events)}")
        for c in EventCategory:
            if counts[c]:
                doc.add_paragraph(f"{c.label}: {counts[c]}", style="List Bullet")
        if chart_path:
            doc.add_picture(chart_path, width=Inches(6.0))

        doc.add_heading("Events", level=1)
        t = doc.add_table(rows=1, cols=5)
        h = t.rows[0].cells
        h[0].text = "Event"
        h[1].text = "Category"
        h[2].text = "When"
        h[3].text = "Venue"
        h[4].text = "Sponsored"
        for e in list(events)[:config.max_rows]:
            r = t.add_row().cells
            r[0].text = e.title
            r[1].text = e.category.label
            r[2].text = e.duration_text()
            r[3].text = f"{e.location.venue}, {e.location.address}"
            r[4].text = "Yes" if e.is_sponsored else ""
        if len(events) > config.max_rows:
            doc.add_paragraph(f"... {len(events) - config.max_rows} more not shown")

        from . import __version__
        doc.add_paragraph("")
        doc.add_paragraph(f"CountryPal version: {__version__}")
        doc.add_paragraph(f"Generated at: {datetime.now().isoformat(timespec='seconds')}")

        doc.save(out_path)
    logger.info("Wrote digest of %d events to %s", len(events), out_path)
    return out_path
