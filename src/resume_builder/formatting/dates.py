"""Display formatting for ``YYYY-MM`` partial dates."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_PARTIAL_DATE = re.compile(r"^(\d{4})-(\d{1,2})$")

# Fixed English abbreviations; output must not depend on the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

PRESENT = "Present"


def format_partial_date(raw: str | None) -> str:
    """Format ``"2021-03"`` as ``"Mar 2021"``.

    Empty or malformed input yields ``""``. Month numbers outside 1-12 roll
    over into the neighbouring years the way calendar arithmetic does, so
    ``"2021-13"`` is ``"Jan 2022"`` and ``"2021-00"`` is ``"Dec 2020"``.
    """
    if not raw:
        return ""
    match = _PARTIAL_DATE.match(raw.strip())
    if match is None:
        logger.debug("Ignoring malformed partial date %r", raw)
        return ""
    year = int(match.group(1))
    month_index = int(match.group(2)) - 1
    year += month_index // 12
    month_index %= 12
    return f"{MONTH_ABBREVIATIONS[month_index]} {year}"


def format_date_range(start: str | None, end: str | None, *, current: bool = False) -> str:
    """Join start and end dates; ``current`` replaces the end with "Present"."""
    end_text = PRESENT if current else format_partial_date(end)
    return f"{format_partial_date(start)} - {end_text}"
