from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..config import DEFAULT_LAYOUT, TOP_N, ColumnLayout
from ..core.models import Entry
from ..core.ranking import rank_entries


_log = logging.getLogger(__name__)

# Leading numeric prefix, the way a spreadsheet cell like "12.5 pts" reads as 12.5
_NUMBER_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def split_rows(csv_text: str) -> List[List[str]]:
    """Split quote-stripped CSV text into rows of raw fields.

    Quotes are dropped rather than honoured, so a comma inside a quoted cell
    still splits it. The published sheet ranges never contain one.
    """
    s = csv_text.replace('"', "").strip()
    if not s:
        return []
    rows: List[List[str]] = []
    for line in s.split("\n"):
        rows.append(line.rstrip("\r").split(","))
    return rows


def parse_score(raw: Optional[str]) -> float:
    """Parse a score cell; anything without a numeric prefix counts as 0."""
    m = _NUMBER_PREFIX.match((raw or "").strip())
    if not m:
        return 0.0
    return float(m.group(0))


def _row_entry(fields: List[str], layout: ColumnLayout) -> Optional[Entry]:
    if len(fields) < layout.required_fields:
        return None
    name = fields[layout.name_index].strip()
    if not name:
        return None
    return Entry(name=name, score=parse_score(fields[layout.score_index]))


def process_sheet_data(
    csv_text: object,
    layout: ColumnLayout = DEFAULT_LAYOUT,
    limit: int = TOP_N,
) -> List[Entry]:
    """Turn one published sheet range into its top ``limit`` ranking.

    Rows that are too short to reach the score column, or that have no name,
    are skipped. An unreadable score is kept as 0 instead of dropping the row.
    """
    if not isinstance(csv_text, str) or not csv_text.strip():
        return []
    entries: List[Entry] = []
    skipped = 0
    for fields in split_rows(csv_text):
        entry = _row_entry(fields, layout)
        if entry is None:
            skipped += 1
            continue
        entries.append(entry)
    if skipped:
        _log.debug("skipped %d row(s) without a name or score column", skipped)
    return rank_entries(entries, limit=limit)
