from typing import Iterable, List

from .models import Entry
from ..config import CEILING_FALLBACK, CEILING_PADDING, TOP_N


def rank_entries(entries: Iterable[Entry], limit: int = TOP_N) -> List[Entry]:
    """
    Order entries by score, highest first, and keep the top ``limit``.

    Tie-breaks: none (equal scores keep their row order via sort stability).
    """
    ordered = sorted(entries, key=lambda e: e.score, reverse=True)
    return ordered[:limit]


def chart_ceiling(*rankings: List[Entry]) -> float:
    """Upper bound for the chart's value axis across every given ranking."""
    scores = [e.score for ranking in rankings for e in ranking]
    top = max(scores, default=0.0)
    if top <= 0:
        return CEILING_FALLBACK
    return top + CEILING_PADDING


def format_score(score: float) -> str:
    if float(score).is_integer():
        return str(int(score))
    return repr(float(score))
