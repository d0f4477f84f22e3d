from __future__ import annotations

from html import escape
from typing import List, Sequence

from ..config import NAME_HEADER, RANK_HEADER, SCORE_HEADER
from ..core.models import Entry, RankingPair
from ..core.ranking import format_score


def leaderboard_table(title: str, ranking: List[Entry]) -> str:
    """Render one ranking as the leaderboard block: title plus rank/name/score rows."""
    parts = [
        f'<div class="leaderboard"><h3>{escape(title)}</h3><table>',
        f"<thead><tr><th>{RANK_HEADER}</th><th>{NAME_HEADER}</th><th>{SCORE_HEADER}</th></tr></thead>",
        "<tbody>",
    ]
    for i, entry in enumerate(ranking, start=1):
        parts.append(f"<tr><td>#{i}</td><td>{escape(entry.name)}</td><td>{format_score(entry.score)}</td></tr>")
    parts.append("</tbody></table></div>")
    return "".join(parts)


def leaderboard_markup(pair: RankingPair, titles: Sequence[str]) -> str:
    title_a, title_b = titles
    return leaderboard_table(title_a, pair.group_a) + leaderboard_table(title_b, pair.group_b)
