"""Presenter owning the leaderboard markup, the live chart state and the status line."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from html import escape
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..config import ERROR_MESSAGE, LAST_UPDATED_PREFIX, SOURCES, SheetSource
from ..core.models import Entry, RankingPair
from .chart import ChartState, build_chart
from .leaderboard import leaderboard_markup

_log = logging.getLogger(__name__)

_PAGE = """<!DOCTYPE html>
<html lang="th">
<head>
<meta charset="utf-8">
<meta http-equiv="refresh" content="15">
<title>Leaderboard</title>
<script src="https://cdn.jsdelivr.net/npm/chart.js"></script>
<script src="https://cdn.jsdelivr.net/npm/chartjs-plugin-datalabels@2"></script>
</head>
<body>
<p id="lastUpdated" class="{status_class}">{status}</p>
<div id="leaderboard-container">{leaderboard}</div>
<div class="chart-box"><canvas id="myChart"></canvas></div>
<script>
const config = {config};
const textAt = (key) => (ctx) => (ctx.dataset[key] || [])[ctx.dataIndex] || '';
config.options.plugins = {{
  tooltip: {{ callbacks: {{ label: textAt('tooltipText') }} }},
  datalabels: {{ anchor: 'start', align: 'start', offset: 8,
    formatter: (value, ctx) => textAt('barLabels')(ctx) }}
}};
Chart.register(ChartDataLabels);
new Chart(document.getElementById('myChart').getContext('2d'), config);
</script>
</body>
</html>
"""


class Presenter:
    """Turns ranking pairs into leaderboard markup and chart series.

    The chart is created on the first successful render and updated in place
    afterwards. ``show_error`` only touches the status line, so the last good
    leaderboard and chart stay visible.
    """

    def __init__(
        self,
        sources: Sequence[SheetSource] = SOURCES,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.sources = tuple(sources)
        self._clock = clock
        self.leaderboard_html: str = ""
        self.chart: Optional[ChartState] = None
        self.rankings: Optional[RankingPair] = None
        self.status: str = ""
        self.error: bool = False
        self.updated_at: Optional[datetime] = None

    def render(self, ranking_a: List[Entry], ranking_b: List[Entry]) -> None:
        pair = RankingPair(group_a=ranking_a, group_b=ranking_b)
        markup = leaderboard_markup(pair, [s.title for s in self.sources])
        now = self._clock()
        # The live chart is mutated in place, so it goes last
        if self.chart is None:
            chart = build_chart(pair, self.sources)
        else:
            chart = self.chart
            chart.update(pair)

        self.leaderboard_html = markup
        self.rankings = pair
        self.chart = chart
        self.updated_at = now
        self.status = LAST_UPDATED_PREFIX + now.strftime("%H:%M:%S")
        self.error = False
        _log.debug("rendered %d + %d entries (chart revision %d)", len(ranking_a), len(ranking_b), self.chart.revision)

    def show_error(self, message: str = ERROR_MESSAGE) -> None:
        self.status = message
        self.error = True

    def page(self) -> str:
        """Full HTML document for the current state."""
        config = self.chart.to_chartjs() if self.chart is not None else {"type": "bar", "data": {"labels": [], "datasets": []}, "options": {}}
        # Keep "</script>" inside a name from closing the script block
        config_json = json.dumps(config, ensure_ascii=False).replace("</", "<\\/")
        return _PAGE.format(
            status=escape(self.status),
            status_class="error" if self.error else "ok",
            leaderboard=self.leaderboard_html,
            config=config_json,
        )

    def write_page(self, path: Path) -> None:
        """Write the page next to ``path`` and swap it in, so readers never see a partial file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(self.page(), encoding="utf-8")
        tmp.replace(path)
