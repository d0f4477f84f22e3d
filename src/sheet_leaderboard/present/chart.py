"""Bar-chart series state for the two rankings.

The chart is created once and then updated in place on every refresh, so a
rendering collaborator can animate from the previous values to the new ones.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from pydantic import BaseModel, Field

from ..config import RANK_LABEL, TOP_N, SheetSource
from ..core.models import RankingPair
from ..core.ranking import chart_ceiling, format_score


def rank_labels(count: int = TOP_N) -> List[str]:
    return [RANK_LABEL.format(rank=i) for i in range(1, count + 1)]


class ChartDataset(BaseModel):
    label: str
    data: List[float] = Field(default_factory=list)
    names: List[str] = Field(default_factory=list)
    color: str = ""


def tooltip_label(dataset: ChartDataset, index: int) -> str:
    """Hover text for one bar: ``"name: score"``."""
    name = dataset.names[index] if 0 <= index < len(dataset.names) else ""
    score = dataset.data[index] if 0 <= index < len(dataset.data) else 0.0
    return f"{name}: {format_score(score)}"


def datalabel(dataset: ChartDataset, index: int) -> str:
    """Label drawn under a bar; bars with no score get none."""
    if not 0 <= index < len(dataset.data) or dataset.data[index] <= 0:
        return ""
    return dataset.names[index] if index < len(dataset.names) else ""


class ChartState(BaseModel):
    labels: List[str] = Field(default_factory=rank_labels)
    datasets: List[ChartDataset] = Field(default_factory=list)
    y_max: float = 0.0
    revision: int = 0

    def update(self, pair: RankingPair) -> None:
        """Replace the series in place with a fresh pair of rankings.

        Every new value is computed before the first one is assigned.
        """
        rankings = (pair.group_a, pair.group_b)
        series = [([e.score for e in r], [e.name for e in r]) for r in rankings]
        labels = rank_labels()
        y_max = chart_ceiling(*rankings)

        for ds, (data, names) in zip(self.datasets, series):
            ds.data = data
            ds.names = names
        self.labels = labels
        self.y_max = y_max
        self.revision += 1

    def to_chartjs(self) -> Dict[str, Any]:
        """Chart.js bar config.

        Tooltip and bar-label text is precomputed per bar (``tooltipText``,
        ``barLabels``); the page's callbacks only look it up by index. A
        per-dataset ``datalabels`` key would be read as plugin options.
        """
        return {
            "type": "bar",
            "data": {
                "labels": list(self.labels),
                "datasets": [
                    {
                        "label": ds.label,
                        "data": list(ds.data),
                        "names": list(ds.names),
                        "tooltipText": [tooltip_label(ds, i) for i in range(len(ds.data))],
                        "barLabels": [datalabel(ds, i) for i in range(len(ds.data))],
                        "backgroundColor": ds.color,
                        "borderWidth": 1,
                        "borderRadius": 10,
                        "borderSkipped": False,
                    }
                    for ds in self.datasets
                ],
            },
            "options": {
                "responsive": True,
                "maintainAspectRatio": False,
                "scales": {"y": {"beginAtZero": True, "max": self.y_max}},
            },
        }


def build_chart(pair: RankingPair, sources: Sequence[SheetSource]) -> ChartState:
    chart = ChartState(datasets=[ChartDataset(label=s.title, color=s.color) for s in sources])
    chart.update(pair)
    return chart
