"""Competitor analytics relative to the subject site.

Pure functions of the competitor set and the subject site, computed once
after a successful load.  Averages round half up (2.5 -> 3); an empty
population averages to 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from atlas.dataset import Competitor, SubjectSite, TrackPosition
from atlas.layers.labels import truncate_label
from atlas.layers.styles import (
    FALLBACK_GRAY,
    TRACK_CHART_FILL_FALLBACK,
    TRACK_CHART_FILLS,
    TRACK_COLORS,
    resolve,
)

CHART_LABEL_LIMIT = 12


@dataclass(frozen=True)
class Summary:
    """Headline comparison figures."""

    subject_footfall: int
    avg_competitor_footfall: int
    primary_spine_count: int
    primary_spine_avg_footfall: int

    def slots(self) -> dict[str, str]:
        """Display values keyed by summary slot name."""
        return {
            "subject-footfall": str(self.subject_footfall),
            "avg-competitor-footfall": str(self.avg_competitor_footfall),
            "primary-spine-count": str(self.primary_spine_count),
            "primary-avg-footfall": str(self.primary_spine_avg_footfall),
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return int(math.floor(value + 0.5))


def mean_footfall(competitors: Sequence[Competitor]) -> int:
    """Rounded mean footfall, or 0 for an empty sequence."""
    if not competitors:
        return 0
    return round_half_up(sum(c.footfall for c in competitors) / len(competitors))


def aggregate(subject: SubjectSite, competitors: Iterable[Competitor]) -> Summary:
    """Compute the subject-vs-competitors summary."""
    competitors = list(competitors)
    primary_spine = [
        c for c in competitors if c.track_position == TrackPosition.PRIMARY_SPINE
    ]
    return Summary(
        subject_footfall=subject.footfall,
        avg_competitor_footfall=mean_footfall(competitors),
        primary_spine_count=len(primary_spine),
        primary_spine_avg_footfall=mean_footfall(primary_spine),
    )


# ---------------------------------------------------------------------------
# Competitor chart
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ChartSeries:
    """Horizontal bar chart data, one entry per competitor."""

    labels: list[str]
    values: list[int]
    fill_colors: list[str]
    stroke_colors: list[str]
    tooltips: list[str]

    def tooltip(self, index: int) -> str:
        return self.tooltips[index]


def competitor_chart(competitors: Iterable[Competitor]) -> ChartSeries:
    """Bars sorted by footfall, highest first; ties keep input order."""
    ranked = sorted(competitors, key=lambda c: c.footfall, reverse=True)
    return ChartSeries(
        labels=[truncate_label(c.name, CHART_LABEL_LIMIT) for c in ranked],
        values=[c.footfall for c in ranked],
        fill_colors=[
            resolve(c.track_position, TRACK_CHART_FILLS, TRACK_CHART_FILL_FALLBACK)
            for c in ranked
        ],
        stroke_colors=[
            resolve(c.track_position, TRACK_COLORS, FALLBACK_GRAY) for c in ranked
        ],
        tooltips=[
            f"Footfall: {c.footfall} ({c.track_position.replace('_', ' ')})" for c in ranked
        ],
    )
