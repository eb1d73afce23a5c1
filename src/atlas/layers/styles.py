"""Category-driven style resolution.

Every categorical attribute (route classification, landmark category,
competitor category, track position) maps to a style through
:func:`resolve`, an exact-match lookup with an explicit fallback.  Unknown
values are never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, TypeVar

from atlas.dataset import LandmarkCategory, TrackPosition

T = TypeVar("T")

FALLBACK_GRAY = "#6b7280"
LANDMARK_FALLBACK_GRAY = "#94a3b8"


@dataclass(frozen=True)
class StyleRule:
    """Rendering hints for one feature.

    Attributes:
        fill_color: Interior color (points, rings).  None for lines.
        stroke_color: Outline / line color.
        weight: Stroke width in pixels.
        opacity: Stroke opacity (0.0 to 1.0).
        radius: Pixel radius for point markers.  None for lines and rings.
        fill_opacity: Interior opacity (0.0 to 1.0).
        dash_array: Stroke dash pattern, e.g. "5, 5".
        line_cap: Line end cap ("round" for routes).
        line_join: Line join style.
    """

    fill_color: str | None = None
    stroke_color: str = FALLBACK_GRAY
    weight: float = 1
    opacity: float = 1.0
    radius: float | None = None
    fill_opacity: float | None = None
    dash_array: str | None = None
    line_cap: str | None = None
    line_join: str | None = None

    def to_dict(self) -> dict:
        """Non-empty style keys in the renderer's camelCase vocabulary."""
        keys = {
            "fillColor": self.fill_color,
            "color": self.stroke_color,
            "weight": self.weight,
            "opacity": self.opacity,
            "radius": self.radius,
            "fillOpacity": self.fill_opacity,
            "dashArray": self.dash_array,
            "lineCap": self.line_cap,
            "lineJoin": self.line_join,
        }
        return {k: v for k, v in keys.items() if v is not None}


def resolve(key: str, table: Mapping[str, T], fallback: T) -> T:
    """Look up ``key`` in ``table`` by exact string match.

    Returns the mapped value, or ``fallback`` when ``key`` is not present.
    No case folding and no partial matching.
    """
    if key in table:
        return table[key]
    return fallback


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def _route(color: str, weight: float, opacity: float) -> StyleRule:
    return StyleRule(
        stroke_color=color, weight=weight, opacity=opacity,
        line_cap="round", line_join="round",
    )


ROUTE_STYLES: dict[str, StyleRule] = {
    "primary_pedestrian": _route("#ef4444", 5, 0.9),
    "secondary_route": _route("#f97316", 4, 0.85),
    "tertiary_offtrack": _route("#6b7280", 3, 0.7),
    "walls_path": _route("#8b5cf6", 4, 0.85),
}
ROUTE_FALLBACK = ROUTE_STYLES["secondary_route"]

LANDMARK_COLORS: dict[str, str] = {
    "primary_attraction": "#fbbf24",
    "secondary_attraction": "#fb923c",
    "tertiary_attraction": "#fdba74",
    "entry_point": "#22c55e",
}

COMPETITOR_COLORS: dict[str, str] = {
    "wine_bar": "#8b5cf6",
    "wine_cocktail_bar": "#a855f7",
    "enoteca": "#f59e0b",
    "cocktail_bar": "#10b981",
}

TRACK_COLORS: dict[str, str] = {
    "primary_spine": "#ef4444",
    "secondary": "#f97316",
    "off_track": "#6b7280",
}

# Translucent bar fills for the competitor chart, keyed like TRACK_COLORS
TRACK_CHART_FILLS: dict[str, str] = {
    "primary_spine": "rgba(239, 68, 68, 0.7)",
    "secondary": "rgba(249, 115, 22, 0.7)",
}
TRACK_CHART_FILL_FALLBACK = "rgba(107, 114, 128, 0.7)"

COMPETITOR_RADIUS = 8

# ---------------------------------------------------------------------------
# Tie-breaks
# ---------------------------------------------------------------------------


def landmark_radius(category: str) -> int:
    """Marker radius: primary attractions 12, entry points 11, else 9."""
    if category == LandmarkCategory.PRIMARY_ATTRACTION:
        return 12
    if category == LandmarkCategory.ENTRY_POINT:
        return 11
    return 9


def competitor_stroke_weight(track_position: str) -> int:
    """Outline width: primary spine 3, secondary 2, anything else 1."""
    if track_position == TrackPosition.PRIMARY_SPINE:
        return 3
    if track_position == TrackPosition.SECONDARY:
        return 2
    return 1


def track_status(track_position: str) -> str:
    """CSS status class shown next to the track-position label."""
    if track_position == TrackPosition.PRIMARY_SPINE:
        return "on-track"
    if track_position == TrackPosition.SECONDARY:
        return "near-track"
    return "off-track"


# ---------------------------------------------------------------------------
# Per-entity styles
# ---------------------------------------------------------------------------

def route_style(classification: str) -> StyleRule:
    return resolve(classification, ROUTE_STYLES, ROUTE_FALLBACK)


def landmark_style(category: str) -> StyleRule:
    return StyleRule(
        fill_color=resolve(category, LANDMARK_COLORS, LANDMARK_FALLBACK_GRAY),
        stroke_color="#ffffff",
        weight=2,
        opacity=1.0,
        radius=landmark_radius(category),
        fill_opacity=0.9,
    )


def competitor_style(category: str, track_position: str) -> StyleRule:
    return StyleRule(
        fill_color=resolve(category, COMPETITOR_COLORS, FALLBACK_GRAY),
        stroke_color=resolve(track_position, TRACK_COLORS, FALLBACK_GRAY),
        weight=competitor_stroke_weight(track_position),
        opacity=1.0,
        radius=COMPETITOR_RADIUS,
        fill_opacity=0.9,
    )


def band_style(color: str, fill_opacity: float) -> StyleRule:
    return StyleRule(
        fill_color=color,
        stroke_color=color,
        weight=1,
        opacity=0.5,
        fill_opacity=fill_opacity,
        dash_array="5, 5",
    )
