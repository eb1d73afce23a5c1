"""Presentation step — projects core state onto external widgets.

The core (builder, registry, analytics) never talks to a rendering engine.
This module translates its output through narrow protocols:

  RenderSurface  — the map engine (lines, circles, markers, groups)
  ChartWidget    — a horizontal bar chart
  summary slots  — a mutable mapping of display slot -> text

Toggle intents go through LayerControls: registry state change first, then
a separate sync of that one group onto the surface.
"""

from __future__ import annotations

import html
from typing import Any, Callable, Iterable, MutableMapping, Protocol, Sequence

from loguru import logger

from atlas.analytics import ChartSeries, Summary, competitor_chart
from atlas.dataset import Competitor
from atlas.layers.layer import LINE, MARKER, POINT, RING, Feature, MarkerIcon, PopupContent
from atlas.layers.registry import LayerRegistry, UnknownLayerError


# ---------------------------------------------------------------------------
# Popup markup
# ---------------------------------------------------------------------------

def render_popup_html(popup: PopupContent) -> str:
    """Render structured popup content to escaped HTML."""
    esc = html.escape
    classes = "popup-content"
    if popup.variant:
        classes += f" {popup.variant}-popup"

    parts = [f'<div class="{classes}">', f"<h3>{esc(popup.title)}</h3>"]
    for field in popup.fields:
        value = esc(field.value)
        if field.status:
            value = f'<span class="{esc(field.status)}">{value}</span>'
        parts.append(f"<p><strong>{esc(field.label)}:</strong> {value}</p>")
    if popup.description:
        parts.append(f'<p class="description">{esc(popup.description)}</p>')
    if popup.footer:
        parts.append(f'<div class="popup-footer">{esc(popup.footer)}</div>')
    parts.append("</div>")
    return "".join(parts)


# ---------------------------------------------------------------------------
# External widget protocols
# ---------------------------------------------------------------------------

class RenderSurface(Protocol):
    """Map rendering engine, as consumed by MapProjector."""

    def create_line(self, latlngs: Sequence, style: dict) -> Any: ...

    def create_circle(self, center: Sequence, radius_m: float, style: dict) -> Any: ...

    def create_point_marker(self, center: Sequence, radius_px: float, style: dict) -> Any: ...

    def create_marker(self, center: Sequence, icon: MarkerIcon, z_index_offset: int) -> Any: ...

    def bind_popup(self, handle: Any, content: str) -> None: ...

    def bind_tooltip(self, handle: Any, text: str, placement: dict) -> None: ...

    def group(self, handles: list) -> Any: ...

    def add_to_surface(self, group_handle: Any) -> None: ...

    def remove_from_surface(self, group_handle: Any) -> None: ...


class ChartWidget(Protocol):
    """Charting widget, as consumed by render_competitor_chart."""

    def render_horizontal_bar(
        self,
        labels: list[str],
        values: list[int],
        fill_colors: list[str],
        stroke_colors: list[str],
        tooltip: Callable[[int], str],
    ) -> None: ...


# ---------------------------------------------------------------------------
# Map projection
# ---------------------------------------------------------------------------

class MapProjector:
    """Draws registry groups on a RenderSurface and keeps them in sync."""

    def __init__(
        self,
        surface: RenderSurface,
        registry: LayerRegistry,
        popup_renderer: Callable[[PopupContent], str] = render_popup_html,
    ) -> None:
        self._surface = surface
        self._registry = registry
        self._render_popup = popup_renderer
        self._handles: dict[str, Any] = {}
        self._on_surface: dict[str, bool] = {}

    def mount(self) -> None:
        """Create engine handles for every group, bottom group first."""
        for group in sorted(self._registry.groups(), key=lambda g: g.z_index):
            handles = [self._draw(f) for f in group.features]
            self._handles[group.name] = self._surface.group(handles)
            self._on_surface[group.name] = False
            self.sync(group.name)

    def is_mounted(self, name: str) -> bool:
        return name in self._handles

    def sync(self, name: str) -> None:
        """Add or remove one group so the surface matches the registry."""
        if name not in self._handles:
            return
        visible = self._registry.is_visible(name)
        if visible and not self._on_surface[name]:
            self._surface.add_to_surface(self._handles[name])
        elif not visible and self._on_surface[name]:
            self._surface.remove_from_surface(self._handles[name])
        self._on_surface[name] = visible

    def _draw(self, feature: Feature) -> Any:
        surface = self._surface
        style = feature.style.to_dict() if feature.style else {}
        if feature.geometry_type == LINE:
            handle = surface.create_line(feature.coordinates, style)
        elif feature.geometry_type == RING:
            handle = surface.create_circle(feature.coordinates, feature.radius_m, style)
        elif feature.geometry_type == POINT:
            handle = surface.create_point_marker(
                feature.coordinates, feature.style.radius if feature.style else 0, style,
            )
        elif feature.geometry_type == MARKER:
            handle = surface.create_marker(
                feature.coordinates, feature.icon, feature.z_index_offset,
            )
        else:
            raise ValueError(f"Unsupported geometry type: {feature.geometry_type}")

        if feature.popup is not None:
            surface.bind_popup(handle, self._render_popup(feature.popup))
        if feature.tooltip is not None:
            tip = feature.tooltip
            surface.bind_tooltip(
                handle,
                tip.text,
                {"direction": tip.direction, "offset": list(tip.offset), "permanent": tip.permanent},
            )
        return handle


class LayerControls:
    """Toggle command surface for the UI.

    Unknown layer names are a logged no-op here; the registry itself raises
    UnknownLayerError so callers further in can tell a bug from a user no-op.
    """

    def __init__(
        self, registry: LayerRegistry, projector: MapProjector | None = None,
    ) -> None:
        self._registry = registry
        self._projector = projector

    def toggle(self, name: str) -> bool | None:
        """Toggle a layer; returns the new visibility, or None if unknown."""
        try:
            visible = self._registry.toggle(name)
        except UnknownLayerError:
            logger.warning(f"Toggle ignored, no layer named '{name}'")
            return None
        if self._projector is not None:
            self._projector.sync(name)
        return visible


# ---------------------------------------------------------------------------
# Chart and summary
# ---------------------------------------------------------------------------

def render_competitor_chart(
    chart: ChartWidget | None, competitors: Iterable[Competitor],
) -> ChartSeries | None:
    """Draw the competitor footfall chart; skipped when no chart is present."""
    if chart is None:
        logger.debug("No chart target, competitor chart skipped")
        return None
    series = competitor_chart(competitors)
    chart.render_horizontal_bar(
        series.labels,
        series.values,
        series.fill_colors,
        series.stroke_colors,
        series.tooltip,
    )
    return series


def write_summary(
    slots: MutableMapping[str, str] | None, summary: Summary,
) -> list[str]:
    """Write summary values into the slots that exist; returns those written."""
    if slots is None:
        return []
    written = []
    for name, value in summary.slots().items():
        if name in slots:
            slots[name] = value
            written.append(name)
    return written
