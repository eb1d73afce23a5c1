"""Feature and LayerGroup dataclasses for the site map.

Feature coordinates are stored in rendering order: [lat, lng].  They are
normalized from the dataset's [lng, lat] once, by the LayerBuilder.
"""

from __future__ import annotations

from dataclasses import dataclass

from atlas.layers.styles import StyleRule

# Geometry kinds
LINE = "LineString"          # polyline, pixel stroke
POINT = "CircleMarker"       # point, radius in pixels
RING = "Circle"              # point, radius in meters
MARKER = "Marker"            # point, icon marker

# Layer group names
ROUTES = "routes"
DISTANCE = "distance"
LANDMARKS = "landmarks"
COMPETITORS = "competitors"
SUBJECT = "subject"


@dataclass(frozen=True)
class PopupField:
    """One ``Label: value`` row of a popup.

    Attributes:
        label: Row label, e.g. "Footfall Index".
        value: Display value.
        status: Optional status class for the value (e.g. "on-track").
    """

    label: str
    value: str
    status: str | None = None


@dataclass(frozen=True)
class PopupContent:
    """Structured popup body, independent of any markup.

    Attributes:
        title: Heading.
        fields: Ordered label/value rows.
        description: Optional free text; omitted when None.
        footer: Optional footer marker text.
        variant: Optional style variant ("competitor", "subject").
    """

    title: str
    fields: tuple[PopupField, ...] = ()
    description: str | None = None
    footer: str | None = None
    variant: str | None = None


@dataclass(frozen=True)
class Tooltip:
    """Hover text and its placement relative to the feature."""

    text: str
    direction: str = "top"
    offset: tuple[int, int] = (0, 0)
    permanent: bool = False


@dataclass(frozen=True)
class MarkerIcon:
    """Icon descriptor for a custom marker (size and anchor in pixels)."""

    class_name: str
    html: str
    size: tuple[int, int] = (40, 40)
    anchor: tuple[int, int] = (20, 20)


@dataclass(frozen=True)
class Feature:
    """A single renderable map feature.

    Attributes:
        feature_id: Unique identifier within its group.
        geometry_type: One of LINE, POINT, RING, MARKER.
        coordinates: [lat, lng] for points, sequence of [lat, lng] for lines.
        style: Resolved style (None for icon markers).
        title: Display title.
        popup: Structured popup content.
        tooltip: Hover tooltip.
        radius_m: Ring radius in meters (RING only).
        icon: Icon descriptor (MARKER only).
        z_index_offset: Draw-order boost; higher is on top.
    """

    feature_id: str
    geometry_type: str
    coordinates: tuple
    style: StyleRule | None
    title: str
    popup: PopupContent | None = None
    tooltip: Tooltip | None = None
    radius_m: float | None = None
    icon: MarkerIcon | None = None
    z_index_offset: int = 0


@dataclass
class LayerGroup:
    """A named, independently toggleable collection of features.

    Only ``visible`` changes after the group is built.

    Attributes:
        name: Group name (ROUTES, LANDMARKS ...).
        features: Immutable feature tuple.
        visible: Whether the group is currently on the map surface.
        z_index: Draw order between groups (higher = on top).
    """

    name: str
    features: tuple[Feature, ...]
    visible: bool = True
    z_index: int = 0
