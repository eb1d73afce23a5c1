"""Export a LayerGroup to a render-ready dict for the map frontend.

Coordinates are emitted exactly as stored on the features ([lat, lng]
rendering order); nothing here re-normalizes them.
"""

from __future__ import annotations

from dataclasses import asdict

from atlas.layers.layer import Feature, LayerGroup


def export_group(group: LayerGroup) -> dict:
    """Export a LayerGroup to a JSON-serializable dict.

    Args:
        group: The LayerGroup to export.

    Returns:
        Dict with the group's name, visibility, z-index and features.
    """
    return {
        "name": group.name,
        "visible": group.visible,
        "zIndex": group.z_index,
        "features": [_feature_to_dict(f) for f in group.features],
    }


def _feature_to_dict(feature: Feature) -> dict:
    """Convert a Feature to a plain dict."""
    out = {
        "id": feature.feature_id,
        "geometry": {
            "type": feature.geometry_type,
            "coordinates": _listify(feature.coordinates),
        },
        "title": feature.title,
        "style": feature.style.to_dict() if feature.style else None,
        "popup": asdict(feature.popup) if feature.popup else None,
        "tooltip": asdict(feature.tooltip) if feature.tooltip else None,
    }
    if feature.radius_m is not None:
        out["radius"] = feature.radius_m
    if feature.icon is not None:
        out["icon"] = asdict(feature.icon)
    if feature.z_index_offset:
        out["zIndexOffset"] = feature.z_index_offset
    return out


def _listify(value):
    if isinstance(value, (tuple, list)):
        return [_listify(v) for v in value]
    return value
