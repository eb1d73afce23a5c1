"""Site map layer system — style resolution, feature building, visibility.

Groups: routes, distance, landmarks, competitors, subject.
"""

from atlas.layers.builder import BuildResult, LayerBuilder, build_layers
from atlas.layers.layer import Feature, LayerGroup, PopupContent, PopupField, Tooltip
from atlas.layers.registry import LayerRegistry, UnknownLayerError

__all__ = [
    "BuildResult",
    "Feature",
    "LayerBuilder",
    "LayerGroup",
    "LayerRegistry",
    "PopupContent",
    "PopupField",
    "Tooltip",
    "UnknownLayerError",
    "build_layers",
]
