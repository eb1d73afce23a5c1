"""Coordinate axis-order helpers.

Input data follows the GeoJSON convention ``[lng, lat]``; the map renderer
expects ``[lat, lng]``.  Normalization happens once, when features are built.
"""

from __future__ import annotations

from typing import Iterable

Coordinate = tuple[float, float]


def normalize(coord: Coordinate) -> Coordinate:
    """Swap a ``(lng, lat)`` pair into ``(lat, lng)`` rendering order.

    The swap is its own inverse: ``normalize(normalize(c)) == c``.
    """
    return (coord[1], coord[0])


def normalize_path(coords: Iterable[Coordinate]) -> tuple[Coordinate, ...]:
    """Normalize every coordinate of a polyline, preserving order."""
    return tuple(normalize(c) for c in coords)
