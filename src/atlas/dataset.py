"""Site dataset models and the one-time load of the input document.

The document is loaded once per session and is immutable afterwards.  Field
names follow the camelCase keys of the published JSON (``mapCenter``,
``pedestrianRoutes``, ``trackPosition`` ...).  All coordinates are stored as
they arrive, in ``[lng, lat]`` order; see :mod:`atlas.geo`.

Top-level shape problems abort the load with :class:`DatasetLoadError`.  A
single malformed entity record is excluded with a warning so that the rest of
the dataset stays usable.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from atlas.geo import Coordinate


class DatasetLoadError(Exception):
    """Raised when the site document cannot be fetched or parsed."""


# ---------------------------------------------------------------------------
# Known categorical values (the sets are open; unknown values are allowed)
# ---------------------------------------------------------------------------

class RouteClass(str, Enum):
    """Pedestrian route classification."""

    PRIMARY_PEDESTRIAN = "primary_pedestrian"
    SECONDARY_ROUTE = "secondary_route"
    TERTIARY_OFFTRACK = "tertiary_offtrack"
    WALLS_PATH = "walls_path"


class LandmarkCategory(str, Enum):
    """Landmark importance category."""

    PRIMARY_ATTRACTION = "primary_attraction"
    SECONDARY_ATTRACTION = "secondary_attraction"
    TERTIARY_ATTRACTION = "tertiary_attraction"
    ENTRY_POINT = "entry_point"


class TrackPosition(str, Enum):
    """Competitor proximity to the dominant pedestrian route."""

    PRIMARY_SPINE = "primary_spine"
    SECONDARY = "secondary"
    OFF_TRACK = "off_track"


# ---------------------------------------------------------------------------
# Entity models
# ---------------------------------------------------------------------------

class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class SubjectSite(_Record):
    """The assessed property.  Always rendered, highest z-order."""

    name: str
    address: str = ""
    footfall: int
    coordinates: Coordinate


class Route(_Record):
    """A pedestrian route polyline."""

    name: str
    classification: str = Field(validation_alias=AliasChoices("classification", "type"))
    footfall: int
    coordinates: tuple[Coordinate, ...]
    description: str | None = None


class Landmark(_Record):
    """A point of interest that draws foot traffic."""

    name: str
    category: str
    landmark_type: str = Field(
        default="", validation_alias=AliasChoices("landmark_type", "type"),
    )
    footfall: int
    coordinates: Coordinate
    description: str | None = None


class Competitor(_Record):
    """A competing venue."""

    name: str
    address: str = ""
    category: str = Field(validation_alias=AliasChoices("category", "type"))
    track_position: str = Field(
        validation_alias=AliasChoices("track_position", "trackPosition"),
    )
    footfall: int
    coordinates: Coordinate


class DistanceBand(_Record):
    """A catchment ring drawn around the subject site (radius in meters)."""

    radius: float = Field(gt=0)
    color: str
    fill_opacity: float = Field(validation_alias=AliasChoices("fill_opacity", "fillOpacity"))
    label: str


DEFAULT_DISTANCE_BANDS: tuple[DistanceBand, ...] = (
    DistanceBand(radius=500, color="#eab308", fill_opacity=0.05, label="500m"),
    DistanceBand(radius=300, color="#f97316", fill_opacity=0.08, label="300m"),
    DistanceBand(radius=150, color="#ef4444", fill_opacity=0.1, label="150m"),
)


class _Header(BaseModel):
    """Fields whose absence makes the whole document unusable."""

    map_center: Coordinate = Field(validation_alias=AliasChoices("map_center", "mapCenter"))
    map_zoom: float = Field(validation_alias=AliasChoices("map_zoom", "mapZoom"))
    subject: SubjectSite = Field(
        validation_alias=AliasChoices("subject", "subjectSite", "desArts"),
    )


class SiteDataset(BaseModel):
    """The complete, validated site document."""

    model_config = ConfigDict(frozen=True)

    map_center: Coordinate
    map_zoom: float
    subject: SubjectSite
    routes: tuple[Route, ...] = ()
    landmarks: tuple[Landmark, ...] = ()
    competitors: tuple[Competitor, ...] = ()
    distance_bands: tuple[DistanceBand, ...] = DEFAULT_DISTANCE_BANDS
    rejected: tuple[str, ...] = ()  # Warnings for records excluded at load


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def _parse_entities(
    document: dict, keys: tuple[str, ...], model: type[_Record], kind: str,
    rejected: list[str],
) -> list:
    raw_list: Any = None
    for key in keys:
        if key in document:
            raw_list = document[key]
            break
    if raw_list is None:
        return []
    if not isinstance(raw_list, list):
        raise DatasetLoadError(f"'{keys[0]}' must be a list, got {type(raw_list).__name__}")

    parsed = []
    for idx, raw in enumerate(raw_list):
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as e:
            name = raw.get("name", "?") if isinstance(raw, dict) else "?"
            msg = f"{kind} #{idx} ({name!r}) excluded: {_describe(e)}"
            logger.warning(msg)
            rejected.append(msg)
    return parsed


def parse_dataset(document: Any) -> SiteDataset:
    """Validate a decoded site document.

    Args:
        document: The decoded JSON object.

    Returns:
        A frozen SiteDataset.  Entity records that fail validation are
        dropped and described in ``SiteDataset.rejected``.

    Raises:
        DatasetLoadError: If the document is not an object or its map
            center, zoom or subject record is missing or invalid.
    """
    if not isinstance(document, dict):
        raise DatasetLoadError(
            f"Site document must be a JSON object, got {type(document).__name__}"
        )

    try:
        header = _Header.model_validate(document)
    except ValidationError as e:
        raise DatasetLoadError(f"Invalid site document: {_describe(e)}") from e

    rejected: list[str] = []
    routes = _parse_entities(
        document, ("pedestrianRoutes", "routes"), Route, "route", rejected,
    )
    landmarks = _parse_entities(document, ("landmarks",), Landmark, "landmark", rejected)
    competitors = _parse_entities(
        document, ("competitors",), Competitor, "competitor", rejected,
    )
    bands = _parse_entities(
        document, ("distanceBands",), DistanceBand, "distance band", rejected,
    )

    return SiteDataset(
        map_center=header.map_center,
        map_zoom=header.map_zoom,
        subject=header.subject,
        routes=tuple(routes),
        landmarks=tuple(landmarks),
        competitors=tuple(competitors),
        distance_bands=tuple(bands) if "distanceBands" in document else DEFAULT_DISTANCE_BANDS,
        rejected=tuple(rejected),
    )


def load_dataset(content: str) -> SiteDataset:
    """Decode and validate a site document from a JSON string."""
    try:
        document = json.loads(content)
    except (json.JSONDecodeError, TypeError) as e:
        raise DatasetLoadError(f"Site document is not valid JSON: {e}") from e
    return parse_dataset(document)


async def fetch_dataset(source: str | Path, timeout: float = 10.0) -> SiteDataset:
    """Fetch the site document once, from a URL or a local file.

    ``http://`` and ``https://`` sources are fetched with httpx; anything
    else is treated as a filesystem path.

    Raises:
        DatasetLoadError: On transport, file or parse failure.
    """
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.get(source_str)
                resp.raise_for_status()
                content = resp.text
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise DatasetLoadError(f"Fetch failed for {source_str}: {e}") from e
    else:
        try:
            content = Path(source_str).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DatasetLoadError(f"Cannot read {source_str}: {e}") from e

    dataset = load_dataset(content)
    logger.info(
        f"Site dataset loaded from {source_str}: {len(dataset.routes)} routes, "
        f"{len(dataset.landmarks)} landmarks, {len(dataset.competitors)} competitors"
    )
    return dataset
