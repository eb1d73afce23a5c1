"""LayerBuilder — turns the site dataset into styled, grouped features.

One Feature per entity, grouped by entity kind.  Coordinates are normalized
to rendering order here and nowhere else.  A malformed entity (blank name,
route with fewer than two points) is excluded from its group with a warning;
the rest of the build continues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from atlas.dataset import Competitor, DistanceBand, Landmark, Route, SiteDataset, SubjectSite
from atlas.geo import normalize, normalize_path
from atlas.layers.labels import format_label
from atlas.layers.layer import (
    COMPETITORS,
    DISTANCE,
    LANDMARKS,
    LINE,
    MARKER,
    POINT,
    RING,
    ROUTES,
    SUBJECT,
    Feature,
    LayerGroup,
    MarkerIcon,
    PopupContent,
    PopupField,
    Tooltip,
)
from atlas.layers.styles import (
    band_style,
    competitor_style,
    landmark_style,
    route_style,
    track_status,
)

SUBJECT_Z_INDEX_OFFSET = 1000
SUBJECT_TRACK_LABEL = "Secondary Track"
SUBJECT_DESCRIPTION = (
    "Located off the primary pedestrian spine, "
    "within 2-3 min walk of main tourist nodes."
)
SUBJECT_FOOTER = "Subject Property"
SUBJECT_ICON = MarkerIcon(
    class_name="subject-marker",
    html='<div class="marker-pulse"></div><div class="marker-icon"><span>\U0001F377</span></div>',
    size=(40, 40),
    anchor=(20, 20),
)

# Draw order between groups, bottom to top
_Z_ORDER = {DISTANCE: 0, ROUTES: 1, LANDMARKS: 2, COMPETITORS: 3, SUBJECT: 4}

_POINT_TOOLTIP_OFFSET = (0, -10)


class EntityRejected(ValueError):
    """A single entity violates the data contract and is skipped."""


@dataclass
class BuildResult:
    """Output of one build: the layer groups plus exclusion warnings."""

    groups: dict[str, LayerGroup]
    rejected: list[str] = field(default_factory=list)


def _footfall(value: int) -> PopupField:
    return PopupField("Footfall Index", str(value))


class LayerBuilder:
    """Build the map's layer groups from a SiteDataset."""

    def __init__(
        self,
        label: Callable[[str], str] = format_label,
        subject_description: str = SUBJECT_DESCRIPTION,
    ) -> None:
        self._label = label
        self._subject_description = subject_description

    def build(self, dataset: SiteDataset) -> BuildResult:
        """Build every layer group.

        Returns:
            BuildResult with groups keyed by name (routes, distance,
            landmarks, competitors, subject) and a warning per excluded
            entity.
        """
        rejected: list[str] = []
        groups = {
            ROUTES: self._group(ROUTES, dataset.routes, self.build_route, rejected),
            DISTANCE: LayerGroup(
                DISTANCE,
                self.build_distance_bands(dataset.subject, dataset.distance_bands),
                z_index=_Z_ORDER[DISTANCE],
            ),
            LANDMARKS: self._group(LANDMARKS, dataset.landmarks, self.build_landmark, rejected),
            COMPETITORS: self._group(
                COMPETITORS, dataset.competitors, self.build_competitor, rejected,
            ),
            SUBJECT: LayerGroup(
                SUBJECT, (self.build_subject(dataset.subject),), z_index=_Z_ORDER[SUBJECT],
            ),
        }
        total = sum(len(g.features) for g in groups.values())
        logger.info(f"Built {len(groups)} layer groups, {total} features, {len(rejected)} rejected")
        return BuildResult(groups=groups, rejected=rejected)

    def _group(self, name: str, entities, build_one, rejected: list[str]) -> LayerGroup:
        features = []
        for idx, entity in enumerate(entities):
            try:
                features.append(build_one(entity, idx))
            except EntityRejected as e:
                logger.warning(f"{name}: {e}")
                rejected.append(f"{name}: {e}")
        return LayerGroup(name, tuple(features), z_index=_Z_ORDER[name])

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def build_route(self, route: Route, idx: int = 0) -> Feature:
        if not route.name.strip():
            raise EntityRejected(f"route #{idx} has no name")
        if len(route.coordinates) < 2:
            raise EntityRejected(
                f"route #{idx} ({route.name!r}) needs at least 2 coordinates, "
                f"got {len(route.coordinates)}"
            )
        return Feature(
            feature_id=f"route-{idx}",
            geometry_type=LINE,
            coordinates=normalize_path(route.coordinates),
            style=route_style(route.classification),
            title=route.name,
            popup=PopupContent(
                title=route.name,
                fields=(
                    PopupField("Classification", self._label(route.classification)),
                    _footfall(route.footfall),
                ),
                description=route.description or None,
            ),
            tooltip=Tooltip(route.name, direction="center"),
        )

    def build_landmark(self, landmark: Landmark, idx: int = 0) -> Feature:
        if not landmark.name.strip():
            raise EntityRejected(f"landmark #{idx} has no name")
        return Feature(
            feature_id=f"landmark-{idx}",
            geometry_type=POINT,
            coordinates=normalize(landmark.coordinates),
            style=landmark_style(landmark.category),
            title=landmark.name,
            popup=PopupContent(
                title=landmark.name,
                fields=(
                    PopupField("Type", landmark.landmark_type),
                    PopupField("Category", self._label(landmark.category)),
                    _footfall(landmark.footfall),
                ),
                description=landmark.description or None,
            ),
            tooltip=Tooltip(landmark.name, offset=_POINT_TOOLTIP_OFFSET),
        )

    def build_competitor(self, competitor: Competitor, idx: int = 0) -> Feature:
        if not competitor.name.strip():
            raise EntityRejected(f"competitor #{idx} has no name")
        return Feature(
            feature_id=f"competitor-{idx}",
            geometry_type=POINT,
            coordinates=normalize(competitor.coordinates),
            style=competitor_style(competitor.category, competitor.track_position),
            title=competitor.name,
            popup=PopupContent(
                title=competitor.name,
                fields=(
                    PopupField("Address", competitor.address),
                    PopupField("Type", self._label(competitor.category)),
                    PopupField(
                        "Track Position",
                        self._label(competitor.track_position),
                        status=track_status(competitor.track_position),
                    ),
                    _footfall(competitor.footfall),
                ),
                variant="competitor",
            ),
            tooltip=Tooltip(competitor.name, offset=_POINT_TOOLTIP_OFFSET),
        )

    def build_subject(self, subject: SubjectSite) -> Feature:
        return Feature(
            feature_id="subject",
            geometry_type=MARKER,
            coordinates=normalize(subject.coordinates),
            style=None,
            title=subject.name,
            popup=PopupContent(
                title=subject.name,
                fields=(
                    PopupField("Address", subject.address),
                    PopupField("Position", SUBJECT_TRACK_LABEL, status="off-track"),
                    _footfall(subject.footfall),
                ),
                description=self._subject_description,
                footer=SUBJECT_FOOTER,
                variant="subject",
            ),
            icon=SUBJECT_ICON,
            z_index_offset=SUBJECT_Z_INDEX_OFFSET,
        )

    def build_distance_bands(
        self, subject: SubjectSite, bands: tuple[DistanceBand, ...],
    ) -> tuple[Feature, ...]:
        center = normalize(subject.coordinates)
        return tuple(
            Feature(
                feature_id=f"band-{idx}",
                geometry_type=RING,
                coordinates=center,
                style=band_style(band.color, band.fill_opacity),
                title=band.label,
                tooltip=Tooltip(band.label, direction="right"),
                radius_m=band.radius,
            )
            for idx, band in enumerate(bands)
        )


def build_layers(dataset: SiteDataset, builder: LayerBuilder | None = None) -> BuildResult:
    """Build all layer groups with a default LayerBuilder."""
    return (builder or LayerBuilder()).build(dataset)
