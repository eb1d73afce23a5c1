"""Shared fixtures: a small site document and loguru capture."""

from __future__ import annotations

import copy

import pytest
from loguru import logger

from atlas.dataset import parse_dataset

SITE_DOCUMENT = {
    "mapCenter": [18.1094, 42.6410],
    "mapZoom": 17,
    "subjectSite": {
        "name": "Des Arts",
        "address": "Od Puča 4",
        "footfall": 62,
        "coordinates": [18.1089, 42.6404],
    },
    "pedestrianRoutes": [
        {
            "name": "Stradun",
            "type": "primary_pedestrian",
            "footfall": 95,
            "coordinates": [[18.1067, 42.6417], [18.1105, 42.6410]],
            "description": "Main promenade.",
        },
        {
            "name": "Prijeko",
            "type": "tertiary_offtrack",
            "footfall": 40,
            "coordinates": [[18.1075, 42.6423], [18.1098, 42.6419]],
        },
    ],
    "landmarks": [
        {
            "name": "Pile Gate",
            "category": "entry_point",
            "type": "City gate",
            "footfall": 98,
            "coordinates": [18.1063, 42.6417],
        },
        {
            "name": "Onofrio's Fountain",
            "category": "primary_attraction",
            "type": "Fountain",
            "footfall": 90,
            "coordinates": [18.1069, 42.6416],
            "description": "Just inside the gate.",
        },
    ],
    "competitors": [
        {
            "name": "Stradun Wine House",
            "address": "Placa 12",
            "type": "wine_bar",
            "trackPosition": "primary_spine",
            "footfall": 80,
            "coordinates": [18.1081, 42.6415],
        },
        {
            "name": "Bar Pucić",
            "address": "Od Puča 11",
            "type": "enoteca",
            "trackPosition": "secondary",
            "footfall": 50,
            "coordinates": [18.1094, 42.6403],
        },
        {
            "name": "Prijeko Cocktails",
            "address": "Prijeko 9",
            "type": "cocktail_bar",
            "trackPosition": "off_track",
            "footfall": 30,
            "coordinates": [18.1088, 42.6421],
        },
    ],
}


@pytest.fixture
def site_document():
    """A fresh, mutable copy of the sample site document."""
    return copy.deepcopy(SITE_DOCUMENT)


@pytest.fixture
def dataset(site_document):
    return parse_dataset(site_document)


@pytest.fixture
def warnings_logged():
    """Collect loguru WARNING+ messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="WARNING")
    yield messages
    logger.remove(handler_id)
