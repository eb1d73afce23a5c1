"""Map configuration API — initial view and basemap tiles."""

from __future__ import annotations

from fastapi import APIRouter, Request

from app.config import settings
from app.state import get_site
from atlas.geo import normalize

router = APIRouter(prefix="/api/map", tags=["map"])


@router.get("")
async def get_map_config(request: Request):
    """Initial map view (center in [lat, lng]) and tile layer settings."""
    site = get_site(request)
    lat, lng = normalize(site.dataset.map_center)
    return {
        "center": [lat, lng],
        "zoom": site.dataset.map_zoom,
        "tiles": {
            "url": settings.tile_url,
            "attribution": settings.tile_attribution,
            "subdomains": settings.tile_subdomains,
            "maxZoom": settings.tile_max_zoom,
        },
    }
