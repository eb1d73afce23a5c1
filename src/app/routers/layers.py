"""Layer API — list layer groups, fetch features, toggle visibility."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from loguru import logger
from pydantic import BaseModel

from app.state import get_site
from atlas.layers.export import export_group
from atlas.layers.registry import UnknownLayerError

router = APIRouter(prefix="/api/layers", tags=["layers"])


class LayerState(BaseModel):
    """Visibility of one layer group."""
    name: str
    visible: bool


class LayerSummary(LayerState):
    """A layer group's state and size."""
    feature_count: int
    z_index: int


@router.get("", response_model=list[LayerSummary])
async def list_layers(request: Request):
    """All layer groups, in registration order."""
    site = get_site(request)
    return [
        LayerSummary(
            name=g.name,
            visible=g.visible,
            feature_count=len(g.features),
            z_index=g.z_index,
        )
        for g in site.registry.groups()
    ]


@router.get("/{name}")
async def get_layer(name: str, request: Request):
    """Render-ready features of one layer group."""
    site = get_site(request)
    try:
        group = site.registry.get(name)
    except UnknownLayerError as e:
        raise HTTPException(404, str(e))
    return export_group(group)


@router.post("/{name}/toggle", response_model=LayerState)
async def toggle_layer(name: str, request: Request):
    """Flip a layer group's visibility."""
    site = get_site(request)
    try:
        visible = site.registry.toggle(name)
    except UnknownLayerError as e:
        logger.warning(f"Toggle request for unknown layer '{name}'")
        raise HTTPException(404, str(e))
    return LayerState(name=name, visible=visible)
