"""Access to the per-process site context stored on app state."""

from __future__ import annotations

from fastapi import HTTPException, Request

from atlas.context import SiteContext


def get_site(request: Request) -> SiteContext:
    """Retrieve the loaded SiteContext, or 503 if the load failed."""
    site = getattr(request.app.state, "site", None)
    if site is None:
        raise HTTPException(503, "Site dataset not loaded")
    return site
