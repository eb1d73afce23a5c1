"""Analytics API — subject vs competitor summary and chart series."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Request

from app.state import get_site

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/summary")
async def get_summary(request: Request):
    """Headline figures plus their display-slot values."""
    site = get_site(request)
    return {**asdict(site.summary), "slots": site.summary.slots()}


@router.get("/chart")
async def get_chart(request: Request):
    """Competitor footfall bars, highest first."""
    site = get_site(request)
    return asdict(site.chart)
