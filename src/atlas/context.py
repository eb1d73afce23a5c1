"""SiteContext — the composition root for one loaded session.

Holds the immutable dataset, the built layer groups and the analytics
summary, plus the LayerRegistry that owns runtime visibility.  Components
receive what they need from here; nothing is looked up globally.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from atlas.analytics import ChartSeries, Summary, aggregate, competitor_chart
from atlas.dataset import SiteDataset, fetch_dataset
from atlas.layers.builder import LayerBuilder
from atlas.layers.registry import DEFAULT_HIDDEN, LayerRegistry


@dataclass
class SiteContext:
    """Everything derived from one successful load."""

    dataset: SiteDataset
    registry: LayerRegistry
    summary: Summary
    chart: ChartSeries
    rejected: tuple[str, ...]

    @classmethod
    def build(
        cls,
        dataset: SiteDataset,
        hidden_on_load: Iterable[str] = DEFAULT_HIDDEN,
        builder: LayerBuilder | None = None,
    ) -> "SiteContext":
        """Build layers, initialize visibility and compute analytics."""
        result = (builder or LayerBuilder()).build(dataset)
        registry = LayerRegistry(hidden_on_load=hidden_on_load)
        registry.initialize(result.groups)
        return cls(
            dataset=dataset,
            registry=registry,
            summary=aggregate(dataset.subject, dataset.competitors),
            chart=competitor_chart(dataset.competitors),
            rejected=dataset.rejected + tuple(result.rejected),
        )


async def load_site(
    source: str | Path,
    hidden_on_load: Iterable[str] = DEFAULT_HIDDEN,
    timeout: float = 10.0,
) -> SiteContext:
    """Fetch the dataset once and build the session context.

    Raises:
        DatasetLoadError: If the fetch or parse fails; nothing is built.
    """
    dataset = await fetch_dataset(source, timeout=timeout)
    return SiteContext.build(dataset, hidden_on_load=hidden_on_load)
