"""LayerRegistry — owns the named layer groups and their visibility.

Features are fixed once registered; only visibility changes at runtime.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from loguru import logger

from atlas.layers.layer import DISTANCE, LayerGroup

DEFAULT_HIDDEN = (DISTANCE,)


class UnknownLayerError(KeyError):
    """Raised when a layer name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Layer not found: {self.name}"


class LayerRegistry:
    """Registry of the site map's layer groups."""

    def __init__(self, hidden_on_load: Iterable[str] = DEFAULT_HIDDEN) -> None:
        self._groups: dict[str, LayerGroup] = {}
        self._hidden_on_load = frozenset(hidden_on_load)

    def initialize(self, groups: Mapping[str, LayerGroup]) -> None:
        """Register groups and set their load-time visibility.

        Every group starts visible except those named in ``hidden_on_load``
        (the distance bands by default).  Replaces any earlier registration.
        """
        self._groups = {}
        for name, group in groups.items():
            group.visible = name not in self._hidden_on_load
            self._groups[name] = group
        visible = [n for n, g in self._groups.items() if g.visible]
        logger.info(f"Layer registry: {len(self._groups)} groups, visible={visible}")

    def get(self, name: str) -> LayerGroup:
        """Get a group by name.

        Raises:
            UnknownLayerError: If the name is not registered.
        """
        group = self._groups.get(name)
        if group is None:
            raise UnknownLayerError(name)
        return group

    def names(self) -> list[str]:
        return list(self._groups)

    def groups(self) -> list[LayerGroup]:
        """All groups, in registration order."""
        return list(self._groups.values())

    def __contains__(self, name: object) -> bool:
        return name in self._groups

    def is_visible(self, name: str) -> bool:
        return self.get(name).visible

    def set_visibility(self, name: str, visible: bool) -> None:
        """Set a group's visibility.

        Raises:
            UnknownLayerError: If the name is not registered.
        """
        self.get(name).visible = visible

    def toggle(self, name: str) -> bool:
        """Flip a group's visibility and return the new state.

        The feature tuple is never touched, so toggling twice restores the
        original state with the same feature objects.

        Raises:
            UnknownLayerError: If the name is not registered.
        """
        group = self.get(name)
        group.visible = not group.visible
        logger.debug(f"Layer '{name}' visible={group.visible}")
        return group.visible
