"""
Selection State — the current system/planet/moon pointer.

Written only by the session (on user choice, after promotions, deletions
and restores). Read by the Mutation Engine and the presentation layer.
Stale ids are tolerated: a level that does not resolve reads as None.
"""

import logging
from typing import Optional

from cosmos_kernel.models.selection import (
    ResolvedSelection,
    Selection,
    SelectionSummary,
)
from cosmos_kernel.models.universe import Universe

logger = logging.getLogger(__name__)


def resolve_selection(universe: Universe, selection: Selection) -> ResolvedSelection:
    """Resolve the pointer top-down. Never raises on stale or inconsistent ids."""
    system = next((s for s in universe.systems if s.id == selection.system), None)
    planet = None
    moon = None
    if system is not None:
        planet = next((p for p in system.planets if p.id == selection.planet), None)
    if planet is not None:
        moon = next((m for m in planet.moons if m.id == selection.moon), None)
    return ResolvedSelection(system, planet, moon)


class SelectionState:
    """Owns one Selection and applies the cascading setter rules."""

    def __init__(self, selection: Optional[Selection] = None):
        self._selection = selection or Selection()

    @property
    def current(self) -> Selection:
        return self._selection

    def resolve(self, universe: Universe) -> ResolvedSelection:
        return resolve_selection(universe, self._selection)

    def select_system(self, system_id: Optional[str]) -> None:
        """Pick a system. Anything selected below it is cleared."""
        self._selection.system = system_id or None
        self._selection.planet = None
        self._selection.moon = None

    def select_planet(self, planet_id: Optional[str]) -> None:
        self._selection.planet = planet_id or None
        self._selection.moon = None

    def select_moon(self, moon_id: Optional[str]) -> None:
        self._selection.moon = moon_id or None

    def clear(self) -> None:
        self._selection.system = None
        self._selection.planet = None
        self._selection.moon = None

    def prune(self, universe: Universe) -> bool:
        """
        Clear every level that no longer resolves, and everything beneath it.
        Returns True if the pointer changed.
        """
        before = self._selection.model_copy()
        system, planet, moon = self.resolve(universe)

        if system is None:
            self.clear()
        elif planet is None:
            self._selection.planet = None
            self._selection.moon = None
        elif moon is None:
            self._selection.moon = None

        changed = before != self._selection
        if changed:
            logger.debug("Pruned stale selection %s -> %s", before, self._selection)
        return changed

    def summary(self, universe: Universe) -> SelectionSummary:
        """What the side panel shows for the deepest resolved level."""
        system, planet, moon = self.resolve(universe)

        if system is None:
            return SelectionSummary()

        if planet is None:
            return SelectionSummary(
                kind="system",
                title=system.title,
                path=system.title,
                child_count=len(system.planets),
                child_label=f"{len(system.planets)} planets",
                last_update=system.updated,
            )

        if moon is None:
            return SelectionSummary(
                kind="planet",
                title=planet.title,
                path=f"{system.title} / {planet.title}",
                child_count=len(planet.moons),
                child_label=f"{len(planet.moons)} moons",
                last_update=planet.updated,
            )

        return SelectionSummary(
            kind="moon",
            title=moon.title,
            path=f"{system.title} / {planet.title} / {moon.title}",
            child_count=len(moon.entries),
            child_label=f"{len(moon.entries)} entries",
            last_update=moon.updated,
            entries=sorted(moon.entries, key=lambda e: e.created),
        )
