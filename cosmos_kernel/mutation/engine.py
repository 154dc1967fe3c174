"""
Mutation Engine — structural edits to a Universe.

Operations:
- create_node: mode-aware creation (Generate → new System, Evolve → one level deeper)
- create_system: a root System regardless of mode
- promote_to_system: detach a Planet or Moon and re-create it as a System
- delete_object / delete_subtree: remove an entity and everything it owns
- update_object: inspector edit of title/text

Behavioral Contract:
- Every operation takes the Universe explicitly and mutates it in place.
- Misses are results (None / False / []), never exceptions.
- Creation touches nothing but the new entity and its immediate parent's
  `updated` timestamp.
- Nothing here emits change notices; the session does, after the edit is
  fully applied.
"""

import logging
from typing import Iterator, List, Optional, Union

from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.selection import Selection
from cosmos_kernel.models.universe import Entry, Mode, Moon, Planet, System, Universe
from cosmos_kernel.objects.factory import (
    create_entry,
    create_moon,
    create_planet,
    create_system as new_system,
    now,
)
from cosmos_kernel.selection.state import resolve_selection

logger = logging.getLogger(__name__)

CosmosObject = Union[System, Planet, Moon, Entry]


# --- Lookup ---

def iter_objects(universe: Universe) -> Iterator[CosmosObject]:
    """Every entity in the forest, depth-first, owners before children."""
    for system in universe.systems:
        yield system
        for planet in system.planets:
            yield planet
            for moon in planet.moons:
                yield moon
                yield from moon.entries
            yield from planet.entries


def find_object(universe: Universe, object_id: str) -> Optional[CosmosObject]:
    """Find an entity of any kind by id."""
    return next((o for o in iter_objects(universe) if o.id == object_id), None)


def collect_ids(obj: CosmosObject) -> List[str]:
    """Ids of an entity and its whole owned subtree, owner first."""
    ids = [obj.id]
    if isinstance(obj, System):
        for planet in obj.planets:
            ids.extend(collect_ids(planet))
    elif isinstance(obj, Planet):
        for moon in obj.moons:
            ids.extend(collect_ids(moon))
        ids.extend(e.id for e in obj.entries)
    elif isinstance(obj, Moon):
        ids.extend(e.id for e in obj.entries)
    return ids


def lineage_links(universe: Universe) -> List[tuple]:
    """
    (ancestor_id, descendant_id) pairs for every lineage entry whose
    ancestor System still exists. Dangling ancestors are skipped.
    """
    system_ids = {s.id for s in universe.systems}
    return [
        (ancestor, system.id)
        for system in universe.systems
        for ancestor in system.lineage
        if ancestor in system_ids
    ]


# --- Creation ---

def create_system(
    universe: Universe,
    title: str,
    description: str = "",
    energy: int = 0,
) -> Optional[System]:
    """Append a root System. Blank titles are ignored."""
    if not title or not title.strip():
        return None
    system = new_system(title=title.strip(), description=description.strip(), energy=energy)
    universe.systems.append(system)
    logger.debug("Created system %s (%s)", system.id, system.title)
    return system


def create_node(
    universe: Universe,
    selection: Selection,
    payload: NodePayload,
) -> Optional[CosmosObject]:
    """
    Create exactly one entity at the depth implied by mode and selection.

    Generate: a new top-level System, descended from the selected System if any.
    Evolve: Planet under a System, Moon under a Planet, Entry under a Moon.
    Returns None when Evolve has nothing selected. Selection is never changed.
    """
    system, planet, moon = resolve_selection(universe, selection)

    if universe.mode == Mode.GENERATE:
        created = new_system(
            title=payload.title,
            description=payload.text,
            energy=payload.energy,
        )
        if system is not None:
            created.lineage.append(system.id)
        universe.systems.append(created)
        logger.debug("Generated system %s (lineage=%s)", created.id, created.lineage)
        return created

    if system is not None and planet is None:
        created = create_planet(payload.title, payload.text, payload.tone, payload.energy)
        system.planets.append(created)
        system.updated = now()
        logger.debug("Evolved planet %s under system %s", created.id, system.id)
        return created

    if planet is not None and moon is None:
        created = create_moon(payload.title, payload.text, payload.tone, payload.energy)
        planet.moons.append(created)
        planet.updated = now()
        logger.debug("Evolved moon %s under planet %s", created.id, planet.id)
        return created

    if moon is not None:
        created = create_entry(payload.text, payload.tone)
        moon.entries.append(created)
        moon.updated = now()
        logger.debug("Evolved entry %s under moon %s", created.id, moon.id)
        return created

    return None


# --- Promotion ---

def _lift_children(source: Union[Planet, Moon]) -> List[Planet]:
    """Shift a promoted node's children up one level to become planets."""
    lifted = []
    for moon in getattr(source, "moons", []):
        planet = create_planet(moon.title, moon.text, moon.tone, moon.energy)
        planet.entries = list(moon.entries)
        lifted.append(planet)
    if source.entries:
        holder = create_planet(source.title, source.text, source.tone, source.energy)
        holder.entries = list(source.entries)
        lifted.append(holder)
    return lifted


def _system_from(source: Union[Planet, Moon], lineage: List[str], carry_subtree: bool) -> System:
    system = new_system(title=source.title, description=source.text, energy=source.energy)
    system.lineage.extend(lineage)
    if carry_subtree:
        system.planets.extend(_lift_children(source))
    return system


def promote_to_system(
    universe: Universe,
    object_id: str,
    carry_subtree: bool = False,
) -> Optional[System]:
    """
    Detach a Planet or Moon and append it as a new top-level System.

    Planets are matched before moons across the whole universe. A promoted
    planet records its former system as lineage; a promoted moon records
    [planet, system]. Without carry_subtree the detached node's descendants
    are dropped. Returns None for anything else (systems, entries, misses).
    """
    for system in universe.systems:
        for idx, planet in enumerate(system.planets):
            if planet.id == object_id:
                del system.planets[idx]
                promoted = _system_from(planet, [system.id], carry_subtree)
                universe.systems.append(promoted)
                logger.debug("Promoted planet %s to system %s", object_id, promoted.id)
                return promoted

    for system in universe.systems:
        for planet in system.planets:
            for idx, moon in enumerate(planet.moons):
                if moon.id == object_id:
                    del planet.moons[idx]
                    promoted = _system_from(moon, [planet.id, system.id], carry_subtree)
                    universe.systems.append(promoted)
                    logger.debug("Promoted moon %s to system %s", object_id, promoted.id)
                    return promoted

    logger.debug("Nothing promotable with id %s", object_id)
    return None


# --- Deletion ---

def delete_subtree(universe: Universe, object_id: str) -> List[str]:
    """
    Remove an entity and its owned subtree.

    Checks systems, then planets, then moons, then entries; the first match
    wins. Returns every removed id (owner first), empty if nothing matched.
    """
    for idx, system in enumerate(universe.systems):
        if system.id == object_id:
            del universe.systems[idx]
            return collect_ids(system)

    for system in universe.systems:
        for idx, planet in enumerate(system.planets):
            if planet.id == object_id:
                del system.planets[idx]
                return collect_ids(planet)

    for system in universe.systems:
        for planet in system.planets:
            for idx, moon in enumerate(planet.moons):
                if moon.id == object_id:
                    del planet.moons[idx]
                    return collect_ids(moon)

    for system in universe.systems:
        for planet in system.planets:
            owners = [*planet.moons, planet]
            for owner in owners:
                for idx, entry in enumerate(owner.entries):
                    if entry.id == object_id:
                        del owner.entries[idx]
                        return [entry.id]

    return []


def delete_object(universe: Universe, object_id: str) -> bool:
    """Remove an entity and everything beneath it. False if the id matched nothing."""
    removed = delete_subtree(universe, object_id)
    if removed:
        logger.debug("Deleted %s (%d objects)", object_id, len(removed))
    return bool(removed)


# --- Inspector edits ---

def update_object(
    universe: Universe,
    object_id: str,
    title: Optional[str] = None,
    text: Optional[str] = None,
) -> Optional[CosmosObject]:
    """
    Apply an inspector edit and bump `updated`.

    A System's text is its description. Entries have no title and no
    `updated`; only their text changes.
    """
    obj = find_object(universe, object_id)
    if obj is None:
        return None

    if isinstance(obj, Entry):
        if text is not None:
            obj.text = text
        return obj

    if title is not None:
        obj.title = title
    if text is not None:
        if isinstance(obj, System):
            obj.description = text
        else:
            obj.text = text
    obj.updated = now()
    return obj
