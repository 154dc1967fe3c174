"""
Cosmos Session — one universe with its selection, history and storage.

Control flow for every committed edit:
  user intent → Mutation Engine applies the change → change bus emits
  → Timeline captures a snapshot → store saves → selection pruned
  → presentation re-reads state.
"""

import logging
import random
from typing import List, Optional, Union

from cosmos_kernel.events.bus import ChangeBus
from cosmos_kernel.layout.orbits import assign_orbits
from cosmos_kernel.models.config import CosmosConfig
from cosmos_kernel.models.mutation import NodePayload
from cosmos_kernel.models.selection import ResolvedSelection, SelectionSummary
from cosmos_kernel.models.timeline import ChangeCause, ChangeNotice
from cosmos_kernel.models.universe import Mode, System, Theme, Universe
from cosmos_kernel.mutation import engine
from cosmos_kernel.mutation.engine import CosmosObject
from cosmos_kernel.selection.state import SelectionState
from cosmos_kernel.storage.store import UniverseStore
from cosmos_kernel.timeline.engine import TimelineEngine

logger = logging.getLogger(__name__)


class CosmosSession:
    """
    The composition root. Owns the Universe and is the only writer of the
    selection pointer.
    """

    def __init__(
        self,
        config: Optional[CosmosConfig] = None,
        store: Optional[UniverseStore] = None,
        universe: Optional[Universe] = None,
    ):
        self.config = config or CosmosConfig()
        self.store = store or UniverseStore(
            db_path=self.config.db_path,
            key=self.config.storage_key,
        )

        if universe is None:
            universe = self.store.load()
            if universe is not None:
                logger.info("Loaded universe with %d systems", len(universe.systems))
        self.universe = universe or Universe()

        self.bus = ChangeBus()
        self.selection = SelectionState()
        self.timeline = TimelineEngine(self.universe, self.bus, self.config)
        self.bus.subscribe(self._on_change)

        self.timeline.snapshot("initial")

    def _on_change(self, notice: ChangeNotice) -> None:
        if notice.cause == ChangeCause.RESTORE:
            self.selection.prune(self.universe)
        self.store.save(self.universe)

    def _commit(self, reason: str) -> None:
        self.bus.emit(ChangeCause.EDIT, reason=reason)

    # --- Selection ---

    def select_system(self, system_id: Optional[str]) -> None:
        self.selection.select_system(system_id)

    def select_planet(self, planet_id: Optional[str]) -> None:
        self.selection.select_planet(planet_id)

    def select_moon(self, moon_id: Optional[str]) -> None:
        self.selection.select_moon(moon_id)

    def clear_selection(self) -> None:
        self.selection.clear()

    def resolve_selection(self) -> ResolvedSelection:
        return self.selection.resolve(self.universe)

    def summary(self) -> SelectionSummary:
        return self.selection.summary(self.universe)

    # --- Edits ---

    def create_system(
        self, title: str, description: str = "", energy: int = 0
    ) -> Optional[System]:
        system = engine.create_system(self.universe, title, description, energy)
        if system is not None:
            self._commit("create-system")
        return system

    def create_node(
        self,
        payload: Optional[NodePayload] = None,
        **fields,
    ) -> Optional[CosmosObject]:
        """
        Mode-aware creation from the current selection. Blank titles are
        ignored, except for entries, which need non-blank text instead.
        """
        if payload is None:
            payload = NodePayload(**fields)
        targets_entry = (
            self.universe.mode == Mode.EVOLVE
            and self.resolve_selection().moon is not None
        )
        required = payload.text if targets_entry else payload.title
        if not required.strip():
            logger.debug("Ignoring create_node with blank %s", "text" if targets_entry else "title")
            return None

        created = engine.create_node(self.universe, self.selection.current, payload)
        if created is not None:
            self._commit(f"create-{created.type}")
        return created

    def edit_object(
        self,
        object_id: str,
        title: Optional[str] = None,
        text: Optional[str] = None,
    ) -> Optional[CosmosObject]:
        obj = engine.update_object(self.universe, object_id, title=title, text=text)
        if obj is not None:
            self._commit(f"edit-{obj.type}")
        return obj

    def delete_object(self, object_id: str) -> List[str]:
        """Delete an entity subtree. Returns the removed ids (empty on a miss)."""
        removed = engine.delete_subtree(self.universe, object_id)
        if removed:
            self.selection.prune(self.universe)
            self._commit("delete")
        return removed

    def promote(
        self,
        object_id: Optional[str] = None,
        carry_subtree: Optional[bool] = None,
    ) -> Optional[System]:
        """
        Promote a planet or moon to a System and select it. With no id, the
        deepest selected node is promoted.
        """
        if object_id is None:
            _, planet, moon = self.resolve_selection()
            target = moon or planet
            if target is None:
                return None
            object_id = target.id
        if carry_subtree is None:
            carry_subtree = self.config.promote_carries_subtree

        promoted = engine.promote_to_system(self.universe, object_id, carry_subtree=carry_subtree)
        if promoted is None:
            return None
        self.selection.select_system(promoted.id)
        self._commit("promote")
        return promoted

    # --- Timeline ---

    def restore(self, index: int) -> bool:
        return self.timeline.restore_snapshot(index)

    def step(self) -> bool:
        return self.timeline.step()

    def start_playback(self):
        return self.timeline.start_playback()

    def pause_playback(self) -> None:
        self.timeline.pause_playback()

    # --- Session settings (persisted, not part of history) ---

    def set_mode(self, mode: Union[Mode, str]) -> None:
        self.universe.mode = Mode(mode)
        self.store.save(self.universe)

    def set_theme(self, theme: Union[Theme, str]) -> None:
        self.universe.theme = Theme(theme)
        self.store.save(self.universe)

    def toggle_theme(self) -> Theme:
        self.set_theme(Theme.LIGHT if self.universe.theme == Theme.DARK else Theme.DARK)
        return self.universe.theme

    def focus_on_selection(self) -> bool:
        """Centre the camera on the deepest resolved selection."""
        system, planet, moon = self.resolve_selection()
        target = moon or planet or system
        if target is None:
            return False
        self.universe.camera.x = target.x
        self.universe.camera.y = target.y
        self.universe.camera.zoom = self.config.focus_zoom
        self.store.save(self.universe)
        return True

    # --- Derived views ---

    def lineage_links(self) -> List[tuple]:
        return engine.lineage_links(self.universe)

    def layout(self, rng: Optional[random.Random] = None) -> None:
        assign_orbits(self.universe, rng)

    def close(self) -> None:
        self.timeline.close()
        self.store.close()
