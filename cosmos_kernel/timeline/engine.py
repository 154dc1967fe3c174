"""
Timeline Engine — coarse version history over the System forest.

States:
  LIVE ⇄ SCRUBBING ⇄ PLAYING

Behavioral Contract:
- The history log is append-only. Each entry holds a deep copy of the
  forest, never shared references to live entities.
- Only edit notices append. A restore moves the read cursor and replaces
  the live forest wholesale; it does not append (unless record_restores).
- Out-of-range restores are ignored.
- At most one playback ticker runs at a time; pausing is idempotent.
- Playback ends at the entry that was newest when it started.
"""

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from cosmos_kernel.events.bus import ChangeBus
from cosmos_kernel.models.config import CosmosConfig
from cosmos_kernel.models.timeline import ChangeCause, ChangeNotice, Snapshot, TimelineState
from cosmos_kernel.models.universe import System, Universe
from cosmos_kernel.objects.factory import now

logger = logging.getLogger(__name__)


def clone_systems(systems: List[System]) -> List[System]:
    """Structural deep copy of a forest: every entity and nested list duplicated."""
    return [system.model_copy(deep=True) for system in systems]


class TimelineEngine:
    """
    Snapshot log plus a cursor. Subscribes itself to the change bus so every
    committed edit is captured with the post-mutation state.
    """

    def __init__(
        self,
        universe: Universe,
        bus: ChangeBus,
        config: Optional[CosmosConfig] = None,
    ):
        self.universe = universe
        self.bus = bus
        self.config = config or CosmosConfig()

        self._timeline: List[Snapshot] = []
        self._index = -1
        self._playing = False
        self._stop_event: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

        self._unsubscribe = bus.subscribe(self._on_change)

    # --- Read model ---

    @property
    def index(self) -> int:
        """Cursor into the log; -1 before the first snapshot."""
        return self._index

    @property
    def count(self) -> int:
        return len(self._timeline)

    @property
    def newest_index(self) -> int:
        return len(self._timeline) - 1

    @property
    def state(self) -> TimelineState:
        if self._playing:
            return TimelineState.PLAYING
        if self._index < self.newest_index:
            return TimelineState.SCRUBBING
        return TimelineState.LIVE

    @property
    def is_playing(self) -> bool:
        return self._playing

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self._timeline)

    def time_at(self, index: int) -> Optional[datetime]:
        return self._timeline[index].time if self._valid(index) else None

    def reason_at(self, index: int) -> Optional[str]:
        return self._timeline[index].reason if self._valid(index) else None

    def systems_at(self, index: int) -> Optional[List[System]]:
        """A fresh copy of the forest stored at an index."""
        if not self._valid(index):
            return None
        return clone_systems(self._timeline[index].systems)

    def label(self, index: Optional[int] = None) -> str:
        """'Now' for the newest entry, otherwise the entry's HH:MM."""
        if index is None:
            index = self._index
        if not self._valid(index) or index == self.newest_index:
            return "Now"
        return self._timeline[index].time.strftime("%H:%M")

    def entries(self) -> List[dict]:
        """Lightweight metadata for every entry, oldest first."""
        return [
            {
                "index": i,
                "time": snap.time.isoformat(),
                "reason": snap.reason,
                "systems": len(snap.systems),
            }
            for i, snap in enumerate(self._timeline)
        ]

    # --- Capture and restore ---

    def snapshot(self, reason: str = "update") -> Snapshot:
        """Append a deep copy of the live forest and move the cursor to it."""
        snap = self._append(reason)
        self._index = self.newest_index
        return snap

    def _append(self, reason: str) -> Snapshot:
        snap = Snapshot(
            time=now(),
            systems=clone_systems(self.universe.systems),
            reason=reason,
        )
        self._timeline.append(snap)
        logger.debug("Snapshot #%d (%s)", self.newest_index, reason)
        return snap

    def _on_change(self, notice: ChangeNotice) -> None:
        if notice.cause == ChangeCause.EDIT:
            self.snapshot(notice.reason)
        elif self.config.record_restores:
            # Legacy behaviour: history grows on every scrub, cursor stays put
            self._append(notice.reason)

    def restore_snapshot(self, index: int) -> bool:
        """
        Replace the live forest with a copy of entry `index`.
        Returns False (and changes nothing) for an out-of-range index.
        """
        if not self._valid(index):
            logger.debug("Ignoring restore of out-of-range index %s", index)
            return False

        self.universe.systems = clone_systems(self._timeline[index].systems)
        self._index = index
        self.bus.emit(ChangeCause.RESTORE, reason=f"restore:{index}")
        return True

    # --- Playback ---

    def step(self) -> bool:
        """Advance one entry and restore it. False when already at the newest."""
        if self._index >= self.newest_index:
            return False
        return self.restore_snapshot(self._index + 1)

    def start_playback(self) -> Optional[asyncio.Task]:
        """
        Start the ticker on the running event loop. No-op (returns None)
        while a ticker is already active or when called outside a loop.

        The ticker stops at the entry that was newest when it started, so
        entries appended during playback (record_restores) are not chased.
        """
        if self._playing:
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Timeline playback needs a running event loop; ignoring start")
            return None
        self._playing = True
        self._stop_event = asyncio.Event()
        self._task = loop.create_task(
            self._run_playback(self._stop_event, stop_at=self.newest_index)
        )
        logger.info("Timeline playback started at #%d", self._index)
        return self._task

    def pause_playback(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        if self._playing:
            logger.info("Timeline playback paused at #%d", self._index)
        self._playing = False

    async def _run_playback(self, stop_event: asyncio.Event, stop_at: int) -> None:
        try:
            while not stop_event.is_set():
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=self.config.playback_interval_seconds,
                    )
                except asyncio.TimeoutError:
                    if self._index >= stop_at or not self.step():
                        break
        finally:
            # A newer ticker may have replaced this one after a pause
            if self._stop_event is stop_event:
                self._playing = False
                self._stop_event = None
                logger.info("Timeline playback stopped at #%d", self._index)

    def close(self) -> None:
        """Stop playback and detach from the change bus."""
        self.pause_playback()
        self._unsubscribe()
