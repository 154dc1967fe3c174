"""Selection — the three-level pointer into the forest."""

from datetime import datetime
from typing import List, Literal, NamedTuple, Optional

from pydantic import BaseModel

from cosmos_kernel.models.universe import Entry, Moon, Planet, System


class Selection(BaseModel):
    """
    Nullable ids for the current system, planet and moon.

    Levels are only meaningful top-down: a planet id without a resolving
    system reads as nothing selected at that level.
    """

    system: Optional[str] = None
    planet: Optional[str] = None
    moon: Optional[str] = None


class ResolvedSelection(NamedTuple):
    system: Optional[System]
    planet: Optional[Planet]
    moon: Optional[Moon]


class SelectionSummary(BaseModel):
    """Read-model of the current selection for the presentation layer."""

    kind: Literal["none", "system", "planet", "moon"] = "none"
    title: str = "—"
    path: str = "—"
    child_count: int = 0
    child_label: str = "0"                  # e.g. "2 planets"
    last_update: Optional[datetime] = None
    entries: List[Entry] = []               # Only populated for a selected moon, oldest first
