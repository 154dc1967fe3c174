"""Universe — the System → Planet → Moon → Entry forest and its session state."""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class Mode(str, Enum):
    GENERATE = "generate"   # Every new node is a new top-level System
    EVOLVE = "evolve"       # Every new node goes one level below the selection


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Entry(BaseModel):
    """Leaf log item owned by a Moon (or, rarely, a Planet)."""

    id: str
    type: Literal["entry"] = Field(default="entry", frozen=True)
    text: str = ""
    tone: Optional[str] = None
    created: datetime


class Moon(BaseModel):
    """Third-level body, owned by exactly one Planet."""

    id: str
    type: Literal["moon"] = Field(default="moon", frozen=True)
    title: str = ""
    text: str = ""
    tone: Optional[str] = None
    energy: int = 0
    created: datetime
    updated: datetime

    entries: List[Entry] = []

    # Derived geometry, filled lazily by the layout pass
    x: float = 0.0
    y: float = 0.0
    radius: float = 14
    orbit_radius: float = 0.0               # Distance from the owning planet
    orbit_angle: float = 0.0


class Planet(BaseModel):
    """Second-level body, owned by exactly one System."""

    id: str
    type: Literal["planet"] = Field(default="planet", frozen=True)
    title: str = ""
    text: str = ""
    tone: Optional[str] = None
    energy: int = 0
    created: datetime
    updated: datetime

    moons: List[Moon] = []
    entries: List[Entry] = []

    x: float = 0.0
    y: float = 0.0
    radius: float = 26
    orbit_radius: float = 0.0               # Distance from the system centre
    orbit_angle: float = 0.0


class System(BaseModel):
    """Top-level body (a Sun). Root of its own subtree."""

    id: str
    type: Literal["system"] = Field(default="system", frozen=True)
    title: str = ""
    description: str = ""
    energy: int = 0
    created: datetime
    updated: datetime

    planets: List[Planet] = []
    lineage: List[str] = []                 # Ancestor ids, provenance only (not containment)

    x: float = 0.0
    y: float = 0.0
    radius: float = 40
    orbit_band: float = 0.0                 # Distance from the universe origin
    orbit_angle: float = 0.0


class Camera(BaseModel):
    """Viewport position, consumed by the presentation layer."""

    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


class Universe(BaseModel):
    """
    The persisted aggregate. Every core operation takes one explicitly,
    so several universes can live side by side.
    """

    systems: List[System] = []
    mode: Mode = Mode.GENERATE
    theme: Theme = Theme.DARK
    camera: Camera = Camera()
