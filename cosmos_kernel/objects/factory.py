"""
Object Factory — the only place universe entities are born.

Allocates globally unique ids and timestamps. Kind is fixed at construction:
a factory never returns an entity whose type tag will later change.
"""

import math
import random
from datetime import datetime
from typing import Optional
from uuid import uuid4

from cosmos_kernel.models.universe import Entry, Moon, Planet, System


def uid() -> str:
    """Collision-resistant id, unique across every entity kind."""
    return str(uuid4())


def now() -> datetime:
    return datetime.utcnow()


def random_angle(rng: Optional[random.Random] = None) -> float:
    """Random angle in radians, in [0, 2π)."""
    return (rng or random).random() * math.pi * 2


def create_system(title: str, description: str = "", energy: int = 0) -> System:
    """A root System with no planets and no lineage. Orbit band is laid out lazily."""
    created = now()
    return System(
        id=uid(),
        title=title,
        description=description,
        energy=energy,
        created=created,
        updated=created,
        planets=[],
        lineage=[],
        radius=40,
        orbit_band=0.0,
    )


def create_planet(
    title: str,
    text: str = "",
    tone: Optional[str] = None,
    energy: int = 0,
) -> Planet:
    created = now()
    return Planet(
        id=uid(),
        title=title,
        text=text,
        tone=tone,
        energy=energy,
        created=created,
        updated=created,
        moons=[],
        entries=[],
        radius=26,
        orbit_radius=0.0,
        orbit_angle=random_angle(),
    )


def create_moon(
    title: str,
    text: str = "",
    tone: Optional[str] = None,
    energy: int = 0,
) -> Moon:
    created = now()
    return Moon(
        id=uid(),
        title=title,
        text=text,
        tone=tone,
        energy=energy,
        created=created,
        updated=created,
        entries=[],
        radius=14,
        orbit_radius=0.0,
        orbit_angle=random_angle(),
    )


def create_entry(text: str = "", tone: Optional[str] = None) -> Entry:
    return Entry(id=uid(), text=text, tone=tone, created=now())
