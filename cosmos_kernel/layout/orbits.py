"""
Orbit layout — derived, non-authoritative geometry.

Orbit distances are initialised once from energy plus a random spread,
then positions are placed from the current angles. Everything here can be
recomputed without losing semantic data; pass a seeded Random to reproduce.
"""

import math
import random
from typing import Optional

from cosmos_kernel.models.universe import Moon, Planet, System, Universe
from cosmos_kernel.objects.factory import random_angle

# (base, random spread, per-energy step)
SYSTEM_BAND = (200.0, 120.0, 18.0)
PLANET_ORBIT = (80.0, 50.0, 12.0)
MOON_ORBIT = (28.0, 20.0, 10.0)


def _distance(params: tuple, energy: int, rng: random.Random) -> float:
    base, spread, step = params
    return base + rng.random() * spread + energy * step


def _place_system(system: System, rng: random.Random) -> None:
    if not system.orbit_band:
        system.orbit_band = _distance(SYSTEM_BAND, system.energy, rng)
        system.orbit_angle = random_angle(rng)
    system.x = math.cos(system.orbit_angle) * system.orbit_band
    system.y = math.sin(system.orbit_angle) * system.orbit_band


def _place_planet(system: System, planet: Planet, rng: random.Random) -> None:
    if not planet.orbit_radius:
        planet.orbit_radius = _distance(PLANET_ORBIT, planet.energy, rng)
    planet.x = system.x + math.cos(planet.orbit_angle) * planet.orbit_radius
    planet.y = system.y + math.sin(planet.orbit_angle) * planet.orbit_radius


def _place_moon(planet: Planet, moon: Moon, rng: random.Random) -> None:
    if not moon.orbit_radius:
        moon.orbit_radius = _distance(MOON_ORBIT, moon.energy, rng)
    moon.x = planet.x + math.cos(moon.orbit_angle) * moon.orbit_radius
    moon.y = planet.y + math.sin(moon.orbit_angle) * moon.orbit_radius


def assign_orbits(universe: Universe, rng: Optional[random.Random] = None) -> None:
    """Lazily initialise orbit distances and place every body. Owners are placed first."""
    rng = rng or random.Random()
    for system in universe.systems:
        _place_system(system, rng)
        for planet in system.planets:
            _place_planet(system, planet, rng)
            for moon in planet.moons:
                _place_moon(planet, moon, rng)
